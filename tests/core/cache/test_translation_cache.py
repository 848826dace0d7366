"""Unit tests for core.cache.manager module."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from core.cache.manager import CACHE_STORAGE_KEY, TranslationCacheManager
from core.storage import KeyValueStorage, StorageError, StorageQuotaExceededError


@pytest.fixture
def storage() -> KeyValueStorage:
    return KeyValueStorage(":memory:")


@pytest.fixture
def cache(storage: KeyValueStorage) -> TranslationCacheManager:
    manager = TranslationCacheManager(storage)
    manager.load()
    return manager


def test_get_returns_none_on_miss(cache: TranslationCacheManager) -> None:
    assert cache.get("save", "fr") is None
    cache.set("save", "fr", "Enregistrer")
    assert cache.get("save", "de") is None


def test_set_overwrites_and_persists(cache: TranslationCacheManager, storage: KeyValueStorage) -> None:
    cache.set("save", "fr", "Sauver")
    cache.set("save", "fr", "Enregistrer")
    cache.set("save", "de", "Speichern")

    assert cache.get("save", "fr") == "Enregistrer"
    blob = storage.get(CACHE_STORAGE_KEY)
    assert blob is not None
    assert json.loads(blob) == {"save": {"fr": "Enregistrer", "de": "Speichern"}}


def test_load_restores_persisted_entries(cache: TranslationCacheManager, storage: KeyValueStorage) -> None:
    cache.set("save", "fr", "Enregistrer")

    reloaded = TranslationCacheManager(storage)
    reloaded.load()

    assert reloaded.get("save", "fr") == "Enregistrer"


@pytest.mark.parametrize("blob", ["{not json", "[1, 2]", '"text"'])
def test_load_corrupt_blob_gives_empty_cache(storage: KeyValueStorage, blob: str) -> None:
    storage.set(CACHE_STORAGE_KEY, blob)
    manager = TranslationCacheManager(storage)
    manager.load()
    assert len(manager) == 0


def test_load_skips_malformed_entries(storage: KeyValueStorage) -> None:
    storage.set(CACHE_STORAGE_KEY, json.dumps({"save": {"fr": "Enregistrer", "de": 1}, "bad": "x", "empty": {}}))
    manager = TranslationCacheManager(storage)
    manager.load()

    assert manager.keys() == ["save"]
    assert manager.get("save", "de") is None


def test_clear_all_removes_persisted_blob(cache: TranslationCacheManager, storage: KeyValueStorage) -> None:
    cache.set("save", "fr", "Enregistrer")
    cache.clear_all()

    assert len(cache) == 0
    assert storage.get(CACHE_STORAGE_KEY) is None


def test_clear_language_drops_empty_keys(cache: TranslationCacheManager, storage: KeyValueStorage) -> None:
    cache.set("save", "fr", "Enregistrer")
    cache.set("save", "de", "Speichern")
    cache.set("cancel", "fr", "Annuler")

    cache.clear_language("fr")

    assert cache.keys() == ["save"]
    assert cache.get("save", "de") == "Speichern"
    blob = storage.get(CACHE_STORAGE_KEY)
    assert blob is not None
    assert json.loads(blob) == {"save": {"de": "Speichern"}}


def test_clear_language_removing_everything_removes_blob(
    cache: TranslationCacheManager, storage: KeyValueStorage
) -> None:
    cache.set("save", "fr", "Enregistrer")
    cache.clear_language("fr")
    assert storage.get(CACHE_STORAGE_KEY) is None


def test_eviction_keeps_most_recent_keys(cache: TranslationCacheManager, storage: KeyValueStorage) -> None:
    for i in range(1500):
        cache.set(f"text {i}", "fr", f"texte {i}")

    keys = cache.keys()
    assert len(keys) == TranslationCacheManager.MAX_ENTRIES
    assert keys[0] == "text 500"
    assert keys[-1] == "text 1499"
    blob = storage.get(CACHE_STORAGE_KEY)
    assert blob is not None
    assert len(json.loads(blob)) == TranslationCacheManager.MAX_ENTRIES


def test_adding_language_keeps_insertion_position(cache: TranslationCacheManager) -> None:
    cache.set("first", "fr", "premier")
    cache.set("second", "fr", "second")
    cache.set("first", "de", "erste")

    assert cache.keys() == ["first", "second"]


def test_eviction_by_size_drops_oldest(monkeypatch: pytest.MonkeyPatch, cache: TranslationCacheManager) -> None:
    monkeypatch.setattr(TranslationCacheManager, "MAX_BYTES", 200)
    for i in range(20):
        cache.set(f"text {i}", "fr", f"texte {i}")

    keys = cache.keys()
    assert keys[-1] == "text 19"
    assert "text 0" not in cache
    assert 0 < cache.statistics().serialized_bytes <= 200


def test_evict_if_oversize_within_bounds(cache: TranslationCacheManager) -> None:
    cache.set("save", "fr", "Enregistrer")
    assert cache.evict_if_oversize() is False


def test_quota_error_clears_cache() -> None:
    storage = MagicMock(spec=KeyValueStorage)
    storage.get.return_value = None
    storage.set.side_effect = StorageQuotaExceededError("full")
    manager = TranslationCacheManager(storage)
    manager.load()

    manager.set("save", "fr", "Enregistrer")

    assert len(manager) == 0
    storage.remove.assert_called_with(CACHE_STORAGE_KEY)


def test_storage_error_keeps_memory_cache() -> None:
    storage = MagicMock(spec=KeyValueStorage)
    storage.get.return_value = None
    storage.set.side_effect = StorageError("locked")
    manager = TranslationCacheManager(storage)
    manager.load()

    manager.set("save", "fr", "Enregistrer")

    assert manager.get("save", "fr") == "Enregistrer"


def test_quota_limited_storage_clears_cache_instead_of_raising() -> None:
    storage = KeyValueStorage(":memory:", quota_bytes=40)
    manager = TranslationCacheManager(storage)
    manager.load()

    manager.set("save", "fr", "Enregistrer")
    manager.set("a much longer source text", "fr", "un texte source beaucoup plus long")

    assert len(manager) == 0
    assert storage.get(CACHE_STORAGE_KEY) is None


def test_statistics(cache: TranslationCacheManager) -> None:
    cache.set("save", "fr", "Enregistrer")
    cache.set("save", "de", "Speichern")
    cache.set("cancel", "fr", "Annuler")

    stats = cache.statistics()

    assert stats.total_entries == 2
    assert stats.total_translations == 3
    assert stats.language_distribution == {"fr": 2, "de": 1}
    assert stats.serialized_bytes > 0


def test_statistics_empty(cache: TranslationCacheManager) -> None:
    stats = cache.statistics()
    assert stats.total_entries == 0
    assert stats.serialized_bytes == 0


def test_unencodable_translation_is_not_stored(cache: TranslationCacheManager, storage: KeyValueStorage) -> None:
    cache.set("hello", "fr", "Bonjour \ud83d")

    assert cache.get("hello", "fr") is None
    assert "hello" not in cache
    assert storage.get(CACHE_STORAGE_KEY) is None

    cache.set("goodbye", "fr", "Au revoir")

    assert cache.get("goodbye", "fr") == "Au revoir"
    blob = storage.get(CACHE_STORAGE_KEY)
    assert blob is not None
    assert json.loads(blob) == {"goodbye": {"fr": "Au revoir"}}


def test_unencodable_translation_keeps_previous_value(cache: TranslationCacheManager) -> None:
    cache.set("hello", "fr", "Bonjour")
    cache.set("hello", "fr", "Salut \ud83d")

    assert cache.get("hello", "fr") == "Bonjour"
    assert cache.statistics().total_translations == 1


def test_load_skips_unencodable_entries(storage: KeyValueStorage) -> None:
    storage.set(CACHE_STORAGE_KEY, '{"hello": {"fr": "Bonjour \\ud83d", "de": "Hallo"}}')
    manager = TranslationCacheManager(storage)
    manager.load()

    assert manager.get("hello", "fr") is None
    assert manager.get("hello", "de") == "Hallo"
