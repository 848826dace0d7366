"""Translation cache manager.

Keeps translations keyed by normalized source text and target language in memory,
and persists the whole mapping as one JSON blob in the key-value storage after every change.
Eviction keeps the most recently inserted texts.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, ClassVar, Final

from core.storage import StorageError, StorageQuotaExceededError
from models.cache_models import CacheStatistics
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.storage import KeyValueStorage

__all__: list[str] = ["CACHE_STORAGE_KEY", "TranslationCacheManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

CACHE_STORAGE_KEY: Final[str] = "translation_cache"


class TranslationCacheManager:
    """Manager for the persistent translation cache.

    Entries map normalized text to ``{target_lang: translated_text}``. Python dicts keep insertion
    order, and adding a language to an existing text does not move it, so the oldest keys are
    always at the front.

    Attributes:
        MAX_ENTRIES (ClassVar[int]): Number of normalized texts kept by eviction.
        MAX_BYTES (ClassVar[int]): Byte budget of the serialized cache.
    """

    MAX_ENTRIES: ClassVar[int] = 1000
    MAX_BYTES: ClassVar[int] = 4 * 1024 * 1024

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage: KeyValueStorage = storage
        self._entries: dict[str, dict[str, str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, normalized_text: object) -> bool:
        return normalized_text in self._entries

    def keys(self) -> list[str]:
        """Return the cached normalized texts, oldest first."""
        return list(self._entries)

    def load(self) -> None:
        """Rebuild the cache from storage.

        A missing, unreadable or corrupt blob results in an empty cache; the next write replaces it.
        """
        self._entries = {}
        try:
            blob: str | None = self._storage.get(CACHE_STORAGE_KEY)
        except StorageError as err:
            logger.warning("Failed to load cache: %s", err)
            return

        if not blob:
            logger.debug("No persisted cache found")
            return

        try:
            data: Any = json.loads(blob)
        except json.JSONDecodeError as err:
            logger.warning("Persisted cache is corrupt, starting empty: %s", err)
            return

        if not isinstance(data, dict):
            logger.warning("Persisted cache has an unexpected shape, starting empty")
            return

        for normalized_text, translations in data.items():
            if not isinstance(translations, dict):
                continue
            valid: dict[str, str] = {
                lang: text
                for lang, text in translations.items()
                if isinstance(lang, str) and isinstance(text, str) and self._is_encodable(text)
            }
            if valid and self._is_encodable(normalized_text):
                self._entries[normalized_text] = valid
        logger.info("Translation cache loaded: %d entries", len(self._entries))

    def get(self, normalized_text: str, lang: str) -> str | None:
        """Look up a cached translation.

        Args:
            normalized_text (str): Normalized source text.
            lang (str): Target language code.

        Returns:
            str | None: The cached translation, or None on a miss.
        """
        translations: dict[str, str] | None = self._entries.get(normalized_text)
        if translations is None:
            return None
        return translations.get(lang)

    def set(self, normalized_text: str, lang: str, value: str) -> None:
        """Insert or overwrite a translation and persist the cache.

        Persistence failures are handled here and never reach the caller.

        Args:
            normalized_text (str): Normalized source text.
            lang (str): Target language code.
            value (str): Translated text.
        """
        translations: dict[str, str] = self._entries.setdefault(normalized_text, {})
        previous: str | None = translations.get(lang)
        translations[lang] = value
        try:
            if not self.evict_if_oversize():
                self._persist()
        except ValueError as err:
            # UnicodeEncodeError included: lone surrogates cannot be stored as UTF-8
            logger.error("Failed to serialize cache, translation not stored: %s", err)
            self._rollback(normalized_text, lang, previous)

    def clear_all(self) -> None:
        """Empty the cache and remove the persisted blob."""
        self._entries.clear()
        try:
            self._storage.remove(CACHE_STORAGE_KEY)
        except StorageError as err:
            logger.error("Failed to remove persisted cache: %s", err)
        logger.info("Cache cleared")

    def clear_language(self, lang: str) -> None:
        """Remove every translation into one language.

        Texts left without any translation are removed entirely.

        Args:
            lang (str): Target language code.
        """
        for normalized_text in list(self._entries):
            translations: dict[str, str] = self._entries[normalized_text]
            if lang in translations:
                del translations[lang]
                if not translations:
                    del self._entries[normalized_text]
        self._persist()
        logger.info("Language cache cleared: '%s'", lang)

    def evict_if_oversize(self) -> bool:
        """Trim the cache when it exceeds the entry count or the byte budget.

        Only the MAX_ENTRIES most recently inserted texts are kept. If the remaining blob is still
        over MAX_BYTES, the oldest texts are dropped until it fits. The trimmed cache is persisted.

        Returns:
            bool: True if the cache was trimmed (and persisted), False if it was within bounds.
        """
        blob: str = self._serialize()
        over_count: bool = len(self._entries) > self.MAX_ENTRIES
        over_bytes: bool = self._size(blob) > self.MAX_BYTES
        if not over_count and not over_bytes:
            return False

        before: int = len(self._entries)
        if over_count:
            for normalized_text in list(self._entries)[: -self.MAX_ENTRIES]:
                del self._entries[normalized_text]
            blob = self._serialize()

        while self._entries and self._size(blob) > self.MAX_BYTES:
            for normalized_text in list(self._entries)[: max(1, len(self._entries) // 10)]:
                del self._entries[normalized_text]
            blob = self._serialize()

        logger.info("Cache cleaned: %d -> %d entries", before, len(self._entries))
        self._write(blob)
        return True

    def statistics(self) -> CacheStatistics:
        """Build usage statistics for the current cache."""
        distribution: dict[str, int] = {}
        for translations in self._entries.values():
            for lang in translations:
                distribution[lang] = distribution.get(lang, 0) + 1
        return CacheStatistics(
            total_entries=len(self._entries),
            total_translations=sum(distribution.values()),
            language_distribution=distribution,
            serialized_bytes=self._size(self._serialize()) if self._entries else 0,
        )

    def _rollback(self, normalized_text: str, lang: str, previous: str | None) -> None:
        translations: dict[str, str] | None = self._entries.get(normalized_text)
        if translations is None:
            return
        if previous is not None:
            translations[lang] = previous
            return
        translations.pop(lang, None)
        if not translations:
            del self._entries[normalized_text]

    def _serialize(self) -> str:
        return json.dumps(self._entries, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _is_encodable(text: str) -> bool:
        try:
            text.encode("utf-8")
        except UnicodeEncodeError:
            return False
        return True

    @staticmethod
    def _size(blob: str) -> int:
        return len(blob.encode("utf-8"))

    def _persist(self) -> None:
        if not self._entries:
            try:
                self._storage.remove(CACHE_STORAGE_KEY)
            except StorageError as err:
                logger.error("Failed to remove persisted cache: %s", err)
            return
        self._write(self._serialize())

    def _write(self, blob: str) -> None:
        """Write the blob; on a quota failure the whole cache is dropped."""
        try:
            self._storage.set(CACHE_STORAGE_KEY, blob)
        except StorageQuotaExceededError as err:
            logger.warning("Failed to save cache, clearing it: %s", err)
            self.clear_all()
        except StorageError as err:
            logger.error("Failed to save cache: %s", err)
