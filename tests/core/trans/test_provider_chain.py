"""Unit tests for core.trans.provider_chain module."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, cast

import pytest

from core.trans.engines import GoogleCloudTranslation, MyMemoryTranslation
from core.trans.interface import (
    EngineAttributes,
    ProviderNotConfiguredError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslationRateLimitError,
)
from core.trans.provider_chain import ProviderChain

if TYPE_CHECKING:
    from config.loader import Config
    from handlers.async_comm import AsyncHttp


class DummyEngine(TransInterface):
    """Provider double configured per instance."""

    def __init__(self, name: str, *, text: str | None = "traduit", error: Exception | None = None) -> None:
        super().__init__()
        self.engine_attributes = EngineAttributes(name=name)
        self.text: str | None = text
        self.error: Exception | None = error
        self.available: bool = True
        self.calls: list[tuple[str, str, str]] = []
        self.closed: bool = False

    @property
    def is_available(self) -> bool:
        return self.available

    @staticmethod
    def fetch_engine_name() -> str:
        return ""

    def initialize(self, config: Config, http: AsyncHttp) -> None:
        _ = config, http

    async def translation(self, content: str, tgt_lang: str, src_lang: str) -> Result:
        self.calls.append((content, tgt_lang, src_lang))
        if self.error is not None:
            raise self.error
        return Result(text=self.text)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def config() -> Config:
    return cast("Config", SimpleNamespace(TRANSLATION=SimpleNamespace(PRIMARY_API_KEY="", TIMEOUT=5.0)))


def _chain(config: Config, primary: DummyEngine | None, fallback: DummyEngine | None) -> ProviderChain:
    chain = ProviderChain(config, cast("AsyncHttp", object()))
    chain.primary = primary
    chain.fallback = fallback
    return chain


def test_initialize_creates_registered_providers(
    monkeypatch: pytest.MonkeyPatch, config: Config, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="I18nEngine")
    monkeypatch.delenv("GOOGLE_CLOUD_API_OAUTH", raising=False)
    chain = ProviderChain(config, cast("AsyncHttp", object()))

    chain.initialize()

    assert isinstance(chain.primary, GoogleCloudTranslation)
    assert isinstance(chain.fallback, MyMemoryTranslation)
    assert chain.providers == [chain.fallback]
    assert any("'google_cloud' has no credential" in rec.message for rec in caplog.records)


def test_initialize_tolerates_missing_registration(monkeypatch: pytest.MonkeyPatch, config: Config) -> None:
    monkeypatch.setattr(TransInterface, "registered", {"mymemory": MyMemoryTranslation})
    chain = ProviderChain(config, cast("AsyncHttp", object()))

    chain.initialize()

    assert chain.primary is None
    assert isinstance(chain.fallback, MyMemoryTranslation)


def test_configure_primary_credential_enables_primary(monkeypatch: pytest.MonkeyPatch, config: Config) -> None:
    monkeypatch.delenv("GOOGLE_CLOUD_API_OAUTH", raising=False)
    chain = ProviderChain(config, cast("AsyncHttp", object()))
    chain.initialize()

    chain.configure_primary_credential("key")

    assert chain.providers == [chain.primary, chain.fallback]


@pytest.mark.asyncio
async def test_primary_success_skips_fallback(config: Config) -> None:
    primary, fallback = DummyEngine("primary", text="Enregistrer"), DummyEngine("fallback")
    chain = _chain(config, primary, fallback)

    assert await chain.call("Save", "fr", "en") == "Enregistrer"
    assert primary.calls == [("Save", "fr", "en")]
    assert fallback.calls == []


@pytest.mark.asyncio
async def test_unconfigured_primary_goes_straight_to_fallback(config: Config) -> None:
    primary, fallback = DummyEngine("primary"), DummyEngine("fallback", text="Annuler")
    primary.available = False
    chain = _chain(config, primary, fallback)

    assert await chain.call("Cancel", "fr", "en") == "Annuler"
    assert primary.calls == []


@pytest.mark.asyncio
async def test_primary_failure_falls_back(config: Config) -> None:
    primary = DummyEngine("primary", error=TranslateExceptionError("boom", status=500))
    fallback = DummyEngine("fallback", text="Annuler")
    chain = _chain(config, primary, fallback)

    assert await chain.call("Cancel", "fr", "en") == "Annuler"
    assert len(primary.calls) == 1


@pytest.mark.asyncio
async def test_empty_result_counts_as_failure(config: Config) -> None:
    primary = DummyEngine("primary", text="")
    fallback = DummyEngine("fallback", text="Annuler")
    chain = _chain(config, primary, fallback)

    assert await chain.call("Cancel", "fr", "en") == "Annuler"


@pytest.mark.asyncio
async def test_all_failures_raise_last_error(config: Config) -> None:
    last = TranslateExceptionError("fallback down", status=503)
    primary = DummyEngine("primary", error=TranslateExceptionError("primary down", status=500))
    fallback = DummyEngine("fallback", error=last)
    chain = _chain(config, primary, fallback)

    with pytest.raises(TranslateExceptionError) as exc_info:
        await chain.call("Cancel", "fr", "en")
    assert exc_info.value is last


@pytest.mark.asyncio
async def test_throttling_error_takes_precedence(config: Config) -> None:
    throttled = TranslationRateLimitError("slow down")
    primary = DummyEngine("primary", error=throttled)
    fallback = DummyEngine("fallback", error=TranslateExceptionError("unreachable"))
    chain = _chain(config, primary, fallback)

    with pytest.raises(TranslationRateLimitError) as exc_info:
        await chain.call("Cancel", "fr", "en")
    assert exc_info.value is throttled


@pytest.mark.asyncio
async def test_no_providers_raises(config: Config) -> None:
    chain = _chain(config, None, None)

    with pytest.raises(ProviderNotConfiguredError):
        await chain.call("Cancel", "fr", "en")


@pytest.mark.asyncio
async def test_close_closes_providers(config: Config) -> None:
    primary, fallback = DummyEngine("primary"), DummyEngine("fallback")
    chain = _chain(config, primary, fallback)

    await chain.close()

    assert primary.closed is True
    assert fallback.closed is True


def test_dummy_engine_is_not_registered() -> None:
    assert all(cls is not DummyEngine for cls in cast("dict[str, Any]", TransInterface.registered).values())
