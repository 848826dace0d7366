"""Shared data management for the translation engine.

This module defines the SharedData class, the single owner of the engine's stateful parts:
the key-value storage, the HTTP client, the translation cache, the rate limiter, the static dictionary,
the provider chain, the language state, and the resolution engine built on top of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.cache.manager import TranslationCacheManager
from core.language_state import LanguageState
from core.storage import KeyValueStorage
from core.trans.manager import TransManager
from core.trans.provider_chain import ProviderChain
from core.trans.rate_limiter import RateLimiter
from core.trans.static_dictionary import StaticDictionary
from handlers.async_comm import AsyncHttp

if TYPE_CHECKING:
    from config.loader import Config


__all__: list[str] = ["SharedData"]


@dataclass
class SharedData:
    _config: Config = field()
    _storage: KeyValueStorage | None = field(default=None)
    _http: AsyncHttp = field(init=False)
    _cache_manager: TranslationCacheManager = field(init=False)
    _rate_limiter: RateLimiter = field(init=False)
    _dictionary: StaticDictionary = field(init=False)
    _provider_chain: ProviderChain = field(init=False)
    _language_state: LanguageState = field(init=False)
    _trans_manager: TransManager = field(init=False)

    def initialize(self) -> None:
        """Build every component and load the persisted state."""
        if self._storage is None:
            self._storage = KeyValueStorage(self.config.STORAGE.PATH, quota_bytes=self.config.STORAGE.QUOTA_BYTES)
        self._http = AsyncHttp(default_timeout=self.config.TRANSLATION.TIMEOUT)

        self._cache_manager = TranslationCacheManager(self._storage)
        self._cache_manager.load()
        self._rate_limiter = RateLimiter(self._storage)
        self._rate_limiter.load()

        self._dictionary = StaticDictionary.from_file(self.config.DICTIONARY.LANGUAGE, self.config.DICTIONARY.PATH)
        self._provider_chain = ProviderChain(self.config, self._http)
        self._provider_chain.initialize()

        self._language_state = LanguageState(self.config.TRANSLATION.DEFAULT_LANGUAGE, self._storage)
        if self.config.TRANSLATION.USE_SAVED_LANGUAGE:
            self._language_state.load_saved_language()

        self._trans_manager = TransManager(
            self.config,
            cache_manager=self._cache_manager,
            rate_limiter=self._rate_limiter,
            dictionary=self._dictionary,
            provider_chain=self._provider_chain,
            language_state=self._language_state,
        )

    async def close(self) -> None:
        await self._provider_chain.close()
        await self._http.close()
        self.storage.close()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def storage(self) -> KeyValueStorage:
        if self._storage is None:
            msg = "Storage is not initialized"
            raise RuntimeError(msg)
        return self._storage

    @property
    def http(self) -> AsyncHttp:
        return self._http

    @property
    def cache_manager(self) -> TranslationCacheManager:
        return self._cache_manager

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def dictionary(self) -> StaticDictionary:
        return self._dictionary

    @property
    def provider_chain(self) -> ProviderChain:
        return self._provider_chain

    @property
    def language_state(self) -> LanguageState:
        return self._language_state

    @property
    def trans_manager(self) -> TransManager:
        return self._trans_manager
