"""Public entry point of the translation engine.

`TranslationService` wraps the shared components behind the operations offered to the presentation layer.
No translation, storage or provider error escapes these operations; callers always receive
a usable value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from core.shared_data import SharedData
from core.storage import StorageError
from core.trans.languages import SUPPORTED_LANGUAGES, is_supported_language
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from config.loader import Config
    from core.storage import KeyValueStorage
    from models.cache_models import CacheStatistics
    from models.translation_models import LanguageChangedEvent, RateLimitStatus, SupportedLanguage

__all__: list[str] = ["DEBUG_STORAGE_KEY", "TranslationService"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEBUG_STORAGE_KEY: Final[str] = "translation_debug"


class TranslationService:
    """Facade over the resolution engine, cache, rate limiter and language state.

    Call init() once before any other operation.
    """

    def __init__(self, config: Config, *, storage: KeyValueStorage | None = None) -> None:
        """Prepare the service.

        Args:
            config (Config): Loaded configuration.
            storage (KeyValueStorage | None): Storage to use instead of the one named by STORAGE.PATH.
        """
        self.config: Config = config
        self._storage: KeyValueStorage | None = storage
        self._shared_data: SharedData | None = None

    @property
    def shared_data(self) -> SharedData:
        if self._shared_data is None:
            msg = "TranslationService.init() has not been called"
            raise RuntimeError(msg)
        return self._shared_data

    @property
    def is_initialized(self) -> bool:
        return self._shared_data is not None

    def init(self, default_language: str | None = None, primary_credential: str | None = None) -> None:
        """Build the engine and load its persisted state.

        Args:
            default_language (str | None): Starting language. None keeps TRANSLATION.DEFAULT_LANGUAGE.
            primary_credential (str | None): API key of the primary provider. None keeps the configured key.
        """
        if self._shared_data is not None:
            logger.warning("TranslationService is already initialized")
            return

        if default_language:
            self.config.TRANSLATION.DEFAULT_LANGUAGE = default_language
        if primary_credential is not None:
            self.config.TRANSLATION.PRIMARY_API_KEY = primary_credential

        shared_data = SharedData(self.config, self._storage)
        shared_data.initialize()
        self._shared_data = shared_data

        if self.config.GENERAL.DEBUG or self.is_debug():
            LoggerUtils.set_debug(enabled=True)
        logger.info("Translation service initialized (language: '%s')", self.get_language())

    async def translate(self, text: Any, target_language: str | None = None) -> Any:
        """Translate a text. Returns the input unchanged when no translation is available."""
        return await self.shared_data.trans_manager.resolve(text, target_language)

    def translate_sync(self, text: Any, target_language: str | None = None) -> Any:
        """Return a static or cached translation without network access."""
        return self.shared_data.trans_manager.resolve_sync(text, target_language)

    async def translate_batch(self, texts: Any, target_language: str | None = None) -> list[Any]:
        """Translate a list of texts, preserving order. A non-list argument yields an empty list."""
        return await self.shared_data.trans_manager.translate_batch(texts, target_language)

    def set_language(self, code: str) -> None:
        """Change the current language. Blank codes are ignored.

        Args:
            code (str): Language code. Codes outside the supported list are accepted with a warning.
        """
        if StringUtils.is_blank(code):
            logger.warning("Ignoring empty language code")
            return
        code = code.strip()
        if not is_supported_language(code):
            logger.warning("Language '%s' is not in the supported list", code)
        self.shared_data.language_state.set_language(code)

    def get_language(self) -> str:
        return self.shared_data.language_state.get_language()

    def subscribe(self, listener: Callable[[LanguageChangedEvent], None]) -> Callable[[], None]:
        """Register a language change listener and return its unsubscribe function."""
        return self.shared_data.language_state.subscribe(listener)

    @staticmethod
    def get_supported_languages() -> list[SupportedLanguage]:
        return list(SUPPORTED_LANGUAGES)

    def clear_cache(self) -> None:
        self.shared_data.cache_manager.clear_all()

    def clear_language_cache(self, code: str) -> None:
        self.shared_data.cache_manager.clear_language(code)

    def cache_statistics(self) -> CacheStatistics:
        return self.shared_data.cache_manager.statistics()

    def get_rate_limit_status(self) -> RateLimitStatus:
        return self.shared_data.rate_limiter.status()

    def clear_rate_limit(self) -> None:
        self.shared_data.rate_limiter.clear()

    def configure_primary_credential(self, api_key: str | None) -> None:
        """Set or replace the primary provider's API key. An empty key leaves only the fallback provider."""
        self.shared_data.provider_chain.configure_primary_credential(api_key)

    def is_debug(self) -> bool:
        """Check the persisted debug flag."""
        try:
            return self.shared_data.storage.get(DEBUG_STORAGE_KEY) == "true"
        except StorageError as err:
            logger.warning("Failed to read debug flag: %s", err)
            return False

    def set_debug(self, *, enabled: bool) -> None:
        """Switch debug logging and persist the choice.

        Args:
            enabled (bool): True to log debug records.
        """
        try:
            if enabled:
                self.shared_data.storage.set(DEBUG_STORAGE_KEY, "true")
            else:
                self.shared_data.storage.remove(DEBUG_STORAGE_KEY)
        except StorageError as err:
            logger.error("Failed to save debug flag: %s", err)
        LoggerUtils.set_debug(enabled=enabled)
        logger.info("Debug mode %s", "enabled" if enabled else "disabled")

    async def close(self) -> None:
        """Release the HTTP session and the storage connection."""
        if self._shared_data is None:
            return
        await self._shared_data.close()
        self._shared_data = None
        logger.info("Translation service closed")
