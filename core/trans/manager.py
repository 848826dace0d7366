"""Translation resolution engine.

Turns a source text into a target-language string through, in order: source-language pass-through,
the static dictionary, the persistent cache, the rate-limit check, and the provider chain.
Every failure degrades to returning the original text.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, ClassVar

from core.trans.interface import HTTP_TOO_MANY_REQUESTS, NotSupportedLanguagesError, TranslateExceptionError
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Sequence

    from config.loader import Config
    from core.cache.manager import TranslationCacheManager
    from core.language_state import LanguageState
    from core.trans.provider_chain import ProviderChain
    from core.trans.rate_limiter import RateLimiter
    from core.trans.static_dictionary import StaticDictionary


__all__: list[str] = ["TransManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TransManager:
    """Orchestrator of the translation layers.

    Attributes:
        BATCH_SIZE (ClassVar[int]): Number of texts resolved concurrently in one batch group.
        BATCH_DELAY_SEC (ClassVar[float]): Pause between two batch groups.
    """

    BATCH_SIZE: ClassVar[int] = 5
    BATCH_DELAY_SEC: ClassVar[float] = 0.1

    def __init__(
        self,
        config: Config,
        *,
        cache_manager: TranslationCacheManager,
        rate_limiter: RateLimiter,
        dictionary: StaticDictionary,
        provider_chain: ProviderChain,
        language_state: LanguageState,
    ) -> None:
        self.config: Config = config
        self.cache_manager: TranslationCacheManager = cache_manager
        self.rate_limiter: RateLimiter = rate_limiter
        self.dictionary: StaticDictionary = dictionary
        self.provider_chain: ProviderChain = provider_chain
        self.language_state: LanguageState = language_state
        # Normalized text -> the most recent original text seen for it.
        self._original_text: dict[str, str] = {}

    @property
    def source_language(self) -> str:
        return self.config.TRANSLATION.SOURCE_LANGUAGE

    def original_text(self, normalized_text: str) -> str | None:
        """Return the most recent caller-supplied text seen for a normalized text."""
        return self._original_text.get(normalized_text)

    def _resolve_local(self, text: str, target: str) -> tuple[str, str | None]:
        """Run the steps that need no network access.

        Returns:
            tuple[str, str | None]: The normalized text and the static or cached translation, if any.
        """
        normalized: str = StringUtils.normalize_text(text)
        self._original_text[normalized] = text

        static: str | None = self.dictionary.lookup(self.original_text(normalized), target)
        if static is not None:
            logger.debug("Static dictionary hit (%s): '%s'", target, StringUtils.shorten(text))
            return normalized, static

        cached: str | None = self.cache_manager.get(normalized, target)
        if cached is not None:
            logger.debug("Translation cache hit (%s): '%s'", target, StringUtils.shorten(text))
        return normalized, cached

    def _target(self, target_language: str | None) -> str:
        return target_language or self.language_state.get_language()

    async def resolve(self, text: Any, target_language: str | None = None) -> Any:
        """Translate a text, never raising.

        Args:
            text (Any): Text to translate. Non-string or blank values are returned unchanged.
            target_language (str | None): Target language code. None uses the current language.

        Returns:
            Any: The translated text, or the input unchanged when no translation is available.
        """
        if StringUtils.is_blank(text):
            return text

        target: str = self._target(target_language)
        if target == self.source_language:
            return text

        normalized, local = self._resolve_local(text, target)
        if local is not None:
            return local

        if self.rate_limiter.is_limited():
            logger.debug("Rate limited, returning original text")
            return text

        try:
            translated: str = await self.provider_chain.call(text, target, self.source_language)
        except NotSupportedLanguagesError as err:
            logger.error("Translation failed (src: '%s', tgt: '%s'): %s", self.source_language, target, err)
            return text
        except TranslateExceptionError as err:
            if err.status == HTTP_TOO_MANY_REQUESTS:
                self.rate_limiter.trigger()
                logger.warning("Translation rate limit detected: %s", err)
            else:
                logger.error("Translation failed: %s", err)
            return text
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error during translation, returning original text")
            return text

        if translated == text:
            logger.debug("Provider returned the original text, not caching")
            return text

        self.cache_manager.set(normalized, target, translated)
        logger.debug(
            "Final translation result (src: '%s', tgt: '%s'): %s",
            self.source_language,
            target,
            StringUtils.shorten(translated),
        )
        return translated

    def resolve_sync(self, text: Any, target_language: str | None = None) -> Any:
        """Return a static or cached translation without any network access.

        Args:
            text (Any): Text to translate. Non-string or blank values are returned unchanged.
            target_language (str | None): Target language code. None uses the current language.

        Returns:
            Any: The static or cached translation, or the input unchanged.
        """
        if StringUtils.is_blank(text):
            return text

        target: str = self._target(target_language)
        if target == self.source_language:
            return text

        _, local = self._resolve_local(text, target)
        return text if local is None else local

    async def translate_batch(self, texts: Any, target_language: str | None = None) -> list[Any]:
        """Translate texts in groups, preserving order.

        Texts within a group are resolved concurrently; groups run one after another
        with a short pause between them.

        Args:
            texts (Any): List or tuple of texts. Anything else yields an empty list.
            target_language (str | None): Target language code. None uses the current language.

        Returns:
            list[Any]: Results in input order, one per input.
        """
        if not isinstance(texts, list | tuple):
            logger.warning("Batch translation expects a list, got '%s'", type(texts).__name__)
            return []

        items: Sequence[Any] = texts
        results: list[Any] = []
        for start in range(0, len(items), self.BATCH_SIZE):
            if start:
                await asyncio.sleep(self.BATCH_DELAY_SEC)
            group: Sequence[Any] = items[start : start + self.BATCH_SIZE]
            results.extend(await asyncio.gather(*(self.resolve(text, target_language) for text in group)))
        logger.debug("Batch translation completed: %d texts", len(results))
        return results
