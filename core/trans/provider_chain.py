"""Ordered fallback chain of remote translation providers.

The chain has exactly two slots: the credentialed primary provider and the keyless fallback provider.
The primary is skipped while it has no credential; any primary failure is retried on the fallback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from core.trans.engines import GoogleCloudTranslation, MyMemoryTranslation
from core.trans.interface import (
    ProviderNotConfiguredError,
    TransInterface,
    TranslateExceptionError,
    TranslationResponseError,
)
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config
    from core.trans.interface import Result
    from handlers.async_comm import AsyncHttp

__all__: list[str] = ["PRIMARY_PROVIDER", "FALLBACK_PROVIDER", "ProviderChain"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

PRIMARY_PROVIDER: Final[str] = GoogleCloudTranslation.fetch_engine_name()
FALLBACK_PROVIDER: Final[str] = MyMemoryTranslation.fetch_engine_name()


class ProviderChain:
    """Primary and fallback providers tried in order.

    Attributes:
        primary (TransInterface | None): Credentialed provider, or None if it failed to initialize.
        fallback (TransInterface | None): Keyless provider, or None if it failed to initialize.
    """

    def __init__(self, config: Config, http: AsyncHttp) -> None:
        self.config: Config = config
        self.http: AsyncHttp = http
        self.primary: TransInterface | None = None
        self.fallback: TransInterface | None = None
        logger.debug("Registered translation providers: %s", list(TransInterface.registered))

    def initialize(self) -> None:
        """Instantiate and initialize both providers from the registry."""
        logger.info("ProviderChain initialization started")
        self.primary = self._create(PRIMARY_PROVIDER)
        self.fallback = self._create(FALLBACK_PROVIDER)

    def _create(self, name: str) -> TransInterface | None:
        cls: type[TransInterface] | None = TransInterface.registered.get(name)
        if cls is None:
            logger.critical("Translation class not found: '%s'", name)
            return None
        instance: TransInterface = cls()
        try:
            instance.initialize(self.config, self.http)
        except RuntimeError as err:
            logger.critical("RuntimeError in '%s' translation setup: %s", name, err)
            return None
        except TranslateExceptionError as err:
            logger.critical("Exception in '%s' translation setup: %s", name, err)
            return None
        logger.info("Translation provider initialized: '%s'", name)
        logger.debug("Engine attributes: %s", instance.engine_attributes)
        if instance.engine_attributes.requires_credential and not instance.is_available:
            logger.info("'%s' has no credential and is skipped until one is configured", name)
        return instance

    @property
    def providers(self) -> list[TransInterface]:
        """Providers that can be called right now, in call order."""
        return [p for p in (self.primary, self.fallback) if p is not None and p.is_available]

    def configure_primary_credential(self, api_key: str | None) -> None:
        """Set or replace the primary provider's API key. An empty key disables the primary."""
        if not isinstance(self.primary, GoogleCloudTranslation):
            logger.error("Primary provider is not available, credential ignored")
            return
        self.primary.set_api_key(api_key)

    async def call(self, text: str, target_language: str, source_language: str) -> str:
        """Translate a text with the first provider that succeeds.

        Args:
            text (str): Original source text.
            target_language (str): Target language code.
            source_language (str): Source language code.

        Returns:
            str: Non-empty translated text.

        Raises:
            TranslateExceptionError: If every provider failed. A throttling error takes precedence
                over the other failures so the caller can start the cooldown.
        """
        providers: list[TransInterface] = self.providers
        if not providers:
            msg = "No translation providers currently available"
            raise ProviderNotConfiguredError(msg)

        errors: list[TranslateExceptionError] = []
        for provider in providers:
            try:
                result: Result = await provider.translation(
                    content=text, tgt_lang=target_language, src_lang=source_language
                )
            except TranslateExceptionError as err:
                logger.warning("'%s' translation failed: %s", provider.engine_name, err)
                errors.append(err)
                continue

            if not result.text:
                msg = f"'{provider.engine_name}' returned an empty translation"
                logger.warning(msg)
                errors.append(TranslationResponseError(msg))
                continue

            logger.debug(
                "'%s' translated (%s > %s): '%s' %s",
                provider.engine_name,
                result.detected_source_lang or source_language,
                target_language,
                StringUtils.shorten(result.text),
                result.metadata or {},
            )
            return result.text

        for err in errors:
            if providers[0].is_rate_limit_error(err):
                raise err
        raise errors[-1]

    async def close(self) -> None:
        for provider in (self.primary, self.fallback):
            if provider is not None:
                await provider.close()
