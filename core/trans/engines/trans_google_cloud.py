"""Google Cloud Translation API Basic (v2) implementation.

This module provides the credentialed primary provider. Requests are sent as a JSON POST
to the v2 REST endpoint with the API key in the body, through the shared aiohttp client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from core.trans.interface import (
    HTTP_TOO_MANY_REQUESTS,
    EngineAttributes,
    NotSupportedLanguagesError,
    ProviderNotConfiguredError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslationRateLimitError,
    TranslationResponseError,
)
from handlers.async_comm import AsyncCommError
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config
    from handlers.async_comm import AsyncHttp

__all__: list[str] = ["GOOGLE_CLOUD_TRANSLATE_URL", "GoogleCloudTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

GOOGLE_CLOUD_TRANSLATE_URL: Final[str] = "https://translation.googleapis.com/language/translate/v2"
HTTP_BAD_REQUEST: Final[int] = 400


class GoogleCloudTranslation(TransInterface):
    """Google Cloud Translation API Basic (v2) provider.

    The API key is taken from TRANSLATION.PRIMARY_API_KEY, or from the GOOGLE_CLOUD_API_OAUTH
    environment variable when the setting is empty. Without a key the provider reports itself
    unavailable and the chain skips it.
    """

    def __init__(self) -> None:
        super().__init__()
        self.__http: AsyncHttp | None = None
        self._api_key: str = ""
        self._timeout: float = 10.0

    @property
    def _http(self) -> AsyncHttp:
        if self.__http is None:
            msg = "The Google Cloud provider is not initialised"
            raise TranslateExceptionError(msg)
        return self.__http

    @property
    def is_available(self) -> bool:
        return self.__http is not None and bool(self._api_key)

    @staticmethod
    def fetch_engine_name() -> str:
        return "google_cloud"

    def initialize(self, config: Config, http: AsyncHttp) -> None:
        """Bind the shared HTTP client and resolve the API key.

        Args:
            config (Config): Configuration object providing PRIMARY_API_KEY and TIMEOUT.
            http (AsyncHttp): Shared HTTP client.
        """
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.engine_attributes = EngineAttributes(name="google_cloud", requires_credential=True)
        self.__http = http
        self._timeout = config.TRANSLATION.TIMEOUT
        self.set_api_key(config.TRANSLATION.PRIMARY_API_KEY or self.get_authentication_key())

    def set_api_key(self, api_key: str | None) -> None:
        """Set or replace the API key. An empty key disables the provider."""
        self._api_key = api_key.strip() if isinstance(api_key, str) else ""
        logger.info("Google Cloud credential %s", "configured" if self._api_key else "not configured")

    async def translation(self, content: str, tgt_lang: str, src_lang: str) -> Result:
        """Translate input text with the v2 REST endpoint.

        Raises:
            ProviderNotConfiguredError: If no API key is set.
            TranslationRateLimitError: If the API answered with HTTP 429.
            NotSupportedLanguagesError: If the API rejected the request with HTTP 400.
            TranslationResponseError: If the response holds no translation.
            TranslateExceptionError: If the request failed for any other reason.
        """
        if not self._api_key:
            msg = "Google Cloud API key is not configured"
            raise ProviderNotConfiguredError(msg)

        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        payload: dict[str, str] = {"q": content, "source": src_lang, "target": tgt_lang, "key": self._api_key}

        try:
            response: Any = await self._http.post(
                url=GOOGLE_CLOUD_TRANSLATE_URL, data=payload, total_timeout=self._timeout
            )
        except AsyncCommError as err:
            if err.status == HTTP_TOO_MANY_REQUESTS:
                msg: str = f"Google Cloud translation rate limited: {err}"
                raise TranslationRateLimitError(msg) from err
            if err.status == HTTP_BAD_REQUEST:
                msg = f"Unsupported language pair (src: '{src_lang}', tgt: '{tgt_lang}'): {err}"
                raise NotSupportedLanguagesError(msg, status=err.status) from err
            msg = f"Google Cloud translation failed: {err}"
            raise TranslateExceptionError(msg, status=err.status) from err

        translated_text: str = self._extract_translation(response)
        logger.debug("translation completed (%s > %s)", src_lang, tgt_lang)
        return Result(
            text=translated_text,
            detected_source_lang=src_lang,
            metadata={"engine": "google_cloud"},
        )

    @staticmethod
    def _extract_translation(response: Any) -> str:
        """Pull data.translations[0].translatedText out of the response.

        Raises:
            TranslationResponseError: If the field is missing or empty.
        """
        try:
            translated: Any = response["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as err:
            msg = "Google Cloud Translate API returned invalid response"
            raise TranslationResponseError(msg) from err

        if not isinstance(translated, str) or not translated.strip():
            msg = "Google Cloud Translate API returned an empty translation"
            raise TranslationResponseError(msg)
        return translated
