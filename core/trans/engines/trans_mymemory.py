"""MyMemory translation provider.

Keyless fallback provider. Requests are query-string GETs; the API reports its own status
in the JSON body, which may differ from the HTTP status (e.g., a daily quota answered with HTTP 200).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from core.trans.interface import (
    HTTP_TOO_MANY_REQUESTS,
    EngineAttributes,
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

__all__: list[str] = ["MYMEMORY_URL", "MyMemoryTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

MYMEMORY_URL: Final[str] = "https://api.mymemory.translated.net/get"
MYMEMORY_OK: Final[int] = 200


class MyMemoryTranslation(TransInterface):
    """MyMemory translation provider.

    Needs no credential, so it is available as soon as it has the shared HTTP client. A 429 reported
    either as the HTTP status or as responseStatus in the body is raised as a rate-limit error.
    """

    def __init__(self) -> None:
        super().__init__()
        self.__http: AsyncHttp | None = None
        self._timeout: float = 10.0

    @property
    def _http(self) -> AsyncHttp:
        if self.__http is None:
            msg = "The MyMemory provider is not initialised"
            raise TranslateExceptionError(msg)
        return self.__http

    @property
    def is_available(self) -> bool:
        return self.__http is not None

    @staticmethod
    def fetch_engine_name() -> str:
        return "mymemory"

    def initialize(self, config: Config, http: AsyncHttp) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.engine_attributes = EngineAttributes(name="mymemory", requires_credential=False)
        self.__http = http
        self._timeout = config.TRANSLATION.TIMEOUT

    async def translation(self, content: str, tgt_lang: str, src_lang: str) -> Result:
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        params: dict[str, str] = {"q": content, "langpair": f"{src_lang}|{tgt_lang}"}

        try:
            response: Any = await self._http.get(url=MYMEMORY_URL, params=params, total_timeout=self._timeout)
        except AsyncCommError as err:
            if err.status == HTTP_TOO_MANY_REQUESTS:
                msg: str = f"MyMemory translation rate limited: {err}"
                raise TranslationRateLimitError(msg) from err
            msg = f"MyMemory API error: {err}"
            raise TranslateExceptionError(msg, status=err.status) from err

        translated_text: str = self._extract_translation(response)
        logger.debug("translation completed (%s > %s)", src_lang, tgt_lang)
        metadata: dict[str, str] = {"engine": "mymemory"}
        if isinstance(response.get("responseData"), dict) and "match" in response["responseData"]:
            metadata["match"] = str(response["responseData"]["match"])
        return Result(text=translated_text, detected_source_lang=src_lang, metadata=metadata)

    @staticmethod
    def _extract_translation(response: Any) -> str:
        """Validate the body status and pull responseData.translatedText.

        Raises:
            TranslationRateLimitError: If the body reports status 429.
            TranslationResponseError: If the body reports another status or holds no translation.
        """
        if not isinstance(response, dict):
            msg = "MyMemory API returned invalid response"
            raise TranslationResponseError(msg)

        try:
            status = int(response.get("responseStatus", 0))
        except (TypeError, ValueError):
            status = 0

        if status == HTTP_TOO_MANY_REQUESTS:
            msg = f"MyMemory quota exceeded: {response.get('responseDetails', '')}"
            raise TranslationRateLimitError(msg)

        response_data: Any = response.get("responseData")
        if status != MYMEMORY_OK or not isinstance(response_data, dict):
            msg = "MyMemory API returned invalid response"
            raise TranslationResponseError(msg, status=status or None)

        translated: Any = response_data.get("translatedText")
        if not isinstance(translated, str) or not translated.strip():
            msg = "MyMemory API returned an empty translation"
            raise TranslationResponseError(msg)
        return translated
