"""This module defines the abstract base class for translation providers and related exceptions.
It includes the Result data class for translation results, and the provider error hierarchy
whose status code decides whether the global cooldown is started.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Final

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config
    from handlers.async_comm import AsyncHttp

__all__: list[str] = [
    "HTTP_TOO_MANY_REQUESTS",
    "EngineAttributes",
    "NotSupportedLanguagesError",
    "ProviderNotConfiguredError",
    "Result",
    "TransInterface",
    "TranslateExceptionError",
    "TranslationRateLimitError",
    "TranslationResponseError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTP_TOO_MANY_REQUESTS: Final[int] = 429


@dataclass
class EngineAttributes:
    """Provider-specific capabilities and behavior flags.

    Attributes:
        name (str): Name of the translation provider, used in log output.
        requires_credential (bool): Whether the provider can only be called with an API key.
    """

    name: str
    requires_credential: bool = False


@dataclass
class Result:
    """Data class for translation results.

    Attributes:
        text (str | None): Translated text. None if translation fails.
        detected_source_lang (str | None): Source language reported by the provider, if any.
        metadata (dict[str, str] | None): Provider-specific metadata (e.g., match quality).
    """

    text: str | None = None
    detected_source_lang: str | None = None
    metadata: dict[str, str] | None = None

    def __str__(self) -> str:
        if self.text is None:
            return ""
        return self.text


class TranslateExceptionError(Exception):
    """An error occurred during the translation process.

    Attributes:
        status (int | None): HTTP-like status code reported by the provider, if known.
    """

    def __init__(self, msg: str, *, status: int | None = None) -> None:
        super().__init__(msg)
        self.status: int | None = status


class NotSupportedLanguagesError(TranslateExceptionError):
    """An unsupported language code was specified."""


class TranslationResponseError(TranslateExceptionError):
    """The provider answered, but the payload holds no usable translation."""


class ProviderNotConfiguredError(TranslateExceptionError):
    """The provider was called without the credential it requires."""


class TranslationRateLimitError(TranslateExceptionError):
    """The translation request was rate-limited by the API."""

    def __init__(self, msg: str, *, status: int | None = HTTP_TOO_MANY_REQUESTS) -> None:
        super().__init__(msg, status=status)


class TransInterface(ABC):
    """Abstract base class for remote translation providers.

    Subclasses register themselves under their distinguished name when they are defined,
    so the provider chain can instantiate them by name.

    Attributes:
        registered (ClassVar[dict[str, type[TransInterface]]]): Registered provider classes keyed by name.
    """

    registered: ClassVar[dict[str, type[TransInterface]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        """Register the subclass using its distinguished name.

        Raises:
            TypeError: If the subclass does not implement fetch_engine_name().
            ValueError: If another provider already uses the same name.
        """
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "fetch_engine_name") or not callable(cls.fetch_engine_name):
            msg = "Subclasses of TransInterface must implement the static method fetch_engine_name()."
            raise TypeError(msg)

        if not isinstance(cls.fetch_engine_name(), str) or cls.fetch_engine_name() == "":
            return  # Nameless providers (test doubles) are allowed but not registered.

        if cls.fetch_engine_name() in cls.registered:
            msg: str = f"A translation provider with the name '{cls.fetch_engine_name()}' is already registered."
            raise ValueError(msg)

        cls.registered[cls.fetch_engine_name()] = cls

    def __init__(self) -> None:
        self._engine_attributes: EngineAttributes | None = None

    @property
    def engine_attributes(self) -> EngineAttributes:
        """Get the provider attributes.

        Raises:
            RuntimeError: If initialize() has not been called.
        """
        if self._engine_attributes is None:
            msg = "Engine attributes have not been set."
            raise RuntimeError(msg)
        return self._engine_attributes

    @engine_attributes.setter
    def engine_attributes(self, attributes: EngineAttributes) -> None:
        if self._engine_attributes is not None:
            msg = "Engine attributes can only be set once during initialization."
            raise RuntimeError(msg)
        self._engine_attributes = attributes

    @property
    def engine_name(self) -> str:
        return self.engine_attributes.name

    def is_rate_limit_error(self, err: Exception) -> bool:
        """Check if the given exception indicates throttling.

        Only a status of 429 counts; every other failure is treated as transient.

        Args:
            err (Exception): Exception raised during translation.

        Returns:
            bool: True if the exception represents rate limiting.
        """
        return isinstance(err, TranslateExceptionError) and err.status == HTTP_TOO_MANY_REQUESTS

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider can be called (initialized and, where needed, credentialed)."""
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def fetch_engine_name() -> str:
        """Fetch the distinguished name of the provider.

        Called during class registration in __init_subclass__, so the implementation
        must be available at subclass definition time.
        """
        raise NotImplementedError

    @abstractmethod
    def initialize(self, config: Config, http: AsyncHttp) -> None:
        """Initialize the provider.

        Args:
            config (Config): Configuration object containing translation settings.
            http (AsyncHttp): Shared HTTP client used for every request.
        """
        raise NotImplementedError

    @abstractmethod
    async def translation(self, content: str, tgt_lang: str, src_lang: str) -> Result:
        """Translate input text to the target language.

        Args:
            content (str): Text to be translated.
            tgt_lang (str): Target language code.
            src_lang (str): Source language code.

        Returns:
            Result: Translation result with non-empty translated text.

        Raises:
            TranslationRateLimitError: If the request is rate-limited by the API.
            TranslationResponseError: If the response holds no usable translation.
            TranslateExceptionError: If translation fails for any other reason.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release provider resources. The shared HTTP client is closed by its owner."""
        logger.debug("'%s' process termination", self.__class__.__name__)

    def get_authentication_key(self) -> str:
        """Retrieve the authentication key from environment variables.

        The variable is named after the provider's distinguished name with the suffix "_API_OAUTH".
        For example, the provider "google_cloud" reads "GOOGLE_CLOUD_API_OAUTH".

        Returns:
            str: The authentication key, or an empty string if the environment variable is not set.
        """
        return os.getenv(f"{self.fetch_engine_name().upper()}_API_OAUTH", "")
