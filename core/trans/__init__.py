"""Translation providers, layers and the resolution engine.

This package provides translation through the static dictionary, the persistent cache and
pluggable remote providers, governed by a shared rate-limit cooldown.
"""

from core.trans.interface import (
    NotSupportedLanguagesError,
    ProviderNotConfiguredError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslationRateLimitError,
    TranslationResponseError,
)
from core.trans.languages import SUPPORTED_LANGUAGES, is_supported_language
from core.trans.manager import TransManager
from core.trans.provider_chain import ProviderChain
from core.trans.rate_limiter import RateLimiter
from core.trans.static_dictionary import StaticDictionary

__all__: list[str] = [
    "SUPPORTED_LANGUAGES",
    "NotSupportedLanguagesError",
    "ProviderChain",
    "ProviderNotConfiguredError",
    "RateLimiter",
    "Result",
    "StaticDictionary",
    "TransInterface",
    "TransManager",
    "TranslateExceptionError",
    "TranslationRateLimitError",
    "TranslationResponseError",
    "is_supported_language",
]
