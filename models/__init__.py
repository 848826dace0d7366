"""Data models for the translation engine.

This package contains dataclass definitions for configuration, cache statistics,
and translation state shared across the engine components.
"""

from __future__ import annotations

from models.cache_models import CacheStatistics
from models.config_models import Config
from models.translation_models import LanguageChangedEvent, RateLimitRecord, RateLimitStatus, SupportedLanguage

__all__: list[str] = [
    "CacheStatistics",
    "Config",
    "LanguageChangedEvent",
    "RateLimitRecord",
    "RateLimitStatus",
    "SupportedLanguage",
]
