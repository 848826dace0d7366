"""Translation cache package.

Provides the persistent, size-bounded cache of provider translations.
"""

from __future__ import annotations

from core.cache.manager import CACHE_STORAGE_KEY, TranslationCacheManager

__all__: list[str] = ["CACHE_STORAGE_KEY", "TranslationCacheManager"]
