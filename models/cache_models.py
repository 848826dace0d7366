"""Models for translation cache data."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["CacheStatistics"]


@dataclass
class CacheStatistics:
    """Cache usage statistics.

    Attributes:
        total_entries (int): Number of distinct normalized texts in the cache.
        total_translations (int): Number of cached (text, language) pairs.
        language_distribution (dict[str, int]): Cached translations per target language.
        serialized_bytes (int): Size of the persisted cache blob.
    """

    total_entries: int = 0
    total_translations: int = 0
    language_distribution: dict[str, int] = field(default_factory=dict)
    serialized_bytes: int = 0
