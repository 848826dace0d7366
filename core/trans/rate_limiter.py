"""Global translation cooldown.

A provider throttling response starts a one-hour window during which no remote translation is attempted.
The trigger time is persisted so the window survives a restart.
"""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING, Final

from core.storage import StorageError
from models.translation_models import RateLimitRecord, RateLimitStatus
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from core.storage import KeyValueStorage

__all__: list[str] = ["RATE_LIMIT_STORAGE_KEY", "RateLimiter"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

RATE_LIMIT_STORAGE_KEY: Final[str] = "translation_rate_limit"
RATE_LIMIT_COOLDOWN_MS: Final[int] = 60 * 60 * 1000
MS_PER_MINUTE: Final[int] = 60 * 1000


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """Persistent cooldown window shared by every provider.

    Attributes:
        cooldown_ms (int): Length of the window in milliseconds.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        clock: Callable[[], int] = _epoch_ms,
        cooldown_ms: int = RATE_LIMIT_COOLDOWN_MS,
    ) -> None:
        """Initialize the limiter.

        Args:
            storage (KeyValueStorage): Storage holding the trigger record.
            clock (Callable[[], int]): Returns the current time in epoch milliseconds.
            cooldown_ms (int): Length of the window in milliseconds.
        """
        self._storage: KeyValueStorage = storage
        self._clock: Callable[[], int] = clock
        self.cooldown_ms: int = cooldown_ms
        self._record: RateLimitRecord | None = None

    def load(self) -> None:
        """Read the persisted trigger record. A missing or corrupt record means not limited."""
        self._record = None
        try:
            blob: str | None = self._storage.get(RATE_LIMIT_STORAGE_KEY)
        except StorageError as err:
            logger.warning("Failed to load rate limit record: %s", err)
            return
        if not blob:
            return

        try:
            record: RateLimitRecord = RateLimitRecord.from_json(blob)
            timestamp = int(record.timestamp)
        except (ValueError, TypeError, KeyError, AttributeError, OverflowError) as err:
            logger.warning("Ignoring corrupt rate limit record: %s", err)
            return
        self._record = RateLimitRecord(timestamp=timestamp)

        if self.is_limited():
            logger.warning("Translation rate limit active: %d minutes remaining", self.status().minutes_remaining)

    def _remaining_ms(self) -> int:
        if self._record is None:
            return 0
        return self.cooldown_ms - (self._clock() - self._record.timestamp)

    def is_limited(self) -> bool:
        return self._remaining_ms() > 0

    def trigger(self) -> None:
        """Start the cooldown window now and persist it."""
        self._record = RateLimitRecord(timestamp=self._clock())
        try:
            self._storage.set(RATE_LIMIT_STORAGE_KEY, self._record.to_json())
        except StorageError as err:
            logger.error("Failed to save rate limit record: %s", err)
        logger.warning(
            "Translation rate limit reached, remote translation paused for %d minutes",
            math.ceil(self.cooldown_ms / MS_PER_MINUTE),
        )

    def clear(self) -> None:
        """End the cooldown window and remove the persisted record."""
        self._record = None
        try:
            self._storage.remove(RATE_LIMIT_STORAGE_KEY)
        except StorageError as err:
            logger.error("Failed to remove rate limit record: %s", err)
        logger.info("Translation rate limit cleared")

    def status(self) -> RateLimitStatus:
        """Report whether the window is running and how many whole minutes remain (rounded up)."""
        remaining_ms: int = self._remaining_ms()
        if remaining_ms <= 0:
            return RateLimitStatus(is_limited=False, minutes_remaining=0)
        return RateLimitStatus(is_limited=True, minutes_remaining=max(0, math.ceil(remaining_ms / MS_PER_MINUTE)))
