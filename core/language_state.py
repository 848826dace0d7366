"""Current target language and change notification."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, TypeAlias

from core.storage import StorageError
from models.translation_models import LanguageChangedEvent
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from core.storage import KeyValueStorage

    LanguageListener: TypeAlias = Callable[[LanguageChangedEvent], None]

__all__: list[str] = ["LANGUAGE_STORAGE_KEY", "LanguageState"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

LANGUAGE_STORAGE_KEY: Final[str] = "translation_language"


class LanguageState:
    """Holder of the current target language.

    Subscribers are called synchronously, in subscription order, every time the language changes.
    Each change is also written to storage as the end-user preference.
    """

    def __init__(self, default_language: str, storage: KeyValueStorage | None = None) -> None:
        self._language: str = default_language
        self._storage: KeyValueStorage | None = storage
        self._listeners: list[LanguageListener] = []

    def load_saved_language(self) -> bool:
        """Replace the current language with the persisted preference, if any.

        Subscribers are not notified.

        Returns:
            bool: True if a saved preference was applied.
        """
        if self._storage is None:
            return False
        try:
            saved: str | None = self._storage.get(LANGUAGE_STORAGE_KEY)
        except StorageError as err:
            logger.warning("Failed to load saved language: %s", err)
            return False
        if not saved:
            return False
        self._language = saved
        logger.info("Saved language applied: '%s'", saved)
        return True

    def get_language(self) -> str:
        return self._language

    def set_language(self, code: str) -> None:
        """Change the current language and notify subscribers.

        Setting the language already in effect does nothing.

        Args:
            code (str): New language code.
        """
        if code == self._language:
            return
        previous: str = self._language
        self._language = code
        logger.info("Language changed: '%s' -> '%s'", previous, code)
        self._save(code)

        event = LanguageChangedEvent(language=code, previous=previous)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:  # noqa: BLE001
                logger.exception("Language change listener failed: %r", listener)

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener (LanguageListener): Called with a LanguageChangedEvent on every change.

        Returns:
            Callable[[], None]: Function that removes the listener. Calling it twice is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _save(self, code: str) -> None:
        if self._storage is None:
            return
        try:
            self._storage.set(LANGUAGE_STORAGE_KEY, code)
        except StorageError as err:
            logger.error("Failed to save language preference: %s", err)
