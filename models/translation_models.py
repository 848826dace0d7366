"""Models for translation-related data.

Defines the supported-language reference entry, the persisted rate-limit record,
the rate-limit status report, and the language change event.
"""

from __future__ import annotations

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin, dataclass_json

__all__: list[str] = ["LanguageChangedEvent", "RateLimitRecord", "RateLimitStatus", "SupportedLanguage"]


@dataclass_json
@dataclass(frozen=True)
class SupportedLanguage(DataClassJsonMixin):
    """Supported target language.

    Attributes:
        code (str): Language code used by the providers (e.g., 'fr').
        name (str): English name of the language.
        native (str): Name of the language written in that language.
    """

    code: str
    name: str
    native: str


@dataclass_json
@dataclass
class RateLimitRecord(DataClassJsonMixin):
    """Persisted trigger of the global cooldown.

    Attributes:
        timestamp (int): Epoch milliseconds at which a provider reported throttling.
    """

    timestamp: int


@dataclass(frozen=True)
class RateLimitStatus:
    """Rate-limit state reported to callers.

    Attributes:
        is_limited (bool): True while the cooldown window is running.
        minutes_remaining (int): Whole minutes left in the window, rounded up. 0 when not limited.
    """

    is_limited: bool = False
    minutes_remaining: int = 0


@dataclass(frozen=True)
class LanguageChangedEvent:
    """Notification sent to subscribers when the current language changes.

    Attributes:
        language (str): The new language code.
        previous (str): The language code before the change.
    """

    language: str
    previous: str
