"""Configuration data models for the translation engine.

Each dataclass mirrors one section of the INI file. Field names match the INI keys,
and the default value of each field decides how the loader coerces the raw string.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["Config"]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""
    SCRIPT_NAME: str = ""


@dataclass
class Translation:
    DEFAULT_LANGUAGE: str = "fr"
    SOURCE_LANGUAGE: str = "en"
    USE_SAVED_LANGUAGE: bool = False
    PRIMARY_API_KEY: str = ""
    TIMEOUT: float = 10.0


@dataclass
class Dictionary:
    LANGUAGE: str = "fr"
    PATH: str = ""


@dataclass
class Storage:
    PATH: str = "translation_store.db"
    QUOTA_BYTES: int = 5 * 1024 * 1024


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    TRANSLATION: Translation = field(default_factory=Translation)
    DICTIONARY: Dictionary = field(default_factory=Dictionary)
    STORAGE: Storage = field(default_factory=Storage)
