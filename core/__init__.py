"""Core components of the translation engine.

This package contains the service facade, the shared component container,
the key-value storage, the language state, and the translation and cache subpackages.
"""

from core.language_state import LanguageState
from core.service import TranslationService
from core.shared_data import SharedData
from core.storage import KeyValueStorage, StorageError, StorageQuotaExceededError

__all__: list[str] = [
    "KeyValueStorage",
    "LanguageState",
    "SharedData",
    "StorageError",
    "StorageQuotaExceededError",
    "TranslationService",
]
