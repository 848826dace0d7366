"""Translation provider implementations.

This package contains the concrete TransInterface implementations used by the provider chain.
Importing the package registers both providers under their distinguished names.

Modules:
- GoogleCloudTranslation: Credentialed primary provider (Google Cloud Translation v2 REST).
- MyMemoryTranslation: Keyless fallback provider (MyMemory).
"""

from core.trans.engines.trans_google_cloud import GOOGLE_CLOUD_TRANSLATE_URL, GoogleCloudTranslation
from core.trans.engines.trans_mymemory import MYMEMORY_URL, MyMemoryTranslation

__all__: list[str] = [
    "GOOGLE_CLOUD_TRANSLATE_URL",
    "MYMEMORY_URL",
    "GoogleCloudTranslation",
    "MyMemoryTranslation",
]
