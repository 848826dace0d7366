"""Reference list of the languages offered to end users."""

from __future__ import annotations

from typing import Final

from models.translation_models import SupportedLanguage

__all__: list[str] = ["SUPPORTED_LANGUAGES", "is_supported_language"]

SUPPORTED_LANGUAGES: Final[tuple[SupportedLanguage, ...]] = (
    SupportedLanguage(code="en", name="English", native="English"),
    SupportedLanguage(code="fr", name="French", native="Français"),
    SupportedLanguage(code="sw", name="Kiswahili", native="Kiswahili"),
    SupportedLanguage(code="es", name="Spanish", native="Español"),
    SupportedLanguage(code="pt", name="Portuguese", native="Português"),
    SupportedLanguage(code="ar", name="Arabic", native="العربية"),
    SupportedLanguage(code="zh", name="Chinese", native="中文"),
    SupportedLanguage(code="hi", name="Hindi", native="हिन्दी"),
    SupportedLanguage(code="de", name="German", native="Deutsch"),
    SupportedLanguage(code="it", name="Italian", native="Italiano"),
    SupportedLanguage(code="ja", name="Japanese", native="日本語"),
    SupportedLanguage(code="ko", name="Korean", native="한국어"),
    SupportedLanguage(code="ru", name="Russian", native="Русский"),
    SupportedLanguage(code="tr", name="Turkish", native="Türkçe"),
    SupportedLanguage(code="vi", name="Vietnamese", native="Tiếng Việt"),
    SupportedLanguage(code="nl", name="Dutch", native="Nederlands"),
    SupportedLanguage(code="pl", name="Polish", native="Polski"),
    SupportedLanguage(code="th", name="Thai", native="ไทย"),
    SupportedLanguage(code="uk", name="Ukrainian", native="Українська"),
)


def is_supported_language(code: str) -> bool:
    """Check whether a language code appears in the supported list (case-insensitive)."""
    return any(lang.code == code.lower() for lang in SUPPORTED_LANGUAGES)
