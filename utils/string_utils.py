from __future__ import annotations

from typing import Any

__all__: list[str] = ["StringUtils"]


class StringUtils:
    """Utility class for the string handling shared by the resolution engine and its stores."""

    @staticmethod
    def ensure_str(value: str | None) -> str:
        """Ensure that the value is a string, returning an empty string if None.

        Args:
            value (str | None): The value to ensure as a string.

        Returns:
            str: The value as a string, or empty string if None.
        """
        if not isinstance(value, str):
            value = str(value) if value is not None else ""
        return value

    @staticmethod
    def is_blank(value: Any) -> bool:
        """Check whether the value is not a string or contains only whitespace.

        Args:
            value (Any): Value received from a caller.

        Returns:
            bool: True if the value cannot be translated.
        """
        return not isinstance(value, str) or value.strip() == ""

    @staticmethod
    def normalize_text(text: str) -> str:
        """Build the cache key of a source text.

        The key is the lowercased text with leading and trailing whitespace removed.
        Inner whitespace and punctuation are kept as-is.

        Args:
            text (str): Original source text.

        Returns:
            str: Normalized cache key.
        """
        return text.lower().strip()

    @staticmethod
    def shorten(value: str, limit: int = 50) -> str:
        """Cut a string for log output.

        Args:
            value (str): The string to shorten.
            limit (int): Maximum number of characters kept.

        Returns:
            str: The original string, or its head followed by '...'.
        """
        value = StringUtils.ensure_str(value)
        if len(value) <= limit:
            return value
        return f"{value[:limit]}..."
