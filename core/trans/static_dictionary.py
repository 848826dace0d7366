"""Static dictionary resolver.

Exact-match lookups of original texts for one pinned target language, consulted before the cache
and before any network activity. The content is a flat JSON object mapping source text to its translation.
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any

from utils.file_utils import FileUtils, FileUtilsError
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping
    from pathlib import Path

__all__: list[str] = ["StaticDictionary"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class StaticDictionary:
    """Key-to-value table for one target language.

    Attributes:
        language (str): The only target language this dictionary answers for.
    """

    def __init__(self, language: str, entries: Mapping[str, str] | None = None) -> None:
        self.language: str = language.lower()
        self._entries: dict[str, str] = dict(entries or {})

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, original_text: str | None, target_language: str) -> str | None:
        """Look up an original text.

        Args:
            original_text (str | None): Text exactly as the caller supplied it.
            target_language (str): Requested target language.

        Returns:
            str | None: The dictionary value, or None when the language is not the pinned one or the key is absent.
        """
        if original_text is None or target_language.lower() != self.language:
            return None
        return self._entries.get(original_text)

    @classmethod
    def from_file(cls, language: str, path: str | Path) -> StaticDictionary:
        """Load a dictionary from a JSON object file.

        An empty path gives an empty dictionary. A missing or malformed file is logged and
        also gives an empty dictionary, so translation keeps working through the cache and providers.

        Args:
            language (str): Pinned target language.
            path (str | Path): JSON file path. Environment variables and ~ are expanded.

        Returns:
            StaticDictionary: The loaded dictionary.
        """
        if str(path).strip() == "":
            logger.debug("No static dictionary configured for '%s'", language)
            return cls(language)

        dic_path: Path = FileUtils.resolve_path(path)
        try:
            FileUtils.validate_file_path(dic_path, ".json")
            logger.info("file open '%s' as read-only", dic_path)
            with dic_path.open(mode="r", encoding="utf-8") as fhdl:
                data: Any = json.load(fhdl)
        except FileUtilsError as err:
            logger.warning("Static dictionary not loaded: %s", err)
            return cls(language)
        except OSError as err:
            logger.warning("failed to load '%s': %s", dic_path, err)
            return cls(language)
        except JSONDecodeError as err:
            logger.warning("'%s' is an invalid JSON format: %s", dic_path, err)
            return cls(language)
        except UnicodeDecodeError as err:
            logger.warning("'%s' is not UTF-8 encoded: %s", dic_path, err)
            return cls(language)

        if not isinstance(data, dict):
            logger.warning("'%s' must hold a JSON object", dic_path)
            return cls(language)

        entries: dict[str, str] = {k: v for k, v in data.items() if isinstance(v, str)}
        skipped: int = len(data) - len(entries)
        if skipped:
            logger.warning("Skipped %d non-string entries in '%s'", skipped, dic_path)
        logger.info("loaded dictionary '%s' (%d entries)", dic_path, len(entries))
        return cls(language, entries)
