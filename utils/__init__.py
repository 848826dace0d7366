"""Utility modules for the translation engine.

This package provides utility functions for logging, file handling, and string manipulation.
"""

from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

__all__: list[str] = ["FileUtils", "LoggerUtils", "StringUtils"]
