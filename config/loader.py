"""Configuration file loader and validator.

Handles reading, formatting, and validating settings from the INI configuration file.
Raises exceptions for any issues encountered during loading.
"""

from __future__ import annotations

import ast
import configparser
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from core.trans.languages import is_supported_language
from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from dataclasses import Field as DataclassField
else:
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "Config",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    This class reads the configuration file, applies formatting rules, and validates settings.
    It raises exceptions for any issues encountered during the loading process.

    Args:
        config_filename (str): INI file name to load.
        script_name (str): Executing script name, used in error messaging.
        debug (bool | None): Optional override enabling debug logging.
        language (str | None): Optional override for the default target language.
        api_key (str | None): Optional override for the primary provider API key.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(
        self,
        *,
        config_filename: str,
        script_name: str,
        **args,
    ) -> None:
        config_path = Path(config_filename)
        msg: str
        if not config_path.exists():
            msg = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_filename}' in the same directory as '{script_name}'."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()

        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self.config.GENERAL.SCRIPT_NAME = script_name
        self._convert_settings(parser)
        # Apply command-line argument overrides
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True
        if args.get("language") is not None:
            self.config.TRANSLATION.DEFAULT_LANGUAGE = args["language"]
        if args.get("api_key") is not None:
            self.config.TRANSLATION.PRIMARY_API_KEY = args["api_key"]
        self._validate_settings()

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Convert configuration settings from the parser to the Config object.

        Args:
            parser (ConfigParser): Parsed INI data.

        Raises:
            ConfigFormatError: If a value cannot be parsed or coerced to the expected type.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Skipping undefined section: '%s'", section.name)
                continue
            self._convert_section_field(parser, formatter, section)

    def _convert_section_field(
        self, parser: ConfigParser, formatter: _ConfigFormatter, section: DataclassField[Any]
    ) -> None:
        """Convert all fields in a configuration section.

        Args:
            parser (ConfigParser): Parsed INI data.
            formatter (_ConfigFormatter): Formatter used to coerce string values to typed values.
            section (Field[Any]): Target configuration section dataclass field.

        Raises:
            ConfigFormatError: If a value fails to format correctly.
        """
        for key in fields(getattr(self.config, section.name)):
            if not parser.has_option(section.name, key.name):
                logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                continue

            formatted_value = formatter.apply_format(section, key)
            setattr(getattr(self.config, section.name), key.name, formatted_value)

    def _validate_settings(self) -> None:
        """Validate language codes, the request timeout, and the storage quota.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        for section_name, key_name in (
            ("GENERAL", "LOG_FILE"),
            ("TRANSLATION", "DEFAULT_LANGUAGE"),
            ("TRANSLATION", "SOURCE_LANGUAGE"),
            ("TRANSLATION", "PRIMARY_API_KEY"),
            ("DICTIONARY", "LANGUAGE"),
            ("DICTIONARY", "PATH"),
            ("STORAGE", "PATH"),
        ):
            self._validate_str_setting(section_name, key_name)

        self._validate_language_code("TRANSLATION", "SOURCE_LANGUAGE", required=True)
        self._validate_language_code("TRANSLATION", "DEFAULT_LANGUAGE", required=True)
        self._validate_language_code("DICTIONARY", "LANGUAGE", required=False)

        if self.config.TRANSLATION.TIMEOUT <= 0:
            msg: str = f"'TRANSLATION.TIMEOUT' must be positive: {self.config.TRANSLATION.TIMEOUT}"
            raise ConfigValueError(msg)
        if self.config.STORAGE.QUOTA_BYTES < 0:
            msg = f"'STORAGE.QUOTA_BYTES' must not be negative: {self.config.STORAGE.QUOTA_BYTES}"
            raise ConfigValueError(msg)
        if self.config.STORAGE.PATH.strip() == "":
            msg = "'STORAGE.PATH' is empty"
            raise ConfigValueError(msg)

    def _validate_str_setting(self, section_name: str, key_name: str) -> None:
        """Check that a literal setting evaluated to a string.

        Raises:
            ConfigTypeError: If the configured value is not a string.
        """
        value: Any = getattr(getattr(self.config, section_name), key_name)
        if not isinstance(value, str):
            msg: str = f"Unsupported type used for '{section_name}.{key_name}': {type(value)}"
            raise ConfigTypeError(msg)

    def _validate_language_code(self, section_name: str, key_name: str, *, required: bool) -> None:
        """Normalize a language code and warn about codes outside the supported list.

        Raises:
            ConfigValueError: If a required code is empty.
        """
        value: str = getattr(getattr(self.config, section_name), key_name).strip().lower()
        field_name: str = f"{section_name}.{key_name}"

        if not value:
            if required:
                msg: str = f"'{field_name}' is empty"
                raise ConfigValueError(msg)
            return
        if not is_supported_language(value):
            logger.warning("Unknown value '%s' is set for '%s'", value, field_name)
        setattr(getattr(self.config, section_name), key_name, value)


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, int, float, str)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert INI value to the expected Python type based on the Config field type.

        Args:
            section (DataclassField[Any]): Configuration section field containing the key.
            key (DataclassField[Any]): Target field within the section.

        Returns:
            Any: Parsed value coerced to the type declared in the config dataclass.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If an unexpected type is encountered during coercion.
        """
        formatters: dict[
            type[bool | int | float], Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float]
        ] = {
            bool: self.parse_as_boolean,
            int: self.parse_as_integer,
            float: self.parse_as_float,
        }

        formatter: Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float] | None = formatters.get(
            type(getattr(getattr(self.config, section.name), key.name))
        )
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigTypeError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            return ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        """Convert INI string to float."""
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return float(value)

    def parse_as_integer(self, section: DataclassField[Any], key: DataclassField[Any]) -> int:
        """Convert INI string to integer."""
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return int(float(value))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        """Convert INI string to boolean."""
        return self.parser.getboolean(section.name, key.name)
