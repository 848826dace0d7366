from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

import pytest

from config.loader import ConfigFileNotFoundError, ConfigFormatError, ConfigLoader, ConfigTypeError, ConfigValueError

if TYPE_CHECKING:
    from pathlib import Path


def _write_ini(tmp_path: Path, content: str) -> Path:
    ini_path: Path = tmp_path / "i18n_engine.ini"
    ini_path.write_text(dedent(content), encoding="utf-8")
    return ini_path


def test_config_loader_raises_for_missing_file(tmp_path: Path) -> None:
    ini_path: Path = tmp_path / "missing.ini"
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_config_loader_defaults_for_empty_file(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "")

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.GENERAL.DEBUG is False
    assert config.GENERAL.SCRIPT_NAME == "test"
    assert config.TRANSLATION.DEFAULT_LANGUAGE == "fr"
    assert config.TRANSLATION.SOURCE_LANGUAGE == "en"
    assert config.TRANSLATION.USE_SAVED_LANGUAGE is False
    assert config.TRANSLATION.TIMEOUT == 10.0
    assert config.STORAGE.QUOTA_BYTES == 5 * 1024 * 1024


def test_config_loader_reads_sections(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = True
        LOG_FILE = "engine.log"

        [TRANSLATION]
        DEFAULT_LANGUAGE = "DE"
        SOURCE_LANGUAGE = "en"
        USE_SAVED_LANGUAGE = yes
        PRIMARY_API_KEY = "abc"
        TIMEOUT = 2.5

        [DICTIONARY]
        LANGUAGE = "fr"
        PATH = "dictionaries/fr.json"

        [STORAGE]
        PATH = "store.db"
        QUOTA_BYTES = 1024
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.GENERAL.DEBUG is True
    assert config.GENERAL.LOG_FILE == "engine.log"
    assert config.TRANSLATION.DEFAULT_LANGUAGE == "de"
    assert config.TRANSLATION.USE_SAVED_LANGUAGE is True
    assert config.TRANSLATION.PRIMARY_API_KEY == "abc"
    assert config.TRANSLATION.TIMEOUT == 2.5
    assert config.DICTIONARY.PATH == "dictionaries/fr.json"
    assert config.STORAGE.PATH == "store.db"
    assert config.STORAGE.QUOTA_BYTES == 1024


def test_config_loader_overrides(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = False

        [TRANSLATION]
        DEFAULT_LANGUAGE = "fr"
        """,
    )

    config = ConfigLoader(
        config_filename=str(ini_path),
        script_name="test",
        debug=True,
        language="es",
        api_key="override",
    ).config

    assert config.GENERAL.DEBUG is True
    assert config.TRANSLATION.DEFAULT_LANGUAGE == "es"
    assert config.TRANSLATION.PRIMARY_API_KEY == "override"


def test_unknown_language_only_warns(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        DEFAULT_LANGUAGE = "xx"
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.DEFAULT_LANGUAGE == "xx"
    assert any("Unknown value 'xx'" in rec.message for rec in caplog.records)


def test_empty_source_language_raises(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        SOURCE_LANGUAGE = ""
        """,
    )

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_non_string_language_raises_type_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        DEFAULT_LANGUAGE = 1
        """,
    )

    with pytest.raises(ConfigTypeError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


@pytest.mark.parametrize(
    "content",
    [
        "[TRANSLATION]\nTIMEOUT = 0\n",
        "[TRANSLATION]\nTIMEOUT = abc\n",
        "[STORAGE]\nQUOTA_BYTES = -1\n",
        "[GENERAL]\nDEBUG = maybe\n",
    ],
)
def test_invalid_values_raise_config_value_error(tmp_path: Path, content: str) -> None:
    ini_path: Path = _write_ini(tmp_path, content)

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_unquoted_string_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [STORAGE]
        PATH = store db
        """,
    )

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_broken_ini_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "no section header\n")

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")
