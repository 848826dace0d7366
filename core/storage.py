"""Key-value storage implementation using SQLite3.

This module provides the persistent string store behind the translation cache,
the rate-limit record, the debug flag, and the saved language preference.
"""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path
from typing import TYPE_CHECKING, Final, Self

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = ["KeyValueStorage", "StorageError", "StorageQuotaExceededError"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

MEMORY_DB: Final[str] = ":memory:"


class StorageError(Exception):
    """The key-value store could not be read or written."""


class StorageQuotaExceededError(StorageError):
    """The value does not fit in the storage quota."""


class KeyValueStorage:
    """SQLite3-based string key-value store.

    Every write replaces the whole value of a key. Values larger than the quota are rejected
    with StorageQuotaExceededError before they reach the database, the same way a full disk is reported.

    Attributes:
        db_path (Path | str): Path to the SQLite database file, or ":memory:".
        quota_bytes (int): Maximum UTF-8 size of one value. 0 disables the check.
        _connection (sqlite3.Connection | None): Active database connection.
    """

    def __init__(self, db_path: str | Path, *, quota_bytes: int = 0) -> None:
        """Initialize the storage with the path to the database file.

        Args:
            db_path (str | Path): Path to the SQLite database file, or ":memory:".
            quota_bytes (int): Maximum UTF-8 size of one value. 0 disables the check.

        Raises:
            RuntimeError: If the database path is empty.
        """
        if str(db_path).strip() == "":
            msg: str = "The database path is empty."
            raise RuntimeError(msg)

        self.db_path: Path | str = db_path if str(db_path) == MEMORY_DB else Path(db_path)
        self.quota_bytes: int = max(0, quota_bytes)
        self._connection: sqlite3.Connection | None = None
        logger.debug("Database path set to: %s", self.db_path)

    def __enter__(self) -> Self:
        self._initialize_database()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        self.close()

    def _initialize_database(self) -> None:
        """Open the connection and create the table if it does not exist.

        Raises:
            StorageError: If the database cannot be opened.
        """
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._connection = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None,  # Autocommit mode
            )
            self._connection.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
        except sqlite3.Error as err:
            msg: str = f"Database initialization failed: {err}"
            raise StorageError(msg) from err
        logger.debug("Database initialized successfully")

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._initialize_database()
        if self._connection is None:
            msg = "Database connection is not initialized."
            raise StorageError(msg)
        return self._connection

    def get(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key (str): Storage key.

        Returns:
            str | None: The stored value, or None if the key is absent.

        Raises:
            StorageError: If the database cannot be read.
        """
        try:
            row = self.connection.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as err:
            msg: str = f"Failed to read '{key}': {err}"
            raise StorageError(msg) from err
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value.

        Args:
            key (str): Storage key.
            value (str): Value to store.

        Raises:
            StorageQuotaExceededError: If the value exceeds the quota or the disk is full.
            StorageError: If the database cannot be written.
        """
        size: int = len(value.encode("utf-8"))
        if self.quota_bytes and size > self.quota_bytes:
            msg: str = f"Value for '{key}' is {size} bytes, quota is {self.quota_bytes} bytes"
            raise StorageQuotaExceededError(msg)

        try:
            self.connection.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, time.time()),
            )
        except sqlite3.Error as err:
            if getattr(err, "sqlite_errorcode", None) == sqlite3.SQLITE_FULL or "full" in str(err).lower():
                msg = f"Storage is full while writing '{key}': {err}"
                raise StorageQuotaExceededError(msg) from err
            msg = f"Failed to write '{key}': {err}"
            raise StorageError(msg) from err
        logger.debug("Stored '%s' (%d bytes)", key, size)

    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored.

        Raises:
            StorageError: If the database cannot be written.
        """
        try:
            self.connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except sqlite3.Error as err:
            msg: str = f"Failed to remove '{key}': {err}"
            raise StorageError(msg) from err
        logger.debug("Removed '%s'", key)

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            try:
                self._connection.close()
            except sqlite3.Error as err:
                logger.error("Error closing database connection: %s", err)
            finally:
                self._connection = None
            logger.debug("Database connection closed")
