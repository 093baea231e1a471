"""Database wrapper and settings for the FTS5 foundation tool."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ftslab.foundation.errors import DatabaseError, FTS5Error, TransactionError

_SETTINGS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA cache_size=10000",
    "PRAGMA foreign_keys=ON",
    "PRAGMA temp_store=MEMORY",
)

_CREATE_DOCUMENTS = """
    CREATE VIRTUAL TABLE IF NOT EXISTS documents USING fts5(
        title,
        content,
        category,
        tokenize='unicode61 remove_diacritics 1'
    )"""


@dataclass
class Config:
    """Application settings; empty values fall back to their defaults."""

    database_path: str = ":memory:"
    verbose: bool = False
    format: str = "text"

    def __post_init__(self) -> None:
        if not self.database_path:
            self.database_path = ":memory:"
        if not self.format:
            self.format = "text"


class Database:
    """A SQLite connection configured for FTS5 document storage."""

    def __init__(self, data_source: str) -> None:
        try:
            conn = sqlite3.connect(data_source, isolation_level=None)
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to open database: {exc}") from exc
        try:
            for setting in _SETTINGS:
                conn.execute(setting)
        except sqlite3.Error as exc:
            conn.close()
            raise DatabaseError(f"failed to configure SQLite: {exc}") from exc
        self._conn: sqlite3.Connection | None = conn

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the connection; closing twice is harmless."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @property
    def connection(self) -> sqlite3.Connection:
        """The underlying connection for direct queries."""
        if self._conn is None:
            raise sqlite3.ProgrammingError("Cannot operate on a closed database.")
        return self._conn

    def verify_fts5_support(self) -> None:
        """Raise FTS5Error unless SQLite reports the ENABLE_FTS5 compile option."""
        try:
            (available,) = self.connection.execute(
                "SELECT COUNT(*) > 0 FROM pragma_compile_options "
                "WHERE compile_options = 'ENABLE_FTS5'"
            ).fetchone()
        except sqlite3.Error as exc:
            raise FTS5Error(f"failed to check FTS5 support: {exc}") from exc
        if not available:
            raise FTS5Error("SQLite not compiled with FTS5 support")

    def init_schema(self) -> None:
        """Create the ``documents`` FTS5 table if it does not exist."""
        self.verify_fts5_support()
        try:
            self.connection.execute(_CREATE_DOCUMENTS)
        except sqlite3.Error as exc:
            raise FTS5Error(f"failed to create FTS5 table: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the block in a transaction: commit on success, roll back on error."""
        conn = self.connection
        try:
            conn.execute("BEGIN")
        except sqlite3.Error as exc:
            raise TransactionError(f"failed to begin transaction: {exc}") from exc
        try:
            yield conn
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        if not conn.in_transaction:
            return
        try:
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise TransactionError(f"failed to commit transaction: {exc}") from exc