"""Database wrapper and settings for the setup validation tool."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from ftslab.setup.errors import DatabaseConnectionError, DatabaseError, FTS5Error
from ftslab.setup.utilities import (
    connect_fts5,
    create_basic_document_table,
    insert_sample_documents,
    query_fts5_with_bm25,
)


@dataclass
class Config:
    """Application settings; an empty format falls back to text."""

    verbose: bool = False
    format: str = "text"

    def __post_init__(self) -> None:
        if not self.format:
            self.format = "text"


class Database:
    """A SQLite connection with FTS5 validation operations."""

    def __init__(self, data_source: str) -> None:
        try:
            self._conn: sqlite3.Connection | None = connect_fts5(data_source)
        except sqlite3.Error as exc:
            raise DatabaseConnectionError(f"failed to connect to database: {exc}") from exc

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

    def create_test_table(self, table_name: str) -> None:
        """Create an FTS5 document table for validation."""
        try:
            create_basic_document_table(self.connection, table_name)
        except sqlite3.Error as exc:
            raise FTS5Error(f"failed to create test table: {exc}") from exc

    def insert_test_data(self, table_name: str) -> None:
        """Insert the sample documents into a table."""
        try:
            insert_sample_documents(self.connection, table_name)
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to insert test data: {exc}") from exc

    def query_with_bm25(self, table_name: str, search_term: str) -> list[tuple]:
        """Return (id, title, content, score) rows ordered by BM25 score."""
        try:
            return query_fts5_with_bm25(self.connection, table_name, search_term)
        except sqlite3.Error as exc:
            raise FTS5Error(f"failed to execute BM25 query: {exc}") from exc

    def count_documents(self, table_name: str) -> int:
        """Return the number of rows in a table."""
        try:
            (count,) = self.connection.execute(f"SELECT COUNT(*) FROM {table_name}").fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to count documents: {exc}") from exc
        return count

    def sqlite_version(self) -> str:
        """Return the SQLite library version string."""
        try:
            (version,) = self.connection.execute("SELECT sqlite_version()").fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to get SQLite version: {exc}") from exc
        return version