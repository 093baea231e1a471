"""SQLite FTS5 helpers: connecting, creating tables, sample data and queries."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Document:
    """A simple document for FTS5 experiments."""

    id: int
    title: str
    content: str


_SAMPLE_DOCUMENTS = (
    Document(1, "SQLite Introduction",
             "SQLite is a lightweight database engine that supports full-text search through FTS5."),
    Document(2, "BM25 Algorithm",
             "BM25 is a ranking function used by search engines to estimate relevance of documents to queries."),
    Document(3, "Full-Text Search",
             "Full-text search allows users to search for documents containing specific words or phrases."),
    Document(4, "Database Indexing",
             "Indexes improve query performance by creating efficient data structures for searching."),
    Document(5, "Information Retrieval",
             "Information retrieval systems help users find relevant documents from large collections."),
)


def connect_fts5(data_source: str) -> sqlite3.Connection:
    """Open a SQLite connection and check that FTS5 tables can be created."""
    try:
        conn = sqlite3.connect(data_source)
    except sqlite3.Error as exc:
        raise sqlite3.OperationalError(f"failed to open database: {exc}") from exc
    try:
        _verify_fts5_support(conn)
    except sqlite3.Error as exc:
        conn.close()
        raise sqlite3.OperationalError(f"FTS5 not available: {exc}") from exc
    return conn


def connect_memory_fts5() -> sqlite3.Connection:
    """Open an in-memory SQLite database with FTS5 checked."""
    return connect_fts5(":memory:")


def _verify_fts5_support(conn: sqlite3.Connection) -> None:
    try:
        conn.execute("CREATE VIRTUAL TABLE temp.fts5_test USING fts5(content)")
    except sqlite3.Error as exc:
        raise sqlite3.OperationalError(
            f"SQLite was not compiled with FTS5 support: {exc}"
        ) from exc
    try:
        conn.execute("DROP TABLE temp.fts5_test")
    except sqlite3.Error:
        pass


def create_fts5_table(conn: sqlite3.Connection, table_name: str, columns: Iterable[str]) -> None:
    """Create an FTS5 virtual table with the given columns."""
    column_list = ", ".join(columns)
    try:
        conn.execute(f"CREATE VIRTUAL TABLE {table_name} USING fts5({column_list})")
    except sqlite3.Error as exc:
        raise sqlite3.OperationalError(
            f"failed to create FTS5 table {table_name}: {exc}"
        ) from exc


def create_basic_document_table(conn: sqlite3.Connection, table_name: str) -> None:
    """Create an FTS5 table with id, title and content columns."""
    create_fts5_table(conn, table_name, ["id", "title", "content"])


def query_fts5(conn: sqlite3.Connection, table_name: str, search_term: str) -> list[tuple]:
    """Return (id, title, content) rows matching the term, best first."""
    sql = f"SELECT id, title, content FROM {table_name} WHERE {table_name} MATCH ? ORDER BY rank"
    try:
        return conn.execute(sql, (search_term,)).fetchall()
    except sqlite3.Error as exc:
        raise sqlite3.OperationalError(f"failed to query FTS5 table: {exc}") from exc


def query_fts5_with_bm25(conn: sqlite3.Connection, table_name: str, search_term: str) -> list[tuple]:
    """Return (id, title, content, score) rows ordered by BM25 score."""
    sql = (
        f"SELECT id, title, content, bm25({table_name}) as score FROM {table_name} "
        f"WHERE {table_name} MATCH ? ORDER BY bm25({table_name})"
    )
    try:
        return conn.execute(sql, (search_term,)).fetchall()
    except sqlite3.Error as exc:
        raise sqlite3.OperationalError(
            f"failed to query FTS5 table with BM25: {exc}"
        ) from exc


def sample_documents() -> list[Document]:
    """Return the fixed set of sample documents."""
    return list(_SAMPLE_DOCUMENTS)


def insert_sample_documents(conn: sqlite3.Connection, table_name: str) -> None:
    """Insert the sample documents into an FTS5 table."""
    sql = f"INSERT INTO {table_name} (id, title, content) VALUES (?, ?, ?)"
    with conn:
        for doc in sample_documents():
            try:
                conn.execute(sql, (doc.id, doc.title, doc.content))
            except sqlite3.Error as exc:
                raise sqlite3.OperationalError(
                    f"failed to insert document {doc.id}: {exc}"
                ) from exc