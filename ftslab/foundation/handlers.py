"""Document operations on the FTS5 table and formatting of their results."""

from __future__ import annotations

import sqlite3
import sys
from collections import Counter
from typing import Iterable, TextIO

from ftslab.foundation.database import Database
from ftslab.foundation.errors import DatabaseError, NotFoundError, ValidationError
from ftslab.foundation.models import Document, DocumentInfo, SearchResult

_INSERT_SQL = "INSERT INTO documents (title, content, category) VALUES (?, ?, ?)"

_SEARCH_SQL = """
    SELECT rowid, title, content, category, bm25(documents) AS score
    FROM documents
    WHERE documents MATCH ?
    ORDER BY score
    LIMIT ?"""

_LIST_SQL = """
    SELECT rowid, title, content, category
    FROM documents
    ORDER BY rowid
    LIMIT ?"""

VALID_FIELDS = ("title", "content", "category")

DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LIST_LIMIT = 50
PREVIEW_LENGTH = 100
RESULT_CONTENT_LENGTH = 150


def _blank(value: str) -> bool:
    return not value.strip()


class DocumentService:
    """Create, search, list, update and delete documents in the FTS5 table."""

    def __init__(self, database: Database, verbose: bool = False, out: TextIO | None = None) -> None:
        self.database = database
        self.verbose = verbose
        self.out = out if out is not None else sys.stdout

    def _print(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def create_documents_table(self) -> None:
        """Create the ``documents`` FTS5 table."""
        self.database.init_schema()
        if self.verbose:
            self._print("✓ FTS5 documents table created successfully")
            self._print("Schema: title, content, category with unicode61 tokenizer")

    def verify_fts5_support(self) -> None:
        """Raise FTS5Error unless SQLite has FTS5 support."""
        self.database.verify_fts5_support()

    def insert_document(self, title: str, content: str, category: str) -> int:
        """Insert one document and return its row id."""
        if _blank(title):
            raise ValidationError("title cannot be empty")
        if _blank(content):
            raise ValidationError("content cannot be empty")
        if _blank(category):
            raise ValidationError("category cannot be empty")

        try:
            cursor = self.database.connection.execute(_INSERT_SQL, (title, content, category))
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to insert document: {exc}") from exc
        row_id = cursor.lastrowid

        if self.verbose:
            self._print(f"Successfully inserted document with ID: {row_id}")
            self._print(f"Title: {title}")
            self._print(f"Category: {category}")
            self._print(f"Content length: {len(content)} characters")
        return row_id

    def batch_insert_documents(self, documents: Iterable[Document]) -> int:
        """Insert all documents in one transaction and return how many were inserted."""
        documents = list(documents)
        if not documents:
            raise ValidationError("no documents provided for batch insertion")

        for number, doc in enumerate(documents, start=1):
            if _blank(doc.title):
                raise ValidationError(f"document {number}: title cannot be empty")
            if _blank(doc.content):
                raise ValidationError(f"document {number}: content cannot be empty")
            if _blank(doc.category):
                raise ValidationError(f"document {number}: category cannot be empty")

        inserted = 0
        with self.database.transaction() as conn:
            for number, doc in enumerate(documents, start=1):
                try:
                    conn.execute(_INSERT_SQL, (doc.title, doc.content, doc.category))
                except sqlite3.Error as exc:
                    raise DatabaseError(f"failed to insert document {number}: {exc}") from exc
                inserted += 1

        if self.verbose:
            self._print(f"Successfully inserted {inserted} documents in batch operation")
            self._print("Documents by category:")
            for category, count in Counter(doc.category for doc in documents).items():
                self._print(f"  {category}: {count} documents")
        return inserted

    def search_documents(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
        """Full-text search ordered by BM25 score, best (lowest) first."""
        if _blank(query):
            raise ValidationError("search query cannot be empty")
        if limit <= 0:
            limit = DEFAULT_SEARCH_LIMIT

        try:
            rows = self.database.connection.execute(_SEARCH_SQL, (query, limit)).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to execute search query: {exc}") from exc

        results = [SearchResult(*row) for row in rows]

        if self.verbose:
            self._print(f"Search query: {query}")
            self._print(f"Found {len(results)} results (limit: {limit})")
            if results:
                self._print(
                    f"Best match score: {results[0].score:.4f} (lower is better in SQLite FTS5)")
        return results

    def search_by_category(self, query: str, category: str,
                           limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
        """Search only documents whose category matches."""
        if _blank(query):
            raise ValidationError("search query cannot be empty")
        if _blank(category):
            raise ValidationError("category cannot be empty")
        if limit <= 0:
            limit = DEFAULT_SEARCH_LIMIT
        return self.search_documents(f"category:{category} AND {query}", limit)

    def search_by_field(self, query: str, field: str,
                        limit: int = DEFAULT_SEARCH_LIMIT) -> list[SearchResult]:
        """Search within one column: title, content or category."""
        if _blank(query):
            raise ValidationError("search query cannot be empty")
        if field not in VALID_FIELDS:
            raise ValidationError(
                f"invalid field '{field}'. Valid fields: {', '.join(VALID_FIELDS)}")
        if limit <= 0:
            limit = DEFAULT_SEARCH_LIMIT
        return self.search_documents(f"{field}:{query}", limit)

    def list_documents(self, limit: int = DEFAULT_LIST_LIMIT) -> list[DocumentInfo]:
        """List documents in row id order with a content preview."""
        if limit <= 0:
            limit = DEFAULT_LIST_LIMIT

        try:
            rows = self.database.connection.execute(_LIST_SQL, (limit,)).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to list documents: {exc}") from exc

        documents = []
        for row_id, title, content, category in rows:
            preview = content[:PREVIEW_LENGTH] + "..." if len(content) > PREVIEW_LENGTH else content
            documents.append(DocumentInfo(row_id, title, category, preview))

        if self.verbose:
            self._print(f"Found {len(documents)} documents (limit: {limit})")
        return documents

    def _fetch_existing(self, row_id: int, columns: str) -> tuple:
        try:
            row = self.database.connection.execute(
                f"SELECT {columns} FROM documents WHERE rowid = ?", (row_id,)).fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to check existing document: {exc}") from exc
        if row is None:
            raise NotFoundError(f"document with rowid {row_id}")
        return row

    def update_document(self, row_id: int, title: str = "", content: str = "",
                        category: str = "") -> None:
        """Change the given fields of a document; blank fields keep their value."""
        if row_id <= 0:
            raise ValidationError(f"invalid rowid: {row_id}")
        if title == "" and content == "" and category == "":
            raise ValidationError(
                "at least one field (title, content, category) must be provided for update")

        current_title, current_content, current_category = self._fetch_existing(
            row_id, "title, content, category")
        new_title = title.strip() or current_title
        new_content = content.strip() or current_content
        new_category = category.strip() or current_category

        try:
            cursor = self.database.connection.execute(
                "UPDATE documents SET title = ?, content = ?, category = ? WHERE rowid = ?",
                (new_title, new_content, new_category, row_id))
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to update document: {exc}") from exc
        if cursor.rowcount == 0:
            raise NotFoundError(f"no document was updated (rowid {row_id} may not exist)")

        if self.verbose:
            self._print(f"Successfully updated document {row_id}")
            self._print("New values:")
            self._print(f"  Title: {new_title}")
            self._print(f"  Category: {new_category}")
            self._print(f"  Content length: {len(new_content)} characters")
            self._print("FTS5 index automatically updated")

    def delete_document(self, row_id: int) -> None:
        """Remove a document by row id."""
        if row_id <= 0:
            raise ValidationError(f"invalid rowid: {row_id}")

        title, category = self._fetch_existing(row_id, "title, category")

        try:
            cursor = self.database.connection.execute(
                "DELETE FROM documents WHERE rowid = ?", (row_id,))
        except sqlite3.Error as exc:
            raise DatabaseError(f"failed to delete document: {exc}") from exc
        if cursor.rowcount == 0:
            raise NotFoundError(f"no document was deleted (rowid {row_id} may not exist)")

        if self.verbose:
            self._print(f"Successfully deleted document {row_id}")
            self._print(f"Deleted document: {title} (category: {category})")
            self._print("FTS5 index automatically updated")


def format_search_results(results: Iterable[SearchResult], show_scores: bool = False) -> str:
    """Render search results as text, with BM25 scores if asked."""
    results = list(results)
    if not results:
        return "No results found."
    parts = []
    for number, result in enumerate(results, start=1):
        content = result.content
        if len(content) > RESULT_CONTENT_LENGTH:
            content = content[:RESULT_CONTENT_LENGTH] + "..."
        parts.append(f"\n--- Result #{number} ---\n")
        parts.append(f"Title: {result.title}\n")
        parts.append(f"Category: {result.category}\n")
        parts.append(f"Content: {content}\n")
        if show_scores:
            parts.append(f"BM25 Score: {result.score:.4f} (lower is better)\n")
    return "".join(parts)


def format_document_list(documents: Iterable[DocumentInfo]) -> str:
    """Render a document listing as text."""
    documents = list(documents)
    if not documents:
        return "No documents found."
    parts = [f"\nFound {len(documents)} document(s):\n"]
    for doc in documents:
        parts.append(f"\n--- Document ID: {doc.row_id} ---\n")
        parts.append(f"Title: {doc.title}\n")
        parts.append(f"Category: {doc.category}\n")
        parts.append(f"Preview: {doc.preview}\n")
    return "".join(parts)