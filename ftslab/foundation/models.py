"""Records for documents stored in and returned from the FTS5 table."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Document:
    """A document to be inserted into the FTS5 table."""

    title: str
    content: str
    category: str


@dataclass
class SearchResult:
    """A search hit with its BM25 score (lower is better)."""

    row_id: int
    title: str
    content: str
    category: str
    score: float


@dataclass
class DocumentInfo:
    """Summary of a stored document for listings."""

    row_id: int
    title: str
    category: str
    preview: str