"""Tools for exploring SQLite FTS5 full-text search and BM25 ranking."""

__version__ = "0.1.0"