"""Checks that SQLite supports FTS5 and BM25 scoring."""