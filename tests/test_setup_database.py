import sqlite3

import pytest

from ftslab.setup.database import Config, Database
from ftslab.setup.errors import DatabaseConnectionError, DatabaseError, FTS5Error
from ftslab.setup.utilities import sample_documents


@pytest.fixture
def db():
    with Database(":memory:") as database:
        yield database


def test_config_defaults():
    config = Config()
    assert config.verbose is False
    assert config.format == "text"


def test_config_empty_format_falls_back():
    assert Config(verbose=True, format="").format == "text"
    assert Config(format="json").format == "json"


def test_sqlite_version_matches_library(db):
    assert db.sqlite_version() == sqlite3.sqlite_version


def test_fts5_support_reported(db):
    db.verify_fts5_support()
    (available,) = db.connection.execute(
        "SELECT COUNT(*) FROM pragma_compile_options WHERE compile_options = 'ENABLE_FTS5'"
    ).fetchone()
    assert available == 1


def test_insert_and_count(db):
    db.create_test_table("test_data_validation")
    db.insert_test_data("test_data_validation")
    assert db.count_documents("test_data_validation") == len(sample_documents())


def test_bm25_query_returns_negative_scores(db):
    db.create_test_table("bm25_validation_test")
    db.insert_test_data("bm25_validation_test")
    rows = db.query_with_bm25("bm25_validation_test", "SQLite")
    assert len(rows) >= 1
    assert all(row[3] < 0 for row in rows)


def test_duplicate_table_raises_fts5_error(db):
    db.create_test_table("t")
    with pytest.raises(FTS5Error, match="failed to create test table"):
        db.create_test_table("t")


def test_insert_missing_table_raises(db):
    with pytest.raises(DatabaseError, match="failed to insert test data"):
        db.insert_test_data("missing")


def test_count_missing_table_raises(db):
    with pytest.raises(DatabaseError, match="failed to count documents"):
        db.count_documents("missing")


def test_query_missing_table_raises(db):
    with pytest.raises(FTS5Error, match="failed to execute BM25 query"):
        db.query_with_bm25("missing", "x")


def test_bad_path_raises_connection_error(tmp_path):
    with pytest.raises(DatabaseConnectionError, match="failed to connect to database"):
        Database(str(tmp_path / "missing" / "x.db"))


def test_closed_database_raises():
    database = Database(":memory:")
    database.close()
    database.close()
    with pytest.raises(DatabaseError, match="failed to get SQLite version"):
        database.sqlite_version()
    with pytest.raises(FTS5Error, match="failed to check FTS5 support"):
        database.verify_fts5_support()


def test_context_manager_closes():
    with Database(":memory:") as database:
        assert database.count_documents("sqlite_master") == 0
    with pytest.raises(sqlite3.ProgrammingError):
        database.connection