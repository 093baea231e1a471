import io

import pytest

from ftslab.setup.errors import (
    DatabaseConnectionError,
    DatabaseError,
    FTS5Error,
    SetupError,
    ValidationError,
    display_error,
    extract_message,
)


@pytest.mark.parametrize(
    "cls, label",
    [
        (ValidationError, "validation failed"),
        (DatabaseError, "database operation failed"),
        (FTS5Error, "FTS5 operation failed"),
        (DatabaseConnectionError, "connection failed"),
    ],
)
def test_message_carries_label(cls, label):
    err = cls("something broke")
    assert str(err) == f"{label}: something broke"
    assert isinstance(err, SetupError)


def test_extract_message_takes_last_segment():
    err = DatabaseError("failed to count documents: no such table: t")
    assert extract_message(err) == "t"


def test_extract_message_without_separator():
    assert extract_message(Exception("plain")) == "plain"


def test_simple_display_validation():
    out = io.StringIO()
    display_error(ValidationError("expected 5 documents, got 3"), stream=out)
    text = out.getvalue()
    assert "❌ Validation Error: expected 5 documents, got 3\n" in text
    assert "💡 Tip: Use --verbose for detailed error information" in text


def test_simple_display_uses_cause_chain_order():
    try:
        try:
            raise DatabaseError("failed to get SQLite version")
        except DatabaseError as inner:
            raise DatabaseConnectionError("failed to get SQLite version") from inner
    except DatabaseConnectionError as err:
        out = io.StringIO()
        display_error(err, stream=out)
    assert out.getvalue().startswith("❌ Database Error:")


def test_simple_display_fts5_tip():
    out = io.StringIO()
    display_error(FTS5Error("SQLite not compiled with FTS5 support"), stream=out)
    assert "Ensure SQLite was compiled with FTS5 support" in out.getvalue()


def test_simple_display_unknown_error():
    out = io.StringIO()
    display_error(RuntimeError("boom"), stream=out)
    assert out.getvalue() == "❌ Error: boom\n"


def test_verbose_display_shows_chain():
    inner = DatabaseError("inner")
    outer = DatabaseConnectionError("outer")
    outer.__cause__ = inner
    out = io.StringIO()
    display_error(outer, verbose=True, stream=out)
    text = out.getvalue()
    assert text.startswith("❌ Detailed Error Information:\n")
    assert "   Error: connection failed: outer\n" in text
    assert "   Type: DatabaseConnectionError\n" in text
    assert "   Caused by [1]: database operation failed: inner\n" in text