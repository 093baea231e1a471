import io

import pytest

from ftslab.foundation.errors import (
    DatabaseError,
    FTS5Error,
    FoundationError,
    NotFoundError,
    TransactionError,
    ValidationError,
    display_error,
)


def _shown(err, verbose=False):
    out = io.StringIO()
    display_error(err, verbose, out)
    return out.getvalue()


@pytest.mark.parametrize(
    "cls, label",
    [
        (NotFoundError, "not found"),
        (ValidationError, "validation failed"),
        (DatabaseError, "database operation failed"),
        (FTS5Error, "FTS5 operation failed"),
        (TransactionError, "transaction failed"),
    ],
)
def test_message_is_prefixed_with_label(cls, label):
    err = cls("something")
    assert str(err) == f"{label}: something"
    assert err.message == "something"
    assert isinstance(err, FoundationError)


def test_validation_error_display():
    text = _shown(ValidationError("title cannot be empty"))
    assert text == "Validation Error: validation failed: title cannot be empty\n"


def test_not_found_display():
    text = _shown(NotFoundError("document with rowid 3"))
    assert text.startswith("Not Found: not found: document with rowid 3")


def test_fts5_display_has_hint():
    lines = _shown(FTS5Error("SQLite not compiled with FTS5 support")).splitlines()
    assert lines[0] == "FTS5 Error: FTS5 operation failed: SQLite not compiled with FTS5 support"
    assert lines[1].startswith("Hint:")
    assert len(lines) == 2


def test_transaction_display():
    text = _shown(TransactionError("failed to commit"))
    assert text.startswith("Transaction Error: ")


def test_plain_exception_display():
    assert _shown(RuntimeError("boom")) == "Error: boom\n"


def test_cause_chain_is_searched():
    try:
        try:
            raise FTS5Error("inner")
        except FTS5Error as inner:
            raise RuntimeError("outer") from inner
    except RuntimeError as outer:
        text = _shown(outer)
    assert text.startswith("FTS5 Error: outer")


def test_validation_takes_precedence_over_database():
    try:
        try:
            raise DatabaseError("inner")
        except DatabaseError as inner:
            raise ValidationError("outer") from inner
    except ValidationError as outer:
        text = _shown(outer)
    assert text.startswith("Validation Error:")


def test_verbose_adds_full_chain():
    err = DatabaseError("failed to insert")
    text = _shown(err, verbose=True)
    assert text.startswith("Database Error: database operation failed: failed to insert\n")
    assert text.endswith(f"\nFull error chain: {err}\n")