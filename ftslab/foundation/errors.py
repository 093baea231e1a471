"""Error types raised by the FTS5 foundation tool and how they are shown."""

from __future__ import annotations

import sys
from typing import Iterator, TextIO


class FoundationError(Exception):
    """Base class for FTS5 foundation errors."""

    label = "operation failed"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class NotFoundError(FoundationError):
    """A requested resource was not found."""

    label = "not found"


class ValidationError(FoundationError):
    """Input validation failed."""

    label = "validation failed"


class DatabaseError(FoundationError):
    """A database operation failed."""

    label = "database operation failed"


class FTS5Error(FoundationError):
    """An FTS5-specific operation failed."""

    label = "FTS5 operation failed"


class TransactionError(FoundationError):
    """A transaction failed."""

    label = "transaction failed"


_HEADINGS = (
    (ValidationError, "Validation Error"),
    (DatabaseError, "Database Error"),
    (FTS5Error, "FTS5 Error"),
    (NotFoundError, "Not Found"),
    (TransactionError, "Transaction Error"),
)

_FTS5_HINT = "Hint: Ensure SQLite is compiled with FTS5 support"


def _chain(err: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def _is(err: BaseException, cls: type) -> bool:
    return any(isinstance(cause, cls) for cause in _chain(err))


def display_error(err: BaseException, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Write a description of ``err`` to ``stream`` (stdout by default)."""
    out = stream if stream is not None else sys.stdout
    _display_simple(err, out)
    if verbose:
        out.write(f"\nFull error chain: {err}\n")


def _display_simple(err: BaseException, out: TextIO) -> None:
    for cls, heading in _HEADINGS:
        if _is(err, cls):
            out.write(f"{heading}: {err}\n")
            if cls is FTS5Error:
                out.write(_FTS5_HINT + "\n")
            return
    out.write(f"Error: {err}\n")