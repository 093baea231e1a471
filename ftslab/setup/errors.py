"""Error types raised by the setup validation tool and how they are shown."""

from __future__ import annotations

import sys
from typing import Iterator, TextIO


class SetupError(Exception):
    """Base class for setup validation errors."""

    label = "setup failed"
    title = ""
    tip: str | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class ValidationError(SetupError):
    """A validation check did not hold."""

    label = "validation failed"
    title = "Validation"
    tip = "Use --verbose for detailed error information"


class DatabaseError(SetupError):
    """A database operation failed."""

    label = "database operation failed"
    title = "Database"
    tip = "Check that SQLite is properly installed"


class FTS5Error(SetupError):
    """An FTS5 operation failed."""

    label = "FTS5 operation failed"
    title = "FTS5"
    tip = "Ensure SQLite was compiled with FTS5 support"


class DatabaseConnectionError(SetupError):
    """Connecting to the database failed."""

    label = "connection failed"
    title = "Connection"
    tip = "Verify database path and permissions"


_DISPLAY_ORDER = (ValidationError, DatabaseError, FTS5Error, DatabaseConnectionError)


def _chain(err: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def extract_message(err: BaseException) -> str:
    """Return the text after the last ": " of the error message, or all of it."""
    msg = str(err)
    idx = msg.rfind(": ")
    if idx != -1:
        return msg[idx + 2:]
    return msg


def display_error(err: BaseException, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Write a user-facing description of ``err`` to ``stream`` (stderr by default)."""
    out = stream if stream is not None else sys.stderr
    if verbose:
        _display_verbose(err, out)
    else:
        _display_simple(err, out)


def _display_simple(err: BaseException, out: TextIO) -> None:
    causes = list(_chain(err))
    for cls in _DISPLAY_ORDER:
        if any(isinstance(cause, cls) for cause in causes):
            out.write(f"❌ {cls.title} Error: {extract_message(err)}\n")
            out.write(f"💡 Tip: {cls.tip}\n")
            return
    out.write(f"❌ Error: {err}\n")


def _display_verbose(err: BaseException, out: TextIO) -> None:
    out.write("❌ Detailed Error Information:\n")
    out.write(f"   Error: {err}\n")
    out.write(f"   Type: {type(err).__qualname__}\n")
    for depth, cause in enumerate(_chain(err)):
        if depth > 0:
            out.write(f"   Caused by [{depth}]: {cause}\n")