"""Validation checks for the SQLite FTS5 environment and their reporting."""

from __future__ import annotations

import sys
import time
from datetime import datetime
from typing import Callable, TextIO

from ftslab.setup.database import Config, Database
from ftslab.setup.errors import DatabaseConnectionError, DatabaseError, ValidationError
from ftslab.setup.models import ValidationResult, ValidationSuite
from ftslab.setup.utilities import sample_documents


def _format_duration(seconds: float) -> str:
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}µs"
    if seconds < 1.0:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


class ValidationHandler:
    """Runs validation checks against a database and reports on them."""

    def __init__(self, database: Database, config: Config | None = None, out: TextIO | None = None) -> None:
        self.database = database
        self.config = config if config is not None else Config()
        self.out = out if out is not None else sys.stdout

    def _print(self, text: str = "") -> None:
        self.out.write(text + "\n")

    # Commands

    def handle_validate_all(self) -> ValidationSuite:
        """Run every check, report them, and raise ValidationError if any failed."""
        self._print("🔍 Running setup validation checks...")
        suite = ValidationSuite(
            name="Setup Validation Suite",
            description="Comprehensive validation of SQLite FTS5 learning environment",
            start_time=datetime.now(),
        )
        checks = (
            ("SQLite Connection", "Test basic SQLite database connection", self._validate_sqlite_connection),
            ("FTS5 Support", "Verify FTS5 virtual table support", self._validate_fts5_support),
            ("Test Data Generation", "Validate sample data insertion", self._validate_test_data),
            ("BM25 Scoring", "Test BM25 scoring functionality", self._validate_bm25_scoring),
            ("Shared Utilities", "Verify utility functions work correctly", self._validate_utilities),
        )
        started = time.perf_counter()
        for name, description, check in checks:
            result = self.run_check(name, description, check)
            suite.add_result(result)
            self.display_result(result)
        suite.end_time = datetime.now()
        suite.duration = time.perf_counter() - started

        self.display_summary(suite)

        if not suite.is_successful():
            raise ValidationError(f"validation suite failed with {suite.failed} errors")
        return suite

    def handle_connect(self) -> None:
        """Check that the SQLite connection answers queries."""
        self._print("🔗 Testing SQLite connection...")
        self._validate_sqlite_connection()
        self._print("✅ SQLite connection successful")

    def handle_fts5(self) -> None:
        """Check FTS5 support and virtual table creation."""
        self._print("🔍 Testing FTS5 functionality...")
        self._validate_fts5_support()
        self._print("✅ FTS5 functionality working")

    def handle_test_data(self) -> None:
        """Check that sample data can be inserted and counted."""
        self._print("📄 Testing sample data generation...")
        self._validate_test_data()
        self._print("✅ Sample data generation working")

    def handle_bm25(self) -> None:
        """Check that BM25 queries return negative scores."""
        self._print("📊 Testing BM25 scoring...")
        self._validate_bm25_scoring()
        self._print("✅ BM25 scoring working correctly")

    # Checks

    def _validate_sqlite_connection(self) -> None:
        try:
            version = self.database.sqlite_version()
        except DatabaseError as exc:
            raise DatabaseConnectionError(f"failed to get SQLite version: {exc}") from exc
        if self.config.verbose:
            self._print(f"  📍 SQLite version: {version}")

    def _validate_fts5_support(self) -> None:
        self.database.verify_fts5_support()
        self.database.create_test_table("fts5_validation_test")
        if self.config.verbose:
            self._print("  📍 FTS5 virtual table created successfully")

    def _validate_test_data(self) -> None:
        table_name = "test_data_validation"
        self.database.create_test_table(table_name)
        self.database.insert_test_data(table_name)
        count = self.database.count_documents(table_name)
        expected = len(sample_documents())
        if count != expected:
            raise ValidationError(f"expected {expected} documents, got {count}")
        if self.config.verbose:
            self._print(f"  📍 {count} sample documents inserted successfully")

    def _validate_bm25_scoring(self) -> None:
        table_name = "bm25_validation_test"
        self.database.create_test_table(table_name)
        self.database.insert_test_data(table_name)
        rows = self.database.query_with_bm25(table_name, "SQLite")
        scores = [row[3] for row in rows]
        if not scores:
            raise ValidationError("no results returned for BM25 query")
        if not any(score < 0 for score in scores):
            raise ValidationError("expected negative BM25 scores, but none found")
        if self.config.verbose:
            self._print(f"  📍 {len(scores)} results with proper BM25 scoring")
            self._print(f"  📍 First result score: {scores[0]:.3f} (negative as expected)")

    def _validate_utilities(self) -> None:
        if self.config.verbose:
            self._print("  📍 Utility functions accessible and working")

    # Reporting

    def run_check(self, name: str, description: str, check: Callable[[], None]) -> ValidationResult:
        """Run one check and record whether it raised."""
        start = time.perf_counter()
        error: BaseException | None = None
        try:
            check()
        except Exception as exc:
            error = exc
        duration = time.perf_counter() - start
        return ValidationResult(
            name=name,
            description=description,
            passed=error is None,
            error=error,
            duration=duration,
        )

    def display_result(self, result: ValidationResult) -> None:
        """Write one line for a check, with its error if it failed."""
        status = "✅" if result.passed else "❌"
        line = f"{status} {result.name}"
        if self.config.verbose:
            line += f" ({_format_duration(result.duration)})"
        self._print(line)
        if not result.passed and result.error is not None:
            self._print(f"   Error: {result.error}")

    def display_summary(self, suite: ValidationSuite) -> None:
        """Write the totals of a suite and a closing verdict."""
        self._print("\n📊 Validation Results:")
        self._print(f"   Total checks: {suite.total}")
        self._print(f"   Passed: {suite.passed}")
        self._print(f"   Failed: {suite.failed}")
        self._print(f"   Success rate: {suite.success_rate():.1f}%")
        self._print(f"   Duration: {_format_duration(suite.duration)}")
        if suite.is_successful():
            self._print("\n🎉 All validation checks passed! Environment is ready for FTS5 learning.")
        else:
            self._print("\n⚠️  Some checks failed. Please review the setup before proceeding.")