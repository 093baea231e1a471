"""Records describing validation checks and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ValidationResult:
    """Outcome of one validation check; duration is in seconds."""

    name: str
    description: str
    passed: bool
    error: BaseException | None = None
    duration: float = 0.0
    details: str = ""


@dataclass
class ValidationSuite:
    """A collection of validation results with running totals."""

    name: str
    description: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: float = 0.0
    results: list[ValidationResult] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    total: int = 0

    def add_result(self, result: ValidationResult) -> None:
        """Record a result and update the totals."""
        self.results.append(result)
        self.total += 1
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1

    def is_successful(self) -> bool:
        """True when at least one check ran and none failed."""
        return self.failed == 0 and self.total > 0

    def success_rate(self) -> float:
        """Percentage of checks that passed."""
        if self.total == 0:
            return 0.0
        return self.passed / self.total * 100.0


@dataclass
class SystemInfo:
    """Information about the environment being validated."""

    sqlite_version: str
    fts5_available: bool
    runtime_version: str = ""
    platform: str = ""
    environment: dict[str, str] = field(default_factory=dict)


@dataclass
class BM25TestResult:
    """Summary of a BM25 scoring check."""

    query: str
    result_count: int = 0
    first_score: float = 0.0
    last_score: float = 0.0
    has_negative: bool = False
    min_score: float = 0.0
    max_score: float = 0.0