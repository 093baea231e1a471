import pytest

from ftslab.setup.errors import ValidationError
from ftslab.setup.models import BM25TestResult, ValidationResult, ValidationSuite


def _suite():
    return ValidationSuite(name="Setup Validation Suite", description="d")


def test_empty_suite_is_not_successful():
    suite = _suite()
    assert suite.is_successful() is False
    assert suite.success_rate() == 0.0


def test_all_passed_is_successful():
    suite = _suite()
    for name in ("a", "b", "c"):
        suite.add_result(ValidationResult(name=name, description="", passed=True))
    assert suite.is_successful() is True
    assert suite.success_rate() == pytest.approx(100.0)
    assert [r.name for r in suite.results] == ["a", "b", "c"]


def test_failure_counted():
    suite = _suite()
    suite.add_result(ValidationResult("ok", "", True))
    suite.add_result(ValidationResult("bad", "", False, error=ValidationError("x")))
    assert suite.is_successful() is False
    assert suite.passed == 1
    assert suite.failed == 1
    assert suite.total == suite.passed + suite.failed
    assert suite.success_rate() == pytest.approx(50.0)


def test_totals_invariant_over_many_results():
    suite = _suite()
    outcomes = [True, False, True, True, False]
    for i, passed in enumerate(outcomes):
        suite.add_result(ValidationResult(str(i), "", passed))
    assert suite.total == len(outcomes)
    assert suite.passed == outcomes.count(True)
    assert suite.failed == outcomes.count(False)
    assert suite.success_rate() == pytest.approx(suite.passed / suite.total * 100.0)


def test_bm25_result_defaults():
    result = BM25TestResult(query="SQLite")
    assert result.result_count == 0
    assert result.has_negative is False