"""Unit tests for retry exceptions."""

from retry_layer.retry.exceptions import (
    AttemptFailure,
    InvalidOperationError,
    PredicateViolation,
    RetryAttemptsExceeded,
    RetryError,
)


def test_retry_attempts_exceeded_fields():
    nested = [ValueError("first"), ValueError("second")]

    error = RetryAttemptsExceeded(max_attempts=2, attempts=2, duration_ms=1003, nested=nested)

    assert isinstance(error, RetryError)
    assert error.message == "Exceeded 2 retry attempts after 1003ms"
    assert error.attempts == 2
    assert error.duration_ms == 1003
    assert error.last_error is nested[-1]
    assert "Last error: ValueError: second" in str(error)


def test_nested_is_copied():
    nested = [ValueError("first")]

    error = PredicateViolation(attempts=1, duration_ms=0, nested=nested)
    nested.append(ValueError("later"))

    assert len(error.nested) == 1


def test_predicate_violation_message():
    error = PredicateViolation(attempts=3, duration_ms=2000, nested=[])

    assert error.message == "Retry predicate stopped after 3 attempts in 2000ms"
    assert error.last_error is None
    assert str(error) == error.message


def test_failure_kinds_are_distinct():
    exceeded = RetryAttemptsExceeded(max_attempts=1, attempts=1, duration_ms=0, nested=[])
    violation = PredicateViolation(attempts=1, duration_ms=0, nested=[])

    assert not isinstance(exceeded, PredicateViolation)
    assert not isinstance(violation, RetryAttemptsExceeded)
    assert not isinstance(InvalidOperationError("bad"), RetryError)


def test_invalid_operation_error_carries_empty_history():
    error = InvalidOperationError("operation must be a zero-argument callable")

    assert error.attempts == 0
    assert error.duration_ms == 0
    assert error.nested == []


def test_attempt_failure_message():
    failure = AttemptFailure(404)

    assert str(failure) == "404"
    assert failure.raw == 404
