"""
Retry engine exceptions.

This module defines the terminal failures raised by the retry engine. Per-attempt
failures never escape the engine directly; they are collected in order and
attached to one of these exceptions via ``nested``.

Failure taxonomy:
    - InvalidOperationError: operation is neither awaitable nor zero-argument callable
    - RetryAttemptsExceeded: maximum attempt count reached before success
    - PredicateViolation: custom stop predicate returned True before success
"""

from typing import Any, Sequence


class AttemptFailure(Exception):
    """
    Wrapper for attempt failures that are not exception instances.

    Attributes:
        raw: The original failure value, untouched
    """

    def __init__(self, raw: Any):
        super().__init__(str(raw))
        self.raw = raw
        self.message = str(raw)


class InvalidOperationError(TypeError):
    """
    Raised when the supplied operation cannot be retried at all.

    Fatal and immediate: no attempt is made and no delay is incurred.
    Carries the same fields as RetryError so callers can inspect any
    terminal failure uniformly.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.attempts = 0
        self.duration_ms = 0
        self.nested: list[BaseException] = []


class RetryError(Exception):
    """
    Base exception for retry exhaustion.

    Attributes:
        message: Human-readable summary
        attempts: Number of attempts actually executed
        duration_ms: Wall-clock time from first attempt start to failure (ms)
        nested: Normalized failure of every attempt, in attempt order
    """

    def __init__(
        self,
        message: str,
        attempts: int,
        duration_ms: int,
        nested: Sequence[BaseException],
    ) -> None:
        super().__init__(message)
        self.message = message
        self.attempts = attempts
        self.duration_ms = duration_ms
        self.nested = list(nested)

    @property
    def last_error(self) -> BaseException | None:
        """Failure of the final attempt (None only if nothing ran)."""
        return self.nested[-1] if self.nested else None

    def __str__(self) -> str:
        if self.last_error is not None:
            return f"{self.message} | Last error: {type(self.last_error).__name__}: {self.last_error}"
        return self.message


class RetryAttemptsExceeded(RetryError):
    """
    Raised when the MaxAttempts stop condition is reached.

    ``max_attempts`` is the configured limit; ``attempts`` is what actually ran
    (they differ only for max_attempts=0, where the first attempt still runs).
    """

    def __init__(
        self,
        max_attempts: int,
        attempts: int,
        duration_ms: int,
        nested: Sequence[BaseException],
    ) -> None:
        self.max_attempts = max_attempts
        super().__init__(
            f"Exceeded {attempts} retry attempts after {duration_ms}ms",
            attempts=attempts,
            duration_ms=duration_ms,
            nested=nested,
        )


class PredicateViolation(RetryError):
    """Raised when the stop predicate evaluates True before success."""

    def __init__(
        self,
        attempts: int,
        duration_ms: int,
        nested: Sequence[BaseException],
    ) -> None:
        super().__init__(
            f"Retry predicate stopped after {attempts} attempts in {duration_ms}ms",
            attempts=attempts,
            duration_ms=duration_ms,
            nested=nested,
        )
