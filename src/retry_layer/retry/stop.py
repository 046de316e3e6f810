"""
Stop conditions for the attempt loop.

A stop condition is consulted after every failed attempt with the zero-based
index of the attempt that would run next. Index 0 is never consulted: the
first attempt always executes.
"""

from dataclasses import dataclass
from typing import Callable, ClassVar, Sequence, Union

from retry_layer.config import Settings
from retry_layer.models.enums import RetryOutcome, StopConditionKind
from retry_layer.retry.exceptions import (
    PredicateViolation,
    RetryAttemptsExceeded,
    RetryError,
)


def default_predicate(attempt_index: int) -> bool:
    """Stop before the second attempt (a single try)."""
    return attempt_index >= 1


@dataclass(frozen=True)
class MaxAttempts:
    """
    Permit exactly ``max_attempts`` attempts.

    ``max_attempts=0`` still runs the first attempt, so it behaves like 1.
    """

    max_attempts: int = 1
    kind: ClassVar[StopConditionKind] = StopConditionKind.MAX_ATTEMPTS
    exhausted_outcome: ClassVar[RetryOutcome] = RetryOutcome.ATTEMPTS_EXCEEDED

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "MaxAttempts":
        """Build from RETRY_MAX_ATTEMPTS."""
        return cls(settings.RETRY_MAX_ATTEMPTS)

    def should_stop(self, next_index: int) -> bool:
        return next_index >= max(self.max_attempts, 1)

    def exhausted(
        self, attempts: int, duration_ms: int, nested: Sequence[BaseException]
    ) -> RetryError:
        return RetryAttemptsExceeded(
            max_attempts=self.max_attempts,
            attempts=attempts,
            duration_ms=duration_ms,
            nested=nested,
        )


@dataclass(frozen=True)
class Predicate:
    """
    Stop as soon as ``predicate(next_index)`` returns True.

    Exceptions raised by the predicate propagate to the caller unchanged.
    """

    predicate: Callable[[int], bool] = default_predicate
    kind: ClassVar[StopConditionKind] = StopConditionKind.PREDICATE
    exhausted_outcome: ClassVar[RetryOutcome] = RetryOutcome.PREDICATE_VIOLATION

    def __post_init__(self) -> None:
        if not callable(self.predicate):
            raise TypeError(f"predicate must be callable, got {type(self.predicate).__name__}")

    def should_stop(self, next_index: int) -> bool:
        return bool(self.predicate(next_index))

    def exhausted(
        self, attempts: int, duration_ms: int, nested: Sequence[BaseException]
    ) -> RetryError:
        return PredicateViolation(
            attempts=attempts,
            duration_ms=duration_ms,
            nested=nested,
        )


StopCondition = Union[MaxAttempts, Predicate]
