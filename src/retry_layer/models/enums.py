"""
Enumerations for retry layer data models.

All enums are closed taxonomies - no values outside these sets are permitted.
Values double as log fields and Prometheus label values.
"""

from enum import Enum


class BackoffKind(str, Enum):
    """
    Delay growth law used between attempts.

    Every kind except CONSTANT returns 0 for attempt index 0 and is capped
    by the strategy's max delay.
    """

    CONSTANT = "constant"
    LINEAR = "linear"
    QUADRATIC = "quadratic"
    EXPONENTIAL = "exponential"


class StopConditionKind(str, Enum):
    """Rule deciding whether another attempt is permitted after a failure."""

    MAX_ATTEMPTS = "max_attempts"
    PREDICATE = "predicate"


class RetryOutcome(str, Enum):
    """Terminal state of one retry invocation."""

    SUCCESS = "success"
    ATTEMPTS_EXCEEDED = "attempts_exceeded"
    PREDICATE_VIOLATION = "predicate_violation"
    INVALID_OPERATION = "invalid_operation"
