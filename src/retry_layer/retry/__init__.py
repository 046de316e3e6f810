"""
Retry engine with pluggable backoff and stop conditions.

This package re-runs a fallible asynchronous operation until it succeeds or
a stop condition ends the sequence:

1. **Operation**: Deferred (re-invoked per attempt) or InFlight (one attempt)
2. **Backoff**: constant, linear, quadratic or exponential delay schedule
3. **Stop condition**: MaxAttempts(n) or Predicate(f(next_index))
4. **Exhaustion**: RetryAttemptsExceeded / PredicateViolation carrying the
   full failure history

Main Components:
    - retry / retry_with_predicate: Public entry points
    - RetryEngine: The attempt loop
    - Backoff: Immutable delay strategy
    - RetryError: Base of the exhaustion exceptions

Usage:
    >>> from retry_layer.retry import Backoff, retry
    >>> result = await retry(fetch_quote, max_attempts=4, backoff=Backoff.quadratic(0.5))
"""

from retry_layer.retry.backoff import Backoff
from retry_layer.retry.classifier import classify_failure
from retry_layer.retry.engine import RetryEngine, retry, retry_with_predicate
from retry_layer.retry.exceptions import (
    AttemptFailure,
    InvalidOperationError,
    PredicateViolation,
    RetryAttemptsExceeded,
    RetryError,
)
from retry_layer.retry.operations import Deferred, InFlight, as_operation
from retry_layer.retry.stop import MaxAttempts, Predicate

__all__ = [
    "retry",
    "retry_with_predicate",
    "RetryEngine",
    "Backoff",
    "classify_failure",
    "Deferred",
    "InFlight",
    "as_operation",
    "MaxAttempts",
    "Predicate",
    "AttemptFailure",
    "InvalidOperationError",
    "RetryError",
    "RetryAttemptsExceeded",
    "PredicateViolation",
]
