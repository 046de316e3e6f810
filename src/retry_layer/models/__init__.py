"""Shared enumerations for the retry layer."""

from retry_layer.models.enums import BackoffKind, RetryOutcome, StopConditionKind

__all__ = [
    "BackoffKind",
    "RetryOutcome",
    "StopConditionKind",
]
