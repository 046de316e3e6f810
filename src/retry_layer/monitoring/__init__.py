"""Monitoring and metrics instrumentation for the retry layer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from retry_layer.monitoring.metrics import (
    retry_attempts_total,
    retry_backoff_seconds,
    retry_outcomes_total,
)

__all__ = [
    "retry_attempts_total",
    "retry_outcomes_total",
    "retry_backoff_seconds",
]
