"""Prometheus metrics for the retry layer.

Metrics are registered on the default prometheus_client registry; the host
application decides how to expose them. Alert rules worth configuring:
- retry_attempts_total{success="false"} (high attempt failure rate)
- retry_outcomes_total (rising exhaustion outcomes)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

retry_attempts_total = Counter(
    "retry_attempts_total",
    "Total operation attempts by stop condition and result",
    ["stop_condition", "success"],
)
"""
Attempts counter, one increment per executed attempt.

Labels:
- stop_condition: max_attempts, predicate
- success: true (attempt returned), false (attempt raised)
"""

# === Outcome Metrics ===

retry_outcomes_total = Counter(
    "retry_outcomes_total",
    "Total retry invocations by stop condition and terminal outcome",
    ["stop_condition", "outcome"],
)
"""
Terminal outcome counter, one increment per retry invocation.

Labels:
- stop_condition: max_attempts, predicate
- outcome: success, attempts_exceeded, predicate_violation, invalid_operation
"""

# === Backoff Metrics ===

retry_backoff_seconds = Histogram(
    "retry_backoff_seconds",
    "Delay applied between attempts in seconds",
    ["backoff"],
    buckets=[0.0, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
"""
Inter-attempt delay histogram.

Labels:
- backoff: constant, linear, quadratic, exponential
"""
