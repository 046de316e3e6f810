"""
Retry layer for fallible asynchronous operations.

Wraps a deferred computation (or a single in-flight awaitable) and re-runs it
on failure according to:
- A backoff strategy (constant, linear, quadratic, exponential)
- A stop condition (maximum attempt count or custom predicate)

Every failed attempt is recorded, and exhaustion surfaces as a structured
exception carrying the attempt count, elapsed time and full failure history.

Architecture: asyncio attempt loop + pure backoff strategies + structlog/Prometheus instrumentation
"""

__version__ = "0.1.0"
