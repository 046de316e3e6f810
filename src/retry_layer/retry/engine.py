"""
Retry engine: the attempt loop.

This module implements the RetryEngine that drives repeated invocation of an
operation until it succeeds or its stop condition ends the sequence. It
provides two entry points sharing one algorithm:

    retry(operation, max_attempts=1, backoff=Backoff.constant(1))
    retry_with_predicate(operation, predicate=idx >= 1, backoff=Backoff.constant(1))

Attempt Loop:
    1. Run the attempt (success returns immediately, no delay)
    2. On failure: classify it and append to the failure history
    3. Ask the stop condition about the next index; stop raises RetryError
    4. Otherwise sleep backoff.delay_for(current index) and go to 1

Attempts are strictly sequential. The only suspension point besides the
operation itself is the inter-attempt sleep.

Usage:
    result = await retry(lambda: client.fetch(url), max_attempts=3, backoff=Backoff.linear(0.5))
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

import structlog

from retry_layer.config import Settings, settings as default_settings
from retry_layer.models.enums import RetryOutcome
from retry_layer.monitoring.metrics import (
    retry_attempts_total,
    retry_backoff_seconds,
    retry_outcomes_total,
)
from retry_layer.retry.backoff import Backoff
from retry_layer.retry.classifier import classify_failure
from retry_layer.retry.exceptions import InvalidOperationError
from retry_layer.retry.operations import as_operation
from retry_layer.retry.stop import MaxAttempts, Predicate, StopCondition, default_predicate

logger = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]

DEFAULT_BACKOFF = Backoff.constant(1.0)


class RetryEngine:
    """
    Attempt loop parameterized by a stop condition.

    The engine holds no per-invocation state, so one instance may run any
    number of concurrent ``execute`` calls.

    Attributes:
        stop_condition: MaxAttempts or Predicate
        backoff: Delay strategy between attempts
        sleep: Delay primitive taking seconds (asyncio.sleep by default)
        settings: Application settings (PROMETHEUS_ENABLED)
    """

    def __init__(
        self,
        stop_condition: StopCondition,
        backoff: Optional[Backoff] = None,
        sleep: SleepFunc = asyncio.sleep,
        settings: Optional[Settings] = None,
    ):
        self.stop_condition = stop_condition
        self.backoff = backoff if backoff is not None else DEFAULT_BACKOFF
        self.sleep = sleep
        self.settings = settings if settings is not None else default_settings

    async def execute(self, operation: Any) -> Any:
        """
        Run ``operation`` until success or until the stop condition halts.

        Args:
            operation: Deferred, InFlight, zero-argument callable or awaitable

        Returns:
            The operation's successful result

        Raises:
            InvalidOperationError: Operation shape is invalid (no attempt made)
            RetryAttemptsExceeded: MaxAttempts reached
            PredicateViolation: Predicate returned True
        """
        # Every log line of this invocation carries the retry policy
        with structlog.contextvars.bound_contextvars(
            stop_condition=self.stop_condition.kind.value,
            backoff=self.backoff.kind.value,
        ):
            return await self._execute(operation)

    async def _execute(self, operation: Any) -> Any:
        start_time = time.monotonic()

        try:
            op = as_operation(operation)
        except InvalidOperationError as e:
            logger.error(
                "Invalid retry operation",
                extra={"error": e.message},
            )
            self._record_outcome(RetryOutcome.INVALID_OPERATION)
            raise

        nested: list[BaseException] = []
        attempt_index = 0

        while True:
            try:
                result = await op.run()
            except Exception as e:
                failure = classify_failure(e)
            else:
                self._record_attempt(success=True)
                self._record_outcome(RetryOutcome.SUCCESS)
                logger.info(
                    f"Operation succeeded on attempt {attempt_index + 1}",
                    extra={
                        "attempts": attempt_index + 1,
                        "duration_ms": self._elapsed_ms(start_time),
                    },
                )
                return result

            nested.append(failure)
            self._record_attempt(success=False)
            logger.warning(
                f"Attempt {attempt_index + 1} failed",
                extra={
                    "attempt_index": attempt_index,
                    "error_type": type(failure).__name__,
                    "error": str(failure),
                },
            )

            # Consulted only after a failure, so index 0 always runs
            next_index = attempt_index + 1
            if op.single_shot or self.stop_condition.should_stop(next_index):
                duration_ms = self._elapsed_ms(start_time)
                error = self.stop_condition.exhausted(
                    attempts=len(nested), duration_ms=duration_ms, nested=nested
                )
                self._record_outcome(self.stop_condition.exhausted_outcome)
                logger.error(
                    "Retry stopped without success",
                    extra={
                        "attempts": len(nested),
                        "duration_ms": duration_ms,
                        "single_shot": op.single_shot,
                        "final_error_type": type(failure).__name__,
                    },
                )
                raise error from failure

            delay_seconds = self.backoff.delay_for(attempt_index)
            self._record_backoff(delay_seconds)
            logger.info(
                f"Retrying in {self.backoff.delay_ms(attempt_index)}ms",
                extra={
                    "attempt_index": attempt_index,
                    "next_attempt": next_index + 1,
                    "delay_seconds": delay_seconds,
                },
            )
            await self.sleep(delay_seconds)
            attempt_index = next_index

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.monotonic() - start_time) * 1000)

    def _record_attempt(self, success: bool) -> None:
        if self.settings.PROMETHEUS_ENABLED:
            retry_attempts_total.labels(
                stop_condition=self.stop_condition.kind.value,
                success=str(success).lower(),
            ).inc()

    def _record_outcome(self, outcome: RetryOutcome) -> None:
        if self.settings.PROMETHEUS_ENABLED:
            retry_outcomes_total.labels(
                stop_condition=self.stop_condition.kind.value,
                outcome=outcome.value,
            ).inc()

    def _record_backoff(self, delay_seconds: float) -> None:
        if self.settings.PROMETHEUS_ENABLED:
            retry_backoff_seconds.labels(backoff=self.backoff.kind.value).observe(delay_seconds)


async def retry(
    operation: Any,
    max_attempts: int = 1,
    backoff: Backoff = DEFAULT_BACKOFF,
    *,
    sleep: SleepFunc = asyncio.sleep,
) -> Any:
    """
    Run ``operation`` up to ``max_attempts`` times.

    The first attempt always runs, even with max_attempts=0. An InFlight
    awaitable is attempted once regardless of max_attempts.

    Raises:
        InvalidOperationError: Operation shape is invalid
        RetryAttemptsExceeded: Every permitted attempt failed
    """
    engine = RetryEngine(MaxAttempts(max_attempts), backoff=backoff, sleep=sleep)
    return await engine.execute(operation)


async def retry_with_predicate(
    operation: Any,
    predicate: Callable[[int], bool] = default_predicate,
    backoff: Backoff = DEFAULT_BACKOFF,
    *,
    sleep: SleepFunc = asyncio.sleep,
) -> Any:
    """
    Run ``operation`` until it succeeds or ``predicate(next_index)`` is True.

    ``predicate`` receives the zero-based index of the attempt about to run
    and is never consulted for index 0.

    Raises:
        InvalidOperationError: Operation shape is invalid
        PredicateViolation: Predicate stopped the sequence
    """
    engine = RetryEngine(Predicate(predicate), backoff=backoff, sleep=sleep)
    return await engine.execute(operation)
