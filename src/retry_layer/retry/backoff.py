"""
Backoff strategies for delaying between retry attempts.

A Backoff is an immutable value: a BackoffKind tag plus a base delay and a
ceiling. The delay for a zero-based attempt index is computed by a pure
function selected on the tag:

    constant:    base
    linear:      min(base * i, max)
    quadratic:   min(i ** 2 * base, max)
    exponential: min(i ** i * base, max)

Non-constant kinds return 0 for index 0.

Note that ``exponential`` raises the index to its own power rather than using
a fixed base (2 ** i). It grows far faster than conventional exponential
backoff and reaches the ceiling by the 4th or 5th retry for typical values.

Usage:
    >>> Backoff.linear(0.5, 10).delay_for(3)
    1.5
    >>> Backoff().delay_ms(4)
    1000
"""

from fractions import Fraction
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from retry_layer.config import Settings
from retry_layer.models.enums import BackoffKind

DEFAULT_BASE_DELAY_SECONDS = 1.0
DEFAULT_MAX_DELAY_SECONDS = 60.0


class Backoff(BaseModel):
    """
    Immutable backoff strategy.

    Stateless and safe to share across concurrent retry invocations.
    ``Backoff()`` is a constant 1 second delay.
    """
    model_config = ConfigDict(frozen=True)

    kind: BackoffKind = Field(default=BackoffKind.CONSTANT, description="Delay growth law")
    base_delay_seconds: float = Field(
        default=DEFAULT_BASE_DELAY_SECONDS, ge=0.0, description="Delay unit in seconds"
    )
    max_delay_seconds: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Delay ceiling in seconds (mirrors base delay for constant)",
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_ceiling(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("max_delay_seconds") is not None:
            return data
        kind = BackoffKind(data.get("kind", BackoffKind.CONSTANT))
        if kind is BackoffKind.CONSTANT:
            ceiling = data.get("base_delay_seconds", DEFAULT_BASE_DELAY_SECONDS)
        else:
            ceiling = DEFAULT_MAX_DELAY_SECONDS
        return {**data, "max_delay_seconds": ceiling}

    @classmethod
    def constant(cls, delay_seconds: float = DEFAULT_BASE_DELAY_SECONDS) -> "Backoff":
        return cls(kind=BackoffKind.CONSTANT, base_delay_seconds=delay_seconds)

    @classmethod
    def linear(
        cls,
        delay_seconds: float = DEFAULT_BASE_DELAY_SECONDS,
        max_delay_seconds: float = DEFAULT_MAX_DELAY_SECONDS,
    ) -> "Backoff":
        return cls(
            kind=BackoffKind.LINEAR,
            base_delay_seconds=delay_seconds,
            max_delay_seconds=max_delay_seconds,
        )

    @classmethod
    def quadratic(
        cls,
        delay_seconds: float = DEFAULT_BASE_DELAY_SECONDS,
        max_delay_seconds: float = DEFAULT_MAX_DELAY_SECONDS,
    ) -> "Backoff":
        return cls(
            kind=BackoffKind.QUADRATIC,
            base_delay_seconds=delay_seconds,
            max_delay_seconds=max_delay_seconds,
        )

    @classmethod
    def exponential(
        cls,
        delay_seconds: float = DEFAULT_BASE_DELAY_SECONDS,
        max_delay_seconds: float = DEFAULT_MAX_DELAY_SECONDS,
    ) -> "Backoff":
        return cls(
            kind=BackoffKind.EXPONENTIAL,
            base_delay_seconds=delay_seconds,
            max_delay_seconds=max_delay_seconds,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Backoff":
        """
        Build a strategy from RETRY_* settings.

        The ceiling is ignored for constant backoff.

        Raises:
            pydantic.ValidationError: Unknown RETRY_BACKOFF_KIND or negative delays
        """
        kind = settings.RETRY_BACKOFF_KIND.lower()
        return cls(
            kind=kind,
            base_delay_seconds=settings.RETRY_BASE_DELAY_SECONDS,
            max_delay_seconds=(
                None if kind == BackoffKind.CONSTANT.value else settings.RETRY_MAX_DELAY_SECONDS
            ),
        )

    def delay_for(self, attempt_index: int) -> float:
        """
        Delay in seconds after the failed attempt at ``attempt_index``.

        Args:
            attempt_index: Zero-based index (0 = first attempt)

        Raises:
            ValueError: If attempt_index is negative
        """
        return compute_delay(self, attempt_index)

    def delay_ms(self, attempt_index: int) -> int:
        """Same as delay_for, in whole milliseconds."""
        return round(self.delay_for(attempt_index) * 1000)


def compute_delay(backoff: Backoff, attempt_index: int) -> float:
    """Pure delay computation for a strategy and a zero-based attempt index."""
    if attempt_index < 0:
        raise ValueError(f"attempt_index must be >= 0, got {attempt_index}")

    match backoff.kind:
        case BackoffKind.CONSTANT:
            return backoff.base_delay_seconds
        case BackoffKind.LINEAR:
            growth = attempt_index
        case BackoffKind.QUADRATIC:
            growth = attempt_index ** 2
        case BackoffKind.EXPONENTIAL:
            # 0 ** 0 == 1 in Python; the first attempt never delays
            growth = attempt_index ** attempt_index if attempt_index else 0

    return _capped(growth, backoff.base_delay_seconds, backoff.max_delay_seconds)


def _capped(growth: int, base: float, ceiling: float) -> float:
    # Exact arithmetic: growth (i ** i) and tiny bases both leave float range.
    if growth == 0 or base == 0:
        return 0.0
    delay = growth * Fraction(base)
    if delay >= Fraction(ceiling):
        return ceiling
    return float(delay)
