"""
Operation shapes accepted by the retry engine.

An operation is either:
    - Deferred: a zero-argument callable, invoked once per attempt
    - InFlight: an already-started awaitable, which cannot be restarted and
      therefore allows exactly one attempt

Bare callables and awaitables are coerced with ``as_operation``.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, ClassVar, Generic, TypeVar, Union

from retry_layer.retry.exceptions import InvalidOperationError

T = TypeVar("T")

ZERO_ARGUMENT_MESSAGE = (
    "operation must be an awaitable or a zero-argument callable"
)

_REQUIRED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def is_zero_argument_callable(fn: Any) -> bool:
    """True if ``fn`` can be called with no arguments."""
    if not callable(fn):
        return False
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature; give them the benefit of the doubt
        return True
    return not any(
        param.kind in _REQUIRED_KINDS and param.default is inspect.Parameter.empty
        for param in signature.parameters.values()
    )


@dataclass(frozen=True)
class Deferred(Generic[T]):
    """
    Zero-argument computation producing a fresh result per attempt.

    ``fn`` may be a coroutine function, a function returning any awaitable,
    or a plain synchronous function.
    """

    fn: Callable[[], Union[Awaitable[T], T]]
    single_shot: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not is_zero_argument_callable(self.fn):
            raise InvalidOperationError(
                f"{ZERO_ARGUMENT_MESSAGE}, got {_describe(self.fn)}"
            )

    async def run(self) -> T:
        result = self.fn()
        if inspect.isawaitable(result):
            return await result
        return result


@dataclass(frozen=True)
class InFlight(Generic[T]):
    """Already-started awaitable (coroutine, Future, Task). One attempt only."""

    awaitable: Awaitable[T]
    single_shot: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if not inspect.isawaitable(self.awaitable):
            raise InvalidOperationError(
                f"{ZERO_ARGUMENT_MESSAGE}, got {_describe(self.awaitable)}"
            )

    async def run(self) -> T:
        return await self.awaitable


Operation = Union[Deferred[T], InFlight[T]]


def as_operation(operation: Any) -> Operation[Any]:
    """
    Coerce a caller-supplied value into an explicit operation.

    Raises:
        InvalidOperationError: Neither awaitable nor zero-argument callable
    """
    if isinstance(operation, (Deferred, InFlight)):
        return operation
    if inspect.isawaitable(operation):
        return InFlight(operation)
    if callable(operation):
        return Deferred(operation)
    raise InvalidOperationError(f"{ZERO_ARGUMENT_MESSAGE}, got {_describe(operation)}")


def _describe(value: Any) -> str:
    name = getattr(value, "__qualname__", None) or type(value).__name__
    if callable(value):
        try:
            return f"{name}{inspect.signature(value)}"
        except (TypeError, ValueError):
            pass
    return name
