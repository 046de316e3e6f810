"""Normalization of attempt failures into exception records."""

from typing import Any

from retry_layer.retry.exceptions import AttemptFailure


def classify_failure(raw: Any) -> BaseException:
    """
    Normalize one attempt's failure.

    Exception instances pass through unchanged so callers can still match on
    their type. Exception classes are instantiated the way ``raise`` would.
    Anything else is wrapped in AttemptFailure with ``str(raw)`` as message.
    """
    if isinstance(raw, BaseException):
        return raw
    if isinstance(raw, type) and issubclass(raw, BaseException):
        try:
            return raw()
        except TypeError:
            return AttemptFailure(raw)
    return AttemptFailure(raw)
