r"""Tagged outcome of one transport attempt.

The outcome is decided once, at the transport boundary, so the retry
loop only has to look at the tag.
"""

from __future__ import annotations

__all__ = ["FatalFailure", "RetryableFailure", "Success", "TransportOutcome", "classify_exception"]

from dataclasses import dataclass
from typing import Union

import httpx

from mercury.retry.classifier import transport_error_is_retryable


@dataclass(frozen=True)
class Success:
    """The transport returned a response, whatever its status code."""

    response: httpx.Response


@dataclass(frozen=True)
class RetryableFailure:
    """The transport failed with an error worth another attempt."""

    cause: Exception


@dataclass(frozen=True)
class FatalFailure:
    """The transport failed with an error that must surface immediately."""

    cause: Exception


TransportOutcome = Union[Success, RetryableFailure, FatalFailure]


def classify_exception(exc: Exception) -> RetryableFailure | FatalFailure:
    """Tag a transport exception as retryable or fatal.

    Example:
        ```pycon
        >>> import httpx
        >>> from mercury.retry.outcome import classify_exception
        >>> classify_exception(httpx.ReadTimeout("slow"))
        RetryableFailure(cause=ReadTimeout('slow'))
        >>> classify_exception(httpx.InvalidURL("bad"))
        FatalFailure(cause=InvalidURL('bad'))

        ```
    """
    if transport_error_is_retryable(exc):
        return RetryableFailure(exc)
    return FatalFailure(exc)
