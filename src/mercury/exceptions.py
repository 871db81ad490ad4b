r"""Exception classes raised by the mercury request layer.

Only terminal outcomes cross the retry loop boundary: a wrapped transport
failure, an interrupted backoff wait, or a programming error in the
policy configuration. Retryable status codes are never raised, the final
response is returned to the caller as-is.
"""

from __future__ import annotations

__all__ = [
    "MercuryError",
    "MercuryRequestError",
    "PolicyViolationError",
    "RetryInterruptedError",
]


class MercuryError(Exception):
    """Base class for all mercury exceptions."""


class MercuryRequestError(MercuryError):
    """Raised when the transport fails to produce a response.

    The error carries the request method and URL for diagnostics, and the
    original transport exception is available as ``cause`` (and as
    ``__cause__`` since the error is always raised ``from`` it).

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: The error message.
        cause: The original exception raised by the transport.
        attempts: The number of attempts that were executed.

    Example:
        ```pycon
        >>> from mercury.exceptions import MercuryRequestError
        >>> error = MercuryRequestError(
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ...     message="GET request to https://api.example.com/data failed",
        ... )
        >>> error.method
        'GET'
        >>> error.attempts
        1

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        cause: BaseException | None = None,
        attempts: int = 1,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.cause = cause
        self.attempts = attempts

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"attempts={self.attempts}, cause={self.cause!r})"
        )


class RetryInterruptedError(MercuryRequestError):
    """Raised when a blocking backoff wait is cancelled.

    The cancellation signal is left untouched so the caller can still
    observe it after handling this error.
    """


class PolicyViolationError(MercuryError, ValueError):
    """Raised for malformed retry configuration or a missing policy.

    These are programming errors: they are never retried.
    """
