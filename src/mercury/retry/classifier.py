r"""Retry classification predicates.

This module decides whether a request may be retried at all, and whether
a given status code or transport exception is worth another attempt.
All the functions are pure.
"""

from __future__ import annotations

__all__ = [
    "is_retry_eligible",
    "method_allows_retry",
    "status_is_retryable",
    "transport_error_is_retryable",
]

import logging
from typing import TYPE_CHECKING

import httpx

from mercury.core.config import IDEMPOTENT_METHODS, RETRY_STATUS_CODES

if TYPE_CHECKING:
    from mercury.core.request import RequestDescriptor
    from mercury.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)

# Transport failures worth another attempt: the connection could not be
# established, an operation timed out, or the network failed mid-exchange.
# httpx.ProtocolError, httpx.DecodingError, httpx.InvalidURL,
# httpx.UnsupportedProtocol and httpx.TooManyRedirects are terminal.
RETRYABLE_TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    httpx.ConnectError,
    httpx.TimeoutException,
    httpx.NetworkError,
    OSError,
)


def method_allows_retry(method: str, policy: RetryPolicy) -> bool:
    """Return whether the policy allows retrying this HTTP method.

    GET, PUT and DELETE are always retry-eligible. POST and PATCH need
    ``policy.retry_post`` and ``policy.retry_patch``. Any other method is
    executed once.

    Args:
        method: The HTTP method, case-insensitive.
        policy: The retry policy.

    Returns:
        ``True`` if the method may be retried.

    Example:
        ```pycon
        >>> from mercury.retry import RetryPolicy, method_allows_retry
        >>> policy = RetryPolicy.fixed(3, 0.1)
        >>> method_allows_retry("GET", policy)
        True
        >>> method_allows_retry("POST", policy)
        False
        >>> method_allows_retry("POST", policy.allow_post())
        True

        ```
    """
    method = method.upper()
    if method in IDEMPOTENT_METHODS:
        return True
    if method == "POST":
        return policy.retry_post
    if method == "PATCH":
        return policy.retry_patch
    return False


def status_is_retryable(status_code: int) -> bool:
    """Return whether a response status code is worth another attempt.

    Only 429, 502, 503 and 504 are retryable. Every other code, including
    other 4xx and 5xx codes, is terminal.

    Example:
        ```pycon
        >>> from mercury.retry import status_is_retryable
        >>> status_is_retryable(503)
        True
        >>> status_is_retryable(500)
        False

        ```
    """
    return status_code in RETRY_STATUS_CODES


def transport_error_is_retryable(exc: BaseException | None) -> bool:
    """Return whether a transport exception is worth another attempt.

    Connection failures, timeouts and network I/O errors are retryable.
    Protocol and decoding errors, invalid URLs, cancellation and
    programming errors are not.

    Example:
        ```pycon
        >>> import httpx
        >>> from mercury.retry import transport_error_is_retryable
        >>> transport_error_is_retryable(httpx.ConnectTimeout("timed out"))
        True
        >>> transport_error_is_retryable(httpx.RemoteProtocolError("bad"))
        False
        >>> transport_error_is_retryable(ValueError("bug"))
        False

        ```
    """
    return isinstance(exc, RETRYABLE_TRANSPORT_ERRORS)


def is_retry_eligible(request: RequestDescriptor, policy: RetryPolicy) -> bool:
    """Return whether a request may be executed more than once.

    A request is retry-eligible when its method is allowed by the policy
    and its body can be resent unchanged. A single-use body silently
    disables retries.

    Args:
        request: The request to execute.
        policy: The retry policy.

    Returns:
        ``True`` if the request is retry-eligible.
    """
    if not method_allows_retry(request.method, policy):
        logger.debug(f"{request.method} request to {request.url} is not retried by the policy")
        return False
    if not request.is_repeatable_body:
        logger.debug(
            f"{request.method} request to {request.url} has a single-use body, "
            "retries are disabled"
        )
        return False
    return True
