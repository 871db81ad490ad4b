r"""Shared core logic for retry executors.

This module provides the decision helpers used by both the synchronous
and the asynchronous retry executors, so both execution models make the
same retry decisions given the same outcomes.
"""

from __future__ import annotations

__all__ = [
    "create_interrupted_error",
    "create_transport_error",
    "require_policy",
    "should_retry_failure",
    "should_retry_response",
]

import logging
from typing import TYPE_CHECKING

import httpx

from mercury.exceptions import MercuryRequestError, PolicyViolationError, RetryInterruptedError
from mercury.retry.classifier import status_is_retryable
from mercury.retry.outcome import RetryableFailure

if TYPE_CHECKING:
    from mercury.core.request import RequestDescriptor
    from mercury.retry.outcome import FatalFailure
    from mercury.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def require_policy(policy: RetryPolicy | None) -> RetryPolicy:
    """Return the policy, or raise if it is missing.

    Raises:
        PolicyViolationError: If ``policy`` is ``None``.
    """
    if policy is None:
        msg = "a retry policy is required, got None"
        raise PolicyViolationError(msg)
    return policy


def should_retry_response(
    request: RequestDescriptor, response: httpx.Response, attempt: int, max_attempts: int
) -> bool:
    """Determine if a response should trigger another attempt.

    Args:
        request: The request being executed.
        response: The response of the current attempt.
        attempt: The current attempt number (1-indexed).
        max_attempts: The total number of attempts allowed.

    Returns:
        ``True`` if the status is retryable and attempts remain. A
        retryable status on the last attempt is returned to the caller.
    """
    if not status_is_retryable(response.status_code):
        return False
    if attempt >= max_attempts:
        logger.debug(
            f"{request.method} request to {request.url} returned status "
            f"{response.status_code} after {attempt} attempts, giving up"
        )
        return False
    logger.debug(
        f"{request.method} to {request.url}: will retry (status {response.status_code}, "
        f"attempt {attempt}/{max_attempts})"
    )
    return True


def should_retry_failure(
    request: RequestDescriptor,
    outcome: RetryableFailure | FatalFailure,
    attempt: int,
    max_attempts: int,
) -> bool:
    """Determine if a transport failure should trigger another attempt.

    Args:
        request: The request being executed.
        outcome: The tagged failure of the current attempt.
        attempt: The current attempt number (1-indexed).
        max_attempts: The total number of attempts allowed.

    Returns:
        ``True`` if the failure is retryable and attempts remain.
    """
    error_type = type(outcome.cause).__name__
    if not isinstance(outcome, RetryableFailure):
        logger.debug(
            f"{request.method} request to {request.url} failed with non-retryable "
            f"{error_type}: {outcome.cause}"
        )
        return False
    if attempt >= max_attempts:
        logger.debug(
            f"{request.method} request to {request.url} failed with {error_type} "
            f"after {attempt} attempts, giving up"
        )
        return False
    logger.debug(
        f"{request.method} to {request.url}: will retry ({error_type}, "
        f"attempt {attempt}/{max_attempts})"
    )
    return True


def create_transport_error(
    request: RequestDescriptor, exc: BaseException, attempts: int
) -> MercuryRequestError:
    """Create the error raised for a terminal transport failure.

    Args:
        request: The request being executed.
        exc: The exception raised by the transport.
        attempts: The number of attempts that were executed.

    Returns:
        A ``MercuryRequestError`` carrying the method, the URL and the
        original exception.
    """
    if isinstance(exc, httpx.TimeoutException):
        message = f"{request.method} request to {request.url} timed out ({attempts} attempts)"
    else:
        message = (
            f"{request.method} request to {request.url} failed after {attempts} "
            f"attempts: {exc}"
        )
    return MercuryRequestError(
        method=request.method,
        url=request.url,
        message=message,
        cause=exc,
        attempts=attempts,
    )


def create_interrupted_error(
    request: RequestDescriptor, attempts: int, cause: BaseException | None = None
) -> RetryInterruptedError:
    """Create the error raised when a backoff wait is cancelled."""
    return RetryInterruptedError(
        method=request.method,
        url=request.url,
        message=f"Retry interrupted: {request.method} request to {request.url} "
        f"after {attempts} attempts",
        cause=cause,
        attempts=attempts,
    )
