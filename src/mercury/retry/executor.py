r"""Synchronous retry executor for HTTP requests.

This module provides the RetryExecutor class that drives the attempt
loop on the calling thread, blocking it during backoff waits.
"""

from __future__ import annotations

__all__ = ["RetryExecutor", "execute_with_policy", "send_once"]

import logging
from typing import TYPE_CHECKING

from mercury.retry.classifier import is_retry_eligible
from mercury.retry.executor_core import (
    create_interrupted_error,
    create_transport_error,
    require_policy,
    should_retry_failure,
    should_retry_response,
)
from mercury.retry.outcome import Success, classify_exception
from mercury.retry.strategy import RetryStrategy
from mercury.utils.sleep import interruptible_sleep

if TYPE_CHECKING:
    import threading

    import httpx

    from mercury.core.request import RequestDescriptor
    from mercury.retry.outcome import TransportOutcome
    from mercury.retry.policy import RetryPolicy
    from mercury.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


def send_once(request: RequestDescriptor, transport: Transport) -> httpx.Response:
    """Send a request exactly once, without classifying the outcome.

    Args:
        request: The request to send.
        transport: The transport used to send it.

    Returns:
        The response, whatever its status code.

    Raises:
        MercuryRequestError: If the transport raises.
    """
    try:
        return transport.send(request)
    except Exception as exc:
        raise create_transport_error(request, exc, attempts=1) from exc


class RetryExecutor:
    """Executes requests with automatic retry logic on the calling thread.

    The executor orchestrates the following components:
    - RetryStrategy: Calculates backoff delays between attempts
    - The classifier functions: Decide whether an outcome is retryable

    Attempts are strictly sequential: attempt ``n + 1`` starts only after
    attempt ``n`` has been classified and its backoff has elapsed.

    Args:
        policy: The retry policy.
        cancel_event: Optional event that aborts a pending backoff wait
            when set. The loop then raises ``RetryInterruptedError`` and
            leaves the event set.

    Raises:
        PolicyViolationError: If ``policy`` is ``None``.

    Example:
        ```pycon
        >>> import httpx
        >>> from mercury.core.request import build_request
        >>> from mercury.retry import RetryExecutor, RetryPolicy
        >>> from mercury.transport import HttpxTransport
        >>> statuses = iter([503, 200])
        >>> client = httpx.Client(
        ...     transport=httpx.MockTransport(lambda r: httpx.Response(next(statuses)))
        ... )
        >>> executor = RetryExecutor(RetryPolicy.fixed(3, 0.0))
        >>> executor.execute(build_request("GET", "https://x/"), HttpxTransport(client)).status_code
        200

        ```
    """

    def __init__(
        self, policy: RetryPolicy, cancel_event: threading.Event | None = None
    ) -> None:
        self.policy = require_policy(policy)
        self.strategy: RetryStrategy = RetryStrategy(self.policy)
        self.cancel_event = cancel_event

    def _attempt(self, request: RequestDescriptor, transport: Transport) -> TransportOutcome:
        try:
            return Success(transport.send(request))
        except Exception as exc:  # noqa: BLE001
            return classify_exception(exc)

    def execute(self, request: RequestDescriptor, transport: Transport) -> httpx.Response:
        """Execute a request, retrying according to the policy.

        Args:
            request: The request to execute.
            transport: The transport used for every attempt.

        Returns:
            The first response with a non-retryable status, or the last
            response once attempts are exhausted.

        Raises:
            MercuryRequestError: If the transport fails with a
                non-retryable error, or with a retryable error on the
                last attempt.
            RetryInterruptedError: If the cancel event is set during a
                backoff wait.
        """
        if not is_retry_eligible(request, self.policy):
            return send_once(request, transport)

        max_attempts = self.policy.max_attempts
        attempt = 1
        while True:
            outcome = self._attempt(request, transport)
            if isinstance(outcome, Success):
                if not should_retry_response(request, outcome.response, attempt, max_attempts):
                    return outcome.response
                delay = self.strategy.calculate_delay(attempt, outcome.response)
                last_error = None
            else:
                if not should_retry_failure(request, outcome, attempt, max_attempts):
                    raise create_transport_error(
                        request, outcome.cause, attempts=attempt
                    ) from outcome.cause
                delay = self.strategy.calculate_delay(attempt)
                last_error = outcome.cause

            if not interruptible_sleep(delay, self.cancel_event):
                raise create_interrupted_error(request, attempts=attempt, cause=last_error)
            attempt += 1


def execute_with_policy(
    request: RequestDescriptor,
    policy: RetryPolicy,
    transport: Transport,
    *,
    cancel_event: threading.Event | None = None,
) -> httpx.Response:
    """Execute a request with a retry policy, blocking the calling thread.

    Args:
        request: The request to execute.
        policy: The retry policy. Must not be ``None``.
        transport: The transport used for every attempt.
        cancel_event: Optional event that aborts a pending backoff wait.

    Returns:
        The final response.

    Raises:
        PolicyViolationError: If ``policy`` is ``None``.
        MercuryRequestError: If the transport fails terminally.
        RetryInterruptedError: If the wait is cancelled.
    """
    return RetryExecutor(policy, cancel_event=cancel_event).execute(request, transport)
