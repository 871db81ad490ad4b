r"""Asynchronous retry executor for HTTP requests.

This module provides the AsyncRetryExecutor class that executes async
HTTP requests with automatic retry logic, waiting between attempts with
``asyncio.sleep`` so no thread is held during backoff.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor", "execute_with_policy_async", "send_once_async"]

import asyncio
import logging
from typing import TYPE_CHECKING

from mercury.retry.classifier import is_retry_eligible
from mercury.retry.executor_core import (
    create_transport_error,
    require_policy,
    should_retry_failure,
    should_retry_response,
)
from mercury.retry.outcome import Success, classify_exception
from mercury.retry.strategy import RetryStrategy

if TYPE_CHECKING:
    import httpx

    from mercury.core.request import RequestDescriptor
    from mercury.retry.outcome import TransportOutcome
    from mercury.retry.policy import RetryPolicy
    from mercury.transport import AsyncTransport

logger: logging.Logger = logging.getLogger(__name__)


async def send_once_async(request: RequestDescriptor, transport: AsyncTransport) -> httpx.Response:
    """Send a request exactly once, without classifying the outcome.

    Raises:
        MercuryRequestError: If the transport raises.
    """
    try:
        return await transport.send(request)
    except Exception as exc:
        raise create_transport_error(request, exc, attempts=1) from exc


class AsyncRetryExecutor:
    """Executes async requests with automatic retry logic.

    The retry decisions are the same as ``RetryExecutor``; only the wait
    differs. Each backoff is an ``asyncio.sleep``, so cancelling the task
    that awaits ``execute`` cancels the pending wait and no further
    attempt starts. An attempt already in flight when the task is
    cancelled is cancelled with it by httpx.

    Args:
        policy: The retry policy.

    Raises:
        PolicyViolationError: If ``policy`` is ``None``.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from mercury.core.request import build_request
        >>> from mercury.retry import AsyncRetryExecutor, RetryPolicy
        >>> from mercury.transport import AsyncHttpxTransport
        >>> async def main():
        ...     async with httpx.AsyncClient() as client:
        ...         executor = AsyncRetryExecutor(RetryPolicy.exponential(4, 0.2, 2.0))
        ...         return await executor.execute(
        ...             build_request("GET", "https://api.example.com/data"),
        ...             AsyncHttpxTransport(client),
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = require_policy(policy)
        self.strategy: RetryStrategy = RetryStrategy(self.policy)

    async def _attempt(
        self, request: RequestDescriptor, transport: AsyncTransport
    ) -> TransportOutcome:
        try:
            return Success(await transport.send(request))
        except Exception as exc:  # noqa: BLE001
            return classify_exception(exc)

    async def execute(
        self, request: RequestDescriptor, transport: AsyncTransport
    ) -> httpx.Response:
        """Execute a request, retrying according to the policy.

        Args:
            request: The request to execute.
            transport: The async transport used for every attempt.

        Returns:
            The first response with a non-retryable status, or the last
            response once attempts are exhausted.

        Raises:
            MercuryRequestError: If the transport fails with a
                non-retryable error, or with a retryable error on the
                last attempt.
            asyncio.CancelledError: If the awaiting task is cancelled.
        """
        if not is_retry_eligible(request, self.policy):
            return await send_once_async(request, transport)

        max_attempts = self.policy.max_attempts
        attempt = 1
        while True:
            outcome = await self._attempt(request, transport)
            if isinstance(outcome, Success):
                if not should_retry_response(request, outcome.response, attempt, max_attempts):
                    return outcome.response
                delay = self.strategy.calculate_delay(attempt, outcome.response)
            else:
                if not should_retry_failure(request, outcome, attempt, max_attempts):
                    raise create_transport_error(
                        request, outcome.cause, attempts=attempt
                    ) from outcome.cause
                delay = self.strategy.calculate_delay(attempt)

            await asyncio.sleep(delay)
            attempt += 1


async def execute_with_policy_async(
    request: RequestDescriptor, policy: RetryPolicy, transport: AsyncTransport
) -> httpx.Response:
    """Execute a request with a retry policy without blocking the event
    loop.

    Args:
        request: The request to execute.
        policy: The retry policy. Must not be ``None``.
        transport: The async transport used for every attempt.

    Returns:
        The final response.

    Raises:
        PolicyViolationError: If ``policy`` is ``None``.
        MercuryRequestError: If the transport fails terminally.
    """
    return await AsyncRetryExecutor(policy).execute(request, transport)
