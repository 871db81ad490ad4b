r"""Retry strategy for calculating backoff delays.

This module maps an attempt number and a retry policy to the delay
before the next attempt.
"""

from __future__ import annotations

__all__ = ["RetryStrategy", "backoff_for", "delay_for"]

import logging
from typing import TYPE_CHECKING

from mercury.backoff import ConstantBackoff, ExponentialBackoff, apply_half_jitter
from mercury.utils.retry_after import retry_after_from_response

if TYPE_CHECKING:
    import httpx

    from mercury.backoff import BaseBackoffStrategy
    from mercury.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def backoff_for(policy: RetryPolicy) -> BaseBackoffStrategy:
    """Return the backoff strategy selected by a policy.

    Args:
        policy: The retry policy.

    Returns:
        ``ConstantBackoff`` when ``base_delay == max_delay``,
        ``ExponentialBackoff`` otherwise.
    """
    if policy.is_constant:
        return ConstantBackoff(policy.base_delay)
    return ExponentialBackoff(policy.base_delay, policy.max_delay)


def delay_for(attempt: int, policy: RetryPolicy) -> float:
    """Compute the delay after a failed attempt.

    Args:
        attempt: The attempt that just failed (1-indexed).
        policy: The retry policy.

    Returns:
        The delay in seconds. With ``policy.jitter`` a new value in
        ``[delay / 2, delay]`` is drawn on every call.

    Raises:
        PolicyViolationError: If the exponential computation overflows.

    Example:
        ```pycon
        >>> from mercury.retry import RetryPolicy, delay_for
        >>> policy = RetryPolicy.exponential(5, base_delay=0.1, max_delay=0.3)
        >>> [delay_for(n, policy) for n in (1, 2, 3, 4)]
        [0.1, 0.2, 0.3, 0.3]
        >>> delay_for(7, RetryPolicy.fixed(8, 0.5))
        0.5

        ```
    """
    delay = backoff_for(policy).calculate(attempt)
    if policy.jitter:
        delay = apply_half_jitter(delay)
    return delay


class RetryStrategy:
    """Strategy for calculating retry delays for one policy.

    When the policy respects ``Retry-After`` and the response that
    triggered the retry carries a valid header, the header value replaces
    the computed backoff.

    Args:
        policy: The retry policy.

    Attributes:
        policy: The retry policy.
        backoff: The backoff strategy selected by the policy.
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.backoff: BaseBackoffStrategy = backoff_for(policy)

    def calculate_delay(self, attempt: int, response: httpx.Response | None = None) -> float:
        """Calculate the delay before the attempt after ``attempt``.

        Args:
            attempt: The attempt that just failed (1-indexed).
            response: The response with a retryable status, or ``None``
                after a transport failure.

        Returns:
            The delay in seconds.
        """
        if self.policy.respect_retry_after:
            retry_after = retry_after_from_response(response)
            if retry_after is not None:
                if retry_after > self.policy.max_retry_after:
                    logger.debug(
                        f"Retry-After of {retry_after:.2f}s exceeds the limit, "
                        f"waiting {self.policy.max_retry_after:.2f}s"
                    )
                    return self.policy.max_retry_after
                logger.debug(f"Using Retry-After header value: {retry_after:.2f}s")
                return retry_after
        delay = self.backoff.calculate(attempt)
        if self.policy.jitter:
            delay = apply_half_jitter(delay)
        logger.debug(f"Waiting {delay:.3f}s before attempt {attempt + 1}")
        return delay
