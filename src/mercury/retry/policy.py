r"""Immutable retry policy attached to a request."""

from __future__ import annotations

__all__ = ["RetryPolicy"]

from dataclasses import dataclass, replace

from mercury.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRY_AFTER,
)
from mercury.core.validation import validate_retry_policy


@dataclass(frozen=True)
class RetryPolicy:
    """Retry policy describing how many attempts to make and how long to
    wait between them.

    When ``base_delay == max_delay`` the backoff is constant, otherwise it
    grows exponentially from ``base_delay`` and is capped at ``max_delay``.
    Use the ``fixed`` and ``exponential`` constructors rather than calling
    the class directly.

    Args:
        max_attempts: Total number of attempts including the first one.
        base_delay: Delay in seconds before the first retry.
        max_delay: Upper bound in seconds on any single delay.
        jitter: Whether to randomize each delay within ``[delay / 2, delay]``.
        retry_post: Whether POST requests may be retried.
        retry_patch: Whether PATCH requests may be retried.
        respect_retry_after: Whether a server ``Retry-After`` header replaces
            the computed delay after a retryable status.
        max_retry_after: Upper bound in seconds on a ``Retry-After`` delay.
            Longer server values are shortened to this bound.

    Raises:
        PolicyViolationError: If the parameters are out of range.

    Example:
        ```pycon
        >>> from mercury.retry import RetryPolicy
        >>> policy = RetryPolicy.exponential(5, base_delay=0.2, max_delay=3.0, jitter=True)
        >>> policy.retry_post
        False
        >>> policy.allow_post().retry_post
        True
        >>> policy.retry_post  # Original unchanged
        False

        ```
    """

    max_attempts: int
    base_delay: float
    max_delay: float
    jitter: bool = False
    retry_post: bool = False
    retry_patch: bool = False
    respect_retry_after: bool = True
    max_retry_after: float = DEFAULT_MAX_RETRY_AFTER

    def __post_init__(self) -> None:
        validate_retry_policy(
            max_attempts=self.max_attempts,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            max_retry_after=self.max_retry_after,
        )

    @classmethod
    def fixed(cls, max_attempts: int, delay: float) -> RetryPolicy:
        """Create a policy that waits the same delay before every retry.

        Args:
            max_attempts: Total number of attempts including the first one.
            delay: The delay in seconds between attempts.

        Returns:
            A constant-backoff policy that respects ``Retry-After``.
        """
        return cls(max_attempts=max_attempts, base_delay=delay, max_delay=delay)

    @classmethod
    def exponential(
        cls,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        jitter: bool = False,
    ) -> RetryPolicy:
        """Create a policy whose delay doubles after every attempt.

        Args:
            max_attempts: Total number of attempts including the first one.
            base_delay: Delay in seconds before the first retry.
            max_delay: Upper bound in seconds on any single delay.
            jitter: Whether to apply half-jitter to each delay.

        Returns:
            An exponential-backoff policy that respects ``Retry-After``.
        """
        return cls(
            max_attempts=max_attempts, base_delay=base_delay, max_delay=max_delay, jitter=jitter
        )

    @property
    def is_constant(self) -> bool:
        """``True`` if every retry waits ``base_delay``."""
        return self.base_delay == self.max_delay

    def allow_post(self) -> RetryPolicy:
        """Return a copy of this policy that also retries POST requests."""
        return replace(self, retry_post=True)

    def allow_patch(self) -> RetryPolicy:
        """Return a copy of this policy that also retries PATCH requests."""
        return replace(self, retry_patch=True)
