r"""Parameter validation utilities for retry policies and clients.

This module provides validation functions for retry policy parameters
and request timeouts to ensure they meet the required constraints before
being used by the retry loop.
"""

from __future__ import annotations

__all__ = ["validate_body", "validate_retry_policy", "validate_timeout"]

from typing import TYPE_CHECKING, Any

from mercury.exceptions import PolicyViolationError

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout | None) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from mercury.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_policy(
    max_attempts: int, base_delay: float, max_delay: float, max_retry_after: float = 0.0
) -> None:
    """Validate retry policy parameters.

    Args:
        max_attempts: Total number of attempts including the first one.
            Must be >= 1.
        base_delay: Delay in seconds before the first retry. Must be >= 0.
        max_delay: Upper bound on any single delay. Must be >= base_delay.
        max_retry_after: Upper bound on a server Retry-After delay. Must be
            finite and >= 0.

    Raises:
        PolicyViolationError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from mercury.core.validation import validate_retry_policy
        >>> validate_retry_policy(max_attempts=3, base_delay=0.5, max_delay=5.0)
        >>> validate_retry_policy(max_attempts=0, base_delay=0.5, max_delay=5.0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        mercury.exceptions.PolicyViolationError: max_attempts must be >= 1, got 0

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise PolicyViolationError(msg)
    if base_delay < 0:
        msg = f"base_delay must be >= 0, got {base_delay}"
        raise PolicyViolationError(msg)
    if max_delay < base_delay:
        msg = (
            f"max_delay must be >= base_delay, got max_delay={max_delay} "
            f"and base_delay={base_delay}"
        )
        raise PolicyViolationError(msg)
    if not 0 <= max_retry_after < float("inf"):
        msg = f"max_retry_after must be finite and >= 0, got {max_retry_after}"
        raise PolicyViolationError(msg)


def validate_body(method: str, body: Any) -> None:
    """Validate that a request body was given for a method that needs one.

    Args:
        method: The HTTP method, used in the error message.
        body: The request body.

    Raises:
        ValueError: If ``body`` is ``None``.
    """
    if body is None:
        msg = f"{method} requires a body, got None"
        raise ValueError(msg)
