r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["MAX_EXPONENT", "ExponentialBackoff"]

import math

from mercury.backoff.base import BaseBackoffStrategy
from mercury.exceptions import PolicyViolationError

# The exponent is clamped so that late attempts cannot grow the multiplier
# without bound.
MAX_EXPONENT = 30


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as ``min(max_delay, base_delay * 2 ** (attempt - 1))``
    with the exponent clamped at ``MAX_EXPONENT``.

    Args:
        base_delay: The delay in seconds after the first attempt.
        max_delay: The maximum delay in seconds. Must be >= base_delay.

    Raises:
        ValueError: If base_delay is negative or max_delay is smaller
            than base_delay.

    Example:
        ```pycon
        >>> from mercury.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.5, max_delay=3.0)
        >>> backoff.calculate(1)
        0.5
        >>> backoff.calculate(2)
        1.0
        >>> backoff.calculate(3)
        2.0
        >>> backoff.calculate(4)  # Would be 4.0, but capped
        3.0

        ```
    """

    def __init__(self, base_delay: float, max_delay: float) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay < base_delay:
            msg = f"max_delay must be >= base_delay, got {max_delay} < {base_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            The delay in seconds, capped at ``max_delay``.

        Raises:
            PolicyViolationError: If the multiplication overflows.
        """
        exponent = min(MAX_EXPONENT, max(0, attempt - 1))
        try:
            delay = self.base_delay * (2**exponent)
        except OverflowError as exc:
            msg = f"backoff overflow for base_delay={self.base_delay} and attempt={attempt}"
            raise PolicyViolationError(msg) from exc
        if not math.isfinite(delay):
            msg = f"backoff overflow for base_delay={self.base_delay} and attempt={attempt}"
            raise PolicyViolationError(msg)
        return min(self.max_delay, delay)
