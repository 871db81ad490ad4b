r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from mercury.backoff.base import BaseBackoffStrategy


class ConstantBackoff(BaseBackoffStrategy):
    """Constant/fixed backoff strategy.

    Returns the same delay after every attempt. This is the strategy used
    by policies whose ``base_delay`` equals their ``max_delay``.

    Args:
        delay: The fixed delay in seconds.

    Example:
        ```pycon
        >>> from mercury.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff.calculate(1)
        2.5
        >>> backoff.calculate(10)
        2.5

        ```
    """

    def __init__(self, delay: float) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)

        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
