r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait after a failed attempt
    before the next one, based on the attempt number.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay after a given attempt.

        Args:
            attempt: The attempt that just failed (1-indexed). For example,
                attempt=1 is the initial request, attempt=2 is the first
                retry, etc.

        Returns:
            The delay in seconds before the next attempt.
        """
