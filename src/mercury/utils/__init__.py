r"""Utility functions for the retry loop.

This package provides the Retry-After header parser and the cancellable
blocking sleep used between attempts.
"""

from __future__ import annotations

__all__ = ["interruptible_sleep", "parse_retry_after", "retry_after_from_response"]

from mercury.utils.retry_after import parse_retry_after, retry_after_from_response
from mercury.utils.sleep import interruptible_sleep
