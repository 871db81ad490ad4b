r"""Backoff strategies and jitter for retry delays.

This package provides the constant and exponential backoff strategies
selected by a retry policy, and the half-jitter applied on top of them.
"""

from __future__ import annotations

__all__ = [
    "JITTER_THRESHOLD",
    "MAX_EXPONENT",
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "apply_half_jitter",
]

from mercury.backoff.base import BaseBackoffStrategy
from mercury.backoff.constant import ConstantBackoff
from mercury.backoff.exponential import MAX_EXPONENT, ExponentialBackoff
from mercury.backoff.jitter import JITTER_THRESHOLD, apply_half_jitter
