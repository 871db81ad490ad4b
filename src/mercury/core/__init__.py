r"""Core shared logic for sync and async HTTP operations.

This module contains the configuration defaults, parameter validation
and the request model shared by the synchronous and asynchronous
request functions.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRY_AFTER",
    "DEFAULT_TIMEOUT",
    "IDEMPOTENT_METHODS",
    "RETRY_STATUS_CODES",
    "ClientConfig",
    "RequestDescriptor",
    "build_request",
    "validate_retry_policy",
    "validate_timeout",
]


from mercury.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRY_AFTER,
    DEFAULT_TIMEOUT,
    IDEMPOTENT_METHODS,
    RETRY_STATUS_CODES,
    ClientConfig,
)
from mercury.core.request import RequestDescriptor, build_request
from mercury.core.validation import validate_retry_policy, validate_timeout
