r"""Retry package: policy, classification, backoff and executors.

Public API:
    - RetryPolicy: Immutable retry configuration
    - RetryStrategy / delay_for: Delay before the next attempt
    - method_allows_retry, status_is_retryable,
      transport_error_is_retryable, is_retry_eligible: Classification
    - RetryExecutor / execute_with_policy: Blocking retry loop
    - AsyncRetryExecutor / execute_with_policy_async: Async retry loop
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "FatalFailure",
    "RetryExecutor",
    "RetryPolicy",
    "RetryStrategy",
    "RetryableFailure",
    "Success",
    "TransportOutcome",
    "classify_exception",
    "delay_for",
    "execute_with_policy",
    "execute_with_policy_async",
    "is_retry_eligible",
    "method_allows_retry",
    "status_is_retryable",
    "transport_error_is_retryable",
]

from mercury.retry.classifier import (
    is_retry_eligible,
    method_allows_retry,
    status_is_retryable,
    transport_error_is_retryable,
)
from mercury.retry.executor import RetryExecutor, execute_with_policy
from mercury.retry.executor_async import AsyncRetryExecutor, execute_with_policy_async
from mercury.retry.outcome import (
    FatalFailure,
    RetryableFailure,
    Success,
    TransportOutcome,
    classify_exception,
)
from mercury.retry.policy import RetryPolicy
from mercury.retry.strategy import RetryStrategy, delay_for
