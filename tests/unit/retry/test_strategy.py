r"""Unit tests for delay computation."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from mercury.backoff import ConstantBackoff, ExponentialBackoff
from mercury.exceptions import PolicyViolationError
from mercury.retry import RetryPolicy, RetryStrategy, delay_for
from mercury.retry.strategy import backoff_for

#################################
#     Tests for backoff_for     #
#################################


def test_backoff_for_constant() -> None:
    backoff = backoff_for(RetryPolicy.fixed(3, 0.5))
    assert isinstance(backoff, ConstantBackoff)
    assert backoff.delay == 0.5


def test_backoff_for_exponential() -> None:
    backoff = backoff_for(RetryPolicy.exponential(3, 0.5, 4.0))
    assert isinstance(backoff, ExponentialBackoff)
    assert backoff.base_delay == 0.5
    assert backoff.max_delay == 4.0


###############################
#     Tests for delay_for     #
###############################


@pytest.mark.parametrize("attempt", [1, 2, 3, 10])
def test_delay_for_constant(attempt: int) -> None:
    assert delay_for(attempt, RetryPolicy.fixed(20, 1.5)) == 1.5


def test_delay_for_exponential() -> None:
    policy = RetryPolicy.exponential(10, 0.1, 1.0)
    assert [delay_for(attempt, policy) for attempt in range(1, 7)] == [
        0.1,
        0.2,
        0.4,
        0.8,
        1.0,
        1.0,
    ]


def test_delay_for_exponential_large_attempt_capped() -> None:
    assert delay_for(10_000, RetryPolicy.exponential(3, 1.0, 60.0)) == 60.0


def test_delay_for_jitter_range() -> None:
    policy = RetryPolicy.exponential(5, 1.0, 8.0, jitter=True)
    for _ in range(50):
        assert 2.0 <= delay_for(3, policy) <= 4.0


def test_delay_for_jitter_constant_policy() -> None:
    policy = RetryPolicy(max_attempts=3, base_delay=2.0, max_delay=2.0, jitter=True)
    with patch("random.uniform", return_value=1.25) as uniform:
        assert delay_for(1, policy) == 1.25
    uniform.assert_called_once_with(1.0, 2.0)


def test_delay_for_zero_delay() -> None:
    assert delay_for(3, RetryPolicy.fixed(3, 0.0)) == 0.0


def test_delay_for_overflow() -> None:
    policy = RetryPolicy.exponential(3, 1e300, float("inf"))
    with pytest.raises(PolicyViolationError):
        delay_for(31, policy)


###################################
#     Tests for RetryStrategy     #
###################################


def test_retry_strategy_without_response() -> None:
    strategy = RetryStrategy(RetryPolicy.exponential(3, 0.5, 4.0))
    assert strategy.calculate_delay(1) == 0.5
    assert strategy.calculate_delay(2) == 1.0


def test_retry_strategy_retry_after_seconds() -> None:
    strategy = RetryStrategy(RetryPolicy.fixed(3, 0.5))
    response = httpx.Response(429, headers={"Retry-After": "7"})
    assert strategy.calculate_delay(1, response) == 7.0


def test_retry_strategy_retry_after_not_capped_by_max_delay() -> None:
    strategy = RetryStrategy(RetryPolicy.exponential(3, 0.5, 2.0))
    response = httpx.Response(503, headers={"Retry-After": "30"})
    assert strategy.calculate_delay(1, response) == 30.0


def test_retry_strategy_retry_after_capped_by_max_retry_after() -> None:
    strategy = RetryStrategy(RetryPolicy.exponential(3, 0.1, 2.0))
    response = httpx.Response(503, headers={"Retry-After": "31536000"})
    assert strategy.calculate_delay(1, response) == 60.0


def test_retry_strategy_retry_after_custom_cap() -> None:
    policy = RetryPolicy(max_attempts=3, base_delay=0.5, max_delay=0.5, max_retry_after=5.0)
    response = httpx.Response(429, headers={"Retry-After": "7"})
    assert RetryStrategy(policy).calculate_delay(1, response) == 5.0


def test_retry_strategy_out_of_range_retry_after_uses_backoff() -> None:
    strategy = RetryStrategy(RetryPolicy.fixed(3, 0.5))
    response = httpx.Response(503, headers={"Retry-After": "9" * 400})
    assert strategy.calculate_delay(1, response) == 0.5


def test_retry_strategy_retry_after_not_jittered() -> None:
    strategy = RetryStrategy(RetryPolicy.exponential(3, 0.5, 2.0, jitter=True))
    response = httpx.Response(503, headers={"Retry-After": "3"})
    with patch("random.uniform") as uniform:
        assert strategy.calculate_delay(1, response) == 3.0
    uniform.assert_not_called()


def test_retry_strategy_invalid_retry_after_uses_backoff() -> None:
    strategy = RetryStrategy(RetryPolicy.fixed(3, 0.5))
    response = httpx.Response(503, headers={"Retry-After": "later"})
    assert strategy.calculate_delay(1, response) == 0.5


def test_retry_strategy_ignores_retry_after_when_disabled() -> None:
    policy = RetryPolicy(max_attempts=3, base_delay=0.5, max_delay=0.5, respect_retry_after=False)
    response = httpx.Response(503, headers={"Retry-After": "7"})
    assert RetryStrategy(policy).calculate_delay(1, response) == 0.5
