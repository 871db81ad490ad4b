r"""Unit tests for the retry classification predicates."""

from __future__ import annotations

import httpx
import pytest

from mercury.core.request import RequestDescriptor, build_request
from mercury.retry import (
    RetryPolicy,
    is_retry_eligible,
    method_allows_retry,
    status_is_retryable,
    transport_error_is_retryable,
)

POLICY = RetryPolicy.fixed(3, 0.1)


#########################################
#     Tests for method_allows_retry     #
#########################################


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "get", "Put", "delete"])
def test_method_allows_retry_idempotent(method: str) -> None:
    assert method_allows_retry(method, POLICY)


@pytest.mark.parametrize("method", ["POST", "PATCH"])
def test_method_allows_retry_requires_opt_in(method: str) -> None:
    assert not method_allows_retry(method, POLICY)


def test_method_allows_retry_post_allowed() -> None:
    policy = POLICY.allow_post()
    assert method_allows_retry("POST", policy)
    assert not method_allows_retry("PATCH", policy)


def test_method_allows_retry_patch_allowed() -> None:
    policy = POLICY.allow_patch()
    assert method_allows_retry("PATCH", policy)
    assert not method_allows_retry("POST", policy)


@pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "TRACE", "CONNECT"])
def test_method_allows_retry_other_methods(method: str) -> None:
    assert not method_allows_retry(method, POLICY.allow_post().allow_patch())


#########################################
#     Tests for status_is_retryable     #
#########################################


@pytest.mark.parametrize("status_code", [429, 502, 503, 504])
def test_status_is_retryable_true(status_code: int) -> None:
    assert status_is_retryable(status_code)


@pytest.mark.parametrize("status_code", [200, 201, 204, 301, 400, 401, 404, 408, 500, 501, 505])
def test_status_is_retryable_false(status_code: int) -> None:
    assert not status_is_retryable(status_code)


##################################################
#     Tests for transport_error_is_retryable     #
##################################################


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("refused"),
        httpx.ConnectTimeout("connect timeout"),
        httpx.ReadTimeout("read timeout"),
        httpx.WriteTimeout("write timeout"),
        httpx.PoolTimeout("pool timeout"),
        httpx.ReadError("reset"),
        httpx.WriteError("broken pipe"),
        httpx.CloseError("close"),
        ConnectionResetError("reset"),
        OSError("io"),
    ],
)
def test_transport_error_is_retryable_true(exc: Exception) -> None:
    assert transport_error_is_retryable(exc)


@pytest.mark.parametrize(
    "exc",
    [
        httpx.RemoteProtocolError("bad response"),
        httpx.LocalProtocolError("bad request"),
        httpx.DecodingError("bad gzip"),
        httpx.InvalidURL("bad url"),
        httpx.UnsupportedProtocol("ftp"),
        ValueError("bug"),
        RuntimeError("bug"),
        None,
    ],
)
def test_transport_error_is_retryable_false(exc: Exception | None) -> None:
    assert not transport_error_is_retryable(exc)


#######################################
#     Tests for is_retry_eligible     #
#######################################


def test_is_retry_eligible_get() -> None:
    assert is_retry_eligible(build_request("GET", "https://x/"), POLICY)


def test_is_retry_eligible_post_with_bytes_body() -> None:
    request = build_request("POST", "https://x/", body=b"data")
    assert not is_retry_eligible(request, POLICY)
    assert is_retry_eligible(request, POLICY.allow_post())


def test_is_retry_eligible_stream_body() -> None:
    request = RequestDescriptor(method="PUT", url="https://x/", stream=iter([b"data"]))
    assert not is_retry_eligible(request, POLICY)


def test_is_retry_eligible_head() -> None:
    assert not is_retry_eligible(build_request("HEAD", "https://x/"), POLICY)
