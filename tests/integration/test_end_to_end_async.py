from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from mercury import (
    AsyncMercuryClient,
    ClientConfig,
    MercuryRequestError,
    get_async,
    patch_async,
    post_async,
    request_async,
)
from mercury.auth import header_auth, query_auth
from mercury.query import qp_replace
from mercury.retry import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.integration.conftest import EchoService

BASE_URL = "https://api.example.com"


##############################
#     Tests for requests     #
##############################


@pytest.mark.asyncio
async def test_get_async_query_and_auth(service: EchoService) -> None:
    async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
        response = await get_async(
            f"{BASE_URL}/echo?q=caf%C3%A9&page=1",
            query=qp_replace("page", "2"),
            auth=header_auth("X-API-Key", "secret"),
            client=client,
        )
    data = response.json()
    assert data["query"] == "q=caf%C3%A9&page=2"
    assert ["x-api-key", "secret"] in data["headers"]


@pytest.mark.asyncio
async def test_post_async_sends_body(service: EchoService) -> None:
    async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
        response = await post_async(f"{BASE_URL}/echo", "hello", client=client)
    assert response.json()["body"] == "hello"


@pytest.mark.asyncio
async def test_request_async_options(service: EchoService) -> None:
    async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
        response = await request_async("OPTIONS", f"{BASE_URL}/echo", client=client)
    assert response.json()["method"] == "OPTIONS"


###########################
#     Tests for retry     #
###########################


@pytest.mark.asyncio
async def test_get_async_retries_until_success(
    make_service: Callable[..., EchoService], mock_asleep: Mock
) -> None:
    service = make_service((504, 503))
    async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
        response = await get_async(
            f"{BASE_URL}/flaky",
            auth=query_auth("key", "k"),
            policy=RetryPolicy.exponential(4, 0.5, 0.75),
            client=client,
        )
    assert response.status_code == 200
    assert len(service.requests) == 3
    assert {str(r.url) for r in service.requests} == {f"{BASE_URL}/flaky?key=k"}
    assert [c.args[0] for c in mock_asleep.call_args_list] == [0.5, 0.75]


@pytest.mark.asyncio
async def test_get_async_honors_retry_after(
    make_service: Callable[..., EchoService], mock_asleep: Mock
) -> None:
    service = make_service((503,), retry_after="3")
    async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
        response = await get_async(
            f"{BASE_URL}/flaky", policy=RetryPolicy.fixed(2, 0.1), client=client
        )
    assert response.status_code == 200
    mock_asleep.assert_called_once_with(3.0)


@pytest.mark.asyncio
async def test_patch_async_retried_with_opt_in(
    make_service: Callable[..., EchoService], mock_asleep: Mock
) -> None:
    service = make_service((502,))
    policy = RetryPolicy.fixed(2, 0.1).allow_patch()
    async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
        response = await patch_async(f"{BASE_URL}/flaky", b"{}", policy=policy, client=client)
    assert response.status_code == 200
    assert len(service.requests) == 2


@pytest.mark.asyncio
async def test_get_async_timeouts_exhausted(mock_asleep: Mock) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MercuryRequestError) as exc_info:
            await get_async(f"{BASE_URL}/slow", policy=RetryPolicy.fixed(2, 0.1), client=client)
    assert exc_info.value.attempts == 2
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


@pytest.mark.asyncio
async def test_get_async_cancelled_during_backoff(
    make_service: Callable[..., EchoService],
) -> None:
    service = make_service((503, 503))
    first_attempt = asyncio.Event()
    service.hooks.append(lambda _request: first_attempt.set())
    async with httpx.AsyncClient(transport=httpx.MockTransport(service)) as client:
        task = asyncio.create_task(
            get_async(f"{BASE_URL}/flaky", policy=RetryPolicy.fixed(3, 60.0), client=client)
        )
        await asyncio.wait_for(first_attempt.wait(), timeout=5.0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
    assert len(service.requests) == 1


########################################
#     Tests for AsyncMercuryClient     #
########################################


@pytest.mark.asyncio
async def test_async_mercury_client_end_to_end(
    make_service: Callable[..., EchoService], mock_asleep: Mock
) -> None:
    service = make_service((429, 429))
    config = ClientConfig(headers={"Accept": "application/json"})
    async with (
        httpx.AsyncClient(transport=httpx.MockTransport(service)) as http_client,
        AsyncMercuryClient(config=config, client=http_client) as client,
    ):
        plain = await client.get(f"{BASE_URL}/flaky")
        retried = await client.retrying(RetryPolicy.fixed(3, 0.2)).get(f"{BASE_URL}/flaky")
        echo = await client.get(f"{BASE_URL}/echo")
    assert plain.status_code == 429
    assert retried.status_code == 200
    mock_asleep.assert_called_once_with(0.2)
    assert ["accept", "application/json"] in echo.json()["headers"]
