from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


class EchoService:
    r"""In-memory HTTP service used as the far end of the integration
    tests.

    ``/echo`` answers with a JSON document describing the request it
    received. ``/flaky`` answers with the scripted statuses in order and
    then with ``200``. ``/status/<code>`` always answers with ``code``.
    """

    def __init__(self, statuses: tuple[int, ...] = (), retry_after: str | None = None) -> None:
        self.statuses = list(statuses)
        self.retry_after = retry_after
        self.requests: list[httpx.Request] = []
        self.hooks: list[Callable[[httpx.Request], None]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for hook in self.hooks:
            hook(request)
        path = request.url.path
        if path == "/flaky" and self.statuses:
            status = self.statuses.pop(0)
            headers = {"Retry-After": self.retry_after} if self.retry_after else {}
            return httpx.Response(status, headers=headers, text="try again")
        if path.startswith("/status/"):
            return httpx.Response(int(path.rsplit("/", 1)[1]))
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "query": request.url.query.decode("ascii"),
                "headers": [[k, v] for k, v in request.headers.multi_items()],
                "body": request.content.decode("utf-8"),
            },
        )


@pytest.fixture
def service() -> EchoService:
    return EchoService()


@pytest.fixture
def make_service() -> Callable[..., EchoService]:
    return EchoService


@pytest.fixture
def http_client(service: EchoService) -> Generator[httpx.Client, None, None]:
    with httpx.Client(
        transport=httpx.MockTransport(service), base_url="https://api.example.com"
    ) as client:
        yield client
