r"""Transport boundary used by the retry loop.

The retry loop only needs a ``send(request)`` operation. The httpx
implementations below are the ones used by the request functions and
clients; tests can inject ``httpx.MockTransport`` through the wrapped
``httpx.Client``, or provide any object with a ``send`` method.
"""

from __future__ import annotations

__all__ = ["AsyncHttpxTransport", "AsyncTransport", "HttpxTransport", "Transport"]

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import httpx

    from mercury.core.request import RequestDescriptor


@runtime_checkable
class Transport(Protocol):
    """Blocking transport: returns a response or raises."""

    def send(self, request: RequestDescriptor) -> httpx.Response: ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Non-blocking transport: a coroutine returning a response or
    raising."""

    async def send(self, request: RequestDescriptor) -> httpx.Response: ...


class HttpxTransport:
    """Send requests through an ``httpx.Client``.

    The client is not closed by this transport.

    Args:
        client: The httpx client.

    Example:
        ```pycon
        >>> import httpx
        >>> from mercury.core.request import build_request
        >>> from mercury.transport import HttpxTransport
        >>> client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        >>> HttpxTransport(client).send(build_request("GET", "https://x/")).status_code
        204

        ```
    """

    def __init__(self, client: httpx.Client) -> None:
        self.client = client

    def send(self, request: RequestDescriptor) -> httpx.Response:
        return self.client.send(request.to_httpx(self.client))


class AsyncHttpxTransport:
    """Send requests through an ``httpx.AsyncClient``.

    The client is not closed by this transport.

    Args:
        client: The httpx async client.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        return await self.client.send(request.to_httpx(self.client))
