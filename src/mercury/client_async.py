r"""Asynchronous context manager client for HTTP requests with retry
policies.

This module provides an async context manager-based client for making
multiple HTTP requests with a shared configuration. The
AsyncMercuryClient manages the underlying httpx.AsyncClient lifecycle
and provides convenient coroutine methods for the HTTP verbs.
"""

from __future__ import annotations

__all__ = ["AsyncMercuryClient"]

import logging
from typing import TYPE_CHECKING, Any

from mercury.core.config import ClientConfig
from mercury.core.http_logic import execute_http_method_async
from mercury.core.validation import validate_body

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import TracebackType
    from typing import Self

    import httpx

    from mercury.auth import Auth
    from mercury.core.request import RequestBody
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class AsyncMercuryClient:
    r"""Asynchronous context manager for HTTP requests with a shared
    configuration.

    The client follows the same ownership rules as ``MercuryClient``: an
    ``httpx.AsyncClient`` passed in is left open on exit, one created
    from the ``ClientConfig`` is closed on exit.

    Args:
        config: Optional ClientConfig. If ``None``, a default ClientConfig
            is used, which has no retry policy.
        client: Optional httpx.AsyncClient instance to use for requests.
            If ``None``, a new client is created from ``config``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from mercury import AsyncMercuryClient
        >>> from mercury.core.config import ClientConfig
        >>> from mercury.retry import RetryPolicy
        >>> async def main():
        ...     config = ClientConfig(policy=RetryPolicy.exponential(4, 0.2, 2.0))
        ...     async with AsyncMercuryClient(config=config) as client:
        ...         return await client.get("https://api.example.com/data")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.AsyncClient = client or self._config.create_async_client()

    @property
    def config(self) -> ClientConfig:
        """The configuration used for every request."""
        return self._config

    @property
    def policy(self) -> RetryPolicy | None:
        """The retry policy used for every request, if any."""
        return self._config.policy

    async def __aenter__(self) -> Self:
        """Enter the async context manager.

        Returns:
            The AsyncMercuryClient instance for making requests.
        """
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the underlying httpx
        client if this client created it."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this client created it."""
        if self._owns_client:
            await self._client.aclose()
            self._owns_client = False

    def retrying(self, policy: RetryPolicy) -> AsyncMercuryClient:
        r"""Return a client that sends requests with ``policy``.

        The returned client shares the underlying httpx client and never
        closes it.

        Args:
            policy: The retry policy for the new client.

        Returns:
            A new AsyncMercuryClient bound to ``policy``.
        """
        bound = AsyncMercuryClient(config=self._config.merge(policy=policy), client=self._client)
        logger.debug(f"Created retrying async client with {policy}")
        return bound

    async def request(
        self,
        method: str,
        url: str | httpx.URL,
        *,
        body: RequestBody = None,
        timeout: float | None = None,
        query: QueryEdit | None = None,
        auth: Auth | None = None,
        headers: Mapping[str, str] | Sequence[str] | None = None,
    ) -> httpx.Response:
        r"""Send an HTTP request with the client's retry policy.

        Args:
            method: The HTTP method.
            url: The URL to send the request to.
            body: Optional request body.
            timeout: Optional per-request timeout in seconds.
            query: Optional query edit applied to ``url``.
            auth: Optional authentication.
            headers: Optional headers, added after the configured
                default headers, replacing those with the same name.

        Returns:
            An httpx.Response object containing the server's HTTP response.

        Raises:
            MercuryRequestError: If the transport fails terminally.
        """
        return await execute_http_method_async(
            url=url,
            method=method,
            client=self._client,
            config=self._config,
            body=body,
            timeout=timeout,
            query=query,
            auth=auth,
            headers=headers,
        )

    async def get(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """Send an HTTP GET request (see request() method)."""
        return await self.request("GET", url, **kwargs)

    async def delete(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """Send an HTTP DELETE request (see request() method)."""
        return await self.request("DELETE", url, **kwargs)

    async def post(self, url: str | httpx.URL, body: RequestBody, **kwargs: Any) -> httpx.Response:
        """Send an HTTP POST request. ``body`` must not be ``None``."""
        validate_body("POST", body)
        return await self.request("POST", url, body=body, **kwargs)

    async def put(self, url: str | httpx.URL, body: RequestBody, **kwargs: Any) -> httpx.Response:
        """Send an HTTP PUT request. ``body`` must not be ``None``."""
        validate_body("PUT", body)
        return await self.request("PUT", url, body=body, **kwargs)

    async def patch(self, url: str | httpx.URL, body: RequestBody, **kwargs: Any) -> httpx.Response:
        """Send an HTTP PATCH request. ``body`` must not be ``None``."""
        validate_body("PATCH", body)
        return await self.request("PATCH", url, body=body, **kwargs)
