r"""Contains asynchronous HTTP GET request with optional retry logic."""

from __future__ import annotations

__all__ = ["get_async"]

from typing import TYPE_CHECKING

from mercury.core.http_logic import execute_http_method_async

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    import httpx

    from mercury.auth import Auth
    from mercury.core.config import ClientConfig
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy


async def get_async(
    url: str | httpx.URL,
    *,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
    policy: RetryPolicy | None = None,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> httpx.Response:
    r"""Send an HTTP GET request asynchronously.

    The async counterpart of ``get``; backoff waits do not block the
    event loop.

    Args:
        url: The URL to send the GET request to.
        timeout: Optional per-request timeout in seconds.
        query: Optional query edit applied to ``url``.
        auth: Optional authentication.
        headers: Optional headers, as a mapping or flat pairs.
        policy: Optional retry policy. If None, the request is sent once.
        client: An optional httpx.AsyncClient object to use for making requests.
            If None, a new client will be created and closed after use.
        config: An optional ClientConfig used as defaults.

    Returns:
        An httpx.Response object containing the server's HTTP response.

    Raises:
        MercuryRequestError: If the transport fails terminally.
        ValueError: If the timeout is non-positive.

    Example:
        ```pycon
        >>> import asyncio
        >>> from mercury import get_async
        >>> response = asyncio.run(get_async("https://api.example.com/items"))  # doctest: +SKIP

        ```
    """
    return await execute_http_method_async(
        url=url,
        method="GET",
        client=client,
        config=config,
        policy=policy,
        timeout=timeout,
        query=query,
        auth=auth,
        headers=headers,
    )
