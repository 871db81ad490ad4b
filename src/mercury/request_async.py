r"""Contains the asynchronous HTTP request function with optional retry
logic."""

from __future__ import annotations

__all__ = ["request_async"]

from typing import TYPE_CHECKING

from mercury.core.http_logic import execute_http_method_async

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    import httpx

    from mercury.auth import Auth
    from mercury.core.config import ClientConfig
    from mercury.core.request import RequestBody
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy


async def request_async(
    method: str,
    url: str | httpx.URL,
    *,
    body: RequestBody = None,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
    policy: RetryPolicy | None = None,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> httpx.Response:
    r"""Send an HTTP request asynchronously, retrying transient failures
    when a policy is given.

    The retry decisions are the same as ``request``. Backoff waits are
    ``asyncio.sleep`` calls, so cancelling the calling task stops the
    retry loop.

    Args:
        method: The HTTP method.
        url: The URL to send the request to.
        body: Optional body. ``str`` and ``bytes`` bodies are resent on
            retries.
        timeout: Optional per-request timeout in seconds. Must be > 0.
        query: Optional query edit.
        auth: Optional authentication.
        headers: Optional headers, as a mapping or flat pairs.
        policy: Optional retry policy.
        client: An optional httpx.AsyncClient object to use for making
            requests. If None, a new client will be created and closed
            after use.
        config: An optional ClientConfig used as defaults.

    Returns:
        An httpx.Response object containing the server's HTTP response.

    Raises:
        MercuryRequestError: If the transport fails terminally.
        ValueError: If parameters are invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from mercury import request_async
        >>> response = asyncio.run(
        ...     request_async("GET", "https://api.example.com/data")
        ... )  # doctest: +SKIP

        ```
    """
    return await execute_http_method_async(
        url=url,
        method=method,
        client=client,
        config=config,
        policy=policy,
        body=body,
        timeout=timeout,
        query=query,
        auth=auth,
        headers=headers,
    )
