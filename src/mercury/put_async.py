r"""Contains asynchronous HTTP PUT request with optional retry logic."""

from __future__ import annotations

__all__ = ["put_async"]

from typing import TYPE_CHECKING

from mercury.core.http_logic import execute_http_method_async
from mercury.core.validation import validate_body

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    import httpx

    from mercury.auth import Auth
    from mercury.core.config import ClientConfig
    from mercury.core.request import RequestBody
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy


async def put_async(
    url: str | httpx.URL,
    body: RequestBody,
    *,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
    policy: RetryPolicy | None = None,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
) -> httpx.Response:
    r"""Send an HTTP PUT request asynchronously.

    PUT is retry-eligible when a policy is given and the body is
    repeatable.

    Args:
        url: The URL to send the PUT request to.
        body: The request body. ``str`` and ``bytes`` bodies are resent on
            retries; any other iterable is sent as a single-use stream.
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
        ValueError: If ``body`` is None or the timeout is non-positive.
    """
    validate_body("PUT", body)
    return await execute_http_method_async(
        url=url,
        method="PUT",
        client=client,
        config=config,
        policy=policy,
        body=body,
        timeout=timeout,
        query=query,
        auth=auth,
        headers=headers,
    )
