r"""Shared HTTP method logic for sync and async operations.

This module contains the request execution logic used by the
module-level request functions and by the context manager clients. It
builds the request descriptor, manages the lifecycle of a client it
creates itself, and chooses between a single send and the retry loop.
"""

from __future__ import annotations

__all__ = ["execute_http_method", "execute_http_method_async", "merge_headers"]

import logging
from itertools import chain
from typing import TYPE_CHECKING

from mercury.core.config import ClientConfig
from mercury.core.request import build_request, normalize_headers
from mercury.retry.executor import execute_with_policy, send_once
from mercury.retry.executor_async import execute_with_policy_async, send_once_async
from mercury.transport import AsyncHttpxTransport, HttpxTransport

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping, Sequence

    import httpx

    from mercury.auth import Auth
    from mercury.core.request import RequestBody, RequestDescriptor
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


def merge_headers(
    defaults: Mapping[str, str] | None,
    headers: Mapping[str, str] | Sequence[str] | None,
) -> tuple[str, ...] | None:
    """Combine default headers with per-request headers.

    A per-request header replaces every default header with the same
    name, compared case-insensitively. Repeated per-request headers are
    all kept. The remaining default headers come first.

    Args:
        defaults: The default headers, usually from a ``ClientConfig``.
        headers: The per-request headers, as a mapping or flat pairs.

    Returns:
        The combined headers as flat ``name, value`` pairs, or ``None``
        if there are no headers at all.

    Example:
        ```pycon
        >>> from mercury.core.http_logic import merge_headers
        >>> merge_headers({"Accept": "text/plain"}, ("X-Id", "7"))
        ('Accept', 'text/plain', 'X-Id', '7')
        >>> merge_headers({"Accept": "text/plain"}, ("accept", "application/json"))
        ('accept', 'application/json')
        >>> merge_headers({}, None) is None
        True

        ```
    """
    overrides = normalize_headers(headers)
    replaced = {name.lower() for name, _ in overrides}
    pairs = [pair for pair in normalize_headers(defaults) if pair[0].lower() not in replaced]
    pairs += overrides
    if not pairs:
        return None
    return tuple(chain.from_iterable(pairs))


def _prepare(
    method: str,
    url: str | httpx.URL,
    config: ClientConfig | None,
    policy: RetryPolicy | None,
    body: RequestBody,
    timeout: float | None,
    query: QueryEdit | None,
    auth: Auth | None,
    headers: Mapping[str, str] | Sequence[str] | None,
) -> tuple[ClientConfig, RequestDescriptor]:
    effective_config = (config if config is not None else ClientConfig()).merge(policy=policy)
    request = build_request(
        method,
        url,
        body=body,
        timeout=timeout,
        query=query,
        auth=auth,
        headers=merge_headers(effective_config.headers, headers),
    )
    return effective_config, request


def execute_http_method(
    url: str | httpx.URL,
    method: str,
    *,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
    policy: RetryPolicy | None = None,
    body: RequestBody = None,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
    cancel_event: threading.Event | None = None,
) -> httpx.Response:
    """Execute an HTTP method, with retries when a policy is given
    (synchronous).

    This is the core shared logic for all synchronous HTTP methods.
    It handles client creation, request building, and cleanup.

    Args:
        url: The URL to send the request to.
        method: The HTTP method.
        client: An optional httpx.Client object to use for making requests.
            If None, a new client is created from the config and closed
            after use.
        config: An optional ClientConfig. If None, default values are used.
        policy: An optional retry policy. Overrides ``config.policy`` if
            provided. Without any policy the request is sent exactly once.
        body: Optional request body.
        timeout: Optional per-request timeout in seconds. Must be > 0.
        query: Optional query edit applied to ``url``.
        auth: Optional authentication strategy.
        headers: Optional per-request headers.
        cancel_event: Optional event that aborts a pending backoff wait.

    Returns:
        An httpx.Response object containing the server's HTTP response.

    Raises:
        MercuryRequestError: If the transport fails terminally.
        RetryInterruptedError: If the backoff wait is cancelled.
        ValueError: If parameters are invalid.
    """
    effective_config, request = _prepare(
        method, url, config, policy, body, timeout, query, auth, headers
    )

    # Client management
    owns_client = client is None
    client = client or effective_config.create_client()
    try:
        transport = HttpxTransport(client)
        if effective_config.policy is None:
            logger.debug(f"No retry policy, sending {request.method} {request.url} once")
            return send_once(request, transport)
        return execute_with_policy(
            request, effective_config.policy, transport, cancel_event=cancel_event
        )
    finally:
        if owns_client:
            client.close()


async def execute_http_method_async(
    url: str | httpx.URL,
    method: str,
    *,
    client: httpx.AsyncClient | None = None,
    config: ClientConfig | None = None,
    policy: RetryPolicy | None = None,
    body: RequestBody = None,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
) -> httpx.Response:
    """Execute an HTTP method, with retries when a policy is given
    (asynchronous).

    This is the core shared logic for all asynchronous HTTP methods.
    It handles client creation, request building, and cleanup.

    Args:
        url: The URL to send the request to.
        method: The HTTP method.
        client: An optional httpx.AsyncClient object to use for making
            requests. If None, a new client is created from the config
            and closed after use.
        config: An optional ClientConfig. If None, default values are used.
        policy: An optional retry policy. Overrides ``config.policy`` if
            provided. Without any policy the request is sent exactly once.
        body: Optional request body.
        timeout: Optional per-request timeout in seconds. Must be > 0.
        query: Optional query edit applied to ``url``.
        auth: Optional authentication strategy.
        headers: Optional per-request headers.

    Returns:
        An httpx.Response object containing the server's HTTP response.

    Raises:
        MercuryRequestError: If the transport fails terminally.
        ValueError: If parameters are invalid.
    """
    effective_config, request = _prepare(
        method, url, config, policy, body, timeout, query, auth, headers
    )

    # Client management
    owns_client = client is None
    client = client or effective_config.create_async_client()
    try:
        transport = AsyncHttpxTransport(client)
        if effective_config.policy is None:
            logger.debug(f"No retry policy, sending {request.method} {request.url} once")
            return await send_once_async(request, transport)
        return await execute_with_policy_async(request, effective_config.policy, transport)
    finally:
        if owns_client:
            await client.aclose()
