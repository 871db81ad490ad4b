r"""Contains the synchronous HTTP request function with optional retry
logic."""

from __future__ import annotations

__all__ = ["request"]

from typing import TYPE_CHECKING

from mercury.core.http_logic import execute_http_method

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping, Sequence

    import httpx

    from mercury.auth import Auth
    from mercury.core.config import ClientConfig
    from mercury.core.request import RequestBody
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy


def request(
    method: str,
    url: str | httpx.URL,
    *,
    body: RequestBody = None,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
    policy: RetryPolicy | None = None,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> httpx.Response:
    r"""Send an HTTP request, retrying transient failures when a policy
    is given.

    The query edit and the authentication are applied once, before the
    first attempt, so every attempt sends the same URL and headers.
    Without a policy the request is sent exactly once. With a policy,
    GET, PUT and DELETE are retried on connection failures, timeouts and
    the status codes 429, 502, 503 and 504; POST and PATCH only when the
    policy allows it. Responses are returned whatever their status code.

    Args:
        method: The HTTP method.
        url: The URL to send the request to.
        body: Optional body. ``str`` and ``bytes`` bodies are resent on
            retries; any other iterable is a single-use stream and
            disables retries.
        timeout: Optional per-request timeout in seconds. Must be > 0.
        query: Optional query edit, e.g. ``qp("page", "2")``.
        auth: Optional authentication, e.g. ``bearer(token)``.
        headers: Optional headers, as a mapping or flat pairs.
        policy: Optional retry policy.
        client: An optional httpx.Client object to use for making requests.
            If None, a new client will be created and closed after use.
        config: An optional ClientConfig used as defaults.
        cancel_event: Optional event that aborts a pending backoff wait.

    Returns:
        An httpx.Response object containing the server's HTTP response.

    Raises:
        MercuryRequestError: If the transport fails terminally.
        RetryInterruptedError: If ``cancel_event`` is set during a wait.
        ValueError: If parameters are invalid.

    Example:
        ```pycon
        >>> from mercury import request
        >>> from mercury.query import qp
        >>> from mercury.retry import RetryPolicy
        >>> response = request(
        ...     "GET",
        ...     "https://api.example.com/search",
        ...     query=qp("q", "mercury"),
        ...     policy=RetryPolicy.exponential(4, 0.2, 5.0),
        ... )  # doctest: +SKIP

        ```
    """
    return execute_http_method(
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
        cancel_event=cancel_event,
    )
