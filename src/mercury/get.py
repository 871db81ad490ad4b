r"""Contains synchronous HTTP GET request with optional retry logic."""

from __future__ import annotations

__all__ = ["get"]

from typing import TYPE_CHECKING

from mercury.core.http_logic import execute_http_method

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping, Sequence

    import httpx

    from mercury.auth import Auth
    from mercury.core.config import ClientConfig
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy


def get(
    url: str | httpx.URL,
    *,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
    policy: RetryPolicy | None = None,
    client: httpx.Client | None = None,
    config: ClientConfig | None = None,
    cancel_event: threading.Event | None = None,
) -> httpx.Response:
    r"""Send an HTTP GET request.

    GET is always retry-eligible when a policy is given.

    Args:
        url: The URL to send the GET request to.
        timeout: Optional per-request timeout in seconds.
        query: Optional query edit applied to ``url``.
        auth: Optional authentication.
        headers: Optional headers, as a mapping or flat pairs.
        policy: Optional retry policy. If None, the request is sent once.
        client: An optional httpx.Client object to use for making requests.
            If None, a new client will be created and closed after use.
        config: An optional ClientConfig used as defaults.
        cancel_event: Optional event that aborts a pending backoff wait.

    Returns:
        An httpx.Response object containing the server's HTTP response.

    Raises:
        MercuryRequestError: If the transport fails terminally.
        ValueError: If the timeout is non-positive.

    Example:
        ```pycon
        >>> from mercury import get
        >>> from mercury.query import qp
        >>> from mercury.retry import RetryPolicy
        >>> response = get(
        ...     "https://api.example.com/items",
        ...     query=qp("page", "2"),
        ...     policy=RetryPolicy.fixed(3, 1.0),
        ... )  # doctest: +SKIP

        ```
    """
    return execute_http_method(
        url=url,
        method="GET",
        client=client,
        config=config,
        policy=policy,
        timeout=timeout,
        query=query,
        auth=auth,
        headers=headers,
        cancel_event=cancel_event,
    )
