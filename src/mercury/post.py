r"""Contains synchronous HTTP POST request with optional retry logic."""

from __future__ import annotations

__all__ = ["post"]

from typing import TYPE_CHECKING

from mercury.core.http_logic import execute_http_method
from mercury.core.validation import validate_body

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping, Sequence

    import httpx

    from mercury.auth import Auth
    from mercury.core.config import ClientConfig
    from mercury.core.request import RequestBody
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy


def post(
    url: str | httpx.URL,
    body: RequestBody,
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
    r"""Send an HTTP POST request.

    POST is only retried when the policy was created with
    ``allow_post()``.

    Args:
        url: The URL to send the POST request to.
        body: The request body. ``str`` and ``bytes`` bodies are resent on
            retries; any other iterable is sent as a single-use stream.
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
        ValueError: If ``body`` is None or the timeout is non-positive.

    Example:
        ```pycon
        >>> from mercury import post
        >>> from mercury.auth import bearer
        >>> from mercury.retry import RetryPolicy
        >>> response = post(
        ...     "https://api.example.com/items",
        ...     '{"name": "mercury"}',
        ...     auth=bearer("token"),
        ...     policy=RetryPolicy.exponential(3, 0.5, 4.0).allow_post(),
        ... )  # doctest: +SKIP

        ```
    """
    validate_body("POST", body)
    return execute_http_method(
        url=url,
        method="POST",
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
