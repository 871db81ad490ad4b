r"""Synchronous context manager client for HTTP requests with retry
policies.

This module provides a context manager-based client for making multiple
HTTP requests with a shared configuration. The MercuryClient manages the
underlying httpx.Client lifecycle and provides convenient methods for the
HTTP verbs, each sent with the client's retry policy.
"""

from __future__ import annotations

__all__ = ["MercuryClient"]

import logging
from typing import TYPE_CHECKING, Any

from mercury.core.config import ClientConfig
from mercury.core.http_logic import execute_http_method
from mercury.core.validation import validate_body

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping, Sequence
    from types import TracebackType
    from typing import Self

    import httpx

    from mercury.auth import Auth
    from mercury.core.request import RequestBody
    from mercury.query.edit import QueryEdit
    from mercury.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class MercuryClient:
    r"""Synchronous context manager for HTTP requests with a shared
    configuration.

    Two usage patterns are supported:

    **External lifecycle management**: an ``httpx.Client`` is created and
    managed by the caller and passed in. ``MercuryClient`` does *not*
    close it when it exits.

    .. code-block:: python

        import httpx
        from mercury import MercuryClient
        from mercury.retry import RetryPolicy

        with httpx.Client(base_url="https://api.example.com") as http_client:
            with MercuryClient(client=http_client) as client:
                response = client.get("/items")

    **Managed lifecycle**: no client is given, ``MercuryClient`` creates
    one from its ``ClientConfig`` and closes it when the ``with`` block
    exits.

    .. code-block:: python

        from mercury import MercuryClient
        from mercury.core.config import ClientConfig
        from mercury.retry import RetryPolicy

        config = ClientConfig(timeout=30.0, policy=RetryPolicy.fixed(3, 1.0))
        with MercuryClient(config=config) as client:
            response = client.get("https://api.example.com/items")

    Args:
        config: Optional ClientConfig. If ``None``, a default ClientConfig
            is used, which has no retry policy.
        client: Optional httpx.Client instance to use for requests.
            If ``None``, a new client is created from ``config``.

    Example:
        ```pycon
        >>> import httpx
        >>> from mercury import MercuryClient
        >>> from mercury.retry import RetryPolicy
        >>> http_client = httpx.Client(
        ...     transport=httpx.MockTransport(lambda r: httpx.Response(200, text="ok"))
        ... )
        >>> with MercuryClient(client=http_client) as client:
        ...     retrying = client.retrying(RetryPolicy.fixed(3, 0.0))
        ...     retrying.get("https://api.example.com/items").text
        ...
        'ok'

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.Client = client or self._config.create_client()

    @property
    def config(self) -> ClientConfig:
        """The configuration used for every request."""
        return self._config

    @property
    def policy(self) -> RetryPolicy | None:
        """The retry policy used for every request, if any."""
        return self._config.policy

    def __enter__(self) -> Self:
        """Enter the context manager.

        Returns:
            The MercuryClient instance for making requests.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager and close the underlying httpx
        client if this client created it."""
        self.close()

    def close(self) -> None:
        """Close the underlying httpx client if this client created it."""
        if self._owns_client:
            self._client.close()
            self._owns_client = False

    def retrying(self, policy: RetryPolicy) -> MercuryClient:
        r"""Return a client that sends requests with ``policy``.

        The returned client shares the underlying httpx client and never
        closes it. This client keeps its own policy.

        Args:
            policy: The retry policy for the new client.

        Returns:
            A new MercuryClient bound to ``policy``.
        """
        bound = MercuryClient(config=self._config.merge(policy=policy), client=self._client)
        logger.debug(f"Created retrying client with {policy}")
        return bound

    def request(
        self,
        method: str,
        url: str | httpx.URL,
        *,
        body: RequestBody = None,
        timeout: float | None = None,
        query: QueryEdit | None = None,
        auth: Auth | None = None,
        headers: Mapping[str, str] | Sequence[str] | None = None,
        cancel_event: threading.Event | None = None,
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
            cancel_event: Optional event that aborts a pending backoff
                wait.

        Returns:
            An httpx.Response object containing the server's HTTP response.

        Raises:
            MercuryRequestError: If the transport fails terminally.
        """
        return execute_http_method(
            url=url,
            method=method,
            client=self._client,
            config=self._config,
            body=body,
            timeout=timeout,
            query=query,
            auth=auth,
            headers=headers,
            cancel_event=cancel_event,
        )

    def get(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP GET request.

        Args:
            url: The URL to send the GET request to.
            **kwargs: Additional keyword arguments (see request() method).

        Returns:
            An httpx.Response object containing the server's HTTP response.
        """
        return self.request("GET", url, **kwargs)

    def delete(self, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP DELETE request.

        Args:
            url: The URL to send the DELETE request to.
            **kwargs: Additional keyword arguments (see request() method).

        Returns:
            An httpx.Response object containing the server's HTTP response.
        """
        return self.request("DELETE", url, **kwargs)

    def post(self, url: str | httpx.URL, body: RequestBody, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP POST request.

        Args:
            url: The URL to send the POST request to.
            body: The request body. Must not be ``None``.
            **kwargs: Additional keyword arguments (see request() method).

        Returns:
            An httpx.Response object containing the server's HTTP response.

        Raises:
            ValueError: If ``body`` is ``None``.
        """
        validate_body("POST", body)
        return self.request("POST", url, body=body, **kwargs)

    def put(self, url: str | httpx.URL, body: RequestBody, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP PUT request.

        Args:
            url: The URL to send the PUT request to.
            body: The request body. Must not be ``None``.
            **kwargs: Additional keyword arguments (see request() method).

        Returns:
            An httpx.Response object containing the server's HTTP response.

        Raises:
            ValueError: If ``body`` is ``None``.
        """
        validate_body("PUT", body)
        return self.request("PUT", url, body=body, **kwargs)

    def patch(self, url: str | httpx.URL, body: RequestBody, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP PATCH request.

        Args:
            url: The URL to send the PATCH request to.
            body: The request body. Must not be ``None``.
            **kwargs: Additional keyword arguments (see request() method).

        Returns:
            An httpx.Response object containing the server's HTTP response.

        Raises:
            ValueError: If ``body`` is ``None``.
        """
        validate_body("PATCH", body)
        return self.request("PATCH", url, body=body, **kwargs)

