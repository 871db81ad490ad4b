r"""Immutable request descriptor and the request builder.

The descriptor is what the retry loop hands to the transport on every
attempt. It is built once, with the query edit and authentication
already applied to its URL.
"""

from __future__ import annotations

__all__ = ["RequestBody", "RequestDescriptor", "build_request", "normalize_headers"]

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

import httpx

from mercury.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mercury.auth import Auth
    from mercury.query.edit import QueryEdit

logger: logging.Logger = logging.getLogger(__name__)

RequestBody = Union[str, bytes, bytearray, Iterable[bytes], None]


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to send one HTTP request, possibly several times.

    Args:
        method: The uppercase HTTP method.
        url: The final URL, query and authentication already applied.
        headers: The request headers as ``(name, value)`` pairs, in order.
        content: An in-memory body, resent unchanged on every attempt.
        stream: A single-use body (iterator or file object). A request
            with a stream is never retried.
        timeout: Optional per-request timeout in seconds. ``None`` uses
            the client timeout.

    Example:
        ```pycon
        >>> from mercury.core.request import RequestDescriptor
        >>> request = RequestDescriptor(method="POST", url="https://x/items", content=b"{}")
        >>> request.is_repeatable_body
        True

        ```
    """

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    content: bytes | None = None
    stream: Any = None
    timeout: float | None = None

    @property
    def is_repeatable_body(self) -> bool:
        """``True`` if the body can be resent byte-identical on a retry."""
        return self.stream is None

    def to_httpx(self, client: httpx.Client | httpx.AsyncClient) -> httpx.Request:
        """Create the ``httpx.Request`` sent for one attempt.

        Args:
            client: The client that sends the request. Its default
                headers, cookies and timeout are merged in.

        Returns:
            A new ``httpx.Request``.
        """
        return client.build_request(
            self.method,
            self.url,
            headers=list(self.headers),
            content=self.content if self.stream is None else self.stream,
            timeout=httpx.USE_CLIENT_DEFAULT if self.timeout is None else self.timeout,
        )


def normalize_headers(
    headers: Mapping[str, str] | Sequence[str] | None,
) -> list[tuple[str, str]]:
    """Turn a header mapping or flat ``name, value`` pairs into a list of
    pairs.

    Args:
        headers: A mapping, a flat sequence ``n1, v1, n2, v2, ...``, or
            ``None``.

    Returns:
        The headers as a list of ``(name, value)`` pairs.

    Raises:
        ValueError: If the flat sequence has an odd length or contains
            ``None``.

    Example:
        ```pycon
        >>> from mercury.core.request import normalize_headers
        >>> normalize_headers(("Accept", "application/json"))
        [('Accept', 'application/json')]

        ```
    """
    if headers is None:
        return []
    if isinstance(headers, Mapping):
        return list(headers.items())
    if len(headers) % 2 != 0:
        msg = "header pairs must be even: name, value, ..."
        raise ValueError(msg)
    pairs = list(zip(headers[::2], headers[1::2]))
    for name, value in pairs:
        if name is None or value is None:
            msg = f"header name and value must not be None, got {name!r}: {value!r}"
            raise ValueError(msg)
    return pairs


def _split_body(body: RequestBody) -> tuple[bytes | None, Any]:
    if body is None:
        return None, None
    if isinstance(body, str):
        return body.encode("utf-8"), None
    if isinstance(body, (bytes, bytearray)):
        return bytes(body), None
    return None, body


def build_request(
    method: str,
    url: str | httpx.URL,
    *,
    body: RequestBody = None,
    timeout: float | None = None,
    query: QueryEdit | None = None,
    auth: Auth | None = None,
    headers: Mapping[str, str] | Sequence[str] | None = None,
) -> RequestDescriptor:
    """Build a request descriptor.

    The query edit is applied first, then the authentication URL
    injection. Explicit headers are added first and authentication
    headers then replace any header with the same name.

    Args:
        method: The HTTP method.
        url: The base URL.
        body: ``str`` (encoded as UTF-8) or ``bytes`` bodies are
            repeatable. Any other iterable is sent as a single-use stream.
        timeout: Optional per-request timeout in seconds. Must be > 0.
        query: Optional query edit applied to ``url``.
        auth: Optional authentication strategy.
        headers: Optional headers, as a mapping or flat pairs.

    Returns:
        The request descriptor.

    Raises:
        ValueError: If ``url`` is ``None``, the timeout is not positive or
            the headers are malformed.

    Example:
        ```pycon
        >>> from mercury.core.request import build_request
        >>> from mercury.query import qp
        >>> request = build_request("get", "https://x/search", query=qp("q", "a b"))
        >>> request.method, request.url
        ('GET', 'https://x/search?q=a%20b')

        ```
    """
    if url is None:
        msg = "url must not be None"
        raise ValueError(msg)
    validate_timeout(timeout)
    final_url = str(url)
    if query is not None:
        final_url = query.apply(final_url)
    if auth is not None:
        final_url = auth.apply_to_url(final_url)

    header_pairs = normalize_headers(headers)
    if auth is not None:
        header_pairs = auth.apply_to_headers(header_pairs)

    content, stream = _split_body(body)
    request = RequestDescriptor(
        method=method.upper(),
        url=final_url,
        headers=tuple(header_pairs),
        content=content,
        stream=stream,
        timeout=timeout,
    )
    logger.debug(f"Built {request.method} request to {request.url}")
    return request
