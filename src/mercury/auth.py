r"""Authentication strategies applied while building a request.

A strategy may rewrite the request URL (query parameter credentials) and
may set headers. Header credentials replace any header with the same
name, compared case-insensitively.

Example:
    ```pycon
    >>> from mercury.auth import bearer, chain, query_auth
    >>> auth = chain(bearer("s3cr3t"), query_auth("api_key", "k"))
    >>> auth.apply_to_url("https://x/data?api_key=old")
    'https://x/data?api_key=k'
    >>> auth.apply_to_headers([("Authorization", "Basic abc")])
    [('Authorization', 'Bearer s3cr3t')]
    >>> auth
    Auth(chain)

    ```
"""

from __future__ import annotations

__all__ = [
    "Auth",
    "HeaderAuth",
    "QueryAuth",
    "basic",
    "bearer",
    "chain",
    "header_auth",
    "query_auth",
]

import base64
from typing import TYPE_CHECKING

from mercury.query.edit import qp_replace

if TYPE_CHECKING:
    from collections.abc import Sequence


def _set_header(
    headers: Sequence[tuple[str, str]], name: str, value: str
) -> list[tuple[str, str]]:
    lowered = name.lower()
    pairs = [(key, val) for key, val in headers if key.lower() != lowered]
    pairs.append((name, value))
    return pairs


class Auth:
    """Base authentication strategy that leaves the request unchanged."""

    def apply_to_url(self, url: str) -> str:
        """Return the URL to send, with any credentials added."""
        return url

    def apply_to_headers(self, headers: Sequence[tuple[str, str]]) -> list[tuple[str, str]]:
        """Return the headers to send, with any credentials added."""
        return list(headers)

    def __repr__(self) -> str:
        return "Auth()"


class HeaderAuth(Auth):
    """Authentication through a single header.

    Args:
        name: The header name.
        value: The header value.
        label: The label shown by ``repr``. The value is never shown.
    """

    def __init__(self, name: str, value: str, label: str | None = None) -> None:
        if name is None or value is None:
            msg = "header name and value must not be None"
            raise ValueError(msg)
        self._name = name
        self._value = value
        self._label = label or f"header {name}"

    def apply_to_headers(self, headers: Sequence[tuple[str, str]]) -> list[tuple[str, str]]:
        return _set_header(headers, self._name, self._value)

    def __repr__(self) -> str:
        return f"Auth({self._label} ****)"


class QueryAuth(Auth):
    """Authentication through a query parameter that replaces any existing
    occurrence of the same key.

    Args:
        key: The query parameter name.
        value: The credential.
    """

    def __init__(self, key: str, value: str) -> None:
        if key is None or value is None:
            msg = "query key and value must not be None"
            raise ValueError(msg)
        self._key = key
        self._edit = qp_replace(key, value)

    def apply_to_url(self, url: str) -> str:
        return self._edit.apply(url)

    def __repr__(self) -> str:
        return f"Auth(query {self._key}=****)"


class _ChainAuth(Auth):
    def __init__(self, auths: Sequence[Auth | None]) -> None:
        self._auths = [auth for auth in auths if auth is not None]

    def apply_to_url(self, url: str) -> str:
        for auth in self._auths:
            url = auth.apply_to_url(url)
        return url

    def apply_to_headers(self, headers: Sequence[tuple[str, str]]) -> list[tuple[str, str]]:
        pairs = list(headers)
        for auth in self._auths:
            pairs = auth.apply_to_headers(pairs)
        return pairs

    def __repr__(self) -> str:
        return "Auth(chain)"


def bearer(token: str) -> Auth:
    """Authenticate with an ``Authorization: Bearer <token>`` header."""
    if token is None:
        msg = "token must not be None"
        raise ValueError(msg)
    return HeaderAuth("Authorization", f"Bearer {token}", label="bearer")


def basic(user: str, password: str) -> Auth:
    """Authenticate with an HTTP Basic ``Authorization`` header.

    The credentials are encoded as ISO-8859-1 before base64 encoding.

    Raises:
        ValueError: If ``user`` or ``password`` is ``None``, or if the
            credentials cannot be encoded as ISO-8859-1.

    Example:
        ```pycon
        >>> from mercury.auth import basic
        >>> basic("user", "pass").apply_to_headers([])
        [('Authorization', 'Basic dXNlcjpwYXNz')]

        ```
    """
    if user is None or password is None:
        msg = "user and password must not be None"
        raise ValueError(msg)
    try:
        raw = f"{user}:{password}".encode("latin-1")
    except UnicodeEncodeError as exc:
        msg = "basic auth credentials must be encodable as ISO-8859-1"
        raise ValueError(msg) from exc
    credentials = base64.b64encode(raw).decode("ascii")
    return HeaderAuth("Authorization", f"Basic {credentials}", label="basic")


def header_auth(name: str, value: str) -> Auth:
    """Authenticate with an arbitrary header, e.g. ``X-API-Key``."""
    return HeaderAuth(name, value)


def query_auth(key: str, value: str) -> Auth:
    """Authenticate with a query parameter, e.g. ``?api_key=...``."""
    return QueryAuth(key, value)


def chain(*auths: Auth | None) -> Auth:
    """Combine several strategies, applied in order. ``None`` entries are
    skipped."""
    return _ChainAuth(auths)
