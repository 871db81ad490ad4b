r"""mercury - HTTP convenience layer with retry policies over httpx.

This package sends HTTP requests through httpx with an optional,
explicit retry policy. Query parameters and authentication are applied
to the request once, before the first attempt, and transient failures
(connection errors, timeouts, and the status codes 429, 502, 503 and
504) are retried with constant or exponential backoff.

Key Features:
    - Raw query editing that keeps existing percent-encoding byte-exact
    - Bearer, basic, header and query-parameter authentication
    - Explicit retry policies: fixed or exponential backoff, optional jitter
    - GET, PUT and DELETE are retried; POST and PATCH only on opt-in
    - Retry-After header support (integer seconds and HTTP-date formats)
    - Blocking and async request functions, and context manager clients

Example:
    ```pycon
    >>> from mercury import get
    >>> from mercury.query import qp
    >>> from mercury.retry import RetryPolicy
    >>> response = get(
    ...     "https://api.example.com/data",
    ...     query=qp("page", "2"),
    ...     policy=RetryPolicy.exponential(4, 0.2, 5.0),
    ... )  # doctest: +SKIP
    >>> from mercury import MercuryClient
    >>> with MercuryClient() as client:  # doctest: +SKIP
    ...     retrying = client.retrying(RetryPolicy.fixed(3, 1.0))
    ...     response = retrying.delete("https://api.example.com/items/7")
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncMercuryClient",
    "ClientConfig",
    "MercuryClient",
    "MercuryError",
    "MercuryRequestError",
    "PolicyViolationError",
    "RetryInterruptedError",
    "RetryPolicy",
    "__version__",
    "delete",
    "delete_async",
    "get",
    "get_async",
    "patch",
    "patch_async",
    "post",
    "post_async",
    "put",
    "put_async",
    "request",
    "request_async",
]

from importlib.metadata import PackageNotFoundError, version

from mercury.client import MercuryClient
from mercury.client_async import AsyncMercuryClient
from mercury.core.config import ClientConfig
from mercury.delete import delete
from mercury.delete_async import delete_async
from mercury.exceptions import (
    MercuryError,
    MercuryRequestError,
    PolicyViolationError,
    RetryInterruptedError,
)
from mercury.get import get
from mercury.get_async import get_async
from mercury.patch import patch
from mercury.patch_async import patch_async
from mercury.post import post
from mercury.post_async import post_async
from mercury.put import put
from mercury.put_async import put_async
from mercury.request import request
from mercury.request_async import request_async
from mercury.retry.policy import RetryPolicy

try:
    __version__ = version("mercury-http")
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
