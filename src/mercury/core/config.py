r"""Configuration dataclass and defaults for MercuryClient.

This module provides configuration constants and a dataclass-based
configuration object for the MercuryClient and AsyncMercuryClient
context manager classes, and for the module-level request functions.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRY_AFTER",
    "DEFAULT_TIMEOUT",
    "IDEMPOTENT_METHODS",
    "RETRY_STATUS_CODES",
    "ClientConfig",
    "create_httpx_timeout",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import httpx

from mercury.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mercury.retry.policy import RetryPolicy


# Default timeout in seconds for reading a response
DEFAULT_TIMEOUT = 10.0

# Default timeout in seconds for establishing a connection
DEFAULT_CONNECT_TIMEOUT = 5.0

# Defaults of RetryPolicy.exponential: total attempts (initial one included)
# and delays in seconds. Attempt n is followed by a wait of
# base * 2 ** (n - 1), capped at the maximum: 0.3s, then 0.6s, then 1.2s
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 0.3
DEFAULT_MAX_DELAY = 10.0

# Longest wait in seconds a server Retry-After header may impose
DEFAULT_MAX_RETRY_AFTER = 60.0

# HTTP status codes that should trigger automatic retry
# 429: Too Many Requests - Rate limiting
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 502, 503, 504)

# Methods that are always retry-eligible because they are assumed idempotent.
# POST and PATCH are only retried when the policy allows it.
IDEMPOTENT_METHODS = ("GET", "PUT", "DELETE")


def create_httpx_timeout(timeout: float | httpx.Timeout = DEFAULT_TIMEOUT) -> httpx.Timeout:
    """Create the timeout used for clients created by mercury.

    Args:
        timeout: The read/write/pool timeout in seconds, or an
            ``httpx.Timeout`` that is returned unchanged.

    Returns:
        An ``httpx.Timeout`` whose connect timeout is
        ``DEFAULT_CONNECT_TIMEOUT`` unless a Timeout was given.

    Example:
        ```pycon
        >>> from mercury.core.config import create_httpx_timeout
        >>> timeout = create_httpx_timeout(30.0)
        >>> timeout.connect, timeout.read
        (5.0, 30.0)

        ```
    """
    if isinstance(timeout, httpx.Timeout):
        return timeout
    return httpx.Timeout(timeout, connect=DEFAULT_CONNECT_TIMEOUT)


@dataclass
class ClientConfig:
    """Configuration for MercuryClient behavior.

    Args:
        timeout: Timeout in seconds used when mercury creates the underlying
            httpx client. Must be > 0.
        follow_redirects: Whether clients created by mercury follow redirects.
        policy: Optional retry policy. If ``None``, every request is executed
            exactly once.
        headers: Default headers sent with every request. A per-request
            header with the same name, in any case, replaces the default.

    Example:
        ```pycon
        >>> from mercury.core.config import ClientConfig
        >>> from mercury.retry import RetryPolicy
        >>> config = ClientConfig()
        >>> config.policy is None
        True
        >>> config = config.merge(policy=RetryPolicy.fixed(3, 0.5))
        >>> config.policy.max_attempts
        3

        ```
    """

    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT
    follow_redirects: bool = True
    policy: RetryPolicy | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_timeout(self.timeout)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "timeout": self.timeout,
            "follow_redirects": self.follow_redirects,
            "policy": self.policy,
            "headers": dict(self.headers),
        }

    def create_client(self) -> httpx.Client:
        """Create an ``httpx.Client`` matching this configuration."""
        return httpx.Client(
            timeout=create_httpx_timeout(self.timeout), follow_redirects=self.follow_redirects
        )

    def create_async_client(self) -> httpx.AsyncClient:
        """Create an ``httpx.AsyncClient`` matching this configuration."""
        return httpx.AsyncClient(
            timeout=create_httpx_timeout(self.timeout), follow_redirects=self.follow_redirects
        )
