r"""Retry-After header parsing.

The header carries either a number of seconds or an HTTP-date
(RFC 9110, section 10.2.3).
"""

from __future__ import annotations

__all__ = ["parse_retry_after", "retry_after_from_response"]

import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """Parse a Retry-After header value into seconds.

    Args:
        value: The raw header value, or ``None`` if the header is absent.
        now: The reference time for HTTP-dates. Defaults to the current
            UTC time.

    Returns:
        The number of seconds to wait, or ``None`` if the value is absent
        or cannot be parsed. Dates in the past give ``0.0``.

    Example:
        ```pycon
        >>> from datetime import datetime, timezone
        >>> from mercury.utils import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(
        ...     "Wed, 21 Oct 2015 07:28:30 GMT",
        ...     now=datetime(2015, 10, 21, 7, 28, tzinfo=timezone.utc),
        ... )
        30.0
        >>> parse_retry_after("-1") is None
        True
        >>> parse_retry_after("soon") is None
        True
        >>> parse_retry_after("\u00b2") is None
        True

        ```
    """
    if value is None:
        return None
    value = value.strip()
    if value.isascii() and value.isdigit():
        seconds = float(value)
        if math.isfinite(seconds):
            return seconds
        logger.debug(f"Ignoring out of range Retry-After header: {value[:20]!r}...")
        return None
    try:
        retry_date = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        logger.debug(f"Ignoring unparseable Retry-After header: {value!r}")
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0.0, (retry_date - now).total_seconds())


def retry_after_from_response(response: httpx.Response | None) -> float | None:
    """Return the Retry-After delay of a response, if it has a valid one."""
    if response is None:
        return None
    return parse_retry_after(response.headers.get("Retry-After"))
