r"""Raw query string mutation.

The query component is edited as an opaque, still-encoded string: parts
are split on literal ``&`` and every part that is not removed is kept
verbatim. Only the key of each part (the text before the first ``=``) is
decoded, and only to compare it with the keys to remove. Decoding the
whole query and re-encoding it would corrupt encoded ``&`` and ``=``
inside unrelated values.
"""

from __future__ import annotations

__all__ = [
    "apply_append",
    "apply_query_edit",
    "apply_replace",
    "build_raw_query",
    "remove_keys_from_raw_query",
]

import logging
from typing import TYPE_CHECKING, TypeVar

import httpx

from mercury.query.encoding import decode_percent, encode_query_component

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

logger: logging.Logger = logging.getLogger(__name__)

URLT = TypeVar("URLT", str, httpx.URL)


def remove_keys_from_raw_query(raw_query: str | None, keys: Iterable[str]) -> str | None:
    """Drop every part of a raw query whose decoded key is in ``keys``.

    Args:
        raw_query: The raw query string, without the leading ``?``.
        keys: The decoded keys to remove.

    Returns:
        The filtered raw query, or ``None`` if nothing is left. Empty
        parts (``a=1&&b=2``) are dropped, every other retained part is
        returned byte-for-byte.

    Example:
        ```pycon
        >>> from mercury.query import remove_keys_from_raw_query
        >>> remove_keys_from_raw_query("a=1&b=x%26y&c", {"a"})
        'b=x%26y&c'
        >>> remove_keys_from_raw_query("a%20b=1&c=2", {"a b", "c"}) is None
        True

        ```
    """
    if not raw_query:
        return None
    keys = frozenset(keys)
    kept = []
    for part in raw_query.split("&"):
        if not part:
            continue
        raw_key = part.split("=", 1)[0]
        if decode_percent(raw_key) in keys:
            continue
        kept.append(part)
    return "&".join(kept) or None


def build_raw_query(
    raw_query: str | None, items: Iterable[tuple[str, str | None]]
) -> str | None:
    """Append encoded ``key=value`` parts to a raw query.

    Args:
        raw_query: The existing raw query, kept unchanged at the front.
        items: The ``(key, value)`` pairs to append, in order. A ``None``
            value renders as ``key=``.

    Returns:
        The new raw query, or ``None`` if it is empty.

    Raises:
        ValueError: If a key is ``None``.
    """
    parts = [raw_query] if raw_query else []
    for key, value in items:
        encoded = encode_query_component(key) + "="
        if value is not None:
            encoded += encode_query_component(value)
        parts.append(encoded)
    return "&".join(parts) or None


def _with_raw_query(url: URLT, update: Callable[[str | None], str | None]) -> URLT:
    # The fragment is split off first, so a "?" inside it is not a query.
    head, hash_mark, fragment = str(url).partition("#")
    base, _, query = head.partition("?")
    query = update(query or None)
    rebuilt = f"{base}?{query}" if query else base
    rebuilt = f"{rebuilt}{hash_mark}{fragment}"
    if isinstance(url, httpx.URL):
        return httpx.URL(rebuilt)
    return rebuilt


def apply_append(url: URLT, items: Sequence[tuple[str, str | None]]) -> URLT:
    """Append query parameters to a URL without touching existing ones.

    Appending is not idempotent: applying the same edit twice yields two
    occurrences of each key.

    Args:
        url: The base URL, as a string or ``httpx.URL``.
        items: The ``(key, value)`` pairs to append.

    Returns:
        The new URL, of the same type as ``url``.

    Example:
        ```pycon
        >>> from mercury.query import apply_append
        >>> apply_append("http://x/y?a=%2F#top", [("q", "h i"), ("flag", None)])
        'http://x/y?a=%2F&q=h%20i&flag=#top'

        ```
    """
    return _with_raw_query(url, lambda query: build_raw_query(query, items))


def apply_replace(
    url: URLT, keys_to_remove: Iterable[str], items: Sequence[tuple[str, str | None]]
) -> URLT:
    """Remove existing query parameters, then append new ones.

    Removal happens before appending, so an appended key is kept even if
    it is also in ``keys_to_remove``.

    Args:
        url: The base URL, as a string or ``httpx.URL``.
        keys_to_remove: The decoded keys whose existing occurrences are
            dropped.
        items: The ``(key, value)`` pairs to append.

    Returns:
        The new URL, of the same type as ``url``.

    Example:
        ```pycon
        >>> from mercury.query import apply_replace
        >>> apply_replace("http://x/y?a=1&b=2", {"a"}, [("a", "9")])
        'http://x/y?b=2&a=9'
        >>> apply_replace("http://x/y?a=1", {"a"}, [])
        'http://x/y'

        ```
    """
    keys = frozenset(keys_to_remove)
    logger.debug(f"Replacing query keys {sorted(keys)} in {url}")
    return _with_raw_query(
        url, lambda query: build_raw_query(remove_keys_from_raw_query(query, keys), items)
    )


def apply_query_edit(
    url: URLT,
    items: Sequence[tuple[str, str | None]],
    keys_to_remove: Iterable[str] | None = None,
) -> URLT:
    """Apply a query edit: replace when ``keys_to_remove`` is given,
    append otherwise.

    Args:
        url: The base URL, as a string or ``httpx.URL``.
        items: The ``(key, value)`` pairs to append.
        keys_to_remove: Optional decoded keys to strip first.

    Returns:
        The new URL, of the same type as ``url``.
    """
    if keys_to_remove is None:
        return apply_append(url, items)
    return apply_replace(url, keys_to_remove, items)
