r"""Percent-encoding helpers for query string components.

Keys and values appended by mercury are always encoded with the strict
unreserved set, so ``+`` never appears unencoded in anything this
library produced. Decoding therefore leaves ``+`` alone.
"""

from __future__ import annotations

__all__ = ["decode_percent", "encode_query_component"]

from urllib.parse import quote, unquote


def encode_query_component(text: str) -> str:
    """Percent-encode a query key or value.

    Only the unreserved characters ``A-Z a-z 0-9 - . _ ~`` pass through;
    every other UTF-8 byte becomes ``%XX`` with uppercase hex digits.

    Args:
        text: The key or value to encode.

    Returns:
        The encoded text.

    Raises:
        ValueError: If ``text`` is ``None``.

    Example:
        ```pycon
        >>> from mercury.query import encode_query_component
        >>> encode_query_component("h i+j")
        'h%20i%2Bj'
        >>> encode_query_component("café")
        'caf%C3%A9'
        >>> encode_query_component("a-b.c_d~e")
        'a-b.c_d~e'

        ```
    """
    if text is None:
        msg = "null query component"
        raise ValueError(msg)
    return quote(text, safe="", encoding="utf-8")


def decode_percent(text: str) -> str:
    """Decode ``%HH`` sequences in a raw query key.

    Malformed escapes are kept as-is and ``+`` is not turned into a space.

    Args:
        text: The raw, still-encoded text.

    Returns:
        The decoded text. Invalid UTF-8 sequences are replaced with
        ``U+FFFD``.

    Example:
        ```pycon
        >>> from mercury.query import decode_percent
        >>> decode_percent("a%20b")
        'a b'
        >>> decode_percent("a+b")
        'a+b'
        >>> decode_percent("100%")
        '100%'

        ```
    """
    return unquote(text, encoding="utf-8", errors="replace")
