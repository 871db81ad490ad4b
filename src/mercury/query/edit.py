r"""Query edits and the ``qp`` family of builders.

A ``QueryEdit`` is built once per call, applied to the request URL before
any transport call, and discarded.
"""

from __future__ import annotations

__all__ = ["QueryEdit", "qp", "qp_replace", "qp_replace_keys"]

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mercury.query.mutator import URLT, apply_query_edit

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class QueryEdit:
    """An ordered list of query parameters to append, optionally preceded
    by the removal of existing keys.

    Args:
        items: The ``(key, value)`` pairs to append, in order. A ``None``
            value renders as ``key=``.
        keys_to_remove: Optional decoded keys whose existing occurrences
            are stripped before appending. ``None`` means append-only.

    Example:
        ```pycon
        >>> from mercury.query import QueryEdit
        >>> edit = QueryEdit(items=(("page", "2"),), keys_to_remove=frozenset({"page"}))
        >>> edit.apply("https://api.example.com/items?page=1&size=10")
        'https://api.example.com/items?size=10&page=2'

        ```
    """

    items: tuple[tuple[str, str | None], ...] = ()
    keys_to_remove: frozenset[str] | None = None

    def apply(self, url: URLT) -> URLT:
        """Apply this edit to a URL.

        Args:
            url: The base URL, as a string or ``httpx.URL``.

        Returns:
            The edited URL, of the same type as ``url``.
        """
        return apply_query_edit(url, self.items, self.keys_to_remove)

    __call__ = apply


def _pairs_to_items(pairs: tuple[str | None, ...]) -> tuple[tuple[str, str | None], ...]:
    if len(pairs) % 2 != 0:
        msg = "qp requires an even number of strings: k1, v1, k2, v2, ..."
        raise ValueError(msg)
    items = []
    for key, value in zip(pairs[::2], pairs[1::2]):
        if key is None:
            msg = "query key is None"
            raise ValueError(msg)
        items.append((key, value))
    return tuple(items)


def _mapping_to_items(params: Mapping[str, str | None]) -> tuple[tuple[str, str | None], ...]:
    items = []
    for key, value in params.items():
        if key is None:
            msg = "query key is None"
            raise ValueError(msg)
        items.append((key, value))
    return tuple(items)


def qp(*pairs: str | None | Mapping[str, str | None]) -> QueryEdit:
    """Create a query edit from flat ``key, value`` pairs or a mapping.

    Flat pairs are appended to the existing query. A single mapping
    argument replaces any existing occurrence of its keys.

    Args:
        *pairs: ``k1, v1, k2, v2, ...`` or a single mapping.

    Returns:
        The query edit.

    Raises:
        ValueError: If the number of strings is odd or a key is ``None``.

    Example:
        ```pycon
        >>> from mercury.query import qp
        >>> qp("q", "java", "page", "1").apply("https://x/search?q=old")
        'https://x/search?q=old&q=java&page=1'
        >>> qp({"q": "java"}).apply("https://x/search?q=old")
        'https://x/search?q=java'

        ```
    """
    if len(pairs) == 1 and isinstance(pairs[0], Mapping):
        return qp_replace(pairs[0])
    return QueryEdit(items=_pairs_to_items(pairs))


def qp_replace(*pairs: str | None | Mapping[str, str | None]) -> QueryEdit:
    """Create a query edit that replaces the keys it appends.

    Args:
        *pairs: ``k1, v1, k2, v2, ...`` or a single mapping.

    Returns:
        The query edit.

    Raises:
        ValueError: If the number of strings is odd or a key is ``None``.
    """
    if len(pairs) == 1 and isinstance(pairs[0], Mapping):
        items = _mapping_to_items(pairs[0])
    else:
        items = _pairs_to_items(pairs)
    return QueryEdit(items=items, keys_to_remove=frozenset(key for key, _ in items))


def qp_replace_keys(keys_to_remove: Iterable[str], *pairs: str | None) -> QueryEdit:
    """Create a query edit that strips an explicit set of keys before
    appending.

    Args:
        keys_to_remove: The decoded keys to strip.
        *pairs: ``k1, v1, k2, v2, ...`` to append.

    Returns:
        The query edit.

    Raises:
        ValueError: If ``keys_to_remove`` is ``None``, the number of
            strings is odd or a key is ``None``.

    Example:
        ```pycon
        >>> from mercury.query import qp_replace_keys
        >>> qp_replace_keys({"token", "sig"}, "sig", "abc").apply("https://x/?token=1&sig=2&a=3")
        'https://x/?a=3&sig=abc'

        ```
    """
    if keys_to_remove is None:
        msg = "keys_to_remove is None"
        raise ValueError(msg)
    return QueryEdit(items=_pairs_to_items(pairs), keys_to_remove=frozenset(keys_to_remove))
