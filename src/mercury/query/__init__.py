r"""Query string editing that preserves the encoding of untouched
parameters.

This package provides the strict query component encoder, the raw query
mutator used to append or replace parameters, and the ``qp`` builders
used by the request functions.
"""

from __future__ import annotations

__all__ = [
    "QueryEdit",
    "apply_append",
    "apply_query_edit",
    "apply_replace",
    "build_raw_query",
    "decode_percent",
    "encode_query_component",
    "qp",
    "qp_replace",
    "qp_replace_keys",
    "remove_keys_from_raw_query",
]

from mercury.query.edit import QueryEdit, qp, qp_replace, qp_replace_keys
from mercury.query.encoding import decode_percent, encode_query_component
from mercury.query.mutator import (
    apply_append,
    apply_query_edit,
    apply_replace,
    build_raw_query,
    remove_keys_from_raw_query,
)
