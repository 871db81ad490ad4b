from __future__ import annotations

import pytest

from mercury.query import decode_percent, encode_query_component

############################################
#     Tests for encode_query_component     #
############################################


def test_encode_query_component_space_and_plus() -> None:
    assert encode_query_component("h i+j") == "h%20i%2Bj"


def test_encode_query_component_unreserved_unchanged() -> None:
    assert encode_query_component("AZaz09-._~") == "AZaz09-._~"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a&b", "a%26b"),
        ("a=b", "a%3Db"),
        ("a/b", "a%2Fb"),
        ("?#", "%3F%23"),
        ("*", "%2A"),
    ],
)
def test_encode_query_component_reserved(text: str, expected: str) -> None:
    assert encode_query_component(text) == expected


def test_encode_query_component_utf8_uppercase_hex() -> None:
    assert encode_query_component("é") == "%C3%A9"
    assert encode_query_component("€") == "%E2%82%AC"


def test_encode_query_component_empty() -> None:
    assert encode_query_component("") == ""


def test_encode_query_component_none() -> None:
    with pytest.raises(ValueError, match=r"null query component"):
        encode_query_component(None)


####################################
#     Tests for decode_percent     #
####################################


def test_decode_percent_sequences() -> None:
    assert decode_percent("a%20b%2Bc") == "a b+c"


def test_decode_percent_keeps_plus() -> None:
    assert decode_percent("a+b") == "a+b"


def test_decode_percent_malformed_sequence_unchanged() -> None:
    assert decode_percent("100%") == "100%"
    assert decode_percent("%zz") == "%zz"


def test_decode_percent_utf8() -> None:
    assert decode_percent("%C3%A9") == "é"
