from __future__ import annotations

import httpx
import pytest

from mercury.query import (
    apply_append,
    apply_query_edit,
    apply_replace,
    build_raw_query,
    remove_keys_from_raw_query,
)

################################################
#     Tests for remove_keys_from_raw_query     #
################################################


def test_remove_keys_from_raw_query_keeps_other_parts_verbatim() -> None:
    assert remove_keys_from_raw_query("a=1&b=x%26y%3Dz&c", {"a"}) == "b=x%26y%3Dz&c"


def test_remove_keys_from_raw_query_compares_decoded_keys() -> None:
    assert remove_keys_from_raw_query("a%20b=1&c=2", {"a b"}) == "c=2"


def test_remove_keys_from_raw_query_all_occurrences() -> None:
    assert remove_keys_from_raw_query("a=1&b=2&a=3", {"a"}) == "b=2"


def test_remove_keys_from_raw_query_key_without_equal_sign() -> None:
    assert remove_keys_from_raw_query("flag&b=2", {"flag"}) == "b=2"


def test_remove_keys_from_raw_query_drops_empty_parts() -> None:
    assert remove_keys_from_raw_query("a=1&&b=2&", set()) == "a=1&b=2"


def test_remove_keys_from_raw_query_absent_key() -> None:
    assert remove_keys_from_raw_query("a=1&b=2", {"z"}) == "a=1&b=2"


def test_remove_keys_from_raw_query_everything_removed() -> None:
    assert remove_keys_from_raw_query("a=1", {"a"}) is None


@pytest.mark.parametrize("raw_query", [None, ""])
def test_remove_keys_from_raw_query_empty(raw_query: str | None) -> None:
    assert remove_keys_from_raw_query(raw_query, {"a"}) is None


#####################################
#     Tests for build_raw_query     #
#####################################


def test_build_raw_query_appends_after_existing() -> None:
    assert build_raw_query("a=%2F", [("b", "c d")]) == "a=%2F&b=c%20d"


def test_build_raw_query_none_value() -> None:
    assert build_raw_query(None, [("flag", None)]) == "flag="


def test_build_raw_query_empty_value() -> None:
    assert build_raw_query(None, [("flag", "")]) == "flag="


def test_build_raw_query_nothing() -> None:
    assert build_raw_query(None, []) is None


def test_build_raw_query_none_key() -> None:
    with pytest.raises(ValueError, match=r"null query component"):
        build_raw_query(None, [(None, "x")])


##################################
#     Tests for apply_append     #
##################################


def test_apply_append_to_url_without_query() -> None:
    assert apply_append("https://x/y", [("q", "h i+j")]) == "https://x/y?q=h%20i%2Bj"


def test_apply_append_keeps_existing_encoding() -> None:
    url = "https://x/y?sig=a%2Bb%3D%3D&next=%2Fhome"
    assert apply_append(url, [("p", "1")]) == "https://x/y?sig=a%2Bb%3D%3D&next=%2Fhome&p=1"


def test_apply_append_duplicates_existing_key() -> None:
    assert apply_append("https://x/y?a=1", [("a", "2")]) == "https://x/y?a=1&a=2"


def test_apply_append_is_not_idempotent() -> None:
    items = [("a", "1")]
    url = apply_append(apply_append("https://x/", items), items)
    assert url == "https://x/?a=1&a=1"


def test_apply_append_keeps_order() -> None:
    url = apply_append("https://x/", [("b", "2"), ("a", "1"), ("b", "3")])
    assert url == "https://x/?b=2&a=1&b=3"


def test_apply_append_preserves_fragment() -> None:
    assert apply_append("https://x/y?a=1#sec", [("b", "2")]) == "https://x/y?a=1&b=2#sec"


def test_apply_append_keeps_empty_fragment() -> None:
    assert apply_append("http://x/y?a=1#", [("b", "2")]) == "http://x/y?a=1&b=2#"


def test_apply_append_question_mark_in_fragment() -> None:
    url = apply_append("https://x/y#frag?z=1", [("b", "2")])
    assert url == "https://x/y?b=2#frag?z=1"


def test_apply_replace_keeps_empty_fragment() -> None:
    assert apply_replace("https://x/y?a=1#", {"a"}, []) == "https://x/y#"


def test_apply_append_preserves_userinfo_port_and_path() -> None:
    url = apply_append("https://u:p@host:8443/a%20b/c", [("k", "v")])
    assert url == "https://u:p@host:8443/a%20b/c?k=v"


def test_apply_append_nothing_keeps_url() -> None:
    assert apply_append("https://x/y?a=1", []) == "https://x/y?a=1"


def test_apply_append_httpx_url() -> None:
    url = apply_append(httpx.URL("https://x/y"), [("a", "b c")])
    assert isinstance(url, httpx.URL)
    assert str(url) == "https://x/y?a=b%20c"


###################################
#     Tests for apply_replace     #
###################################


def test_apply_replace() -> None:
    assert apply_replace("https://x/y?a=1&b=2", {"a"}, [("a", "9")]) == "https://x/y?b=2&a=9"


def test_apply_replace_all_occurrences() -> None:
    url = apply_replace("https://x/y?a=1&b=2&a=3", {"a"}, [("a", "9")])
    assert url == "https://x/y?b=2&a=9"


def test_apply_replace_absent_key_is_noop_removal() -> None:
    assert apply_replace("https://x/y?a=1", {"z"}, []) == "https://x/y?a=1"


def test_apply_replace_no_trailing_question_mark() -> None:
    assert apply_replace("https://x/y?a=1", {"a"}, []) == "https://x/y"


def test_apply_replace_no_trailing_question_mark_with_fragment() -> None:
    assert apply_replace("https://x/y?a=1#top", {"a"}, []) == "https://x/y#top"


def test_apply_replace_encoded_separators_in_other_values() -> None:
    url = apply_replace("https://x/y?a=1&b=x%26c%3D2", {"a"}, [("a", "&")])
    assert url == "https://x/y?b=x%26c%3D2&a=%26"


def test_apply_replace_encoded_key() -> None:
    url = apply_replace("https://x/y?my%20key=1&b=2", {"my key"}, [("my key", "2")])
    assert url == "https://x/y?b=2&my%20key=2"


def test_apply_replace_is_idempotent() -> None:
    once = apply_replace("https://x/y?a=1", {"a"}, [("a", "2")])
    assert apply_replace(once, {"a"}, [("a", "2")]) == once


######################################
#     Tests for apply_query_edit     #
######################################


def test_apply_query_edit_append() -> None:
    assert apply_query_edit("https://x/?a=1", [("a", "2")]) == "https://x/?a=1&a=2"


def test_apply_query_edit_replace() -> None:
    assert apply_query_edit("https://x/?a=1", [("a", "2")], {"a"}) == "https://x/?a=2"


def test_apply_query_edit_empty_keys_to_remove() -> None:
    assert apply_query_edit("https://x/?a=1", [("b", "2")], set()) == "https://x/?a=1&b=2"
