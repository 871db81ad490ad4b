from __future__ import annotations

import httpx
import pytest

from mercury.query import QueryEdit, qp, qp_replace, qp_replace_keys

###############################
#     Tests for QueryEdit     #
###############################


def test_query_edit_default_is_noop() -> None:
    assert QueryEdit().apply("https://x/y?a=1") == "https://x/y?a=1"


def test_query_edit_append() -> None:
    edit = QueryEdit(items=(("a", "2"),))
    assert edit.apply("https://x/?a=1") == "https://x/?a=1&a=2"


def test_query_edit_replace() -> None:
    edit = QueryEdit(items=(("a", "2"),), keys_to_remove=frozenset({"a"}))
    assert edit.apply("https://x/?a=1") == "https://x/?a=2"


def test_query_edit_callable() -> None:
    edit = QueryEdit(items=(("a", "2"),))
    assert edit("https://x/") == edit.apply("https://x/")


def test_query_edit_httpx_url() -> None:
    url = QueryEdit(items=(("a", "2"),)).apply(httpx.URL("https://x/"))
    assert isinstance(url, httpx.URL)


def test_query_edit_frozen() -> None:
    edit = QueryEdit()
    with pytest.raises(AttributeError):
        edit.items = (("a", "b"),)


########################
#     Tests for qp     #
########################


def test_qp_pairs_append() -> None:
    edit = qp("q", "java", "page", "1")
    assert edit.keys_to_remove is None
    assert edit.apply("https://x/search?q=old") == "https://x/search?q=old&q=java&page=1"


def test_qp_none_value() -> None:
    assert qp("flag", None).apply("https://x/") == "https://x/?flag="


def test_qp_no_pairs() -> None:
    assert qp().apply("https://x/?a=1") == "https://x/?a=1"


def test_qp_odd_number_of_strings() -> None:
    with pytest.raises(ValueError, match=r"even number"):
        qp("a", "1", "b")


def test_qp_none_key() -> None:
    with pytest.raises(ValueError, match=r"query key is None"):
        qp(None, "1")


def test_qp_mapping_replaces() -> None:
    edit = qp({"q": "java", "page": "2"})
    assert edit.keys_to_remove == frozenset({"q", "page"})
    url = edit.apply("https://x/search?page=1&q=old&size=10")
    assert url == "https://x/search?size=10&q=java&page=2"


################################
#     Tests for qp_replace     #
################################


def test_qp_replace_pairs() -> None:
    url = qp_replace("a", "9").apply("https://x/y?a=1&b=2")
    assert url == "https://x/y?b=2&a=9"


def test_qp_replace_duplicate_keys_in_pairs() -> None:
    url = qp_replace("a", "1", "a", "2").apply("https://x/?a=0")
    assert url == "https://x/?a=1&a=2"


def test_qp_replace_mapping() -> None:
    assert qp_replace({"a": None}).apply("https://x/?a=1") == "https://x/?a="


def test_qp_replace_odd_number_of_strings() -> None:
    with pytest.raises(ValueError, match=r"even number"):
        qp_replace("a")


#####################################
#     Tests for qp_replace_keys     #
#####################################


def test_qp_replace_keys() -> None:
    edit = qp_replace_keys({"token", "sig"}, "sig", "abc")
    assert edit.apply("https://x/?token=1&sig=2&a=3") == "https://x/?a=3&sig=abc"


def test_qp_replace_keys_remove_only() -> None:
    assert qp_replace_keys({"token"}).apply("https://x/?token=1") == "https://x/"


def test_qp_replace_keys_none() -> None:
    with pytest.raises(ValueError, match=r"keys_to_remove is None"):
        qp_replace_keys(None, "a", "1")
