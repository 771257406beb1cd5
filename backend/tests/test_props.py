import pytest

from landly.schemas import BlockKind
from landly.services.props import as_dict, get_bool, get_str, get_text, to_dicts, to_list, to_strings


@pytest.mark.unit
def test_get_str_degrades_on_wrong_types():
    props = {"title": "Hello", "count": 3, "flag": True, "none": None, "items": []}
    assert get_str(props, "title") == "Hello"
    assert get_str(props, "count") == ""
    assert get_str(props, "flag", "x") == "x"
    assert get_str(props, "none", "fallback") == "fallback"
    assert get_str(props, "missing", "fallback") == "fallback"
    assert get_str(None, "title", "d") == "d"
    assert get_str(["title"], "title") == ""


@pytest.mark.unit
def test_get_text_accepts_numbers_but_not_bools():
    props = {"price": 990, "float": 4.5, "whole": 5.0, "flag": False, "text": "free"}
    assert get_text(props, "price") == "990"
    assert get_text(props, "float") == "4.5"
    assert get_text(props, "whole") == "5"
    assert get_text(props, "flag") == ""
    assert get_text(props, "text") == "free"
    assert get_text(props, "missing", "-") == "-"


@pytest.mark.unit
def test_get_bool():
    assert get_bool({"featured": True}, "featured") is True
    assert get_bool({"featured": " TRUE "}, "featured") is True
    assert get_bool({"featured": "yes"}, "featured") is False
    assert get_bool({"featured": 1}, "featured") is False
    assert get_bool(None, "featured") is False


@pytest.mark.unit
def test_collection_helpers():
    assert as_dict({"a": 1}) == {"a": 1}
    assert as_dict([1]) == {}
    assert to_list("abc") == []
    assert to_list([1, "a"]) == [1, "a"]
    assert to_dicts([{"a": 1}, "x", None, {"b": 2}]) == [{"a": 1}, {"b": 2}]
    assert to_strings(["a", 1, None, "b"]) == ["a", "b"]
    assert to_strings({"a": 1}) == []


@pytest.mark.unit
@pytest.mark.parametrize("raw,expected", [
    ("hero", BlockKind.HERO),
    (" Features ", BlockKind.FEATURES),
    ("PRICING", BlockKind.PRICING),
    ("cta", BlockKind.CTA),
    ("testimonials", BlockKind.TESTIMONIALS),
    ("faq", BlockKind.FAQ),
    ("gallery", BlockKind.UNSUPPORTED),
    ("", BlockKind.UNSUPPORTED),
    (None, BlockKind.UNSUPPORTED),
    (7, BlockKind.UNSUPPORTED),
])
def test_block_kind_parse(raw, expected):
    assert BlockKind.parse(raw) is expected
