import pytest

from packagespec.jpath import JSONPathError, get

DOC = {
    "name": "pkg",
    "owner": {"github": "team"},
    "policy_templates": [
        {"name": "first", "inputs": [{"type": "logfile"}]},
        {"name": "second", "inputs": [{"type": "httpjson"}, {"type": "cel"}]},
        {"title": "no name"},
    ],
    "a.b": 7,
}


def test_root_returns_document():
    assert get("$", DOC) is DOC


def test_plain_child_paths():
    assert get("$.name", DOC) == "pkg"
    assert get("$.owner.github", DOC) == "team"
    assert get("$['owner']['github']", DOC) == "team"


def test_bracket_key_with_dot():
    assert get("$['a.b']", DOC) == 7


def test_indices():
    assert get("$.policy_templates[1].name", DOC) == "second"
    assert get("$.policy_templates[-1].title", DOC) == "no name"


def test_unknown_key_raises():
    with pytest.raises(JSONPathError, match="unknown key missing"):
        get("$.missing", DOC)


def test_index_out_of_bounds_raises():
    with pytest.raises(JSONPathError):
        get("$.policy_templates[10]", DOC)


def test_wildcard_over_list_skips_missing():
    assert get("$.policy_templates[*].name", DOC) == ["first", "second"]


def test_wildcard_over_mapping_is_sorted():
    assert get("$.*", {"b": 2, "a": 1}) == [1, 2]


def test_recursive_descent():
    assert get("$..type", DOC) == ["logfile", "httpjson", "cel"]


def test_union_and_slice():
    assert get("$['name','a.b']", DOC) == ["pkg", 7]
    assert get("$.policy_templates[0:2].name", DOC) == ["first", "second"]
    assert get("$.policy_templates[::-1].name", DOC) == ["second", "first"]


def test_multi_result_with_no_matches_is_empty():
    assert get("$.policy_templates[*].missing", DOC) == []


@pytest.mark.parametrize(
    "path",
    ["name", "$.", "$[", "$[abc]", "$[?(@.name)]", "$['open]", "$[1:2:0]", "$x"],
)
def test_malformed_paths(path):
    with pytest.raises(JSONPathError):
        get(path, DOC)