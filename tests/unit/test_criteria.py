"""Tests for CriteriaSpec, its directives and RequestData."""

import pytest

from routecache.domain.criteria import CriteriaSpec, ExtractFields, Literal, RequestData


def test_from_mapping_tags_lists_of_strings_as_extract_fields() -> None:
    spec = CriteriaSpec.from_mapping({"query": ["userId", "page"], "headers": ("x-id",)})
    assert spec["query"] == ExtractFields(("userId", "page"))
    assert spec["headers"] == ExtractFields(("x-id",))


def test_from_mapping_tags_everything_else_as_literal() -> None:
    spec = CriteriaSpec.from_mapping(
        {"version": 2, "name": "users", "ids": [1, 2], "opts": {"a": 1}}
    )
    assert spec["version"] == Literal(2)
    assert spec["name"] == Literal("users")
    assert spec["ids"] == Literal([1, 2])
    assert spec["opts"] == Literal({"a": 1})


def test_from_mapping_keeps_tagged_values() -> None:
    spec = CriteriaSpec.from_mapping({"q": ExtractFields(("a",)), "v": Literal(["a"])})
    assert spec["q"] == ExtractFields(("a",))
    assert spec["v"] == Literal(["a"])


def test_from_mapping_does_not_share_mutable_literals() -> None:
    raw = {"opts": {"a": [1]}}
    spec = CriteriaSpec.from_mapping(raw)
    raw["opts"]["a"].append(2)
    assert spec["opts"] == Literal({"a": [1]})


def test_constructor_rejects_untagged_values() -> None:
    with pytest.raises(TypeError, match="Literal or ExtractFields"):
        CriteriaSpec({"query": ["userId"]})


def test_extract_fields_rejects_plain_string() -> None:
    with pytest.raises(ValueError, match="not a string"):
        ExtractFields("userId")


def test_extract_fields_rejects_non_string_names() -> None:
    with pytest.raises(ValueError, match="must be a string"):
        ExtractFields(("userId", 3))


def test_extract_fields_normalizes_to_tuple() -> None:
    assert ExtractFields(["a", "b"]).names == ("a", "b")


def test_clone_is_deep() -> None:
    original = CriteriaSpec({"opts": Literal({"a": [1]}), "q": ExtractFields(("x",))})
    clone = original.clone()
    assert clone == original
    assert clone["opts"] is not original["opts"]
    clone["opts"].value["a"].append(2)
    assert original["opts"] == Literal({"a": [1]})


@pytest.mark.parametrize("value", [None, False, {}, CriteriaSpec()])
def test_coerce_treats_absent_criteria_as_none(value) -> None:
    assert CriteriaSpec.coerce(value) is None


def test_coerce_builds_spec_from_mapping() -> None:
    spec = CriteriaSpec.coerce({"query": ["userId"]})
    assert isinstance(spec, CriteriaSpec)
    assert spec["query"] == ExtractFields(("userId",))


def test_coerce_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        CriteriaSpec.coerce("query")


def test_needs_request() -> None:
    assert CriteriaSpec.from_mapping({"query": ["userId"]}).needs_request
    assert not CriteriaSpec.from_mapping({"v": 1}).needs_request


def test_spec_is_a_read_only_mapping() -> None:
    spec = CriteriaSpec.from_mapping({"v": 1, "query": ["id"]})
    assert len(spec) == 2
    assert set(spec) == {"v", "query"}
    with pytest.raises(TypeError):
        spec["v"] = Literal(2)  # type: ignore[index]


def test_request_data_section_defaults_to_empty() -> None:
    data = RequestData(path="/x", fields={"query": {"a": "1"}})
    assert data.section("query") == {"a": "1"}
    assert data.section("body") == {}


@pytest.mark.parametrize(
    "value",
    [{1: "a", "b": 2}, {"outer": {2: "x"}}, [{"ok": 1}, {None: 1}]],
)
def test_literal_rejects_non_string_mapping_keys(value) -> None:
    with pytest.raises(ValueError, match="keys must be strings"):
        Literal(value)


def test_from_mapping_rejects_non_string_literal_keys() -> None:
    with pytest.raises(ValueError, match="keys must be strings"):
        CriteriaSpec.from_mapping({"opts": {1: "a", "b": 2}})
