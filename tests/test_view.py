"""Tests for TypedView -- the keyed accessor, serialization, equality and copy.

Covers:
- Pass-through of values already matching the requested type
- Callback dispatch order (from_value, from_list, from_json) and shape checks
- Scalar coercion fallback and silent degradation to None
- Per-(key, type) memoization and the uncached configuration
- to_json() isolation and round-tripping
- Deep equality / hashing, including null-vs-missing
- copy_with() merge semantics (None means "no change")
"""

from __future__ import annotations

import numbers
from enum import StrEnum, auto
from typing import Any

import pytest

from json_simple_model.config import ViewConfig
from json_simple_model.enums import enum_map
from json_simple_model.lists import from_list
from json_simple_model.view import TypedView

PERSON = {
    "name": "John Doe",
    "age": 30,
    "height": 1.8,
    "scores": [100, 90, 80],
    "isEmployed": True,
    "status": 1,
    "company": {"name": "Acme", "location": "MV"},
    "friends": [{"name": "Jane Doe", "age": 28}, {"name": "Jack Doe", "age": 32}],
}


class Status(StrEnum):
    RUNNING = auto()
    STOPPED = auto()
    PAUSED = auto()


STATUS_CODES = enum_map(
    Status, {Status.RUNNING: 1, Status.STOPPED: 2, Status.PAUSED: 3}.get
)


class Company(TypedView):
    @property
    def name(self) -> str | None:
        return self.get("name", str)

    @property
    def location(self) -> str | None:
        return self.get("location", str)


class Uncached(TypedView):
    config = ViewConfig(cache_conversions=False)


# ---------------------------------------------------------------------------
# Spy helper
# ---------------------------------------------------------------------------


def _spy(result: Any = None) -> tuple[Any, list[Any]]:
    """Return (callback, call_log); the callback records each argument."""
    call_log: list[Any] = []

    def callback(value: Any) -> Any:
        call_log.append(value)
        return result

    return callback, call_log


# ---------------------------------------------------------------------------
# Keyed accessor
# ---------------------------------------------------------------------------


class TestPassThrough:
    def test_concrete_person_scenario(self) -> None:
        view = TypedView(PERSON)
        assert view.get("age", int) == 30
        assert view.get("name", str) == "John Doe"
        assert view.get("scores", list[int]) == [100, 90, 80]
        assert view.get("height", float) == 1.8
        assert view.get("isEmployed", bool) is True

    def test_matching_value_never_reaches_callbacks(self) -> None:
        view = TypedView(PERSON)
        from_value, value_log = _spy()
        from_json, json_log = _spy()
        assert view.get("age", int, from_value=from_value, from_json=from_json) == 30
        assert value_log == []
        assert json_log == []

    def test_list_is_returned_as_plain_list(self) -> None:
        scores = TypedView(PERSON).get("scores", list[int | None])
        assert type(scores) is list

    def test_tuple_types_get_tuples_back(self) -> None:
        view = TypedView({"xs": [1, 2], "pairs": [[1, "a"], [2, "b"]]})
        assert view.get("xs", tuple[int, ...]) == (1, 2)
        assert view.get("xs", tuple) == (1, 2)
        assert view.get("pairs", list[tuple[int, str]]) == [(1, "a"), (2, "b")]

    def test_document_pass_through_for_mapping_types(self) -> None:
        company = TypedView(PERSON).get("company", dict[str, Any])
        assert company == {"name": "Acme", "location": "MV"}
        assert type(company) is dict

    def test_numeric_type_accepts_int_and_float(self) -> None:
        view = TypedView(PERSON)
        assert view.get("age", numbers.Number) == 30
        assert view.get("height", int | float) == 1.8


class TestMissingAndNull:
    def test_missing_key_is_none(self) -> None:
        assert TypedView(PERSON).get("nope", int) is None

    def test_null_value_skips_every_callback(self) -> None:
        view = TypedView({"company": None})
        from_value, value_log = _spy("x")
        assert view.get("company", Company, from_value=from_value) is None
        assert value_log == []

    def test_null_model_degrades_to_none(self) -> None:
        view = TypedView(None)
        assert view.is_null
        assert view.get("age", int) is None
        assert view.to_json() is None

    def test_default_construction_is_null_model(self) -> None:
        assert TypedView().is_null
        assert not TypedView({}).is_null


class TestCallbackDispatch:
    def test_from_json_on_nested_object(self) -> None:
        company = TypedView(PERSON).get("company", Company, from_json=Company)
        assert isinstance(company, Company)
        assert company.name == "Acme"
        assert company.location == "MV"

    def test_missing_object_does_not_invoke_callback(self) -> None:
        from_json, json_log = _spy()
        assert TypedView(PERSON).get("company2", Company, from_json=from_json) is None
        assert json_log == []

    def test_from_json_receives_plain_dict(self) -> None:
        from_json, json_log = _spy()
        TypedView(PERSON).get("company", Company, from_json=from_json)
        assert json_log == [{"name": "Acme", "location": "MV"}]
        assert type(json_log[0]) is dict

    def test_from_json_skipped_for_non_object(self) -> None:
        from_json, json_log = _spy()
        assert TypedView({"company": "Acme"}).get(
            "company", Company, from_json=from_json
        ) is None
        assert json_log == []

    def test_from_list_on_array_of_objects(self) -> None:
        friends = TypedView(PERSON).get(
            "friends",
            list[Company | None],
            from_list=from_list(Company, element_type=Company),
        )
        assert [friend.name for friend in friends] == ["Jane Doe", "Jack Doe"]

    def test_from_list_receives_nulls(self) -> None:
        from_list_cb, list_log = _spy([])
        TypedView({"xs": [{"a": 1}, None]}).get("xs", list[Company], from_list=from_list_cb)
        assert list_log == [[{"a": 1}, None]]

    def test_from_list_skipped_for_array_of_scalars(self) -> None:
        from_list_cb, list_log = _spy([])
        assert TypedView({"xs": [1, "a"]}).get(
            "xs", list[Company], from_list=from_list_cb
        ) is None
        assert list_log == []

    def test_from_value_applies_without_shape_checks(self) -> None:
        view = TypedView(PERSON)
        assert view.get("status", Status, from_value=STATUS_CODES.decode) is Status.RUNNING

    def test_from_value_wins_over_other_callbacks(self) -> None:
        from_value, value_log = _spy("value")
        from_json, json_log = _spy("json")
        result = TypedView(PERSON).get(
            "company", Company, from_value=from_value, from_json=from_json
        )
        assert result == "value"
        assert json_log == []

    def test_unknown_wire_value_decodes_to_none(self) -> None:
        view = TypedView({"status": 9})
        assert view.get("status", Status, from_value=STATUS_CODES.decode) is None

    def test_callback_exception_propagates(self) -> None:
        def broken(data: dict[str, Any]) -> Company:
            raise KeyError("boom")

        with pytest.raises(KeyError, match="boom"):
            TypedView(PERSON).get("company", Company, from_json=broken)


class TestCoercionFallback:
    @pytest.mark.parametrize(
        ("key", "type_", "expected"),
        [
            ("age", float, 30.0),
            ("age", str, "30"),
            ("isEmployed", str, "true"),
            ("height", str, "1.8"),
            ("numeric", int, 42),
            ("numeric", float, 42.0),
            ("flag", bool, True),
        ],
    )
    def test_coerces_by_requested_type(self, key: str, type_: Any, expected: Any) -> None:
        view = TypedView({**PERSON, "numeric": "42", "flag": "true"})
        result = view.get(key, type_)
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize(
        ("key", "type_"),
        [
            ("height", int),
            ("name", int),
            ("name", bool),
            ("scores", list[str]),
            ("company", Company),
            ("status", Status),
        ],
    )
    def test_unresolvable_values_degrade_to_none(self, key: str, type_: Any) -> None:
        assert TypedView(PERSON).get(key, type_) is None

    def test_unresolved_key_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="json_simple_model.view"):
            TypedView(PERSON).get("company", Company)
        assert "'company'" in caplog.text


class TestMemoization:
    def test_second_call_performs_no_conversion(self) -> None:
        view = Company(PERSON)
        from_json, json_log = _spy(object())
        first = view.get("company", Company, from_json=from_json)
        second = view.get("company", Company, from_json=from_json)
        assert first is second
        assert len(json_log) == 1

    def test_cache_is_keyed_by_requested_type(self) -> None:
        view = TypedView(PERSON)
        assert view.get("age", int) == 30
        assert view.get("age", str) == "30"

    def test_instances_do_not_share_results(self) -> None:
        from_json, json_log = _spy(object())
        TypedView(PERSON).get("company", Company, from_json=from_json)
        TypedView(PERSON).get("company", Company, from_json=from_json)
        assert len(json_log) == 2

    def test_uncached_view_converts_every_time(self) -> None:
        view = Uncached(PERSON)
        from_json, json_log = _spy(object())
        view.get("company", Company, from_json=from_json)
        view.get("company", Company, from_json=from_json)
        assert len(json_log) == 2


# ---------------------------------------------------------------------------
# Serialization and immutability
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_to_json_deep_equals_source(self) -> None:
        assert TypedView(PERSON).to_json() == PERSON

    def test_round_trip(self) -> None:
        once = TypedView(PERSON).to_json()
        assert TypedView(once).to_json() == once

    def test_mutating_output_does_not_affect_view(self) -> None:
        view = TypedView(PERSON)
        out = view.to_json()
        assert out is not None
        out["scores"].append(1)
        out["company"]["name"] = "Other"
        assert view.to_json() == PERSON

    def test_mutating_source_does_not_affect_view(self) -> None:
        source = {"scores": [1, 2], "nested": {"a": 1}}
        view = TypedView(source)
        source["scores"].append(3)
        source["nested"]["a"] = 2
        assert view.to_json() == {"scores": [1, 2], "nested": {"a": 1}}

    def test_repr_shows_document(self) -> None:
        assert repr(Company({"name": "Acme"})) == "Company({'name': 'Acme'})"
        assert repr(TypedView(None)) == "TypedView(None)"


class TestImmutability:
    def test_attribute_assignment_raises(self) -> None:
        view = Company(PERSON)
        with pytest.raises(AttributeError, match="immutable"):
            view.name = "x"  # type: ignore[misc]
        with pytest.raises(AttributeError, match="immutable"):
            view._data = {}  # type: ignore[misc]

    def test_attribute_deletion_raises(self) -> None:
        with pytest.raises(AttributeError, match="immutable"):
            del TypedView(PERSON)._data


# ---------------------------------------------------------------------------
# Equality and hashing
# ---------------------------------------------------------------------------


class TestEquality:
    def test_equal_documents_are_equal(self) -> None:
        reordered = dict(reversed(list(PERSON.items())))
        assert TypedView(PERSON) == TypedView(reordered)
        assert hash(TypedView(PERSON)) == hash(TypedView(reordered))

    def test_different_documents_are_unequal(self) -> None:
        assert TypedView({"a": [1, 2]}) != TypedView({"a": [2, 1]})
        assert TypedView({"a": True}) != TypedView({"a": 1})

    def test_null_valued_key_equals_missing_key(self) -> None:
        assert TypedView({"a": 1, "b": None}) == TypedView({"a": 1})
        assert hash(TypedView({"a": 1, "b": None})) == hash(TypedView({"a": 1}))

    def test_views_of_different_classes_compare_by_document(self) -> None:
        assert Company({"name": "Acme"}) == TypedView({"name": "Acme"})

    def test_non_views_are_not_equal(self) -> None:
        assert TypedView({"a": 1}) != {"a": 1}

    def test_null_models(self) -> None:
        assert TypedView(None) == TypedView(None)
        assert TypedView(None) != TypedView({})

    def test_views_with_different_null_rules_are_never_equal(self) -> None:
        class Strict(TypedView):
            config = ViewConfig(null_equals_missing=False)

        loose = TypedView({"a": 1, "b": None})
        strict = Strict({"a": 1})
        assert loose != strict
        assert strict != loose
        assert Strict({"a": 1}) == Strict({"a": 1})

    def test_views_are_usable_in_sets(self) -> None:
        views = {TypedView({"a": 1}), TypedView({"a": 1.0}), TypedView({"a": 2})}
        assert len(views) == 2


# ---------------------------------------------------------------------------
# Copy-with
# ---------------------------------------------------------------------------


class TestCopyWith:
    def test_override_and_null_no_op(self) -> None:
        copy = TypedView({"a": 1, "b": 2}).copy_with({"a": 5, "c": None})
        assert copy.to_json() == {"a": 5, "b": 2}

    def test_no_overrides_is_equal(self) -> None:
        view = Company(PERSON)
        assert view.copy_with() == view
        assert view.copy_with({}) == view

    def test_null_override_never_clears(self) -> None:
        view = Company(PERSON)
        assert view.copy_with({"name": None}) == view
        assert view.copy_with({"name": None}).name == "John Doe"

    def test_single_override_leaves_other_fields_identical(self) -> None:
        copy = TypedView(PERSON).copy_with({"age": 31}).to_json()
        assert copy is not None
        assert copy.pop("age") == 31
        expected = dict(PERSON)
        expected.pop("age")
        assert copy == expected

    def test_result_keeps_class_and_base_is_unchanged(self) -> None:
        base = Company({"name": "Acme"})
        copy = base.copy_with({"name": "Other"})
        assert type(copy) is Company
        assert copy.name == "Other"
        assert base.name == "Acme"

    def test_merge_is_shallow(self) -> None:
        view = TypedView({"company": {"name": "Acme", "location": "MV"}})
        copy = view.copy_with({"company": {"name": "Other"}})
        assert copy.to_json() == {"company": {"name": "Other"}}

    def test_copy_of_null_model(self) -> None:
        assert TypedView(None).copy_with({"a": 1}).to_json() == {"a": 1}

    def test_custom_from_json(self) -> None:
        copy = TypedView({"name": "Acme"}).copy_with({"location": "MV"}, from_json=Company)
        assert isinstance(copy, Company)
        assert copy.location == "MV"


class TestCallbackProtocols:
    def test_view_classes_and_decoders_satisfy_protocols(self) -> None:
        from json_simple_model.protocols import (
            JsonConverter,
            ListConverter,
            ValueConverter,
        )

        assert isinstance(Company, JsonConverter)
        assert isinstance(from_list(Company), ListConverter)
        assert isinstance(STATUS_CODES.decode, ValueConverter)
        assert not isinstance(42, ValueConverter)
