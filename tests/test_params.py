"""Unit tests for ParameterSet and ParameterSetBuilder."""

from __future__ import annotations

import datetime

import pytest

from prepql.compile.base import FormatCompiler
from prepql.compile.clause_builders import generate_where
from prepql.compile.params import ParameterSetBuilder, split_filter_key
from prepql.errors import DisallowedOperatorError, UnsupportedTypeError
from prepql.schema.config import BuilderConfig
from prepql.schema.params import BoundValue, ParameterSet, TypeTag

BUILD = ParameterSetBuilder()


# ---------------------------------------------------------------------------
# ParameterSet
# ---------------------------------------------------------------------------


class TestParameterSet:
    def test_new_set_is_empty(self):
        params = ParameterSet()
        assert params.is_empty()
        assert len(params) == 0
        assert params.type_list == ""

    def test_add_clause_appends_to_all_three(self):
        params = ParameterSet()
        result = params.add_clause("age > ? ", TypeTag.INTEGER, 11)
        assert result is params
        params.add_clause("firstname = ? ", TypeTag.STRING, "fred")
        assert params.conditions == ["age > ? ", "firstname = ? "]
        assert params.types == [TypeTag.INTEGER, TypeTag.STRING]
        assert params.values == [11, "fred"]
        assert params.type_list == "is"
        assert not params.is_empty()

    def test_bound_values_pair_tags_and_values(self):
        params = ParameterSet().add_clause("h = ? ", TypeTag.FLOAT, 1.5)
        assert params.bound_values == [BoundValue(TypeTag.FLOAT, 1.5)]

    def test_accessors_return_copies(self):
        params = ParameterSet().add_clause("a = ? ", TypeTag.INTEGER, 1)
        params.conditions.append("b = ? ")
        params.values.append(2)
        assert len(params.conditions) == len(params.values) == 1

    def test_concat_keeps_order(self):
        first = ParameterSet().add_clause("a = ? ", TypeTag.STRING, "x")
        second = ParameterSet().add_clause("id = ? ", TypeTag.INTEGER, 7)
        merged = first.concat(second)
        assert merged.conditions == ["a = ? ", "id = ? "]
        assert merged.type_list == "si"
        assert merged.values == ["x", 7]
        assert len(first) == 1 and len(second) == 1


# ---------------------------------------------------------------------------
# ParameterSetBuilder
# ---------------------------------------------------------------------------


def test_bare_key_gets_implicit_equals():
    params = BUILD.build({"firstname": "fred"})
    assert params.conditions == ["firstname = ? "]
    assert params.type_list == "s"
    assert params.values == ["fred"]


def test_key_with_operator_kept_verbatim():
    params = BUILD.build({"age >": 11})
    assert params.conditions == ["age > ? "]
    assert params.types == [TypeTag.INTEGER]
    assert params.values == [11]


def test_key_is_trimmed():
    params = BUILD.build({"  age >  ": 11, " lastname ": "Smith"})
    assert params.conditions == ["age > ? ", "lastname = ? "]


def test_insertion_order_and_lengths():
    filters = {"age >": 11, "height <": 1.8, "lastname !=": "Jones", "id": 4}
    params = BUILD.build(filters)
    assert len(params.conditions) == len(params.types) == len(params.values) == 4
    assert params.conditions == ["age > ? ", "height < ? ", "lastname != ? ", "id = ? "]
    assert params.type_list == "idsi"
    assert params.values == [11, 1.8, "Jones", 4]


@pytest.mark.parametrize("filters", [None, {}])
def test_empty_input_yields_empty_set(filters):
    params = BUILD.build(filters)
    assert params.is_empty()
    assert generate_where(params) == ""


def test_datetime_value_is_normalized_and_string_tagged():
    params = BUILD.build({"created_at >": datetime.datetime(2021, 1, 1, 8, 30)})
    assert params.values == ["2021-01-01 08:30:00"]
    assert params.types == [TypeTag.STRING]


def test_unsupported_value_raises():
    with pytest.raises(UnsupportedTypeError):
        BUILD.build({"active": True})


def test_dotted_column_is_accepted():
    params = BUILD.build({"people.age >": 11})
    assert params.conditions == ["people.age > ? "]


def test_format_placeholder():
    params = ParameterSetBuilder(compiler=FormatCompiler()).build({"age >": 11, "id": 1})
    assert params.conditions == ["age > %s ", "id = %s "]


class TestOperatorAllowlist:
    @pytest.mark.parametrize("key", ["age LIKE", "age >=", "age <>", "name IS NOT"])
    def test_operator_outside_allowlist(self, key):
        with pytest.raises(DisallowedOperatorError) as exc_info:
            BUILD.build({key: 1})
        assert exc_info.value.details["key"] == key

    @pytest.mark.parametrize("key", ["1=1 OR id >", "id; DROP TABLE people", "age) OR (1"])
    def test_injection_in_column_position(self, key):
        with pytest.raises(DisallowedOperatorError):
            BUILD.build({key: 1})

    def test_extended_allowlist(self):
        config = BuilderConfig(allowed_operators=[">", "<", "=", "!=", ">="])
        params = ParameterSetBuilder(config).build({"age >=": 18})
        assert params.conditions == ["age >= ? "]

    def test_permissive_mode_accepts_any_text(self):
        config = BuilderConfig(enforce_operators=False)
        params = ParameterSetBuilder(config).build({"lastname LIKE": "S%"})
        assert params.conditions == ["lastname LIKE ? "]

    def test_allowlist_rejects_blank_operator(self):
        with pytest.raises(ValueError):
            BuilderConfig(allowed_operators=[">", " "])


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("age", ("age", None)),
        ("age >", ("age", ">")),
        ("age   !=", ("age", "!=")),
        ("people.age <", ("people.age", "<")),
    ],
)
def test_split_filter_key(key, expected):
    assert split_filter_key(key) == expected
