"""
Tests for schema projections: to_type_hint, to_pydantic and to_schema.
"""

from typing import Any, Literal, Optional, Union

import pytest
from pydantic import ValidationError

from simple_runtypes import (
    RuntypeUsageError,
    any_,
    array,
    boolean,
    dictionary,
    enum_,
    guarded_by,
    ignore,
    integer,
    intersection,
    json,
    literal,
    null,
    nullable,
    number,
    optional,
    record,
    runtype,
    sloppy_record,
    string,
    tuple_,
    union,
)
from simple_runtypes import to_pydantic, to_schema, to_type_hint


class TestToTypeHint:
    def test_primitives(self):
        assert to_type_hint(string()) is str
        assert to_type_hint(integer()) is int
        assert to_type_hint(number()) is float
        assert to_type_hint(boolean()) is bool
        assert to_type_hint(null()) is type(None)

    def test_literals(self):
        assert to_type_hint(literal("a")) == Literal["a"]
        assert to_type_hint(enum_(["a", "b"])) == Literal["a", "b"]

    def test_containers(self):
        assert to_type_hint(array(string())) == list[str]
        assert to_type_hint(tuple_(string(), integer())) == tuple[str, int]
        assert to_type_hint(dictionary(string(), integer())) == dict[str, int]
        assert to_type_hint(record({"a": string()})) == dict[str, Any]

    def test_unions(self):
        assert to_type_hint(union(integer(), null())) == Union[int, None]
        assert to_type_hint(nullable(string())) == Optional[str]

    def test_fallbacks(self):
        assert to_type_hint(any_()) is Any
        assert to_type_hint(runtype(lambda v: v)) is Any
        assert to_type_hint(json(array(integer()))) == list[int]
        assert to_type_hint(intersection(string(), string(max_length=1))) is str


class TestToPydantic:
    def test_simple_model(self):
        User = to_pydantic("User", record({"name": string(), "age": integer()}))
        user = User(name="Alice", age=30)
        assert user.name == "Alice"
        assert user.age == 30

    def test_optional_fields(self):
        User = to_pydantic(
            "User", record({"name": string(), "email": optional(string())})
        )
        user = User(name="Alice")
        assert user.email is None

    def test_pydantic_validation(self):
        User = to_pydantic("User", record({"name": string()}))
        with pytest.raises(ValidationError):
            User()

    def test_nested_containers(self):
        Model = to_pydantic("Model", record({"tags": array(string())}))
        assert Model(tags=["a"]).tags == ["a"]

    def test_requires_record(self):
        with pytest.raises(RuntypeUsageError):
            to_pydantic("X", array(string()))


class TestToSchema:
    def test_any_like(self):
        for rt in [any_(), runtype(lambda v: v), guarded_by(bool), ignore()]:
            assert to_schema(rt) == "any"

    def test_array(self):
        assert to_schema(array(string())) == "string[]"
        assert to_schema(array(boolean())) == "boolean[]"
        assert to_schema(array(union(string(), integer()))) == "(string | number)[]"

    def test_scalars(self):
        assert to_schema(boolean()) == "boolean"
        assert to_schema(integer()) == "number"
        assert to_schema(integer(min=1)) == "number"
        assert to_schema(string()) == "string"
        assert to_schema(string(trim=True)) == "string"
        assert to_schema(json(array(integer()))) == "string"

    def test_dictionary(self):
        assert to_schema(dictionary(string(), boolean())) == "Record<string, boolean>"

    def test_literal(self):
        assert to_schema(literal("abc")) == '"abc"'
        assert to_schema(literal(1)) == "1"
        assert to_schema(literal(False)) == "false"

    def test_record(self):
        expected = "\n".join(["{", "  a: string;", "}"])
        assert to_schema(record({"a": string()})) == expected
        assert to_schema(sloppy_record({"a": string()})) == expected

    def test_optional_and_nested_record(self):
        rt = record({"a": optional(string()), "b": record({"c": integer()})})
        assert to_schema(rt) == "\n".join(
            ["{", "  a?: string;", "  b: {", "    c: number;", "  };", "}"]
        )

    def test_tuple_and_nullable(self):
        assert to_schema(tuple_(string(), nullable(integer()))) == "[string, number | null]"
