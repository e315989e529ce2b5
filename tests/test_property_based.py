"""Property-based tests for the runtype protocol."""

from hypothesis import given
from hypothesis import strategies as st

from simple_runtypes import (
    SAFE_INTEGER_MAX,
    Err,
    Ok,
    array,
    boolean,
    dictionary,
    integer,
    literal,
    optional,
    record,
    string,
    union,
    use,
)

safe_integers = st.integers(min_value=-SAFE_INTEGER_MAX, max_value=SAFE_INTEGER_MAX)

FIELDS = {"name", "n", "tags", "flag"}

Item = record(
    {
        "name": string(),
        "n": integer(),
        "tags": array(string()),
        "flag": optional(boolean()),
    }
)

TrimmedItem = record(
    {
        "name": string(trim=True),
        "n": integer(),
        "tags": array(string(trim=True)),
        "flag": optional(boolean()),
    }
)

items = st.fixed_dictionaries(
    {"name": st.text(), "n": safe_integers, "tags": st.lists(st.text())},
    optional={"flag": st.booleans()},
)


class TestPropertyBasedCore:
    @given(items)
    def test_pure_record_returns_input(self, value):
        assert Item.is_pure
        assert Item(value) is value

    @given(items)
    def test_impure_record_is_idempotent(self, value):
        once = TrimmedItem(value)
        twice = TrimmedItem(once)
        assert twice == once
        assert set(once) <= FIELDS

    @given(items, st.text().filter(lambda k: k not in FIELDS), safe_integers)
    def test_excess_keys_always_rejected(self, value, key, extra):
        result = use(Item, {**value, key: extra})
        assert isinstance(result, Err)
        assert result.error.path == []

    @given(items, st.text())
    def test_proto_always_rejected(self, value, proto_value):
        result = use(Item, {**value, "__proto__": proto_value})
        assert isinstance(result, Err)
        assert "__proto__" in result.error.reason

    @given(st.lists(safe_integers))
    def test_pure_array_returns_input(self, value):
        assert array(integer())(value) is value

    @given(st.dictionaries(st.text().filter(lambda k: k != "__proto__"), safe_integers))
    def test_pure_dictionary_returns_input(self, value):
        assert dictionary(string(), integer())(value) is value

    @given(safe_integers.filter(lambda n: n not in (1, 2)))
    def test_union_reports_last_failure(self, n):
        result = use(union(literal(1), literal(2)), n)
        assert isinstance(result, Err)
        assert result.error.reason == "expected a literal: 2"

    @given(st.lists(items, min_size=1), st.data())
    def test_failure_path_points_at_element(self, values, data):
        index = data.draw(st.integers(min_value=0, max_value=len(values) - 1))
        broken = [dict(v) for v in values]
        broken[index]["n"] = "not a number"

        result = use(array(Item), broken)
        assert isinstance(result, Err)
        assert result.error.path == [index, "n"]
        assert result.error.value is broken

        assert isinstance(use(array(Item), values), Ok)
