"""
Tests for RuntypeError and the formatting helpers.
"""

import pytest

from simple_runtypes import (
    MISSING,
    RuntypeError,
    any_,
    array,
    debug_value,
    dictionary,
    get_formatted_error,
    get_formatted_error_path,
    get_formatted_error_value,
    integer,
    record,
)


class TestRuntypeError:
    def test_is_value_error(self):
        with pytest.raises(ValueError):
            integer()("x")

    def test_root_failure_has_empty_path(self):
        with pytest.raises(RuntypeError) as exc_info:
            integer()("x")
        assert exc_info.value.path == []
        assert str(exc_info.value) == "expected a safe integer"

    def test_value_is_top_level_input(self):
        payload = [{"a": 1}, {"a": "x"}]
        with pytest.raises(RuntypeError) as exc_info:
            array(record({"a": integer()}))(payload)
        assert exc_info.value.value is payload
        assert exc_info.value.path == [1, "a"]


class TestFormatting:
    def test_path(self):
        e = RuntypeError("bad", path=["user", "tags", 1])
        assert get_formatted_error_path(e) == "user.tags[1]"

    def test_path_with_odd_keys(self):
        e = RuntypeError("bad", path=["headers", "x-api-key"])
        assert get_formatted_error_path(e) == 'headers["x-api-key"]'

    def test_path_with_trailing_newline(self):
        e = RuntypeError("bad", path=["a\n"])
        assert get_formatted_error_path(e) == '["a\\n"]'

    def test_path_with_non_string_key(self):
        rt = dictionary(any_(), integer())
        with pytest.raises(RuntypeError) as exc_info:
            rt({("a", 1): "x"})
        assert exc_info.value.path == [("a", 1)]
        assert get_formatted_error_path(exc_info.value) == '[["a", 1]]'

    def test_path_starting_with_index(self):
        e = RuntypeError("bad", path=[0, "a"])
        assert get_formatted_error_path(e) == "[0].a"

    def test_path_of_other_errors(self):
        assert get_formatted_error_path(ValueError()) == "(error is not a RuntypeError!)"

    def test_value(self):
        e = RuntypeError("bad", value={"a": 1})
        assert get_formatted_error_value(e) == '{"a": 1}'

    def test_error(self):
        e = RuntypeError("bad", value={"a": 1}, path=["a"])
        assert get_formatted_error(e) == 'RuntypeError: bad at `value.a` in `{"a": 1}`'

    def test_error_at_root_and_index(self):
        assert get_formatted_error(RuntypeError("bad", value=1)) == (
            "RuntypeError: bad at `value` in `1`"
        )
        assert get_formatted_error(RuntypeError("bad", value=[1], path=[0])) == (
            "RuntypeError: bad at `value[0]` in `[1]`"
        )


class TestDebugValue:
    def test_json(self):
        assert debug_value({"a": [1, None]}) == '{"a": [1, null]}'

    def test_truncates(self):
        s = debug_value("x" * 600, max_length=10)
        assert len(s) == 10
        assert s.endswith("…")

    def test_fallback_to_repr(self):
        assert debug_value({1, 2}) == "{1, 2}"

    def test_missing(self):
        assert debug_value(MISSING) == "MISSING"
