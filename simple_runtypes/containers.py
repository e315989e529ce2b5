"""
Container runtypes for simple_runtypes.

Lists, tuples, records (fixed keys) and dictionaries (validated keys), plus
the optional/nullable wrappers. Containers call their children in INTERNAL
mode and add the list index or dict key to the path of a failing child.

Pure containers (all children pure) return the input object itself instead
of building a copy. The forbidden-key and excess-key checks run either way.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .core import Runtype, create_fail, is_fail, propagate_fail
from .errors import RuntypeUsageError, debug_value
from .meta import (
    ArrayMeta,
    DictionaryMeta,
    NullableMeta,
    ObjectMeta,
    OptionalMeta,
    RecordMeta,
    TupleMeta,
)
from .missing import MISSING
from .types import Mode

# Keys that can alter the prototype of the object once the data reaches a
# JavaScript consumer
FORBIDDEN_KEYS = frozenset({"__proto__"})


def _ensure_runtype(rt: Any, where: str) -> None:
    if not isinstance(rt, Runtype):
        raise RuntypeUsageError(f"{where}: expected a runtype, got {type(rt).__name__}")


def _check_object(v: Any, mode: Mode) -> Any:
    if isinstance(v, dict):
        return v

    return create_fail(mode, "expected an object", v)


_object_runtype: Runtype[dict] = Runtype(_check_object, ObjectMeta(), True)


def object_() -> Runtype[dict]:
    """Any dict, contents unchecked."""
    return _object_runtype


def array(
    item: Runtype[Any],
    min_length: int | None = None,
    max_length: int | None = None,
) -> Runtype[list]:
    """
    A list whose elements all match `item`.

    Usage:
        array(string())
        array(integer(), min_length=1, max_length=10)
    """
    _ensure_runtype(item, "array")
    is_pure = item.is_pure

    def check(v: Any, mode: Mode) -> Any:
        if not isinstance(v, list):
            return create_fail(mode, "expected a list", v)

        if max_length is not None and len(v) > max_length:
            return create_fail(
                mode, f"expected the list to contain at most {max_length} elements", v
            )

        if min_length is not None and len(v) < min_length:
            return create_fail(
                mode, f"expected the list to contain at least {min_length} elements", v
            )

        res: list | None = None if is_pure else []

        for i, element in enumerate(v):
            value = item.fn(element, Mode.INTERNAL)

            if is_fail(value):
                return propagate_fail(mode, value, v, i)

            if res is not None:
                res.append(value)

        return v if res is None else res

    return Runtype(check, ArrayMeta(item), is_pure)


def tuple_(*items: Runtype[Any]) -> Runtype[list]:
    """
    A list of fixed length, each position with its own runtype.

    Usage:
        tuple_(string(), integer())(["a", 1])   # -> ["a", 1]
    """
    if not items:
        raise RuntypeUsageError("no runtypes given to tuple_")
    for rt in items:
        _ensure_runtype(rt, "tuple_")

    is_pure = all(rt.is_pure for rt in items)

    def check(v: Any, mode: Mode) -> Any:
        if not isinstance(v, list):
            return create_fail(mode, "expected a list", v)

        if len(v) != len(items):
            return create_fail(
                mode, f"expected a tuple of length {len(items)}, got {len(v)}", v
            )

        res: list | None = None if is_pure else []

        for i, (rt, element) in enumerate(zip(items, v)):
            value = rt.fn(element, Mode.INTERNAL)

            if is_fail(value):
                return propagate_fail(mode, value, v, i)

            if res is not None:
                res.append(value)

        return v if res is None else res

    return Runtype(check, TupleMeta(items), is_pure)


def _record(fields: Mapping[str, Runtype[Any]], sloppy: bool) -> Runtype[dict]:
    fields = dict(fields)
    for key, rt in fields.items():
        _ensure_runtype(rt, f"record field {key!r}")

    is_pure = not sloppy and all(rt.is_pure for rt in fields.values())
    field_items = tuple(fields.items())
    field_keys = frozenset(fields)

    def check(v: Any, mode: Mode) -> Any:
        if not isinstance(v, dict):
            return create_fail(mode, "expected an object", v)

        for key in FORBIDDEN_KEYS:
            if key in v:
                return create_fail(
                    mode, f"invalid key in record: {debug_value(key)}", v
                )

        res: dict | None = None if is_pure else {}

        for key, rt in field_items:
            value = rt.fn(v.get(key, MISSING), Mode.INTERNAL)

            if is_fail(value):
                return propagate_fail(mode, value, v, key)

            if res is not None and value is not MISSING:
                res[key] = value

        if not sloppy and not v.keys() <= field_keys:
            unknown_keys = [k for k in v if k not in field_keys]
            return create_fail(
                mode, f"invalid keys in record {debug_value(unknown_keys)}", v
            )

        return v if res is None else res

    return Runtype(check, RecordMeta(MappingProxyType(fields), sloppy), is_pure)


def record(fields: Mapping[str, Runtype[Any]]) -> Runtype[dict]:
    """
    A dict with exactly the given keys.

    Absent keys are passed to their runtype as MISSING, so use `optional` for
    keys that may be left out. Undeclared keys and "__proto__" are rejected.

    Usage:
        User = record({
            "id": integer(min=1),
            "name": string(trim=True),
            "email": optional(string()),
        })
    """
    return _record(fields, sloppy=False)


def sloppy_record(fields: Mapping[str, Runtype[Any]]) -> Runtype[dict]:
    """
    Like `record` but undeclared keys are dropped instead of rejected.

    Always returns a new dict holding only the declared keys.
    """
    return _record(fields, sloppy=True)


def dictionary(key: Runtype[Any], value: Runtype[Any]) -> Runtype[dict]:
    """
    A dict with arbitrary keys, each key checked by `key` and each value by
    `value`.

    Usage:
        dictionary(string(), integer())
        dictionary(string_as_integer(), string())   # {"1": "a"} -> {1: "a"}
    """
    _ensure_runtype(key, "dictionary key")
    _ensure_runtype(value, "dictionary value")
    is_pure = key.is_pure and value.is_pure

    def check(v: Any, mode: Mode) -> Any:
        if not isinstance(v, dict):
            return create_fail(mode, "expected an object", v)

        res: dict | None = None if is_pure else {}

        for k, element in v.items():
            if k in FORBIDDEN_KEYS:
                return create_fail(
                    mode, f"invalid key in dictionary: {debug_value(k)}", v
                )

            checked_key = key.fn(k, Mode.INTERNAL)

            if is_fail(checked_key):
                return propagate_fail(mode, checked_key, v, k)

            checked_value = value.fn(element, Mode.INTERNAL)

            if is_fail(checked_value):
                return propagate_fail(mode, checked_value, v, k)

            if res is not None:
                res[checked_key] = checked_value

        return v if res is None else res

    return Runtype(check, DictionaryMeta(key, value), is_pure)


def optional(rt: Runtype[Any]) -> Runtype[Any]:
    """A record key that may be absent (MISSING), otherwise matching rt."""
    _ensure_runtype(rt, "optional")

    def check(v: Any, mode: Mode) -> Any:
        if v is MISSING:
            return v

        value = rt.fn(v, Mode.INTERNAL)

        if is_fail(value):
            return propagate_fail(mode, value, v)

        return value

    return Runtype(check, OptionalMeta(rt), rt.is_pure)


def nullable(rt: Runtype[Any]) -> Runtype[Any]:
    """None or a value matching rt."""
    _ensure_runtype(rt, "nullable")

    def check(v: Any, mode: Mode) -> Any:
        if v is None:
            return v

        value = rt.fn(v, Mode.INTERNAL)

        if is_fail(value):
            return propagate_fail(mode, value, v)

        return value

    return Runtype(check, NullableMeta(rt), rt.is_pure)
