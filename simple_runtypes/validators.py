"""
Primitive runtypes for simple_runtypes.

Provides factory functions that return Runtype instances for scalar values.
"""

from __future__ import annotations

import json as _json
import math
import re
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from .core import Runtype, create_fail, is_fail, propagate_fail
from .errors import RuntypeUsageError, debug_value
from .meta import (
    AnyMeta,
    BooleanMeta,
    EnumMeta,
    GuardedByMeta,
    IgnoreMeta,
    IntegerMeta,
    JsonMeta,
    LiteralMeta,
    NullMeta,
    NumberMeta,
    StringAsIntegerMeta,
    StringMeta,
    UnknownMeta,
)
from .missing import MISSING
from .types import Mode

SAFE_INTEGER_MAX = 2**53 - 1

_INTEGER_STRING = re.compile(r"[+-]?(?:0|[1-9][0-9]*)")


def _is_number(v: Any) -> bool:
    # bool is an int subclass but never a number here
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _is_safe_integer(v: Any) -> bool:
    return (
        isinstance(v, int)
        and not isinstance(v, bool)
        and -SAFE_INTEGER_MAX <= v <= SAFE_INTEGER_MAX
    )


def number(
    allow_nan: bool = False,
    allow_infinity: bool = False,
    min: float | None = None,
    max: float | None = None,
) -> Runtype[float]:
    """
    An int or float. By default NaN and infinite values are rejected.

    Usage:
        number()
        number(min=0, max=1)
        number(allow_nan=True, allow_infinity=True)
    """

    def check(v: Any, mode: Mode) -> Any:
        if not _is_number(v):
            return create_fail(mode, "expected a number", v)

        if not allow_nan and isinstance(v, float) and math.isnan(v):
            return create_fail(mode, "expected a number that is not NaN", v)

        if not allow_infinity and isinstance(v, float) and math.isinf(v):
            return create_fail(mode, "expected a finite number", v)

        if min is not None and v < min:
            return create_fail(mode, f"expected number to be >= {min}", v)

        if max is not None and v > max:
            return create_fail(mode, f"expected number to be <= {max}", v)

        return v

    return Runtype(check, NumberMeta(), True)


def _check_integer(v: Any, mode: Mode) -> Any:
    if _is_safe_integer(v):
        return v

    return create_fail(mode, "expected a safe integer", v)


_integer_runtype: Runtype[int] = Runtype(_check_integer, IntegerMeta(), True)


def integer(min: int | None = None, max: int | None = None) -> Runtype[int]:
    """
    An int within +/- (2**53 - 1). Floats and bools are rejected.

    Usage:
        integer()
        integer(min=1)
        integer(min=0, max=100)
    """
    if min is None and max is None:
        return _integer_runtype

    def check(v: Any, mode: Mode) -> Any:
        n = _check_integer(v, Mode.INTERNAL)

        if is_fail(n):
            return propagate_fail(mode, n, v)

        if min is not None and n < min:
            return create_fail(mode, f"expected the integer to be >= {min}", v)

        if max is not None and n > max:
            return create_fail(mode, f"expected the integer to be <= {max}", v)

        return n

    return Runtype(check, IntegerMeta(), True)


def _check_string_as_integer(v: Any, mode: Mode) -> Any:
    if not isinstance(v, str):
        return create_fail(mode, "expected a string that contains a safe integer", v)

    if not _INTEGER_STRING.fullmatch(v):
        return create_fail(
            mode,
            "expected string to contain only the safe integer, "
            "not additional characters, whitespace or leading zeros",
            v,
        )

    n = int(v)
    if not _is_safe_integer(n):
        return create_fail(mode, "expected a safe integer", v)

    return n


_string_as_integer_runtype: Runtype[int] = Runtype(
    _check_string_as_integer, StringAsIntegerMeta(), False
)


def string_as_integer(min: int | None = None, max: int | None = None) -> Runtype[int]:
    """
    A string that is parsed as an integer.

    Parsing is strict: whitespace, leading zeros and exponents are rejected.
    A leading '+' or '-' is allowed and "-0" parses as 0.

    Usage:
        string_as_integer()("42")     # -> 42
        string_as_integer()("042")    # RuntypeError
        string_as_integer(min=1)("0") # RuntypeError
    """
    if min is None and max is None:
        return _string_as_integer_runtype

    def check(v: Any, mode: Mode) -> Any:
        n = _check_string_as_integer(v, Mode.INTERNAL)

        if is_fail(n):
            return propagate_fail(mode, n, v)

        if min is not None and n < min:
            return create_fail(mode, f"expected the integer to be >= {min}", v)

        if max is not None and n > max:
            return create_fail(mode, f"expected the integer to be <= {max}", v)

        return n

    return Runtype(check, StringAsIntegerMeta(), False)


def _check_string(v: Any, mode: Mode) -> Any:
    if isinstance(v, str):
        return v

    return create_fail(mode, "expected a string", v)


_string_runtype: Runtype[str] = Runtype(_check_string, StringMeta(), True)


def string(
    min_length: int | None = None,
    max_length: int | None = None,
    trim: bool = False,
    match: str | re.Pattern[str] | None = None,
) -> Runtype[str]:
    """
    A string.

    Args:
        min_length: Reject strings shorter than that
        max_length: Reject strings longer than that
        trim: Strip leading and trailing whitespace (makes the runtype impure)
        match: Reject strings in which this regex is not found

    Length and pattern are checked before trimming.
    """
    if min_length is None and max_length is None and not trim and match is None:
        return _string_runtype

    pattern = re.compile(match) if isinstance(match, str) else match

    def check(v: Any, mode: Mode) -> Any:
        s = _check_string(v, Mode.INTERNAL)

        if is_fail(s):
            return propagate_fail(mode, s, v)

        if min_length is not None and len(s) < min_length:
            return create_fail(
                mode, f"expected the string length to be at least {min_length}", v
            )

        if max_length is not None and len(s) > max_length:
            return create_fail(
                mode, f"expected the string length to not exceed {max_length}", v
            )

        if pattern is not None and pattern.search(s) is None:
            return create_fail(
                mode, f"expected the string to match {pattern.pattern!r}", v
            )

        return s.strip() if trim else s

    return Runtype(check, StringMeta(), not trim)


def _check_boolean(v: Any, mode: Mode) -> Any:
    if v is True or v is False:
        return v

    return create_fail(mode, "expected a boolean", v)


_boolean_runtype: Runtype[bool] = Runtype(_check_boolean, BooleanMeta(), True)


def boolean() -> Runtype[bool]:
    """True or False."""
    return _boolean_runtype


def _check_null(v: Any, mode: Mode) -> Any:
    if v is None:
        return v

    return create_fail(mode, "expected null", v)


_null_runtype: Runtype[None] = Runtype(_check_null, NullMeta(), True)


def null() -> Runtype[None]:
    """None (JSON null)."""
    return _null_runtype


def literal(lit: str | int | float | bool) -> Runtype[Any]:
    """
    A literal str, int, float or bool.

    The comparison is type-strict: literal(1) rejects True and 1.0.
    """
    if not isinstance(lit, (str, int, float)):
        raise RuntypeUsageError(
            f"literal must be a str, int, float or bool, not {type(lit).__name__}"
        )

    lit_type = type(lit)

    def check(v: Any, mode: Mode) -> Any:
        if type(v) is lit_type and v == lit:
            return v

        return create_fail(mode, f"expected a literal: {debug_value(lit)}", v)

    return Runtype(check, LiteralMeta(lit), True)


def enum_(values: type[Enum] | Mapping[Any, Any] | Iterable[Any]) -> Runtype[Any]:
    """
    Any value of an Enum class, a mapping or an iterable.

    Members are indexed by (type, value) for an O(1) type-strict lookup.
    The accepted raw value is returned, not the Enum member.

    Usage:
        class Color(Enum):
            RED = "red"
            GREEN = "green"

        enum_(Color)("red")   # -> "red"
        enum_([1, 2, 3])(2)   # -> 2
    """
    if isinstance(values, type) and issubclass(values, Enum):
        members = tuple(m.value for m in values)
    elif isinstance(values, Mapping):
        members = tuple(values.values())
    else:
        members = tuple(values)

    index = frozenset((type(m), m) for m in members)
    reason = f"expected a value that belongs to the enum {debug_value(list(members))}"

    def check(v: Any, mode: Mode) -> Any:
        try:
            found = (type(v), v) in index
        except TypeError:  # unhashable
            found = False

        if found:
            return v

        return create_fail(mode, reason, v)

    return Runtype(check, EnumMeta(members), True)


def string_literal_union(*values: str) -> Runtype[str]:
    """
    One of the given strings.

    Usage:
        string_literal_union("GET", "POST", "PUT")
    """
    if not values:
        raise RuntypeUsageError("no values given to string_literal_union")
    if not all(isinstance(v, str) for v in values):
        raise RuntypeUsageError("string_literal_union only accepts strings")

    index = frozenset(values)

    def check(v: Any, mode: Mode) -> Any:
        if isinstance(v, str) and v in index:
            return v

        return create_fail(mode, f"expected one of {list(values)}", v)

    return Runtype(check, EnumMeta(values), True)


def any_() -> Runtype[Any]:
    """A value to check later."""
    return Runtype(lambda v, mode: v, AnyMeta(), True)


def unknown() -> Runtype[Any]:
    """A value to check later (to be narrowed by the caller)."""
    return Runtype(lambda v, mode: v, UnknownMeta(), True)


def ignore() -> Runtype[Any]:
    """A value to ignore: always results in MISSING, so records drop the key."""
    return Runtype(lambda v, mode: MISSING, IgnoreMeta(), False)


def guarded_by(predicate: Callable[[Any], bool]) -> Runtype[Any]:
    """
    A runtype based on a predicate (e.g. a TypeGuard function).

    Exceptions raised by the predicate are not caught.
    """

    def check(v: Any, mode: Mode) -> Any:
        if not predicate(v):
            return create_fail(mode, "expected typeguard to return true", v)

        return v

    return Runtype(check, GuardedByMeta(), True)


def json(rt: Runtype[Any]) -> Runtype[Any]:
    """
    A string containing JSON that, once parsed, matches rt.

    Usage:
        json(array(integer()))("[1, 2]")   # -> [1, 2]
    """

    def check(v: Any, mode: Mode) -> Any:
        if not isinstance(v, str):
            return create_fail(mode, "expected a json string", v)

        try:
            data = _json.loads(v)
        except ValueError as e:
            reason = f"expected a json string: {e}"
        else:
            res = rt.fn(data, Mode.INTERNAL)
            if is_fail(res):
                return propagate_fail(mode, res, v)
            return res

        return create_fail(mode, reason, v)

    return Runtype(check, JsonMeta(rt), False)
