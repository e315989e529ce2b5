"""
Core runtype protocol for simple_runtypes.

A runtype wraps a check function `fn(value, mode)`. Called at the top level it
returns the accepted value or raises RuntypeError. Composite runtypes call
their children with Mode.INTERNAL, which makes a failing child return a Fail
marker instead of raising. The marker collects path keys while it travels back
up and is turned into a single RuntypeError at the outermost call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, NoReturn, TypeVar

from .errors import RuntypeError, RuntypeUsageError
from .meta import CustomMeta, Meta
from .types import CheckFn, Err, Mode, Ok, Path, PathKey

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True, eq=False)
class Fail:
    """
    Marker returned by a runtype that failed in INTERNAL mode.

    Only `is_fail` should be used to recognize it: it compares the exact type,
    so no application value can pass for a Fail by overriding `__class__`.
    """

    reason: str
    path: Path = field(default_factory=list)


@dataclass(frozen=True, slots=True, eq=False)
class Runtype(Generic[T]):
    """
    Immutable validator.

    Attributes:
        fn: Check function `fn(value, mode)` returning the accepted value or,
            in INTERNAL mode, a Fail
        meta: Kind-specific metadata (record fields, literal value, ...)
        is_pure: True if every accepted input is returned as-is (same object)
    """

    fn: CheckFn
    meta: Meta
    is_pure: bool = False

    def __call__(self, value: Any) -> T:
        """
        Validate a value.

        Returns:
            The accepted value (the input itself for pure runtypes)

        Raises:
            RuntypeError: if the value does not match
        """
        return self.fn(value, Mode.EXTERNAL)


def _invalid_mode(mode: Any) -> RuntypeUsageError:
    return RuntypeUsageError(
        f"mode must be Mode.EXTERNAL or Mode.INTERNAL, not {mode!r}"
    )


def _raise(reason: str, top_level_value: Any, path: Path) -> NoReturn:
    logger.debug("runtype check failed: %s (path=%r)", reason, path)
    raise RuntypeError(reason, value=top_level_value, path=path)


def create_fail(mode: Mode, reason: str, top_level_value: Any = None) -> Fail:
    """
    Report a failed check.

    Raises RuntypeError in EXTERNAL mode, otherwise returns a fresh Fail.
    """
    if mode is Mode.INTERNAL:
        return Fail(reason)
    if mode is Mode.EXTERNAL:
        _raise(reason, top_level_value, [])
    raise _invalid_mode(mode)


def propagate_fail(
    mode: Mode,
    failure: Fail,
    top_level_value: Any = None,
    key: PathKey | None = None,
) -> Fail:
    """
    Pass a child's Fail up to the caller.

    `key` (list index, record field, dict key) is appended to the path, so
    paths are built leaf-to-root while unwinding. In EXTERNAL mode the path is
    reversed and raised as part of a RuntypeError.
    """
    if key is not None:
        failure.path.append(key)

    if mode is Mode.INTERNAL:
        return failure
    if mode is Mode.EXTERNAL:
        _raise(failure.reason, top_level_value, failure.path[::-1])
    raise _invalid_mode(mode)


def fail(reason: str) -> Fail:
    """Create a Fail to return from a custom runtype function."""
    return create_fail(Mode.INTERNAL, reason)


def is_fail(value: Any) -> bool:
    """Check whether a returned value is a Fail."""
    return type(value) is Fail


def runtype(fn: Callable[[Any], Any], is_pure: bool = False) -> Runtype[Any]:
    """
    Construct a runtype from a validation function.

    `fn` receives the raw value and returns the accepted value or a Fail
    created with `fail()`.

    Usage:
        def check_even(v):
            if isinstance(v, int) and v % 2 == 0:
                return v
            return fail("expected an even integer")

        even = runtype(check_even, is_pure=True)
    """

    def check(v: Any, mode: Mode) -> Any:
        res = fn(v)
        if is_fail(res):
            return propagate_fail(mode, res, v)
        return res

    return Runtype(check, CustomMeta(), is_pure)


def use(rt: Runtype[T], value: Any) -> Ok[T] | Err[RuntypeError]:
    """
    Validate without raising.

    Returns:
        Ok(accepted value) if validation passes
        Err(RuntypeError) with root-to-leaf path if it fails
    """
    result = rt.fn(value, Mode.INTERNAL)

    if is_fail(result):
        return Err(RuntypeError(result.reason, value=value, path=result.path[::-1]))

    return Ok(result)
