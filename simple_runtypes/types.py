"""
Type definitions for simple_runtypes.

Provides the validation mode flag, a minimal Result type (Ok/Err) and type
aliases shared by all runtypes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class Mode(Enum):
    """How a runtype reports a failed check."""

    EXTERNAL = "external"  # Raise RuntypeError at the top-level call
    INTERNAL = "internal"  # Return a Fail marker to the enclosing runtype


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


# Type aliases
PathKey = str | int
Path = list[PathKey]
CheckFn = Callable[[Any, Mode], Any]
