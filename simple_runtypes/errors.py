"""
Errors raised by runtypes and helpers to format them for logs.
"""

from __future__ import annotations

import json
import re
from typing import Any

from .missing import MISSING
from .types import Path

DEFAULT_DEBUG_LENGTH = 512

_PLAIN_KEY = re.compile(r"[A-Za-z0-9_]+")


class RuntypeError(ValueError):
    """
    Raised when a value does not match a runtype.

    Attributes:
        reason: Why the check failed
        path: Keys from the root of the input to the failing value
              (empty if the root value itself failed)
        value: The original top-level input, never a nested sub-value

    Use `get_formatted_error_path`, `get_formatted_error_value` and
    `get_formatted_error` to turn path and value into a loggable string.
    """

    def __init__(self, reason: str, value: Any = None, path: Path | None = None):
        super().__init__(reason)
        self.reason = reason
        self.value = value
        self.path: Path = path if path is not None else []

    def __repr__(self) -> str:
        return f"RuntypeError({self.reason!r}, path={self.path!r})"


class RuntypeUsageError(Exception):
    """Raised when runtypes are combined in a way that cannot work."""


def debug_value(v: Any, max_length: int = DEFAULT_DEBUG_LENGTH) -> str:
    """Render v as JSON (or repr as fallback), capped at max_length chars."""
    if v is MISSING:
        return "MISSING"

    try:
        s = json.dumps(v)
    except (TypeError, ValueError):
        s = repr(v)

    if len(s) > max_length:
        return s[: max_length - 1] + "…"
    return s


def get_formatted_error_path(e: RuntypeError) -> str:
    """
    Return the path at which the error occurred.

    Usage:
        ["user", "tags", 1]      -> "user.tags[1]"
        ["headers", "x-api-key"] -> 'headers["x-api-key"]'
    """
    if not isinstance(e, RuntypeError):
        return "(error is not a RuntypeError!)"

    parts = []
    for key in e.path:
        if isinstance(key, int):
            parts.append(f"[{key}]")
        elif not isinstance(key, str):
            parts.append(f"[{debug_value(key)}]")
        elif _PLAIN_KEY.fullmatch(key):
            parts.append(f".{key}")
        else:
            parts.append(f"[{json.dumps(key)}]")

    return "".join(parts).removeprefix(".")


def get_formatted_error_value(
    e: RuntypeError, max_length: int = DEFAULT_DEBUG_LENGTH
) -> str:
    """Return a string representation of the value that failed the check."""
    return debug_value(e.value, max_length)


def get_formatted_error(e: RuntypeError, max_length: int = DEFAULT_DEBUG_LENGTH) -> str:
    """Return reason, path and (truncated) value as a single line."""
    path = get_formatted_error_path(e)
    location = f"value.{path}" if path and not path.startswith("[") else f"value{path}"
    return (
        f"RuntypeError: {e.reason} at `{location}` "
        f"in `{get_formatted_error_value(e, max_length)}`"
    )
