"""
Schema projections for simple_runtypes.

Provides to_type_hint(), to_pydantic() and to_schema(), each dispatching on
the runtype's meta variant.
"""

from __future__ import annotations

import json
import re
from typing import Any, Literal, Union
from typing import Optional as TypingOptional

from pydantic import create_model

from .core import Runtype
from .errors import RuntypeUsageError, debug_value
from .meta import (
    AnyMeta,
    ArrayMeta,
    BooleanMeta,
    CustomMeta,
    DictionaryMeta,
    DiscriminatedUnionMeta,
    EnumMeta,
    GuardedByMeta,
    IgnoreMeta,
    IntegerMeta,
    IntersectionMeta,
    JsonMeta,
    LazyMeta,
    LiteralMeta,
    NullableMeta,
    NullMeta,
    NumberMeta,
    ObjectMeta,
    OptionalMeta,
    RecordMeta,
    StringAsIntegerMeta,
    StringMeta,
    TupleMeta,
    UnionMeta,
    UnknownMeta,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def to_type_hint(rt: Runtype[Any]) -> Any:
    """
    Return the Python annotation matching the values rt accepts.

    Usage:
        to_type_hint(array(string()))           # list[str]
        to_type_hint(union(integer(), null()))  # Union[int, None]
    """
    match rt.meta:
        case BooleanMeta():
            return bool
        case NullMeta():
            return type(None)
        case NumberMeta():
            return float
        case IntegerMeta() | StringAsIntegerMeta():
            return int
        case StringMeta():
            return str
        case LiteralMeta(literal=lit):
            return Literal[lit]
        case EnumMeta(values=values):
            return Literal[values]
        case JsonMeta(inner=inner):
            return to_type_hint(inner)
        case ObjectMeta() | RecordMeta():
            return dict[str, Any]
        case ArrayMeta(item=item):
            return list[to_type_hint(item)]  # type: ignore[misc]
        case TupleMeta(items=items):
            return tuple[tuple(to_type_hint(i) for i in items)]  # type: ignore[misc]
        case DictionaryMeta(key=key, value=value):
            return dict[to_type_hint(key), to_type_hint(value)]  # type: ignore[misc]
        case OptionalMeta(inner=inner) | NullableMeta(inner=inner):
            return TypingOptional[to_type_hint(inner)]
        case UnionMeta(alternatives=alternatives) | DiscriminatedUnionMeta(
            alternatives=alternatives
        ):
            return Union[tuple(to_type_hint(a) for a in alternatives)]
        case IntersectionMeta(b=b):
            # the second runtype's result is what an intersection returns
            return to_type_hint(b)
        case AnyMeta() | UnknownMeta() | IgnoreMeta() | GuardedByMeta():
            return Any
        case CustomMeta() | LazyMeta():
            return Any

    return Any


def to_pydantic(name: str, rt: Runtype[Any]) -> type:
    """
    Compile a record runtype to a Pydantic model.

    Args:
        name: Name of the generated model class
        rt: A record (or sloppy record) runtype

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", record({
            "name": string(),
            "email": optional(string()),
        }))
        user = User(name="Alice")
    """
    if not isinstance(rt, Runtype) or not isinstance(rt.meta, RecordMeta):
        raise RuntypeUsageError("to_pydantic: expected a record runtype")

    fields: dict[str, Any] = {}

    for key, field_rt in rt.meta.fields.items():
        fields[key] = _extract_pydantic_field(field_rt)

    return create_model(name, **fields)


def _extract_pydantic_field(rt: Runtype[Any]) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from a record field."""
    match rt.meta:
        case OptionalMeta(inner=inner):
            return (TypingOptional[to_type_hint(inner)], None)

    return (to_type_hint(rt), ...)


def to_schema(rt: Runtype[Any]) -> str:
    """
    Render rt as a TypeScript-like type expression.

    Usage:
        to_schema(array(string()))                    # 'string[]'
        to_schema(dictionary(string(), boolean()))    # 'Record<string, boolean>'
        to_schema(record({"a": string()}))            # '{\\n  a: string;\\n}'
    """
    match rt.meta:
        case BooleanMeta():
            return "boolean"
        case NullMeta():
            return "null"
        case NumberMeta() | IntegerMeta() | StringAsIntegerMeta():
            return "number"
        case StringMeta() | JsonMeta():
            return "string"
        case LiteralMeta(literal=lit):
            return debug_value(lit)
        case EnumMeta(values=values):
            return " | ".join(debug_value(v) for v in values)
        case ObjectMeta():
            return "object"
        case ArrayMeta(item=item):
            inner = to_schema(item)
            if " | " in inner or " & " in inner:
                inner = f"({inner})"
            return f"{inner}[]"
        case TupleMeta(items=items):
            return "[" + ", ".join(to_schema(i) for i in items) + "]"
        case RecordMeta(fields=fields):
            return _record_to_schema(fields)
        case DictionaryMeta(key=key, value=value):
            return f"Record<{to_schema(key)}, {to_schema(value)}>"
        case OptionalMeta(inner=inner):
            return f"{to_schema(inner)} | undefined"
        case NullableMeta(inner=inner):
            return f"{to_schema(inner)} | null"
        case UnionMeta(alternatives=alternatives) | DiscriminatedUnionMeta(
            alternatives=alternatives
        ):
            return " | ".join(to_schema(a) for a in alternatives)
        case IntersectionMeta(a=a, b=b):
            return f"{to_schema(a)} & {to_schema(b)}"

    return "any"


def _record_to_schema(fields: Any) -> str:
    if not fields:
        return "{}"

    lines = ["{"]
    for key, field_rt in fields.items():
        is_optional = isinstance(field_rt.meta, OptionalMeta)
        inner = field_rt.meta.inner if is_optional else field_rt
        name = key if _IDENTIFIER.match(key) else json.dumps(key)
        body = to_schema(inner).replace("\n", "\n  ")
        lines.append(f"  {name}{'?' if is_optional else ''}: {body};")
    lines.append("}")

    return "\n".join(lines)
