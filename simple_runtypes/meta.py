"""
Metadata variants attached to every runtype.

Each runtype kind carries exactly one of these frozen dataclasses. Combinators
(intersection, pick, discriminated_union, ...) and schema projections dispatch
on them with `match` instead of probing runtypes for attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Union

if TYPE_CHECKING:
    from .core import Runtype

Literal_ = str | int | float | bool


@dataclass(frozen=True, slots=True)
class AnyMeta:
    pass


@dataclass(frozen=True, slots=True)
class UnknownMeta:
    pass


@dataclass(frozen=True, slots=True)
class IgnoreMeta:
    pass


@dataclass(frozen=True, slots=True)
class BooleanMeta:
    pass


@dataclass(frozen=True, slots=True)
class NullMeta:
    pass


@dataclass(frozen=True, slots=True)
class NumberMeta:
    pass


@dataclass(frozen=True, slots=True)
class IntegerMeta:
    pass


@dataclass(frozen=True, slots=True)
class StringAsIntegerMeta:
    pass


@dataclass(frozen=True, slots=True)
class StringMeta:
    pass


@dataclass(frozen=True, slots=True)
class LiteralMeta:
    """The literal is kept so discriminated unions can index records by it."""

    literal: Literal_


@dataclass(frozen=True, slots=True)
class EnumMeta:
    values: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class GuardedByMeta:
    pass


@dataclass(frozen=True, slots=True)
class JsonMeta:
    inner: Runtype[Any]


@dataclass(frozen=True, slots=True)
class CustomMeta:
    pass


@dataclass(frozen=True, slots=True)
class ObjectMeta:
    pass


@dataclass(frozen=True, slots=True)
class ArrayMeta:
    item: Runtype[Any]


@dataclass(frozen=True, slots=True)
class TupleMeta:
    items: tuple[Runtype[Any], ...]


@dataclass(frozen=True, slots=True, eq=False)
class RecordMeta:
    """Field map of a record, used by pick, omit, partial and intersection."""

    fields: Mapping[str, Runtype[Any]]
    sloppy: bool = False


@dataclass(frozen=True, slots=True)
class DictionaryMeta:
    key: Runtype[Any]
    value: Runtype[Any]


@dataclass(frozen=True, slots=True)
class OptionalMeta:
    inner: Runtype[Any]


@dataclass(frozen=True, slots=True)
class NullableMeta:
    inner: Runtype[Any]


@dataclass(frozen=True, slots=True)
class UnionMeta:
    alternatives: tuple[Runtype[Any], ...]


@dataclass(frozen=True, slots=True)
class DiscriminatedUnionMeta:
    key: str
    alternatives: tuple[Runtype[Any], ...]


@dataclass(frozen=True, slots=True)
class IntersectionMeta:
    a: Runtype[Any]
    b: Runtype[Any]


@dataclass(frozen=True, slots=True)
class LazyMeta:
    """Deferred runtype, used for self-referencing definitions."""

    resolve: Callable[[], Runtype[Any]]


Meta = Union[
    AnyMeta,
    UnknownMeta,
    IgnoreMeta,
    BooleanMeta,
    NullMeta,
    NumberMeta,
    IntegerMeta,
    StringAsIntegerMeta,
    StringMeta,
    LiteralMeta,
    EnumMeta,
    GuardedByMeta,
    JsonMeta,
    CustomMeta,
    ObjectMeta,
    ArrayMeta,
    TupleMeta,
    RecordMeta,
    DictionaryMeta,
    OptionalMeta,
    NullableMeta,
    UnionMeta,
    DiscriminatedUnionMeta,
    IntersectionMeta,
    LazyMeta,
]
