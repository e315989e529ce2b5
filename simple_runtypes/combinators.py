"""
Algebraic combinators for simple_runtypes.

Unions, discriminated unions, intersections and the record transforms
pick / omit / partial. Combinators that need structure (record fields, tag
literals, union alternatives) read it from the runtype's meta variant.
"""

from __future__ import annotations

import logging
from functools import cache
from typing import Any, Callable

from .containers import _ensure_runtype, nullable, optional, record, sloppy_record
from .core import Runtype, create_fail, is_fail, propagate_fail
from .errors import RuntypeUsageError, debug_value
from .meta import (
    DiscriminatedUnionMeta,
    IntersectionMeta,
    LazyMeta,
    LiteralMeta,
    NullableMeta,
    OptionalMeta,
    RecordMeta,
    UnionMeta,
)
from .missing import MISSING
from .types import Mode

logger = logging.getLogger(__name__)

# bool is excluded: True == 1 would collide with an int tag
_TAG_TYPES = (str, int, float)


def union(*alternatives: Runtype[Any]) -> Runtype[Any]:
    """
    A value matching any of the alternatives, tried in order.

    The first success is returned. If all alternatives fail, the failure of
    the last alternative is reported.

    Usage:
        union(string(), integer())
        union(literal("on"), literal("off"), boolean())
    """
    if not alternatives:
        raise RuntypeUsageError("no runtypes given to union")

    for rt in alternatives:
        _ensure_runtype(rt, "union")

    is_pure = all(rt.is_pure for rt in alternatives)

    def check(v: Any, mode: Mode) -> Any:
        last_fail = None

        for rt in alternatives:
            value = rt.fn(v, Mode.INTERNAL)

            if not is_fail(value):
                return value

            last_fail = value

        return propagate_fail(mode, last_fail, v)

    return Runtype(check, UnionMeta(alternatives), is_pure)


def _tag_of(key: str, rt: Runtype[Any]) -> str | int | float:
    match rt.meta:
        case RecordMeta(fields=fields) if key in fields:
            tag_runtype = fields[key]
        case RecordMeta():
            raise RuntypeUsageError(
                f"broken record type definition, record has no field {key!r}"
            )
        case _:
            raise RuntypeUsageError(
                "discriminated_union: expected record runtypes, "
                f"got {type(rt.meta).__name__}"
            )

    match tag_runtype.meta:
        case LiteralMeta(literal=tag) if type(tag) in _TAG_TYPES:
            return tag
        case LiteralMeta(literal=tag):
            raise RuntypeUsageError(
                f"broken record type definition, [{key!r}] must be a string or "
                f"number, not {debug_value(tag)}"
            )
        case _:
            raise RuntypeUsageError(
                f"broken record type definition, [{key!r}] is not a literal"
            )


def discriminated_union(key: str, *alternatives: Runtype[Any]) -> Runtype[Any]:
    """
    A tagged union of records, dispatched on the literal value at `key`.

    The alternatives must be `record` runtypes whose `key` field is a str or
    number `literal`. A lookup table is built once, so each check costs one
    dict lookup no matter how many alternatives there are.

    Usage:
        Shape = discriminated_union(
            "kind",
            record({"kind": literal("circle"), "radius": number()}),
            record({"kind": literal("square"), "size": number()}),
        )
    """
    if not alternatives:
        raise RuntypeUsageError("no runtypes given to discriminated_union")

    table: dict[str | int | float, Runtype[Any]] = {}

    for rt in alternatives:
        _ensure_runtype(rt, "discriminated_union")
        tag = _tag_of(key, rt)

        if tag in table:
            raise RuntypeUsageError(
                f"duplicate tag {debug_value(tag)} in discriminated union on {key!r}"
            )

        table[tag] = rt

    logger.debug(
        "built discriminated union on %r with tags %r", key, list(table.keys())
    )

    is_pure = all(rt.is_pure for rt in alternatives)

    def check(v: Any, mode: Mode) -> Any:
        if not isinstance(v, dict):
            return create_fail(mode, "expected an object", v)

        tag = v.get(key, MISSING)
        rt = table.get(tag) if type(tag) in _TAG_TYPES else None

        if rt is None:
            return create_fail(
                mode,
                f"no runtype found for discriminated union tag {key}: "
                f"{debug_value(tag)}",
                v,
            )

        value = rt.fn(v, Mode.INTERNAL)

        if is_fail(value):
            return propagate_fail(mode, value, v)

        return value

    return Runtype(check, DiscriminatedUnionMeta(key, alternatives), is_pure)


def _record_intersection2(a: RecordMeta, b: RecordMeta) -> Runtype[Any]:
    fields: dict[str, Runtype[Any]] = {}

    for k in dict.fromkeys([*a.fields, *b.fields]):
        if k in a.fields and k in b.fields:
            fields[k] = _intersection2(a.fields[k], b.fields[k])
        elif k in a.fields:
            fields[k] = a.fields[k]
        else:
            fields[k] = b.fields[k]

    # results in a new record type
    if a.sloppy and b.sloppy:
        return sloppy_record(fields)
    return record(fields)


def _union_intersection2(
    u: Runtype[Any], other: Runtype[Any], union_first: bool
) -> Runtype[Any]:
    def combine(alternative: Runtype[Any]) -> Runtype[Any]:
        if union_first:
            return _intersection2(alternative, other)
        return _intersection2(other, alternative)

    # the intersection distributes over the union
    match u.meta:
        case DiscriminatedUnionMeta(key=key, alternatives=alternatives) if (
            key not in other.meta.fields
        ):
            return discriminated_union(key, *map(combine, alternatives))
        case DiscriminatedUnionMeta(alternatives=alternatives):
            # the merged tag field is an intersection, not a literal
            return union(*map(combine, alternatives))
        case UnionMeta(alternatives=alternatives):
            return union(*map(combine, alternatives))

    raise RuntypeUsageError(
        f"intersection: expected a union runtype, got {type(u.meta).__name__}"
    )


def _intersection2(a: Runtype[Any], b: Runtype[Any]) -> Runtype[Any]:
    match a.meta, b.meta:
        case RecordMeta(), RecordMeta():
            return _record_intersection2(a.meta, b.meta)
        case (UnionMeta() | DiscriminatedUnionMeta()), RecordMeta():
            return _union_intersection2(a, b, union_first=True)
        case RecordMeta(), (UnionMeta() | DiscriminatedUnionMeta()):
            return _union_intersection2(b, a, union_first=False)
        case (RecordMeta(), _) | (_, RecordMeta()):
            raise RuntypeUsageError(
                "intersection: cannot intersect a base type with a record"
            )
        case OptionalMeta(inner=inner_a), OptionalMeta(inner=inner_b):
            return optional(_intersection2(inner_a, inner_b))
        case NullableMeta(inner=inner_a), NullableMeta(inner=inner_b):
            return nullable(_intersection2(inner_a, inner_b))

    is_pure = a.is_pure and b.is_pure

    def check(v: Any, mode: Mode) -> Any:
        value_a = a.fn(v, Mode.INTERNAL)
        value_b = b.fn(v, Mode.INTERNAL)

        if is_fail(value_b):
            return propagate_fail(mode, value_b, v)

        if is_fail(value_a):
            return propagate_fail(mode, value_a, v)

        # the second runtype's result is preferred
        return value_b

    return Runtype(check, IntersectionMeta(a, b), is_pure)


def intersection(*runtypes: Runtype[Any]) -> Runtype[Any]:
    """
    A value matching all runtypes.

    - record & record: one new record with the fields of both, shared fields
      intersected recursively
    - union & record: distributed over the union's alternatives
    - anything else: both runtypes are run and the last one's result is kept

    Usage:
        WithId = record({"id": integer()})
        Named = record({"name": string()})
        intersection(WithId, Named)({"id": 1, "name": "x"})
    """
    if len(runtypes) < 2:
        raise RuntypeUsageError(f"unsupported number of arguments {len(runtypes)}")

    for rt in runtypes:
        _ensure_runtype(rt, "intersection")

    result = runtypes[0]
    for rt in runtypes[1:]:
        result = _intersection2(result, rt)

    return result


def _record_fields(rt: Runtype[Any], where: str) -> RecordMeta:
    if not isinstance(rt, Runtype) or not isinstance(rt.meta, RecordMeta):
        raise RuntypeUsageError(f"{where}: expected a record runtype")
    return rt.meta


def _rebuild(meta: RecordMeta, fields: dict[str, Runtype[Any]]) -> Runtype[Any]:
    return sloppy_record(fields) if meta.sloppy else record(fields)


def pick(original: Runtype[Any], *keys: str) -> Runtype[Any]:
    """Build a new record runtype that contains some keys from the original."""
    meta = _record_fields(original, "pick")

    unknown_keys = [k for k in keys if k not in meta.fields]
    if unknown_keys:
        raise RuntypeUsageError(f"pick: unknown keys {unknown_keys!r}")

    return _rebuild(meta, {k: meta.fields[k] for k in keys})


def omit(original: Runtype[Any], *keys: str) -> Runtype[Any]:
    """Build a new record runtype that omits some keys from the original."""
    meta = _record_fields(original, "omit")
    omitted = set(keys)

    return _rebuild(meta, {k: rt for k, rt in meta.fields.items() if k not in omitted})


def partial(original: Runtype[Any]) -> Runtype[Any]:
    """
    Build a new record runtype that marks all keys as optional.

    Fields that are already optional are kept as they are.
    """
    meta = _record_fields(original, "partial")
    fields = {
        k: rt if isinstance(rt.meta, OptionalMeta) else optional(rt)
        for k, rt in meta.fields.items()
    }

    return _rebuild(meta, fields)


def lazy(resolve: Callable[[], Runtype[Any]]) -> Runtype[Any]:
    """
    A runtype that is looked up on first use.

    Usage:
        Node = record({
            "value": integer(),
            "children": array(lazy(lambda: Node)),
        })
    """
    resolved = cache(resolve)

    def check(v: Any, mode: Mode) -> Any:
        value = resolved().fn(v, Mode.INTERNAL)

        if is_fail(value):
            return propagate_fail(mode, value, v)

        return value

    return Runtype(check, LazyMeta(resolve), False)
