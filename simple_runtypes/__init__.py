"""
simple_runtypes - validate untyped data and get typed values back.

Usage:
    from simple_runtypes import record, string, integer, optional, array

    User = record({
        "id": integer(min=1),
        "name": string(trim=True),
        "tags": array(string()),
        "email": optional(string()),
    })

    user = User(payload)   # raises RuntypeError on bad input
    result = use(User, payload)   # Ok(user) or Err(RuntypeError)
"""

from .combinators import (
    discriminated_union,
    intersection,
    lazy,
    omit,
    partial,
    pick,
    union,
)
from .containers import (
    FORBIDDEN_KEYS,
    array,
    dictionary,
    nullable,
    object_,
    optional,
    record,
    sloppy_record,
    tuple_,
)
from .core import Fail, Runtype, create_fail, fail, is_fail, propagate_fail, runtype, use
from .errors import (
    DEFAULT_DEBUG_LENGTH,
    RuntypeError,
    RuntypeUsageError,
    debug_value,
    get_formatted_error,
    get_formatted_error_path,
    get_formatted_error_value,
)
from .missing import MISSING
from .schema import to_pydantic, to_schema, to_type_hint
from .types import Err, Mode, Ok
from .validators import (
    SAFE_INTEGER_MAX,
    any_,
    boolean,
    enum_,
    guarded_by,
    ignore,
    integer,
    json,
    literal,
    null,
    number,
    string,
    string_as_integer,
    string_literal_union,
    unknown,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    # Core
    "Runtype",
    "Mode",
    "Fail",
    "MISSING",
    "runtype",
    "use",
    "fail",
    "is_fail",
    "create_fail",
    "propagate_fail",
    # Errors
    "RuntypeError",
    "RuntypeUsageError",
    "debug_value",
    "DEFAULT_DEBUG_LENGTH",
    "get_formatted_error",
    "get_formatted_error_path",
    "get_formatted_error_value",
    # Primitives
    "number",
    "integer",
    "string_as_integer",
    "string",
    "boolean",
    "null",
    "literal",
    "enum_",
    "string_literal_union",
    "any_",
    "unknown",
    "ignore",
    "guarded_by",
    "json",
    "SAFE_INTEGER_MAX",
    # Containers
    "object_",
    "array",
    "tuple_",
    "record",
    "sloppy_record",
    "dictionary",
    "optional",
    "nullable",
    "FORBIDDEN_KEYS",
    # Combinators
    "union",
    "discriminated_union",
    "intersection",
    "pick",
    "omit",
    "partial",
    "lazy",
    # Schema
    "to_type_hint",
    "to_pydantic",
    "to_schema",
]
