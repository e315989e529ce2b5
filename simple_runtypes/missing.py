"""
MISSING sentinel for keys that are absent from a validated dict.
"""

from enum import Enum


class Missing(Enum):
    """
    Sentinel passed to a record field runtype when its key is not present.

    A dict distinguishes "key absent" from "key present with None", so records
    hand MISSING to field runtypes for absent keys:

    - `optional(rt)` accepts MISSING and passes it through
    - any field runtype returning MISSING leaves the key out of the result

    Examples:
        record({"a": optional(string())})({})          # -> {}
        record({"a": optional(string())})({"a": "x"})  # -> {"a": "x"}
        record({"a": string()})({})                    # RuntypeError
    """

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = Missing.MISSING
