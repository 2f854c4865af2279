"""Reference trait library built on ``traitkit.core.trait``."""

from traitkit.stdtraits.assertions import EqualityAssertionError, assert_equals, assert_uneq, pretty
from traitkit.stdtraits.clone import Deepclone, Shallowclone, deepclone, shallowclone
from traitkit.stdtraits.containers import (
    Assign,
    Delete,
    Get,
    Has,
    Pairs,
    Replace,
    Setdefault,
    Size,
    assign,
    delete,
    empty,
    get,
    has,
    keys,
    pairs,
    replace,
    setdefault,
    size,
    values,
)
from traitkit.stdtraits.equality import Equals, eq, uneq
from traitkit.stdtraits.immutable import Immutable, is_immutable, type_is_immutable

__all__ = [
    "Assign",
    "Deepclone",
    "Delete",
    "EqualityAssertionError",
    "Equals",
    "Get",
    "Has",
    "Immutable",
    "Pairs",
    "Replace",
    "Setdefault",
    "Shallowclone",
    "Size",
    "assert_equals",
    "assert_uneq",
    "assign",
    "deepclone",
    "delete",
    "empty",
    "eq",
    "get",
    "has",
    "is_immutable",
    "keys",
    "pairs",
    "pretty",
    "replace",
    "setdefault",
    "shallowclone",
    "size",
    "type_is_immutable",
    "uneq",
    "values",
]
