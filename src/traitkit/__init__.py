"""Traits for Python: named interfaces resolved per value and per type."""

from traitkit.core import (
    HybridWeakMap,
    ManifestValidationError,
    PluginLoadError,
    SetAssignmentError,
    Trait,
    TraitkitError,
    TraitNotImplemented,
    is_untyped,
    mark_untyped,
    supports,
    value_supports,
)
from traitkit.runtime import RuntimeSummary, configure
from traitkit.stdtraits import (
    Assign,
    Deepclone,
    Delete,
    EqualityAssertionError,
    Equals,
    Get,
    Has,
    Immutable,
    Pairs,
    Replace,
    Setdefault,
    Shallowclone,
    Size,
    assert_equals,
    assert_uneq,
    assign,
    deepclone,
    delete,
    empty,
    eq,
    get,
    has,
    is_immutable,
    keys,
    pairs,
    replace,
    setdefault,
    shallowclone,
    size,
    type_is_immutable,
    uneq,
    values,
)

__version__ = "0.1.0"

__all__ = [
    "Assign",
    "Deepclone",
    "Delete",
    "EqualityAssertionError",
    "Equals",
    "Get",
    "Has",
    "HybridWeakMap",
    "Immutable",
    "ManifestValidationError",
    "Pairs",
    "PluginLoadError",
    "Replace",
    "RuntimeSummary",
    "SetAssignmentError",
    "Setdefault",
    "Shallowclone",
    "Size",
    "Trait",
    "TraitNotImplemented",
    "TraitkitError",
    "__version__",
    "assert_equals",
    "assert_uneq",
    "assign",
    "configure",
    "deepclone",
    "delete",
    "empty",
    "eq",
    "get",
    "has",
    "is_immutable",
    "is_untyped",
    "keys",
    "mark_untyped",
    "pairs",
    "replace",
    "setdefault",
    "shallowclone",
    "size",
    "supports",
    "type_is_immutable",
    "uneq",
    "value_supports",
    "values",
]
