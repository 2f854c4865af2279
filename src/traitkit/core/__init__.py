"""traitkit core: trait registration, resolution and the dual-mode store.

This package has no dependency on the reference trait library, manifests or
plugin loading.
"""

from traitkit.core.errors import (
    ManifestValidationError,
    PluginLoadError,
    SetAssignmentError,
    TraitkitError,
    TraitNotImplemented,
)
from traitkit.core.hybrid import HybridWeakMap
from traitkit.core.trait import Trait, is_untyped, mark_untyped, supports, value_supports
from traitkit.core.typesafe import ifdef, is_primitive, isdef, type_of, typename

__all__ = [
    "HybridWeakMap",
    "ManifestValidationError",
    "PluginLoadError",
    "SetAssignmentError",
    "Trait",
    "TraitNotImplemented",
    "TraitkitError",
    "ifdef",
    "is_primitive",
    "is_untyped",
    "isdef",
    "mark_untyped",
    "supports",
    "type_of",
    "typename",
    "value_supports",
]
