from __future__ import annotations

from collections.abc import Callable
from typing import Any

# Values routed by equality rather than identity. Everything else is an
# object key.
PRIMITIVE_TYPES: tuple[type, ...] = (type(None), bool, int, float, complex, str, bytes)


def isdef(value: Any) -> bool:
    return value is not None


def ifdef(value: Any, fn: Callable[[Any], Any]) -> Any:
    """Apply ``fn`` to ``value`` unless it is None."""
    return fn(value) if isdef(value) else value


def type_of(value: Any) -> type:
    return type(value)


def typename(typ: Any) -> str:
    if isinstance(typ, type):
        return typ.__qualname__
    name = getattr(typ, "name", None)
    if isinstance(name, str):
        return name
    return repr(typ)


def is_primitive(value: Any) -> bool:
    # Exact types only: subclasses may redefine equality or hashing.
    return type(value) in PRIMITIVE_TYPES


__all__ = [
    "PRIMITIVE_TYPES",
    "ifdef",
    "is_primitive",
    "isdef",
    "type_of",
    "typename",
]
