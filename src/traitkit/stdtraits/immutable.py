from __future__ import annotations

import datetime
import re
import types
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any

from traitkit.core.trait import Trait, supports, value_supports

IMMUTABLE_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    tuple,
    frozenset,
    range,
    re.Pattern,
    datetime.date,
    datetime.datetime,
    datetime.time,
    datetime.timedelta,
    datetime.timezone,
    Decimal,
    Fraction,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    type,
)

Immutable = Trait("Immutable")


def _immutable(_value: Any) -> bool:
    return True


for _typ in IMMUTABLE_TYPES:
    Immutable.impl_exact_type(_typ, _immutable)


@Immutable.impl_type_predicate
def _immutable_by_kind(typ: Any) -> Any:
    # Enum members and classes created by a custom metaclass.
    if isinstance(typ, type) and (issubclass(typ, Enum) or issubclass(typ, type)):
        return _immutable
    return None


def is_immutable(value: Any) -> bool:
    return value_supports(value, Immutable)


def type_is_immutable(typ: Any) -> bool:
    return supports(typ, Immutable)


__all__ = [
    "IMMUTABLE_TYPES",
    "Immutable",
    "is_immutable",
    "type_is_immutable",
]
