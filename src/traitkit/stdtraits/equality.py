from __future__ import annotations

import array
import datetime
import re
from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from decimal import Decimal
from fractions import Fraction
from types import SimpleNamespace
from typing import Any

from traitkit.core.trait import Implementation, Trait
from traitkit.stdtraits.containers import MAP_TYPES, SET_TYPES, get, has, pairs, size

Equals = Trait("Equals")

_NUMBER_TYPES = (int, float, complex)


def eq(a: Any, b: Any) -> bool:
    """Structural equality.

    Uses the implementation for ``a``; if there is none and ``b`` has a
    different type, the implementation for ``b`` with the arguments swapped;
    otherwise identity.
    """
    main = Equals.lookup_value(a)
    if main:
        return main(a, b)

    alt = None if type(a) is type(b) else Equals.lookup_value(b)
    if alt:
        return alt(b, a)

    return a is b


def uneq(a: Any, b: Any) -> bool:
    return not eq(a, b)


def _number_eq(a: Any, b: Any) -> bool:
    if isinstance(b, bool) or not isinstance(b, _NUMBER_TYPES):
        return False
    # NaN is the only value unequal to itself; two NaNs count as equal.
    return a == b or (a != a and b != b)


def _bool_eq(a: bool, b: Any) -> bool:
    return a is b


def _same_type_eq(a: Any, b: Any) -> bool:
    return type(b) is type(a) and a == b


def _pattern_eq(a: re.Pattern, b: Any) -> bool:
    return type(b) is re.Pattern and a.pattern == b.pattern and a.flags == b.flags


def _operator_eq(a: Any, b: Any) -> bool:
    return bool(a == b)


def container_eq(typ: type) -> Implementation:
    """Build the equality implementation for a key/value container type."""
    # Set members are their own values; presence is enough.
    membership_only = issubclass(typ, AbstractSet)

    def equals(a: Any, b: Any) -> bool:
        if type(b) is not typ or size(a) != size(b):
            return False
        for key, value in pairs(a):
            if not has(b, key):
                return False
            if not membership_only and not eq(get(b, key), value):
                return False
        return True

    return equals


for _typ in _NUMBER_TYPES:
    Equals.impl_exact_type(_typ, _number_eq)
Equals.impl_exact_type(bool, _bool_eq)
Equals.impl_exact_type(re.Pattern, _pattern_eq)

for _typ in (
    str,
    bytes,
    range,
    Decimal,
    Fraction,
    datetime.date,
    datetime.datetime,
    datetime.time,
    datetime.timedelta,
    datetime.timezone,
):
    Equals.impl_exact_type(_typ, _same_type_eq)

for _typ in (list, tuple, bytearray, array.array, *MAP_TYPES, *SET_TYPES, SimpleNamespace):
    Equals.impl_exact_type(_typ, container_eq(_typ))


@Equals.impl_type_predicate
def _abc_container_eq(typ: Any) -> Implementation | None:
    if isinstance(typ, type) and issubclass(typ, (Mapping, AbstractSet, Sequence)):
        return container_eq(typ)
    return None


@Equals.impl_type_predicate
def _custom_operator_eq(typ: Any) -> Implementation | None:
    # Classes that define their own __eq__ keep their own notion of equality.
    if isinstance(typ, type) and typ.__eq__ is not object.__eq__:
        return _operator_eq
    return None


__all__ = [
    "Equals",
    "container_eq",
    "eq",
    "uneq",
]
