from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any

from traitkit.core.trait import Trait
from traitkit.stdtraits.containers import BUFFER_TYPES, MAP_TYPES, assign, pairs
from traitkit.stdtraits.immutable import Immutable


def _unchanged(_impls: list[Any], value: Any) -> Any:
    return value


# SHALLOW


Shallowclone = Trait("Shallowclone")
Shallowclone.impl_exact_type(list, list)
for _typ in (*MAP_TYPES, set, *BUFFER_TYPES):
    Shallowclone.impl_exact_type(_typ, copy.copy)


@Shallowclone.impl_exact_type(SimpleNamespace)
def _record_shallowclone(x: SimpleNamespace) -> SimpleNamespace:
    return SimpleNamespace(**vars(x))


# Immutable values are their own copies.
Shallowclone.impl_derived([Immutable], _unchanged)


def shallowclone(what: Any) -> Any:
    """New top-level container holding the very same entries."""
    return Shallowclone.invoke(what)


# DEEP


Deepclone = Trait("Deepclone")


@Deepclone.impl_exact_type(list)
def _list_deepclone(x: list[Any]) -> list[Any]:
    return [deepclone(value) for value in x]


@Deepclone.impl_exact_type(tuple)
def _tuple_deepclone(x: tuple[Any, ...]) -> tuple[Any, ...]:
    return tuple(deepclone(value) for value in x)


def _map_deepclone(x: Any) -> Any:
    # copy.copy keeps per-instance state such as a defaultdict factory.
    nu = copy.copy(x)
    nu.clear()
    for key, value in pairs(x):
        assign(nu, key, deepclone(value))
    return nu


for _typ in MAP_TYPES:
    Deepclone.impl_exact_type(_typ, _map_deepclone)


@Deepclone.impl_exact_type(SimpleNamespace)
def _record_deepclone(x: SimpleNamespace) -> SimpleNamespace:
    nu = SimpleNamespace()
    for key, value in pairs(x):
        assign(nu, key, deepclone(value))
    return nu


# Set members double as keys and must stay identical; buffers hold scalars only.
for _typ in (set, *BUFFER_TYPES):
    Deepclone.impl_exact_type(_typ, shallowclone)

Deepclone.impl_derived([Immutable], _unchanged)


def deepclone(what: Any) -> Any:
    """Recursive clone; map keys and set members are never cloned."""
    return Deepclone.invoke(what)


__all__ = [
    "Deepclone",
    "Shallowclone",
    "deepclone",
    "shallowclone",
]
