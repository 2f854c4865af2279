"""Uniform key/value access to containers.

Every container is viewed as a collection of ``(key, value)`` pairs:

- sequences (``list``, ``tuple``, ``str``, ``bytes``, ``bytearray``,
  ``array.array``) use their non-negative indices as keys;
- maps (``dict`` and its standard subclasses, ``HybridWeakMap``) use their own
  keys;
- sets use each member as both key and value;
- plain records (``types.SimpleNamespace``) use attribute names.

Other classes registered with the ``collections.abc`` container ABCs are
resolved through type predicates, once per type.

``Delete`` is deliberately missing for strings, bytes and tuples (immutable)
and for lists (removing an index would shift every later key).
``Setdefault`` and ``Replace`` have no direct implementations at all; they are
derived from ``Has``/``Get``/``Assign``.
"""

from __future__ import annotations

import array
from collections import Counter, OrderedDict, defaultdict
from collections.abc import Iterator, Mapping, MutableMapping, MutableSequence, MutableSet, Sequence, Sized
from collections.abc import Set as AbstractSet
from types import SimpleNamespace
from typing import Any

from traitkit.core.errors import SetAssignmentError
from traitkit.core.hybrid import HybridWeakMap
from traitkit.core.trait import Implementation, Trait

MAP_TYPES: tuple[type, ...] = (dict, OrderedDict, defaultdict, Counter)
SET_TYPES: tuple[type, ...] = (set, frozenset)
READONLY_SEQUENCE_TYPES: tuple[type, ...] = (str, bytes, tuple)
BUFFER_TYPES: tuple[type, ...] = (bytearray, array.array)
RECORD_TYPES: tuple[type, ...] = (SimpleNamespace,)


def _abc_matcher(abc: type, impl: Implementation) -> Any:
    def match(typ: Any) -> Implementation | None:
        if isinstance(typ, type) and issubclass(typ, abc):
            return impl
        return None

    return match


# SIZE


Size = Trait("Size")

for _typ in (list, *READONLY_SEQUENCE_TYPES, *BUFFER_TYPES, *MAP_TYPES, *SET_TYPES):
    Size.impl_exact_type(_typ, len)


@Size.impl_exact_type(SimpleNamespace)
def _record_size(x: SimpleNamespace) -> int:
    return len(vars(x))


Size.impl_type_predicate(_abc_matcher(Sized, len))


def size(what: Any) -> int:
    return Size.invoke(what)


def empty(what: Any) -> bool:
    return size(what) == 0


# PAIRS


def _index_pairs(x: Any) -> Iterator[tuple[int, Any]]:
    yield from enumerate(x)


def _map_pairs(x: Any) -> Iterator[tuple[Any, Any]]:
    yield from x.items()


def _set_pairs(x: Any) -> Iterator[tuple[Any, Any]]:
    for member in x:
        yield member, member


def _record_pairs(x: Any) -> Iterator[tuple[str, Any]]:
    yield from vars(x).items()


Pairs = Trait("Pairs")

for _typ in (list, *READONLY_SEQUENCE_TYPES, *BUFFER_TYPES):
    Pairs.impl_exact_type(_typ, _index_pairs)
for _typ in MAP_TYPES:
    Pairs.impl_exact_type(_typ, _map_pairs)
for _typ in SET_TYPES:
    Pairs.impl_exact_type(_typ, _set_pairs)
Pairs.impl_exact_type(SimpleNamespace, _record_pairs)

Pairs.impl_type_predicate(_abc_matcher(Mapping, _map_pairs))
Pairs.impl_type_predicate(_abc_matcher(AbstractSet, _set_pairs))
Pairs.impl_type_predicate(_abc_matcher(Sequence, _index_pairs))


def pairs(what: Any) -> Iterator[tuple[Any, Any]]:
    return Pairs.invoke(what)


def keys(what: Any) -> Iterator[Any]:
    for key, _ in pairs(what):
        yield key


def values(what: Any) -> Iterator[Any]:
    for _, value in pairs(what):
        yield value


# GET / HAS


def _index_has(x: Any, key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(x)


def _index_get(x: Any, key: Any) -> Any:
    return x[key] if _index_has(x, key) else None


def _map_get(x: Any, key: Any) -> Any:
    return x.get(key)


def _map_has(x: Any, key: Any) -> bool:
    return key in x


def _set_get(x: Any, key: Any) -> Any:
    return key if key in x else None


def _record_get(x: Any, key: Any) -> Any:
    return vars(x).get(key)


def _record_has(x: Any, key: Any) -> bool:
    return key in vars(x)


Get = Trait("Get")
Has = Trait("Has")

for _typ in (list, *READONLY_SEQUENCE_TYPES, *BUFFER_TYPES):
    Get.impl_exact_type(_typ, _index_get)
    Has.impl_exact_type(_typ, _index_has)
for _typ in (*MAP_TYPES, HybridWeakMap):
    Get.impl_exact_type(_typ, _map_get)
    Has.impl_exact_type(_typ, _map_has)
for _typ in SET_TYPES:
    Get.impl_exact_type(_typ, _set_get)
    Has.impl_exact_type(_typ, _map_has)
Get.impl_exact_type(SimpleNamespace, _record_get)
Has.impl_exact_type(SimpleNamespace, _record_has)

Get.impl_type_predicate(_abc_matcher(Mapping, _map_get))
Get.impl_type_predicate(_abc_matcher(AbstractSet, _set_get))
Get.impl_type_predicate(_abc_matcher(Sequence, _index_get))
Has.impl_type_predicate(_abc_matcher(Mapping, _map_has))
Has.impl_type_predicate(_abc_matcher(AbstractSet, _map_has))
Has.impl_type_predicate(_abc_matcher(Sequence, _index_has))


def get(container: Any, key: Any) -> Any:
    return Get.invoke(container, key)


def has(container: Any, key: Any) -> bool:
    return Has.invoke(container, key)


# ASSIGN / DELETE


def _list_assign(x: Any, key: int, value: Any) -> None:
    if key < 0:
        raise IndexError(f"Cannot assign negative index {key}")
    if key >= len(x):
        # Pad the gap with None, like assigning past the end of an array.
        x.extend([None] * (key - len(x) + 1))
    x[key] = value


def _item_assign(x: Any, key: Any, value: Any) -> None:
    x[key] = value


def _set_assign(x: Any, key: Any, value: Any) -> None:
    if value is not key and value != key:
        raise SetAssignmentError(key, value)
    x.add(value)


def _record_assign(x: Any, key: str, value: Any) -> None:
    setattr(x, key, value)


def _map_delete(x: Any, key: Any) -> None:
    x.pop(key, None)


def _set_delete(x: Any, key: Any) -> None:
    x.discard(key)


def _record_delete(x: Any, key: str) -> None:
    vars(x).pop(key, None)


Assign = Trait("Assign")
Assign.impl_exact_type(list, _list_assign)
for _typ in (*BUFFER_TYPES, *MAP_TYPES):
    Assign.impl_exact_type(_typ, _item_assign)
Assign.impl_exact_type(HybridWeakMap, HybridWeakMap.set)
Assign.impl_exact_type(set, _set_assign)
Assign.impl_exact_type(SimpleNamespace, _record_assign)

Assign.impl_type_predicate(_abc_matcher(MutableMapping, _item_assign))
Assign.impl_type_predicate(_abc_matcher(MutableSet, _set_assign))
Assign.impl_type_predicate(_abc_matcher(MutableSequence, _list_assign))

Delete = Trait("Delete")
for _typ in MAP_TYPES:
    Delete.impl_exact_type(_typ, _map_delete)
Delete.impl_exact_type(HybridWeakMap, HybridWeakMap.delete)
Delete.impl_exact_type(set, _set_delete)
Delete.impl_exact_type(SimpleNamespace, _record_delete)

Delete.impl_type_predicate(_abc_matcher(MutableMapping, _map_delete))
Delete.impl_type_predicate(_abc_matcher(MutableSet, _set_delete))


def assign(container: Any, key: Any, value: Any) -> None:
    Assign.invoke(container, key, value)


def delete(container: Any, key: Any) -> None:
    Delete.invoke(container, key)


# DERIVED ACCESS


Setdefault = Trait("Setdefault")


@Setdefault.impl_derived([Has, Get, Assign])
def _setdefault_from_access(impls: list[Implementation], x: Any, key: Any, default: Any) -> Any:
    has_impl, get_impl, assign_impl = impls
    if has_impl(x, key):
        return get_impl(x, key)
    assign_impl(x, key, default)
    return default


Replace = Trait("Replace")


@Replace.impl_derived([Get, Assign])
def _replace_from_access(impls: list[Implementation], x: Any, key: Any, value: Any) -> Any:
    get_impl, assign_impl = impls
    previous = get_impl(x, key)
    assign_impl(x, key, value)
    return previous


def setdefault(container: Any, key: Any, default: Any) -> Any:
    return Setdefault.invoke(container, key, default)


def replace(container: Any, key: Any, value: Any) -> Any:
    return Replace.invoke(container, key, value)


__all__ = [
    "Assign",
    "BUFFER_TYPES",
    "Delete",
    "Get",
    "Has",
    "MAP_TYPES",
    "Pairs",
    "READONLY_SEQUENCE_TYPES",
    "RECORD_TYPES",
    "Replace",
    "SET_TYPES",
    "Setdefault",
    "Size",
    "assign",
    "delete",
    "empty",
    "get",
    "has",
    "keys",
    "pairs",
    "replace",
    "setdefault",
    "size",
    "values",
]
