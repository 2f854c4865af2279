"""Dual-mode associative store.

``HybridWeakMap`` behaves like a weak-keyed mapping that also accepts
primitive keys. Primitives (``None``, booleans, numbers, strings, bytes) go to
a regular dict and are compared by equality; since those values are shared and
cannot be weakly referenced they are held strongly. Every other key is
compared by identity and held through a weak reference, so registering data
against a transient object does not keep the object alive.

Some objects (built-in ``list``, ``dict``, ``set`` instances among others) do
not support weak references at all. They are still stored by identity, but
strongly: the store keeps the key alive so its ``id()`` cannot be reused
while the entry exists.

Like a weak map, the store cannot be iterated and has no length.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from traitkit.core.typesafe import is_primitive

_MISSING = object()
_NAN = object()


@dataclass(slots=True)
class _ObjectEntry:
    anchor: Any
    value: Any
    weak: bool

    def key(self) -> Any:
        return self.anchor() if self.weak else self.anchor


class HybridWeakMap:
    __slots__ = ("primitives", "_objects", "_remove", "__weakref__")

    def __init__(self, pairs: Iterable[tuple[Any, Any]] | None = None) -> None:
        self.primitives: dict[tuple[type, Any], Any] = {}
        self._objects: dict[int, _ObjectEntry] = {}

        def remove(ref: weakref.KeyedRef, selfref: weakref.ref = weakref.ref(self)) -> None:
            store = selfref()
            if store is None:
                return
            entry = store._objects.get(ref.key)
            if entry is not None and entry.anchor is ref:
                del store._objects[ref.key]

        self._remove = remove

        if pairs is not None:
            for key, value in pairs:
                self.set(key, value)

    @staticmethod
    def _primitive_key(key: Any) -> tuple[type, Any]:
        # Scoped by exact type so 1, 1.0 and True stay distinct keys. All NaNs
        # share one key.
        if key != key:
            return (type(key), _NAN)
        return (type(key), key)

    def _object_entry(self, key: Any) -> _ObjectEntry | None:
        entry = self._objects.get(id(key))
        if entry is None or entry.key() is not key:
            return None
        return entry

    def get(self, key: Any, default: Any = None) -> Any:
        if is_primitive(key):
            return self.primitives.get(self._primitive_key(key), default)
        entry = self._object_entry(key)
        return default if entry is None else entry.value

    def has(self, key: Any) -> bool:
        if is_primitive(key):
            return self._primitive_key(key) in self.primitives
        return self._object_entry(key) is not None

    def set(self, key: Any, value: Any) -> HybridWeakMap:
        if is_primitive(key):
            self.primitives[self._primitive_key(key)] = value
            return self
        entry = self._object_entry(key)
        if entry is not None:
            entry.value = value
            return self
        try:
            anchor: Any = weakref.KeyedRef(key, self._remove, id(key))
            weak = True
        except TypeError:
            anchor = key
            weak = False
        self._objects[id(key)] = _ObjectEntry(anchor=anchor, value=value, weak=weak)
        return self

    def delete(self, key: Any) -> bool:
        if is_primitive(key):
            return self.primitives.pop(self._primitive_key(key), _MISSING) is not _MISSING
        if self._object_entry(key) is None:
            return False
        del self._objects[id(key)]
        return True

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __getitem__(self, key: Any) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __repr__(self) -> str:
        return f"<HybridWeakMap primitives={len(self.primitives)} objects={len(self._objects)}>"


__all__ = ["HybridWeakMap"]
