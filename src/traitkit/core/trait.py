"""Trait registration and resolution.

A ``Trait`` is a named interface with an open set of implementations. Given a
value (``lookup_value``) or a type (``lookup_type``) it finds the most specific
implementation among independently populated sources.

**Value resolution order** (first hit wins):

1. implementations registered for the exact value (``impl_exact_value``);
2. implementations embedded in the value's class (or the instance itself)
   under the trait's ``sym`` attribute, usually installed with
   ``@trait.method``;
3. implementations registered for the exact type (``impl_exact_type``);
4. derived implementations whose constituent traits all resolve for the type,
   cached into the type table on success;
5. derived implementations whose constituent traits all resolve for the value;
6. type predicates, cached into the type table on success;
7. value predicates.

Values tagged with ``mark_untyped`` skip steps 3, 4 and 6 entirely.

**Type resolution** uses the embedded method of the class, the type table,
type-derived implementations and type predicates, in that order.

Exact registrations replace earlier ones for the same key; derived and
predicate registrations accumulate in registration order. Caching writes are
idempotent, so concurrent lookups need no locking; registrations that change an
existing mapping must be serialized by the caller.
"""

from __future__ import annotations

import itertools
import logging
import reprlib
from collections.abc import Callable, Iterable
from functools import partial
from typing import Any

from traitkit.core.errors import TraitNotImplemented
from traitkit.core.hybrid import HybridWeakMap
from traitkit.core.typesafe import typename

logger = logging.getLogger(__name__)

Implementation = Callable[..., Any]
Matcher = Callable[[Any], "Implementation | None"]
Combiner = Callable[..., Any]

_sym_counter = itertools.count()
_subject_repr = reprlib.Repr()
_subject_repr.maxstring = 60
_subject_repr.maxother = 60

# Values excluded from type-based resolution. Kept outside the values so that
# slotted objects and builtin iterators can be tagged too.
_untyped = HybridWeakMap()


def mark_untyped(value: Any) -> Any:
    """Exclude ``value`` from every type-based resolution step."""
    _untyped.set(value, True)
    return value


def is_untyped(value: Any) -> bool:
    if isinstance(value, type):
        return False
    return _untyped.has(value)


def _embedded_call(sym: str) -> Implementation:
    def call(subject: Any, *args: Any) -> Any:
        return getattr(subject, sym)(*args)

    return call


def _own_call(sym: str) -> Implementation:
    # Functions stored on the instance itself are not bound by attribute
    # lookup; pass the subject as receiver explicitly.
    def call(subject: Any, *args: Any) -> Any:
        return vars(subject)[sym](subject, *args)

    return call


class _TraitMethod:
    # Class-body decorator: installs the function under the trait symbol once
    # the owning class is created, and keeps it under its own name too.
    def __init__(self, trait: Trait, fn: Callable[..., Any]) -> None:
        self.trait = trait
        self.fn = fn

    def __set_name__(self, owner: type, name: str) -> None:
        setattr(owner, name, self.fn)
        setattr(owner, self.trait.sym, self.fn)


class Trait:
    """A named interface with per-value, per-type, derived and predicate implementations.

    ``name`` is used in diagnostics. ``sym`` is the attribute name classes use
    to embed an implementation; a unique one is generated unless given, which
    also allows wrapping an existing protocol (``Trait("Length", sym="__len__")``).

    >>> Size = Trait("Size")
    >>> Size.impl_exact_type(list, len)
    >>> Size.invoke([1, 2, 3])
    3
    """

    def __init__(self, name: str, sym: str | None = None) -> None:
        self.name = name
        self.sym = sym or f"__trait_{name.lower()}_{next(_sym_counter)}__"
        self.table = HybridWeakMap()
        self.static_table = HybridWeakMap()
        self.derived: list[tuple[tuple[Trait, ...], Combiner]] = []
        self.wild: list[Matcher] = []
        self.wild_static: list[Matcher] = []

    def __repr__(self) -> str:
        return f"<Trait {self.name}>"

    # Resolution

    def lookup_value(self, what: Any) -> Implementation | None:
        allow_type = not is_untyped(what)
        typ = type(what)
        return (
            self._lookup_value_table(what)
            or self._lookup_property(what)
            or (allow_type and self._lookup_type_table(typ))
            or (allow_type and self._lookup_type_derive(typ))
            or self._lookup_value_derive(what)
            or (allow_type and self._lookup_type_wild(typ))
            or self._lookup_value_wild(what)
            or None
        )

    def lookup_type(self, typ: type) -> Implementation | None:
        return (
            self._lookup_method(typ)
            or self._lookup_type_table(typ)
            or self._lookup_type_derive(typ)
            or self._lookup_type_wild(typ)
            or None
        )

    def _lookup_value_table(self, what: Any) -> Implementation | None:
        return self.static_table.get(what)

    def _lookup_type_table(self, typ: type) -> Implementation | None:
        return self.table.get(typ)

    def _lookup_property(self, what: Any) -> Implementation | None:
        # Classes passed as values do not expose their instance methods.
        if what is None or isinstance(what, type):
            return None
        own = getattr(what, "__dict__", None)
        if isinstance(own, dict) and self.sym in own:
            return _own_call(self.sym) if callable(own[self.sym]) else None
        if not callable(getattr(type(what), self.sym, None)):
            return None
        return _embedded_call(self.sym)

    def _lookup_method(self, typ: type) -> Implementation | None:
        if not isinstance(typ, type) or not callable(getattr(typ, self.sym, None)):
            return None
        return _embedded_call(self.sym)

    def _lookup_type_derive(self, typ: type) -> Implementation | None:
        for traits, combiner in self.derived:
            impls = []
            for trait in traits:
                impl = trait.lookup_type(typ)
                if not impl:
                    break
                impls.append(impl)
            else:
                composed = partial(combiner, impls)
                logger.debug("Caching derived %s implementation for type %s", self.name, typename(typ))
                self.table.set(typ, composed)
                return composed
        return None

    def _lookup_value_derive(self, what: Any) -> Implementation | None:
        # Not cached: the same definition may be tried against very many values.
        for traits, combiner in self.derived:
            impls = []
            for trait in traits:
                impl = trait.lookup_value(what)
                if not impl:
                    break
                impls.append(impl)
            else:
                return partial(combiner, impls)
        return None

    def _lookup_type_wild(self, typ: type) -> Implementation | None:
        for matcher in self.wild:
            impl = matcher(typ)
            if impl:
                logger.debug("Caching predicate %s implementation for type %s", self.name, typename(typ))
                self.table.set(typ, impl)
                return impl
        return None

    def _lookup_value_wild(self, what: Any) -> Implementation | None:
        for matcher in self.wild_static:
            impl = matcher(what)
            if impl:
                return impl
        return None

    # Invocation

    def invoke(self, what: Any, *args: Any) -> Any:
        impl = self.lookup_value(what)
        if not impl:
            raise TraitNotImplemented(
                f"No implementation of trait {self.name} for {_subject_repr.repr(what)} "
                f"of type {typename(type(what))}.",
                trait=self,
                subject=what,
            )
        return impl(what, *args)

    def supports_type(self, typ: type) -> bool:
        return bool(self.lookup_type(typ))

    def supports_value(self, what: Any) -> bool:
        return bool(self.lookup_value(what))

    # Registration

    def impl_exact_type(self, typ: Any, impl: Implementation | None = None) -> Any:
        """Implement the trait for every value whose exact type is ``typ``.

        Subclasses are not covered. Without ``impl`` this returns a decorator.
        """
        if impl is None:
            return partial(_register_decorated, self.impl_exact_type, typ)
        self.table.set(typ, impl)
        return None

    def impl_exact_value(self, what: Any, impl: Implementation | None = None) -> Any:
        """Implement the trait for one specific value (compared by identity for objects)."""
        if impl is None:
            return partial(_register_decorated, self.impl_exact_value, what)
        self.static_table.set(what, impl)
        return None

    def impl_derived(self, traits: Iterable[Trait], combiner: Combiner | None = None) -> Any:
        """Implement the trait on top of other traits.

        ``combiner(impls, subject, *args)`` receives the resolved
        implementations of ``traits`` in order; it is only used for subjects
        for which all of them resolve.
        """
        traits = tuple(traits)
        if combiner is None:
            return partial(_register_decorated, self.impl_derived, traits)
        self.derived.append((traits, combiner))
        logger.debug(
            "Registered derived %s implementation from %s",
            self.name,
            ", ".join(trait.name for trait in traits),
        )
        return None

    def impl_type_predicate(self, matcher: Matcher) -> Matcher:
        """Last-resort lookup by type; ``matcher(typ)`` returns an implementation or a falsy value.

        Runs on every otherwise unresolved type, so it must be cheap.
        """
        self.wild.append(matcher)
        return matcher

    def impl_value_predicate(self, matcher: Matcher) -> Matcher:
        """Last-resort lookup by value; results are never cached."""
        self.wild_static.append(matcher)
        return matcher

    def method(self, fn: Callable[..., Any]) -> Any:
        """Embed ``fn`` as this trait's implementation in a class body.

        ::

            class Bag:
                @Size.method
                def size(self):
                    return len(self.items)
        """
        return _TraitMethod(self, fn)


def _register_decorated(register: Callable[..., Any], key: Any, impl: Implementation) -> Implementation:
    register(key, impl)
    return impl


def supports(typ: type, trait: Trait) -> bool:
    """Test whether ``trait`` is implemented for the type ``typ``."""
    return trait.supports_type(typ)


def value_supports(what: Any, trait: Trait) -> bool:
    """Test whether ``trait`` is implemented for the value ``what``."""
    return trait.supports_value(what)


__all__ = [
    "Combiner",
    "Implementation",
    "Matcher",
    "Trait",
    "is_untyped",
    "mark_untyped",
    "supports",
    "value_supports",
]
