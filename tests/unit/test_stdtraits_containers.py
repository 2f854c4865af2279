from __future__ import annotations

import array
from collections import OrderedDict, UserDict, defaultdict, deque
from types import SimpleNamespace
from typing import Any

import pytest

from traitkit.core.errors import SetAssignmentError, TraitNotImplemented
from traitkit.core.hybrid import HybridWeakMap
from traitkit.core.trait import Trait, supports, value_supports
from traitkit.stdtraits import (
    Delete,
    Pairs,
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


class _Bar:
    @Size.method
    def size(self) -> int:
        return 42


class _Baz:
    pass


Size.impl_exact_type(_Baz, lambda _: 23)


class _Bang(_Bar):
    pass


class _Foo:
    pass


def test_size_of_builtin_containers() -> None:
    assert size({}) == 0
    assert size({"foo": 42, "bar": 5}) == 2
    assert size([]) == 0
    assert size([1, 2, 3]) == 3
    assert size("asdf") == 4
    assert size(b"ab") == 2
    assert size((1,)) == 1
    assert size({1, 2}) == 2
    assert size(frozenset()) == 0
    assert size(bytearray(b"xyz")) == 3
    assert size(array.array("b", [1, 2])) == 2
    assert size(SimpleNamespace(foo=42)) == 1


def test_size_of_user_classes() -> None:
    assert size(_Bar()) == 42
    assert size(_Bang()) == 42
    assert size(_Baz()) == 23


@pytest.mark.parametrize("value", [_Foo(), 0, None, HybridWeakMap()])
def test_size_is_not_implemented_for_unsized_values(value: Any) -> None:
    with pytest.raises(TraitNotImplemented):
        size(value)


def test_size_resolves_abc_containers_once_per_type() -> None:
    assert size(deque([1, 2])) == 2
    assert Size.table.has(deque)
    assert size(UserDict(a=1)) == 1


def test_empty() -> None:
    assert empty([])
    assert empty("")
    assert empty(SimpleNamespace())
    assert not empty({"a": None})


def test_pairs_of_sequences() -> None:
    assert list(pairs(["a", "s"])) == [(0, "a"), (1, "s")]
    assert list(pairs("as")) == [(0, "a"), (1, "s")]
    assert list(pairs(b"\x01\x02")) == [(0, 1), (1, 2)]
    assert list(pairs((True,))) == [(0, True)]
    assert list(pairs(array.array("d", [1.5]))) == [(0, 1.5)]


def test_pairs_of_maps_sets_and_records() -> None:
    assert list(pairs({"foo": 42, "bar": 23})) == [("foo", 42), ("bar", 23)]
    assert list(pairs(OrderedDict(x=1))) == [("x", 1)]
    assert list(pairs({7})) == [(7, 7)]
    assert list(pairs(SimpleNamespace(foo=42))) == [("foo", 42)]
    assert list(pairs(UserDict(k="v"))) == [("k", "v")]
    assert list(pairs(deque("ab"))) == [(0, "a"), (1, "b")]


def test_pairs_is_lazy() -> None:
    iterator = pairs([1, 2, 3])
    assert next(iterator) == (0, 1)


def test_pairs_is_not_implemented_for_weak_maps() -> None:
    assert not value_supports(HybridWeakMap(), Pairs)
    assert not supports(int, Pairs)


def test_keys_and_values() -> None:
    assert list(keys({"foo": 42, "bar": 23})) == ["foo", "bar"]
    assert list(values({"foo": 42, "bar": 23})) == [42, 23]
    assert list(keys("ab")) == [0, 1]
    assert list(values(SimpleNamespace(a=1))) == [1]
    assert list(values({3})) == [3]


def test_get() -> None:
    store = HybridWeakMap([(42, "bang")])
    assert get({"foo": 42}, "foo") == 42
    assert get(["foo", "bar"], 1) == "bar"
    assert get("ford prefect", 5) == "p"
    assert get({4, 5}, 5) == 5
    assert get(SimpleNamespace(foo=42), "foo") == 42
    assert get(store, 42) == "bang"
    assert get(bytearray(b"\x09"), 0) == 9


@pytest.mark.parametrize(
    "container",
    [{"foo": 42}, ["foo", "bar"], "ford prefect", {4, 5}, SimpleNamespace(foo=1), HybridWeakMap([(1, 2)])],
)
def test_get_missing_keys_returns_none(container: Any) -> None:
    assert get(container, "bar") is None
    assert get(container, 42) is None


def test_index_access_rejects_negative_and_non_integer_keys() -> None:
    assert get([1, 2], -1) is None
    assert get([1, 2], True) is None
    assert not has([1, 2], -1)
    assert not has([1, 2], "0")


def test_has() -> None:
    store = HybridWeakMap([(42, "bang")])
    assert has({"foo": 42}, "foo")
    assert has(["foo", "bar"], 1)
    assert has("ford prefect", 5)
    assert has({4, 5}, 5)
    assert has(SimpleNamespace(foo=42), "foo")
    assert has(store, 42)
    assert has({"foo": None}, "foo")

    assert not has({"foo": 42}, "bar")
    assert not has(["foo", "bar"], 2)
    assert not has({4, 5}, 6)
    assert not has(SimpleNamespace(), "foo")
    assert not has(store, 43)


def test_assign() -> None:
    mapping: dict[str, int] = {}
    assign(mapping, "foo", 42)
    assert mapping == {"foo": 42}

    record = SimpleNamespace()
    assign(record, "foo", 42)
    assert record.foo == 42

    members: set[int] = set()
    assign(members, 4, 4)
    assert members == {4}

    buffer = bytearray(b"\x00")
    assign(buffer, 0, 7)
    assert buffer == bytearray(b"\x07")

    key = object()
    store = HybridWeakMap()
    assign(store, key, "v")
    assert store.get(key) == "v"


def test_assign_pads_lists() -> None:
    items = ["a"]
    assign(items, 0, "b")
    assert items == ["b"]
    assign(items, 3, "d")
    assert items == ["b", None, None, "d"]
    with pytest.raises(IndexError):
        assign(items, -1, "x")


def test_assign_to_set_requires_matching_key_and_value() -> None:
    members = {1}
    with pytest.raises(SetAssignmentError, match="keys and values must be the same"):
        assign(members, 4, 5)
    assert members == {1}


@pytest.mark.parametrize("container", ["abc", b"abc", (1, 2), frozenset({1})])
def test_assign_is_not_implemented_for_immutable_containers(container: Any) -> None:
    with pytest.raises(TraitNotImplemented):
        assign(container, 0, 1)


def test_assign_through_abc_predicates() -> None:
    user_dict = UserDict()
    assign(user_dict, "a", 1)
    assert user_dict == {"a": 1}

    queue: deque[Any] = deque()
    assign(queue, 1, "x")
    assert list(queue) == [None, "x"]


def test_delete() -> None:
    mapping = {"foo": 42, "bar": 1}
    delete(mapping, "foo")
    assert mapping == {"bar": 1}
    delete(mapping, "missing")
    assert mapping == {"bar": 1}

    members = {1, 2}
    delete(members, 2)
    assert members == {1}

    record = SimpleNamespace(foo=42)
    delete(record, "foo")
    assert vars(record) == {}

    key = object()
    store = HybridWeakMap([(key, 1)])
    delete(store, key)
    assert not store.has(key)

    defaults: defaultdict[str, int] = defaultdict(int, a=1)
    delete(defaults, "a")
    assert dict(defaults) == {}


@pytest.mark.parametrize("container", [[1, 2], "abc", b"abc", (1, 2), frozenset({1})])
def test_delete_is_not_implemented_for_sequences_and_frozen_sets(container: Any) -> None:
    assert not value_supports(container, Delete)
    with pytest.raises(TraitNotImplemented):
        delete(container, 0)


def test_setdefault() -> None:
    mapping = {"foo": 42}
    assert setdefault(mapping, "foo", 23) == 42
    assert setdefault(mapping, "bar", 23) == 23
    assert mapping == {"foo": 42, "bar": 23}

    items = [1]
    assert setdefault(items, 0, 9) == 1
    assert setdefault(items, 2, 9) == 9
    assert items == [1, None, 9]

    record = SimpleNamespace()
    assert setdefault(record, "x", 1) == 1
    assert record.x == 1


def test_setdefault_is_derived_and_cached_per_type() -> None:
    setdefault({}, "a", 1)
    assert Setdefault.table.has(dict)
    with pytest.raises(TraitNotImplemented):
        setdefault((1,), 0, 2)


def test_replace() -> None:
    mapping = {"foo": 42}
    assert replace(mapping, "foo", 23) == 42
    assert replace(mapping, "bar", 5) is None
    assert mapping == {"foo": 23, "bar": 5}

    items = [1, 2]
    assert replace(items, 1, 3) == 2
    assert items == [1, 3]


def test_containers_extend_to_new_traits() -> None:
    First = Trait("First")
    First.impl_derived([Pairs], lambda impls, x: next(impls[0](x), None))

    assert First.invoke({"a": 1}) == ("a", 1)
    assert First.invoke([]) is None


def test_setdefault_on_records_sets_missing_attribute() -> None:
    record = SimpleNamespace()
    assert setdefault(record, "bar", 99) == 99
    assert record.bar == 99
    assert setdefault(record, "bar", 1) == 99
