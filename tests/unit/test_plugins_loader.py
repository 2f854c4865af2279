from __future__ import annotations

import types
from typing import Any

import pytest

from traitkit.core.errors import PluginLoadError
from traitkit.core.trait import Trait
from traitkit.plugins import ImplPlugin, load_impl_plugins
from traitkit.plugins import loader

_Greeting = Trait("Greeting")


class _FakeEntryPoint:
    def __init__(self, name: str, obj: Any = None, error: Exception | None = None) -> None:
        self.name = name
        self._obj = obj
        self._error = error

    def load(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._obj


class _FakeEntryPoints:
    def __init__(self, groups: dict[str, list[_FakeEntryPoint]]) -> None:
        self._groups = groups

    def select(self, *, group: str) -> list[_FakeEntryPoint]:
        return self._groups.get(group, [])


class _ClassPlugin:
    def register(self) -> None:
        _Greeting.impl_exact_type(int, lambda _: "hello int")


def _install(monkeypatch: pytest.MonkeyPatch, *entries: _FakeEntryPoint, group: str = "traitkit.impls") -> None:
    fake = _FakeEntryPoints({group: list(entries)})
    monkeypatch.setattr(loader, "entry_points", lambda: fake)


def test_class_plugins_are_instantiated_and_registered(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _FakeEntryPoint("ints", _ClassPlugin))

    assert load_impl_plugins() == ["ints"]
    assert _Greeting.invoke(3) == "hello int"
    assert isinstance(_ClassPlugin(), ImplPlugin)


def test_object_callable_and_module_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    class Registrar:
        def register(self) -> None:
            calls.append("object")

    module = types.ModuleType("traitkit_fake_plugin")
    _install(
        monkeypatch,
        _FakeEntryPoint("object", Registrar()),
        _FakeEntryPoint("callable", lambda: calls.append("callable")),
        _FakeEntryPoint("module", module),
    )

    assert load_impl_plugins() == ["object", "callable", "module"]
    assert calls == ["object", "callable"]


def test_other_groups_are_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _FakeEntryPoint("elsewhere", _ClassPlugin), group="other.group")

    assert load_impl_plugins() == []
    assert load_impl_plugins(group="other.group") == ["elsewhere"]


def test_import_failure_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _FakeEntryPoint("broken", error=ImportError("no module named extras")))

    with pytest.raises(PluginLoadError, match="plugin 'broken': no module named extras") as excinfo:
        load_impl_plugins()
    assert excinfo.value.entry_name == "broken"
    assert isinstance(excinfo.value.__cause__, ImportError)


def test_registration_failure_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode() -> None:
        raise ValueError("bad registration")

    _install(monkeypatch, _FakeEntryPoint("explodes", explode))

    with pytest.raises(PluginLoadError, match="bad registration"):
        load_impl_plugins()


def test_unusable_entry_point_target(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _FakeEntryPoint("constant", 42))

    with pytest.raises(PluginLoadError, match="must be a module, a class"):
        load_impl_plugins()
