from __future__ import annotations

import logging
from importlib.metadata import entry_points
from types import ModuleType
from typing import Any

from traitkit.core.constants import ENTRY_POINT_GROUP
from traitkit.core.errors import PluginLoadError
from traitkit.plugins.interfaces import ImplPlugin

logger = logging.getLogger(__name__)


def _load_group(group: str) -> list[tuple[str, Any]]:
    loaded: list[tuple[str, Any]] = []
    for entry in entry_points().select(group=group):
        try:
            loaded.append((entry.name, entry.load()))
        except Exception as exc:
            raise PluginLoadError(entry.name, str(exc)) from exc
    return loaded


def _run_plugin(name: str, plugin: Any) -> None:
    if isinstance(plugin, ModuleType):
        # Module plugins register at import time.
        return
    instance = plugin() if isinstance(plugin, type) else plugin
    if isinstance(instance, ImplPlugin):
        instance.register()
    elif callable(instance):
        instance()
    else:
        raise PluginLoadError(name, "entry point must be a module, a class, an object with register() or a callable")


def load_impl_plugins(group: str = ENTRY_POINT_GROUP) -> list[str]:
    """Load every implementation plugin of ``group``; returns the entry names in load order."""
    names: list[str] = []
    for name, plugin in _load_group(group):
        try:
            _run_plugin(name, plugin)
        except PluginLoadError:
            raise
        except Exception as exc:
            raise PluginLoadError(name, str(exc)) from exc
        logger.debug("Loaded trait implementation plugin '%s'", name)
        names.append(name)
    return names
