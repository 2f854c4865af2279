from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from traitkit.core.constants import ENV_DISABLE_PLUGINS, ENV_MANIFEST
from traitkit.manifest import apply_manifest, load_manifest
from traitkit.plugins import load_impl_plugins

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class RuntimeSummary:
    plugins: list[str] = field(default_factory=list)
    manifest_path: Path | None = None
    registrations: int = 0


def _plugins_enabled_from_env() -> bool:
    return os.getenv(ENV_DISABLE_PLUGINS, "").strip().lower() not in _TRUTHY


def configure(manifest: Path | str | None = None, *, plugins: bool | None = None) -> RuntimeSummary:
    """Load implementation plugins and apply a registration manifest.

    ``plugins`` defaults to enabled unless ``TRAITKIT_DISABLE_PLUGINS`` is set;
    ``manifest`` defaults to the path in ``TRAITKIT_MANIFEST``, if any.
    """
    summary = RuntimeSummary()

    if plugins is None:
        plugins = _plugins_enabled_from_env()
    if plugins:
        summary.plugins = load_impl_plugins()

    manifest_raw = manifest if manifest is not None else os.getenv(ENV_MANIFEST, "").strip()
    if manifest_raw:
        manifest_path = Path(manifest_raw).resolve()
        summary.manifest_path = manifest_path
        summary.registrations = apply_manifest(load_manifest(manifest_path))

    return summary


__all__ = ["RuntimeSummary", "configure"]
