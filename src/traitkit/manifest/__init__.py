from __future__ import annotations

from pathlib import Path
from typing import Any

from traitkit.core.constants import MANIFEST_MAX_EXTENDS_DEPTH
from traitkit.core.errors import ManifestValidationError
from traitkit.manifest.apply import apply_manifest, resolve_ref
from traitkit.manifest.schema import ImplEntry, ImplKind, Manifest, parse_manifest

# Registration lists accumulate across `extends` instead of being overridden.
_CONCAT_KEYS = ("imports", "impls")


def _load_yaml(path: Path) -> dict[str, Any]:
    import yaml

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ManifestValidationError(f"Manifest is not valid YAML: {path}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ManifestValidationError(f"Manifest file must be a mapping: {path}")
    return loaded


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deterministic deep-merge: dicts merge recursively, lists/scalars override."""
    merged = dict(base)
    for key in sorted(overlay):
        val = overlay[key]
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def _merge_manifest_data(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    merged = deep_merge(base, overlay)
    for key in _CONCAT_KEYS:
        if isinstance(base.get(key), list) and isinstance(overlay.get(key), list):
            merged[key] = [*base[key], *overlay[key]]
    return merged


def _resolve_extends(data: dict[str, Any], source_path: Path, depth: int = 0) -> dict[str, Any]:
    """Recursively resolve `extends` chains with cycle detection."""
    extends_raw = data.pop("extends", None)
    if extends_raw is None:
        return data
    if depth >= MANIFEST_MAX_EXTENDS_DEPTH:
        raise ManifestValidationError(
            f"Manifest extends depth exceeded {MANIFEST_MAX_EXTENDS_DEPTH}: circular reference?"
        )

    extends_path = Path(extends_raw)
    if not extends_path.is_absolute():
        extends_path = (source_path.parent / extends_path).resolve()
    if not extends_path.exists():
        raise ManifestValidationError(f"extends target not found: {extends_path}")

    base_data = _load_yaml(extends_path)
    base_data = _resolve_extends(base_data, extends_path, depth + 1)
    return _merge_manifest_data(base_data, data)


def load_manifest(path: Path | str) -> Manifest:
    path = Path(path)
    if not path.exists():
        raise ManifestValidationError(f"Manifest file not found: {path}")
    data = _load_yaml(path)
    data = _resolve_extends(data, path.resolve())
    return parse_manifest(data, source_path=path.resolve())


__all__ = [
    "ImplEntry",
    "ImplKind",
    "Manifest",
    "apply_manifest",
    "deep_merge",
    "load_manifest",
    "parse_manifest",
    "resolve_ref",
]
