from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from typing import Any

from traitkit.core.errors import ManifestValidationError
from traitkit.core.trait import Trait
from traitkit.manifest.schema import ImplEntry, Manifest, validate_ref

logger = logging.getLogger(__name__)


def _import_module(module_name: str, *, ref: str) -> Any:
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:
        raise ManifestValidationError(f"Cannot import module '{module_name}' for reference '{ref}'") from exc


def resolve_ref(ref: str) -> Any:
    """Resolve a ``module:attribute`` reference; the attribute part may be dotted."""
    ref = validate_ref(ref, field_name="reference")
    module_name, _, attr_path = ref.partition(":")
    obj = _import_module(module_name, ref=ref)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ManifestValidationError(f"Reference '{ref}' has no attribute '{part}'") from exc
    return obj


def _resolve_trait(ref: str) -> Trait:
    trait = resolve_ref(ref)
    if not isinstance(trait, Trait):
        raise ManifestValidationError(f"Reference '{ref}' is not a Trait")
    return trait


def _resolve_callable(ref: str) -> Callable[..., Any]:
    fn = resolve_ref(ref)
    if not callable(fn):
        raise ManifestValidationError(f"Reference '{ref}' is not callable")
    return fn


def _prepare(entry: ImplEntry) -> Callable[[], None]:
    trait = _resolve_trait(entry.trait)
    if entry.kind == "type":
        typ = resolve_ref(entry.target)
        impl = _resolve_callable(entry.impl or "")
        return lambda: trait.impl_exact_type(typ, impl)
    if entry.kind in {"value", "value_ref"}:
        value = entry.target if entry.kind == "value" else resolve_ref(entry.target)
        impl = _resolve_callable(entry.impl or "")
        return lambda: trait.impl_exact_value(value, impl)
    if entry.kind == "derived_from":
        traits = [_resolve_trait(ref) for ref in entry.target]
        combiner = _resolve_callable(entry.impl or "")
        return lambda: trait.impl_derived(traits, combiner)
    matcher = _resolve_callable(entry.target)
    if entry.kind == "type_predicate":
        return lambda: trait.impl_type_predicate(matcher)
    return lambda: trait.impl_value_predicate(matcher)


def apply_manifest(manifest: Manifest) -> int:
    """Import the manifest's modules and perform its registrations.

    Every reference is resolved before the first registration, so a manifest
    with a broken reference registers nothing.
    """
    for module_name in manifest.imports:
        _import_module(module_name, ref=module_name)

    pending: list[Callable[[], None]] = []
    for index, entry in enumerate(manifest.impls):
        try:
            pending.append(_prepare(entry))
        except ManifestValidationError as exc:
            raise ManifestValidationError(f"impls[{index}]: {exc.message}", details={"index": index}) from exc

    for register in pending:
        register()

    logger.debug("Applied %d registrations from manifest %s", len(pending), manifest.source_path)
    return len(pending)


__all__ = [
    "apply_manifest",
    "resolve_ref",
]
