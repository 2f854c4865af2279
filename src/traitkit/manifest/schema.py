from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, cast

from traitkit.core.constants import (
    MANIFEST_IMPL_KINDS,
    MANIFEST_SCHEMA_VERSION,
    SUPPORTED_MANIFEST_SCHEMA_VERSIONS,
)
from traitkit.core.errors import ManifestValidationError
from traitkit.core.typesafe import is_primitive

ImplKind = Literal[
    "type",
    "value",
    "value_ref",
    "derived_from",
    "type_predicate",
    "value_predicate",
]

_KINDS_REQUIRING_IMPL = {"type", "value", "value_ref", "derived_from"}


@dataclass(slots=True)
class ImplEntry:
    """One registration: ``kind`` selects the trait method, ``target`` its key.

    ``target`` is a reference string for ``type``, ``value_ref`` and the
    predicate kinds, a list of trait references for ``derived_from`` and a
    YAML literal for ``value``.
    """

    trait: str
    kind: ImplKind
    target: Any
    impl: str | None = None


@dataclass(slots=True)
class Manifest:
    source_path: Path | None = None
    schema_version: str = MANIFEST_SCHEMA_VERSION
    imports: list[str] = field(default_factory=list)
    impls: list[ImplEntry] = field(default_factory=list)


def _unsupported_version_message(version: str) -> str:
    supported_text = ", ".join(sorted(SUPPORTED_MANIFEST_SCHEMA_VERSIONS))
    return f"Unsupported manifest schema_version '{version}'. Supported versions: {supported_text}."


def _normalize_schema_version(value: Any) -> str:
    if value is None:
        return MANIFEST_SCHEMA_VERSION
    version = str(value)
    if version not in SUPPORTED_MANIFEST_SCHEMA_VERSIONS:
        raise ManifestValidationError(_unsupported_version_message(version))
    return version


def validate_ref(raw: Any, *, field_name: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ManifestValidationError(f"{field_name} must be a non-empty `module:attribute` reference")
    module_name, sep, attr_path = raw.strip().partition(":")
    if not sep or not module_name or not attr_path:
        raise ManifestValidationError(f"{field_name} must look like `module:attribute`; got: {raw}")
    return raw.strip()


def _parse_string_list(raw: Any, *, field_name: str) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ManifestValidationError(f"{field_name} must be a list")
    return [str(item) for item in raw]


def _parse_entry(raw: Any, *, index: int) -> ImplEntry:
    where = f"impls[{index}]"
    if not isinstance(raw, dict):
        raise ManifestValidationError(f"{where} must be a mapping")

    trait = validate_ref(raw.get("trait"), field_name=f"{where}.trait")

    kinds = [kind for kind in MANIFEST_IMPL_KINDS if kind in raw]
    if len(kinds) != 1:
        expected = "|".join(MANIFEST_IMPL_KINDS)
        raise ManifestValidationError(f"{where} must name exactly one of {expected}; got: {kinds or 'none'}")
    kind = cast(ImplKind, kinds[0])

    target: Any = raw[kind]
    if kind == "derived_from":
        if not isinstance(target, list) or not target:
            raise ManifestValidationError(f"{where}.derived_from must be a non-empty list of trait references")
        target = [validate_ref(item, field_name=f"{where}.derived_from") for item in target]
    elif kind == "value":
        if not is_primitive(target):
            # Containers parsed from YAML are fresh objects, keyed by identity.
            raise ManifestValidationError(
                f"{where}.value must be a scalar (null, bool, number or string); use value_ref for objects"
            )
    else:
        target = validate_ref(target, field_name=f"{where}.{kind}")

    impl_raw = raw.get("impl")
    if kind in _KINDS_REQUIRING_IMPL:
        impl = validate_ref(impl_raw, field_name=f"{where}.impl")
    else:
        if impl_raw is not None:
            raise ManifestValidationError(f"{where}.impl is not allowed for {kind} entries")
        impl = None

    unknown = sorted(set(raw) - {"trait", "impl", kind})
    if unknown:
        raise ManifestValidationError(f"{where} has unknown fields: {', '.join(unknown)}")

    return ImplEntry(trait=trait, kind=kind, target=target, impl=impl)


def parse_manifest(data: dict[str, Any], *, source_path: Path | None = None) -> Manifest:
    if not isinstance(data, dict):
        raise ManifestValidationError("Manifest must be a mapping")

    schema_version = _normalize_schema_version(data.get("schema_version"))
    imports = _parse_string_list(data.get("imports"), field_name="imports")

    raw_impls = data.get("impls", [])
    if raw_impls is None:
        raw_impls = []
    if not isinstance(raw_impls, list):
        raise ManifestValidationError("impls must be a list")
    impls = [_parse_entry(raw, index=index) for index, raw in enumerate(raw_impls)]

    return Manifest(
        source_path=source_path,
        schema_version=schema_version,
        imports=imports,
        impls=impls,
    )


__all__ = [
    "ImplEntry",
    "ImplKind",
    "Manifest",
    "parse_manifest",
    "validate_ref",
]
