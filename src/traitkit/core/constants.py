from __future__ import annotations

# Normative error codes.
ERROR_CODE_TRAIT_NOT_IMPLEMENTED = "TRAIT_NOT_IMPLEMENTED"
ERROR_CODE_SET_KEY_MISMATCH = "SET_KEY_MISMATCH"
ERROR_CODE_MANIFEST_INVALID = "MANIFEST_INVALID"
ERROR_CODE_PLUGIN_LOAD_FAILED = "PLUGIN_LOAD_FAILED"

# Registration manifests.
MANIFEST_SCHEMA_VERSION = "1"
SUPPORTED_MANIFEST_SCHEMA_VERSIONS = {MANIFEST_SCHEMA_VERSION}
MANIFEST_MAX_EXTENDS_DEPTH = 10
MANIFEST_IMPL_KINDS = (
    "type",
    "value",
    "value_ref",
    "derived_from",
    "type_predicate",
    "value_predicate",
)

# Plugin discovery.
ENTRY_POINT_GROUP = "traitkit.impls"

ENV_MANIFEST = "TRAITKIT_MANIFEST"
ENV_DISABLE_PLUGINS = "TRAITKIT_DISABLE_PLUGINS"
