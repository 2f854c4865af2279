from __future__ import annotations

from typing import TYPE_CHECKING, Any

from traitkit.core.constants import (
    ERROR_CODE_MANIFEST_INVALID,
    ERROR_CODE_PLUGIN_LOAD_FAILED,
    ERROR_CODE_SET_KEY_MISMATCH,
    ERROR_CODE_TRAIT_NOT_IMPLEMENTED,
)

if TYPE_CHECKING:
    from traitkit.core.trait import Trait


class TraitkitError(Exception):
    """Base class of every error raised by traitkit itself."""

    code: str = "TRAITKIT_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class TraitNotImplemented(TraitkitError, TypeError):
    """Raised by ``Trait.invoke`` when no implementation matches the subject.

    ``trait`` is the trait that was invoked and ``subject`` the value no
    implementation could be found for.
    """

    code = ERROR_CODE_TRAIT_NOT_IMPLEMENTED

    def __init__(self, message: str, *, trait: Trait, subject: Any) -> None:
        super().__init__(
            message,
            details={"trait": trait.name, "subject_type": type(subject).__qualname__},
        )
        self.trait = trait
        self.subject = subject


class SetAssignmentError(TraitkitError, ValueError):
    """Raised when assigning a set member under a key that differs from it."""

    code = ERROR_CODE_SET_KEY_MISMATCH

    def __init__(self, key: Any, value: Any) -> None:
        super().__init__(
            f"For sets, keys and values must be the same; {key!r} != {value!r}",
            details={"key": repr(key), "value": repr(value)},
        )
        self.key = key
        self.value = value


class ManifestValidationError(TraitkitError, ValueError):
    code = ERROR_CODE_MANIFEST_INVALID


class PluginLoadError(TraitkitError, RuntimeError):
    code = ERROR_CODE_PLUGIN_LOAD_FAILED

    def __init__(self, entry_name: str, reason: str) -> None:
        super().__init__(
            f"Failed to load trait implementation plugin '{entry_name}': {reason}",
            details={"entry_point": entry_name},
        )
        self.entry_name = entry_name


__all__ = [
    "ERROR_CODE_MANIFEST_INVALID",
    "ERROR_CODE_PLUGIN_LOAD_FAILED",
    "ERROR_CODE_SET_KEY_MISMATCH",
    "ERROR_CODE_TRAIT_NOT_IMPLEMENTED",
    "ManifestValidationError",
    "PluginLoadError",
    "SetAssignmentError",
    "TraitNotImplemented",
    "TraitkitError",
]
