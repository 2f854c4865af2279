from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ImplPlugin(Protocol):
    # Entry points may also target a module (registrations run on import) or
    # a plain zero-argument callable.
    def register(self) -> None:
        """Register implementations on traits."""
