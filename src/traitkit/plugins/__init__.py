from traitkit.plugins.interfaces import ImplPlugin
from traitkit.plugins.loader import load_impl_plugins

__all__ = ["ImplPlugin", "load_impl_plugins"]
