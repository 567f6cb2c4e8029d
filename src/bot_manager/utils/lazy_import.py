"""Deferred imports for optional backends (motor, redis)."""

from collections.abc import Callable
from functools import cache
from importlib import import_module

__all__ = [
    "lazy_import",
]


def lazy_import(
    module_name: str,
    name: str | None = None,
) -> Callable[[], object]:
    """Return a loader that imports a module, or one of its attributes, on first call.

    Raises:
        ImportError: From the loader, naming the missing backend module
    """

    @cache
    def _load() -> object:
        try:
            mod = import_module(module_name)
        except ImportError as e:
            raise ImportError(
                f"Backend module '{module_name}' is not installed; "
                "install bot-manager with its default dependencies."
            ) from e
        return getattr(mod, name) if name else mod

    return _load
