"""Registry of autoload hooks called when a symbol cannot be found."""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Any, Callable

logger = logging.getLogger(__name__)

AutoloadHook = Callable[[str], None]


class AutoloadRegistry:
    """Ordered stack of autoload callables sharing one symbol table.

    load() calls each registered hook in turn until the requested symbol
    shows up in the symbol table. Loaders publish bare names, so with a
    namespace_separator a request for "Ns\\Sub\\Bar" is satisfied once "Bar"
    is defined.
    """

    def __init__(
        self,
        symbols: dict[str, Any] | None = None,
        namespace_separator: str | None = None,
    ):
        self.symbols: dict[str, Any] = symbols if symbols is not None else {}
        self.namespace_separator = namespace_separator
        self._hooks: list[AutoloadHook] = []

    def defined_name(self, symbol_name: str) -> str:
        """Key under which symbol_name appears in the symbol table."""
        if not self.namespace_separator:
            return symbol_name
        return symbol_name.rpartition(self.namespace_separator)[2]

    def register(self, hook: AutoloadHook, prepend: bool = False) -> None:
        """Register a hook (typically a Resolver). Registering twice is a no-op.

        Args:
            hook: Callable taking the symbol name.
            prepend: Put the hook at the front of the stack.
        """
        if hook in self._hooks:
            return
        if prepend:
            self._hooks.insert(0, hook)
        else:
            self._hooks.append(hook)

    def unregister(self, hook: AutoloadHook) -> bool:
        """Remove a hook. Returns False if it was not registered."""
        try:
            self._hooks.remove(hook)
        except ValueError:
            return False
        return True

    def registered(self) -> list[AutoloadHook]:
        return list(self._hooks)

    def load(self, symbol_name: str) -> bool:
        """
        Run hooks until symbol_name is defined.

        Returns:
            True if the symbol is available afterwards.
        """
        key = self.defined_name(symbol_name)
        if key in self.symbols:
            return True
        for hook in self._hooks:
            hook(symbol_name)
            if key in self.symbols:
                return True
        logger.debug("No autoload hook provided %r", symbol_name)
        return False

    def clear(self) -> None:
        """Drop all hooks. Mainly for testing."""
        self._hooks.clear()


def install_module_getattr(module: ModuleType, registry: AutoloadRegistry) -> None:
    """
    Make attribute misses on module trigger autoloading (PEP 562).

    Only names missing from the module itself reach the hook; loaded symbols
    are read from the registry's symbol table.
    """

    def __getattr__(name: str) -> Any:
        if name.startswith("__") or not registry.load(name):
            raise AttributeError(f"module {module.__name__!r} has no attribute {name!r}")
        return registry.symbols[registry.defined_name(name)]

    module.__getattr__ = __getattr__


default_registry = AutoloadRegistry()


def register(hook: AutoloadHook, prepend: bool = False) -> None:
    """Register a hook with the process-wide registry."""
    default_registry.register(hook, prepend=prepend)


def unregister(hook: AutoloadHook) -> bool:
    """Remove a hook from the process-wide registry."""
    return default_registry.unregister(hook)
