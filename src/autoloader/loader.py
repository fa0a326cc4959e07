"""Loading matched files into the running program."""

from __future__ import annotations

import logging
import os
import runpy
import threading
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class FileLoader(Protocol):
    """Protocol for the step that makes a matched file's symbols available.

    The resolver calls load() at most once per resolved symbol. Implementations
    must tolerate being handed the same path again and do nothing the
    second time.
    """

    def load(self, path: str) -> None:
        """Load the file at path.

        Args:
            path: Absolute path of the matched file.
        """
        ...


class IncludeOnceLoader:
    """Execute Python source files and publish the names they define.

    Each file runs in its own fresh globals (via runpy). Every public name
    it leaves behind (not starting with "_") is copied into the shared
    symbol table. A file already loaded is never executed again.
    Exceptions raised by the file's own code propagate to the caller.
    """

    def __init__(self, symbols: dict[str, Any] | None = None):
        self.symbols: dict[str, Any] = symbols if symbols is not None else {}
        self._loaded: dict[str, list[str]] = {}
        self._lock = threading.RLock()

    def is_loaded(self, path: str) -> bool:
        return os.path.realpath(path) in self._loaded

    def loaded_paths(self) -> list[str]:
        return list(self._loaded)

    def names_from(self, path: str) -> list[str]:
        """Names published by a previously loaded file."""
        return list(self._loaded.get(os.path.realpath(path), []))

    def load(self, path: str) -> None:
        key = os.path.realpath(path)
        with self._lock:
            if key in self._loaded:
                logger.debug("Already loaded %s", key)
                return

            logger.debug("Loading %s", key)
            namespace = runpy.run_path(key, run_name=_module_name_for(key))
            names = [name for name in namespace if not name.startswith("_")]
            for name in names:
                self.symbols[name] = namespace[name]
            self._loaded[key] = names


def _module_name_for(path: str) -> str:
    """Synthetic __name__ for an executed file, unique per path."""
    stem = os.path.splitext(os.path.basename(path))[0]
    safe = "".join(ch if ch.isalnum() else "_" for ch in stem)
    return f"autoloaded_{safe}_{abs(hash(path)):x}"
