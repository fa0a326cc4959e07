"""Data models for autoloader."""

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

DEFAULT_ROOT_DIRECTORY = str(Path(__file__).parent)
DEFAULT_FILE_EXTENSION = ".py"
DEFAULT_NAMESPACE_SEPARATOR = "\\"


@dataclass(frozen=True)
class AutoloaderConfig:
    """Naming-convention rules used to turn symbol names into file paths.

    Instances are immutable; use ConfigBuilder to assemble one and hand the
    result to a Resolver.
    """

    root_directory: str = DEFAULT_ROOT_DIRECTORY
    file_extension: str = DEFAULT_FILE_EXTENSION
    file_prefixes: tuple[str, ...] = ()  # lower-cased, in search order
    uses_snake_case: bool = False
    underscore_to_dash: bool = False
    uses_namespaces: bool = False
    strip_root_namespace: bool = False  # only meaningful with uses_namespaces
    namespace_separator: str = DEFAULT_NAMESPACE_SEPARATOR

    def effective_prefixes(self) -> tuple[str, ...]:
        """Prefixes to try, with an empty set standing for the single prefix ""."""
        return self.file_prefixes or ("",)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root_directory": self.root_directory,
            "file_extension": self.file_extension,
            "file_prefixes": list(self.file_prefixes),
            "uses_snake_case": self.uses_snake_case,
            "underscore_to_dash": self.underscore_to_dash,
            "uses_namespaces": self.uses_namespaces,
            "strip_root_namespace": self.strip_root_namespace,
            "namespace_separator": self.namespace_separator,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutoloaderConfig":
        return cls(
            root_directory=data.get("root_directory", DEFAULT_ROOT_DIRECTORY),
            file_extension=data.get("file_extension", DEFAULT_FILE_EXTENSION),
            file_prefixes=tuple(p.lower() for p in data.get("file_prefixes", [])),
            uses_snake_case=data.get("uses_snake_case", False),
            underscore_to_dash=data.get("underscore_to_dash", False),
            uses_namespaces=data.get("uses_namespaces", False),
            strip_root_namespace=data.get("strip_root_namespace", False),
            namespace_separator=data.get("namespace_separator", DEFAULT_NAMESPACE_SEPARATOR),
        )


class ConfigBuilder:
    """Collects naming-convention settings and builds an AutoloaderConfig.

    Setters accept any value without validation. An unusable setting (an
    empty extension, a missing root directory, a prefix containing a path
    separator) only means that nothing will ever match.
    """

    def __init__(self, base: AutoloaderConfig | None = None):
        self._config = base or AutoloaderConfig()

    def set_root_directory(self, directory: str | os.PathLike) -> "ConfigBuilder":
        """Set the topmost directory where recursion begins."""
        self._config = replace(self._config, root_directory=os.fspath(directory))
        return self

    def set_file_extension(self, extension: str) -> "ConfigBuilder":
        """Set the file extension, including the leading dot (e.g. ".class.py")."""
        self._config = replace(self._config, file_extension=extension)
        return self

    def set_file_prefix(self, prefix: str) -> "ConfigBuilder":
        """Equivalent to set_file_prefixes([prefix])."""
        return self.set_file_prefixes([prefix])

    def set_file_prefixes(self, prefixes: list[str]) -> "ConfigBuilder":
        """Replace the prefix list. Order is the candidate order."""
        self._config = replace(
            self._config, file_prefixes=tuple(p.lower() for p in prefixes)
        )
        return self

    def enable_snake_case(self, use_dashes: bool = False) -> "ConfigBuilder":
        """Treat symbol names as camelCase/PascalCase and convert them to snake_case."""
        self._config = replace(self._config, uses_snake_case=True)
        if use_dashes:
            self.enable_dash_for_underscore()
        return self

    def enable_dash_for_underscore(self) -> "ConfigBuilder":
        self._config = replace(self._config, underscore_to_dash=True)
        return self

    def enable_namespaces(self, strip_root: bool = False) -> "ConfigBuilder":
        """Require namespaced symbols and map namespaces onto sub-directories."""
        self._config = replace(
            self._config, uses_namespaces=True, strip_root_namespace=strip_root
        )
        return self

    def set_namespace_separator(self, separator: str) -> "ConfigBuilder":
        self._config = replace(self._config, namespace_separator=separator)
        return self

    def build(self) -> AutoloaderConfig:
        return self._config


@dataclass(frozen=True)
class ListingEntry:
    """A regular file found under the root directory."""

    subpath: str  # directory relative to the root, "" for the root itself
    filename: str
    path: str  # absolute path
    is_readable: bool

    def comparison_key(self, namespaced: bool) -> str:
        """Lower-cased name compared against candidates."""
        if namespaced and self.subpath:
            return (self.subpath + os.sep + self.filename).lower()
        return self.filename.lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "subpath": self.subpath,
            "filename": self.filename,
            "path": self.path,
            "is_readable": self.is_readable,
        }


class ResolveOutcome(str, Enum):
    """How a single resolution attempt ended."""

    NO_CANDIDATES = "no_candidates"  # malformed name or too few namespace segments
    NO_MATCH = "no_match"
    FOUND = "found"  # dry-run lookup matched a readable file
    LOADED = "loaded"
    UNREADABLE = "unreadable"  # matched, scanning stopped, nothing loaded


@dataclass
class Resolution:
    """Result of resolving one symbol name."""

    symbol_name: str
    outcome: ResolveOutcome
    candidates: tuple[str, ...] = ()
    entry: ListingEntry | None = None

    @property
    def matched(self) -> bool:
        return self.entry is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol_name": self.symbol_name,
            "outcome": self.outcome.value,
            "candidates": list(self.candidates),
            "entry": self.entry.to_dict() if self.entry else None,
        }
