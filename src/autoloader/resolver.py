"""Convention-based resolution of symbol names to source files."""

from __future__ import annotations

import logging

from .listing import DirectoryListing, ListingCache, ListingState
from .loader import FileLoader, IncludeOnceLoader
from .models import AutoloaderConfig, Resolution, ResolveOutcome
from .naming import build_candidates

logger = logging.getLogger(__name__)


class Resolver:
    """Looks for and loads the file defining a requested symbol.

    Filename comparison is always case-insensitive and the first matching
    file in enumeration order wins. The directory tree is enumerated once,
    on first use, and that listing is reused for the resolver's lifetime.

    Usage:
        config = ConfigBuilder().set_root_directory("lib").enable_namespaces().build()
        resolver = Resolver(config)
        resolver.resolve("App\\\\Models\\\\User")
    """

    def __init__(self, config: AutoloaderConfig, loader: FileLoader | None = None):
        self.config = config
        self.loader: FileLoader = loader if loader is not None else IncludeOnceLoader()
        self._cache = ListingCache(config.root_directory)

    @property
    def listing_state(self) -> ListingState:
        return self._cache.state

    def listing(self) -> DirectoryListing:
        """Return the directory listing, building it on first call."""
        return self._cache.get()

    def candidates(self, symbol_name: str) -> tuple[str, ...]:
        """Candidate relative paths for a symbol name, in prefix order."""
        return build_candidates(symbol_name, self.config)

    def locate(self, symbol_name: str) -> Resolution:
        """Find the file a symbol would resolve to without loading it."""
        candidates = self.candidates(symbol_name)
        if not candidates:
            return Resolution(symbol_name, ResolveOutcome.NO_CANDIDATES)

        entry = self.listing().find(candidates, self.config.uses_namespaces)
        if entry is None:
            return Resolution(symbol_name, ResolveOutcome.NO_MATCH, candidates)
        if not entry.is_readable:
            return Resolution(symbol_name, ResolveOutcome.UNREADABLE, candidates, entry)
        return Resolution(symbol_name, ResolveOutcome.FOUND, candidates, entry)

    def resolve_detailed(self, symbol_name: str) -> Resolution:
        """
        Resolve a symbol name and load the matched file.

        An unreadable match still ends the search; nothing else is tried.

        Returns:
            A Resolution describing the outcome.
        """
        result = self.locate(symbol_name)
        if result.outcome is ResolveOutcome.FOUND:
            self.loader.load(result.entry.path)
            result.outcome = ResolveOutcome.LOADED

        logger.debug(
            "Resolved %r -> %s (candidates=%s, path=%s)",
            symbol_name,
            result.outcome.value,
            list(result.candidates),
            result.entry.path if result.entry else None,
        )
        return result

    def resolve(self, symbol_name: str) -> None:
        """Autoload hook: load the file for symbol_name if one can be found."""
        self.resolve_detailed(symbol_name)

    __call__ = resolve
