"""Recursive directory enumeration and the once-only listing cache."""

from __future__ import annotations

import logging
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

from .models import ListingEntry

logger = logging.getLogger(__name__)


def _is_readable(path: str) -> bool:
    return os.access(path, os.R_OK)


def _walk(directory: Path, subpath: str) -> Iterator[ListingEntry]:
    """Yield regular files depth-first, pre-order, entries sorted by name."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", directory, e)
        return

    for entry in entries:
        if entry.name.startswith("."):
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                child = entry.name if not subpath else subpath + os.sep + entry.name
                yield from _walk(Path(entry.path), child)
            elif entry.is_file():
                yield ListingEntry(
                    subpath=subpath,
                    filename=entry.name,
                    path=os.path.abspath(entry.path),
                    is_readable=_is_readable(entry.path),
                )
        except OSError as e:
            logger.debug("Skipping %s: %s", entry.path, e)


class DirectoryListing:
    """Ordered snapshot of the regular files under a root directory."""

    def __init__(self, root: str, entries: Iterable[ListingEntry]):
        self.root = root
        self.entries: tuple[ListingEntry, ...] = tuple(entries)

    def __iter__(self) -> Iterator[ListingEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, candidates: Iterable[str], namespaced: bool) -> ListingEntry | None:
        """
        Return the first entry, in enumeration order, matching any candidate.

        Args:
            candidates: Lower-cased relative paths (or bare filenames).
            namespaced: Compare "subpath/filename" instead of the filename.
        """
        wanted = frozenset(candidates)
        if not wanted:
            return None
        for entry in self.entries:
            if entry.comparison_key(namespaced) in wanted:
                return entry
        return None


def scan_directory(root: str | os.PathLike) -> DirectoryListing:
    """
    Enumerate every regular file below root.

    Hidden entries (dot-prefixed) are skipped and symlinked directories are
    not descended into. A missing or unreadable root yields an empty listing.
    """
    root_str = os.fspath(root)
    return DirectoryListing(root_str, _walk(Path(root_str), ""))


class ListingState(str, Enum):
    UNBUILT = "unbuilt"
    CACHED = "cached"


class ListingCache:
    """
    Builds a DirectoryListing on first use and returns it forever after.

    The transition UNBUILT -> CACHED happens once and is never reversed;
    later filesystem changes are not seen.
    """

    def __init__(self, root: str | os.PathLike):
        self.root = os.fspath(root)
        self._listing: DirectoryListing | None = None
        self._lock = threading.Lock()

    @property
    def state(self) -> ListingState:
        return ListingState.UNBUILT if self._listing is None else ListingState.CACHED

    def get(self) -> DirectoryListing:
        listing = self._listing
        if listing is not None:
            return listing

        with self._lock:
            if self._listing is None:
                listing = scan_directory(self.root)
                logger.info("Indexed %d files under %s", len(listing), self.root)
                self._listing = listing
            return self._listing
