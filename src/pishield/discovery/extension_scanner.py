"""Recursive discovery of extension source files.

Walks each search root and collects files whose name ends in a recognized
source suffix. Directories named in the exclusion list are pruned before
descent, so nothing beneath them is ever visited.

Discovery Algorithm:
    1. For each root in order, skip it if it is missing or unreadable.
    2. Depth-first walk, entries visited in sorted order.
    3. Excluded directory names are never entered; symlinked directories
       are not followed.
    4. Paths reached from more than one root are reported once, at their
       first occurrence (the global root contains its scoped directories).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from pishield.discovery.search_roots import (
    EXCLUDED_DIR_NAMES,
    SOURCE_SUFFIXES,
    SearchRoot,
    default_search_roots,
)

logger = logging.getLogger(__name__)


class ExtensionDiscovery:
    """Finds analyzable extension files under a set of search roots.

    Usage::

        discovery = ExtensionDiscovery()
        for path in discovery.discover():
            print(path)

    Args:
        roots: Roots to search. When None, ``default_search_roots()`` is
            used at discovery time.
        suffixes: File name suffixes to collect.
        excluded_dirs: Directory names to prune.
    """

    def __init__(
        self,
        roots: Iterable[SearchRoot] | None = None,
        suffixes: tuple[str, ...] = SOURCE_SUFFIXES,
        excluded_dirs: frozenset[str] = EXCLUDED_DIR_NAMES,
    ) -> None:
        self.roots = list(roots) if roots is not None else None
        self.suffixes = suffixes
        self.excluded_dirs = excluded_dirs

    def discover(self) -> list[Path]:
        """Return every matching file under every root.

        Missing or unreadable roots contribute nothing; this method does not
        raise for filesystem errors.
        """
        roots = self.roots if self.roots is not None else default_search_roots()
        found: list[Path] = []
        seen: set[Path] = set()
        for root in roots:
            count = 0
            for path in self._walk_root(root):
                key = self._identity(path)
                if key in seen:
                    continue
                seen.add(key)
                found.append(path)
                count += 1
            logger.debug("Root %s (%s): %d files", root.name, root.path, count)
        return found

    def _walk_root(self, root: SearchRoot) -> Iterator[Path]:
        try:
            if not root.path.is_dir():
                logger.debug("Search root missing: %s", root.path)
                return
        except (PermissionError, OSError):
            logger.warning("Search root inaccessible: %s", root.path)
            return
        yield from self._walk(root.path)

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            entries = sorted(directory.iterdir())
        except (PermissionError, OSError) as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            return

        for entry in entries:
            try:
                if entry.is_symlink() and entry.is_dir():
                    continue
                if entry.is_dir():
                    if entry.name in self.excluded_dirs:
                        continue
                    yield from self._walk(entry)
                elif entry.name.endswith(self.suffixes) and entry.is_file():
                    yield entry
            except (PermissionError, OSError):
                continue

    @staticmethod
    def _identity(path: Path) -> Path:
        try:
            return path.resolve()
        except (OSError, RuntimeError):
            return path
