# sdir/emptiness.py

"""
Effective emptiness of directories.

A directory is effectively empty when no admitted regular file can be reached
from it through admitted directories. The check always descends to the bottom
of the tree, regardless of the display depth limit, and is memoized per
resolved path.
"""

from __future__ import annotations

from pathlib import Path

from sdir.config import TraversalConfig
from sdir.filters import EntryFilter
from sdir.walker import DirectoryWalker, is_file


class EmptinessClassifier:
    def __init__(self, entry_filter: EntryFilter) -> None:
        self.entry_filter = entry_filter
        self._cache: dict[Path, bool] = {}

    def is_empty(self, directory: Path) -> bool:
        key = directory.resolve()
        if key in self._cache:
            return self._cache[key]

        # Seed the cache so that a symlink cycle reads as empty instead of recursing forever.
        self._cache[key] = True
        walker = self.entry_filter.walker
        empty = True
        for child in self.entry_filter.admitted_children(directory):
            if walker.can_descend(child):
                if not self.is_empty(child):
                    empty = False
                    break
            elif is_file(child):
                empty = False
                break
        self._cache[key] = empty
        return empty


def is_effectively_empty(directory: Path, config: TraversalConfig | None = None) -> bool:
    """
    Tell whether ``directory`` holds no admitted regular file at any depth.

    Parameters
    ----------
    directory : pathlib.Path
        Directory to classify.
    config : TraversalConfig | None, optional
        Filtering policy (ignore files, hidden entries, glob, lock files,
        dirs-only). ``max_depth`` is not consulted.

    Returns
    -------
    bool
        ``True`` if no admitted file is reachable through admitted directories.
    """
    config = config or TraversalConfig()
    walker = DirectoryWalker(directory, config)
    return EmptinessClassifier(EntryFilter(config, walker)).is_empty(directory)
