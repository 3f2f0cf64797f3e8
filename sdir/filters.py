# sdir/filters.py

"""
The entry filter: which listed entries are shown.

Rules, applied in order (the first failing rule excludes the entry):

1. an entry identical to its parent directory is rejected;
2. with an include glob, files must match it and directories must
   (recursively) contain a file matching it;
3. in dirs-only mode, non-directories are rejected;
4. unless lock files are included, lock files are rejected.

The glob rule runs before the dirs-only rule, so combining both shows exactly
the directories that contain a matching file.
"""

from __future__ import annotations

import fnmatch
import re
from pathlib import Path

from sdir.config import TraversalConfig
from sdir.walker import DirectoryWalker, is_dir

LOCK_FILE_NAMES = frozenset({"Cargo.lock"})


def compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Compile an include glob into a regular expression over full paths.

    A pattern that does not start with ``*`` is prefixed with one, so that a
    bare suffix such as ``.rs`` behaves like ``*.rs``. ``*`` also matches
    path separators.
    """
    if not pattern.startswith("*"):
        pattern = "*" + pattern
    return re.compile(fnmatch.translate(pattern))


class EntryFilter:
    """
    Decide whether a listed entry is admitted under a :class:`TraversalConfig`.

    The recursive glob sub-scan of a directory is independent of the depth
    limit and is memoized per directory for the lifetime of the filter.
    """

    def __init__(self, config: TraversalConfig, walker: DirectoryWalker) -> None:
        self.config = config
        self.walker = walker
        self.glob = compile_glob(config.include_glob) if config.include_glob else None
        self._contains_match: dict[Path, bool] = {}

    def matches_glob(self, p: Path) -> bool:
        return self.glob is not None and self.glob.match(p.as_posix()) is not None

    def contains_match(self, directory: Path) -> bool:
        """Whether any visible file below ``directory`` matches the include glob."""
        key = directory.resolve()
        if key not in self._contains_match:
            self._contains_match[key] = any(
                self.matches_glob(f) for f in self.walker.iter_files(directory)
            )
        return self._contains_match[key]

    def admit(self, entry: Path, parent: Path) -> bool:
        if entry == parent:
            return False

        entry_is_dir = is_dir(entry)

        if self.glob is not None:
            if entry_is_dir:
                if not self.contains_match(entry):
                    return False
            elif not self.matches_glob(entry):
                return False

        if self.config.dirs_only and not entry_is_dir:
            return False

        if not self.config.include_locks and entry.name in LOCK_FILE_NAMES:
            return False

        return True

    def admitted_children(self, directory: Path) -> list[Path]:
        """List ``directory`` through the walker and keep the admitted entries."""
        return [c for c in self.walker.list_dir(directory) if self.admit(c, directory)]
