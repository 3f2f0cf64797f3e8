# sdir/config.py

"""
Traversal configuration.

A :class:`TraversalConfig` is built once per invocation and shared by reference
across the whole recursive traversal. It is frozen: nothing in the walker, the
filters or the builder may change it mid-traversal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class TraversalConfig:
    """
    Immutable settings for one directory traversal.

    Parameters
    ----------
    max_depth : int | None, default=None
        Depth at which directories stop being expanded. The root is at depth
        ``0``; ``max_depth=1`` lists the root's children but does not expand
        any of them. ``None`` means unbounded.
    dirs_only : bool, default=False
        Hide everything that is not a directory.
    include_locks : bool, default=False
        Show lock files, which are hidden by default.
    include_glob : str | None, default=None
        Only show files matching this glob, and only directories that
        (recursively) contain such a file.
    show_hidden : bool, default=False
        Show dot-entries, which the walker hides by default.
    follow_symlinks : bool, default=False
        Expand symbolic links pointing to directories.
    respect_ignore_files : bool, default=True
        Honor ``.gitignore`` and ``.ignore`` files.
    """

    max_depth: int | None = None
    dirs_only: bool = False
    include_locks: bool = False
    include_glob: str | None = None
    show_hidden: bool = False
    follow_symlinks: bool = False
    respect_ignore_files: bool = True

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.include_glob == "":
            object.__setattr__(self, "include_glob", None)

    def depth_reached(self, depth: int) -> bool:
        return self.max_depth is not None and depth >= self.max_depth
