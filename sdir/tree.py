# sdir/tree.py

"""
Directory tree construction.

This module turns a root directory into a tree of :class:`TreeNode` objects,
one level of directory listing at a time, under a :class:`TraversalConfig`.

The same traversal drives every output: the builder returns the in-memory tree
(used for JSON) and, while building it, reports each node to an optional
:class:`TreeVisitor` (used to stream the text rendering) and each file to an
optional content collector. Siblings are visited in ascending path order and
each subtree is finished before the next sibling starts.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from anytree import NodeMixin

from sdir.config import TraversalConfig
from sdir.emptiness import EmptinessClassifier
from sdir.filters import EntryFilter
from sdir.walker import DirectoryWalker, is_dir, is_file


class TreeNode(NodeMixin):
    """
    One rendered filesystem entry.

    ``expanded`` tells a directory whose children were listed (possibly none)
    apart from one that was not listed at all because of the depth limit or
    because it is a symbolic link that is not followed. Files are never
    expanded.
    """

    def __init__(
        self,
        name: str,
        fs_path: Path,
        *,
        display_path: str | None = None,
        is_dir: bool,
        is_empty: bool = False,
        expanded: bool = False,
        parent: TreeNode | None = None,
        children: list[TreeNode] | None = None,
    ) -> None:
        super().__init__()
        self.name = name
        self.fs_path = fs_path
        self.display_path = display_path if display_path is not None else os.fspath(fs_path)
        self.is_dir = is_dir
        self.is_empty = is_empty
        self.expanded = expanded
        self.parent = parent
        if children:
            self.children = children

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"TreeNode({self.display_path!r}, {kind})"


class TreeVisitor(Protocol):
    def visit(self, node: TreeNode, lineage: tuple[bool, ...]) -> None:
        """
        Called once per non-root node, before its own children are built.

        ``lineage`` holds one flag per level from the root's children down to
        ``node`` itself, each telling whether the entry at that level is the
        last of its siblings.
        """


class FileSink(Protocol):
    def collect(self, path: Path, display_path: str) -> None: ...


class TreeBuilder:
    """
    Build the tree of admitted entries below ``root``.

    Parameters
    ----------
    root : pathlib.Path | str
        Directory to expand, as the user typed it; child paths are shown
        joined onto this spelling (so ``.`` gives ``./a.txt``). It is always expanded (unless ``max_depth`` is
        ``0``), even when it is a symbolic link.
    config : TraversalConfig
        Filtering and depth policy.
    visitor : TreeVisitor | None, optional
        Receives every node in display order.
    collector : FileSink | None, optional
        Receives the path (and display path) of every regular file placed in
        the tree.
    """

    def __init__(
        self,
        root: Path | str,
        config: TraversalConfig,
        *,
        visitor: TreeVisitor | None = None,
        collector: FileSink | None = None,
    ) -> None:
        self.root_display = os.fspath(root)
        self.root = Path(root)
        self.config = config
        self.visitor = visitor
        self.collector = collector
        self.walker = DirectoryWalker(self.root, config)
        self.entry_filter = EntryFilter(config, self.walker)
        self.classifier = EmptinessClassifier(self.entry_filter)
        # With an include glob, directories without content are not shown at all.
        self._drop_empty_dirs = config.include_glob is not None and not config.dirs_only

    def build(self) -> TreeNode:
        root_node = TreeNode(
            self.root.name or self.root_display,
            self.root,
            display_path=self.root_display,
            is_dir=True,
            is_empty=self.classifier.is_empty(self.root),
        )
        self._expand(root_node, 0, ())
        return root_node

    def _is_empty(self, directory: Path) -> bool:
        if not self.walker.can_descend(directory):
            return True
        return self.classifier.is_empty(directory)

    def _children(self, directory: Path) -> list[tuple[Path, bool]]:
        children = []
        for child in self.entry_filter.admitted_children(directory):
            child_is_dir = is_dir(child)
            # Vanished or special entries are skipped.
            if not child_is_dir and not is_file(child):
                continue
            if child_is_dir and self._drop_empty_dirs and self._is_empty(child):
                continue
            children.append((child, child_is_dir))
        return children

    def _expand(self, node: TreeNode, depth: int, lineage: tuple[bool, ...]) -> None:
        if self.config.depth_reached(depth):
            return

        node.expanded = True
        children = self._children(node.fs_path)
        built: list[TreeNode] = []

        for i, (child, child_is_dir) in enumerate(children):
            child_lineage = lineage + (i == len(children) - 1,)
            child_display = os.path.join(node.display_path, child.name)
            child_node = TreeNode(
                child.name,
                child,
                display_path=child_display,
                is_dir=child_is_dir,
                is_empty=child_is_dir and self._is_empty(child),
            )
            if self.visitor is not None:
                self.visitor.visit(child_node, child_lineage)

            if child_is_dir:
                if self.walker.can_descend(child):
                    self._expand(child_node, depth + 1, child_lineage)
            elif self.collector is not None:
                self.collector.collect(child, child_display)

            built.append(child_node)

        node.children = built


def build_tree(root: Path | str, config: TraversalConfig | None = None) -> TreeNode:
    """
    Build and return the tree of admitted entries below the directory ``root``.

    Raises
    ------
    NotADirectoryError
        If ``root`` is not a directory.
    """
    if not is_dir(Path(root)):
        raise NotADirectoryError(f"Not a directory: {root}")
    return TreeBuilder(root, config or TraversalConfig()).build()
