"""
sdir — render a path as file content or as a directory tree.

This package provides the pieces behind the ``sdir`` command:
- a filtered, depth-limited directory traversal honoring ignore files,
- an indented text tree (with file contents appended) and a JSON tree,
  both produced from that one traversal,
- a file mode printing a single file's path and content.

The API is based on ``pathlib.Path``.
"""

from __future__ import annotations

from .config import OutputFormat, TraversalConfig
from .content import render_file
from .emptiness import is_effectively_empty
from .render import render_json, render_text, tree_to_dict
from .tree import TreeNode, build_tree

__all__ = [
    "OutputFormat",
    "TraversalConfig",
    "TreeNode",
    "build_tree",
    "is_effectively_empty",
    "render_file",
    "render_json",
    "render_text",
    "tree_to_dict",
]
