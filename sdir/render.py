# sdir/render.py

"""
Text and JSON renderings of a directory tree.

The text rendering is streamed: the tree builder reports each node to a
:class:`TextRenderer`, which turns it into a :class:`TreeLine` and hands that
line to every render target. :class:`PlainTarget` accumulates the unstyled
text that is copied to the clipboard or saved; :class:`TerminalTarget` echoes
a styled version of the same line to standard output.

The JSON rendering serializes the finished :class:`~sdir.tree.TreeNode` tree.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any, Iterable, Protocol

import click

from sdir.config import TraversalConfig
from sdir.content import ContentCollector
from sdir.tree import TreeBuilder, TreeNode

DIR_ICON = "📁"
FILE_ICON = "📄"
EMPTY_SUFFIX = " (empty)"

BRANCH = "├──"
LAST_BRANCH = "└──"
PIPE = "│   "
SPACE = "    "


@dataclass(frozen=True)
class TreeLine:
    prefix: str
    connector: str
    name: str
    is_dir: bool
    is_empty: bool = False

    @property
    def icon(self) -> str:
        return DIR_ICON if self.is_dir else FILE_ICON

    @property
    def suffix(self) -> str:
        return EMPTY_SUFFIX if self.is_dir and self.is_empty else ""

    def plain(self) -> str:
        return f"{self.prefix}{self.connector} {self.icon} {self.name}{self.suffix}"

    def styled(self) -> str:
        label = f"{self.icon} {self.name}"
        if self.is_dir:
            label = click.style(label, fg="blue", bold=True)
        else:
            label = click.style(label, fg="green")
        prefix = click.style(self.prefix, fg="bright_black") if self.prefix else ""
        connector = click.style(self.connector, fg="bright_black")
        suffix = click.style(self.suffix, dim=True) if self.suffix else ""
        return f"{prefix}{connector} {label}{suffix}"


class RenderTarget(Protocol):
    def heading(self, text: str) -> None: ...

    def line(self, line: TreeLine) -> None: ...


class PlainTarget:
    """Accumulates the unstyled rendering, one newline-terminated line at a time."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def heading(self, text: str) -> None:
        self._parts.append(text + "\n")

    def line(self, line: TreeLine) -> None:
        self._parts.append(line.plain() + "\n")

    def write(self, text: str) -> None:
        self._parts.append(text)

    def getvalue(self) -> str:
        return "".join(self._parts)


class TerminalTarget:
    """Echoes styled lines; click drops the styling when stdout is not a terminal."""

    def heading(self, text: str) -> None:
        click.echo(text)

    def line(self, line: TreeLine) -> None:
        click.echo(line.styled())


class TextRenderer:
    """Tree visitor turning nodes into lines for a set of targets."""

    def __init__(self, targets: Iterable[RenderTarget]) -> None:
        self.targets = list(targets)

    def visit(self, node: TreeNode, lineage: tuple[bool, ...]) -> None:
        *ancestors, last = lineage
        tree_line = TreeLine(
            prefix="".join(SPACE if a else PIPE for a in ancestors),
            connector=LAST_BRANCH if last else BRANCH,
            name=node.name,
            is_dir=node.is_dir,
            is_empty=node.is_empty,
        )
        for target in self.targets:
            target.line(tree_line)


def heading_name(root: Path | str) -> str:
    """
    Name used in the text heading.

    This is the last component of ``root`` as typed, or the name of the working
    directory for ``.``. A path with no final name (``./``, ``foo/..``, ``/``)
    is shown as typed.
    """
    raw = os.fspath(root)
    if raw == ".":
        return Path.cwd().name or "."
    name = PurePath(raw).name
    return raw if name in ("", "..") else name


def render_text(
    root: Path | str,
    config: TraversalConfig | None = None,
    *,
    targets: Iterable[RenderTarget] = (),
    contents: bool = True,
) -> str:
    """
    Render the directory ``root`` as an indented tree.

    The rendering starts with a heading and a root line, then one line per
    admitted entry. Unless ``contents`` is ``False``, the text of every file
    in the tree is appended after it, under a ``# File Contents`` heading.

    Parameters
    ----------
    root : pathlib.Path | str
        Directory to render. Paths in the output keep its spelling.
    config : TraversalConfig | None, optional
        Traversal policy. Defaults to ``TraversalConfig()``.
    targets : Iterable[RenderTarget], optional
        Extra targets receiving the tree lines as they are produced, e.g. a
        :class:`TerminalTarget`. The file contents section is not sent to them.
    contents : bool, default=True
        Whether to collect and append file contents.

    Returns
    -------
    str
        The plain (unstyled) rendering.
    """
    config = config or TraversalConfig()
    plain = PlainTarget()
    all_targets: list[RenderTarget] = [plain, *targets]

    for target in all_targets:
        target.heading(f"# tree structure of directory `{heading_name(root)}`")
        target.heading(f"{DIR_ICON} {root}")

    collector = ContentCollector() if contents else None
    TreeBuilder(
        root, config, visitor=TextRenderer(all_targets), collector=collector
    ).build()

    if collector is not None:
        plain.write(collector.render())
    return plain.getvalue()


def tree_to_dict(node: TreeNode) -> dict[str, Any]:
    """
    Convert a tree into plain dictionaries.

    Keys follow the order ``name, path, is_dir, is_empty, children``;
    ``children`` is left out for nodes that were not expanded.
    """
    data: dict[str, Any] = {
        "name": node.name,
        "path": node.display_path,
        "is_dir": node.is_dir,
        "is_empty": node.is_empty,
    }
    if node.expanded:
        data["children"] = [tree_to_dict(child) for child in node.children]
    return data


def render_json(root: Path | str, config: TraversalConfig | None = None) -> str:
    """Render the directory ``root`` as a pretty-printed JSON document."""
    tree = TreeBuilder(root, config or TraversalConfig()).build()
    return json.dumps(tree_to_dict(tree), indent=2, ensure_ascii=False)
