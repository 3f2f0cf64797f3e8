# sdir/content.py

"""
File content extraction.

This module holds the two places where file contents end up in the output:

- :class:`ContentCollector`, which gathers the text of every file placed in a
  directory tree so that it can be appended after the tree, and
- :func:`render_file`, which handles an input path that is a single file.

Files that cannot be read, or are not valid UTF-8, are left out of the
collected contents; they still appear in the tree.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sdir.errors import ReadError

logger = logging.getLogger(__name__)

CONTENTS_HEADING = "# File Contents"


def ensure_newline(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


def read_text(path: Path) -> str:
    """
    Read a file as UTF-8 text.

    Raises
    ------
    ReadError
        If the file cannot be read or is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(path, exc) from exc


def display_path(path: Path | str, cwd: Path | None = None) -> str:
    """
    Return ``./<relative path>`` when ``path`` lies under ``cwd``.

    Otherwise the path is returned as it was given.
    """
    cwd = (cwd or Path.cwd()).resolve()
    try:
        rel = Path(path).resolve().relative_to(cwd)
    except ValueError:
        return os.fspath(path)
    return f"./{rel.as_posix()}"


def render_file(path: Path | str, *, cwd: Path | None = None) -> str:
    """
    Render a single file as its display path followed by its content.

    The returned text always ends with a newline.

    Raises
    ------
    ReadError
        If the file cannot be read or decoded.
    """
    content = read_text(Path(path))
    return f"{display_path(path, cwd)}\n{ensure_newline(content)}"


class ContentCollector:
    """Ordered (display path, content) pairs for the files of one tree traversal."""

    def __init__(self) -> None:
        self.files: list[tuple[str, str]] = []

    def collect(self, path: Path, display_path: str | None = None) -> None:
        try:
            content = read_text(path)
        except ReadError as exc:
            logger.debug("Skipping content of %s: %s", path, exc)
            return
        self.files.append((display_path or os.fspath(path), content))

    def render(self) -> str:
        """Return the contents section, or ``""`` when nothing was collected."""
        if not self.files:
            return ""
        parts = [f"\n{CONTENTS_HEADING}\n"]
        for path, content in self.files:
            parts.append(f"\n# {path}\n")
            parts.append(ensure_newline(content))
        return "".join(parts)
