# sdir/app.py

"""
Processing of the command line's input paths.

Each path is handled to completion before the next one starts. A directory is
rendered as a tree (text or JSON), a file as its path and content. The plain
renderings are accumulated into one output buffer, separated by blank lines;
that buffer is what gets copied to the clipboard or saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

import click

from sdir.config import OutputFormat, TraversalConfig
from sdir.content import render_file
from sdir.errors import InputNotFileOrDir, InputNotFound, SdirError, WriteError
from sdir.render import TerminalTarget, render_json, render_text
from sdir.walker import is_dir, is_file

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    buffer: str = ""
    errors: list[SdirError] = field(default_factory=list)


def process_path(
    path: Path | str,
    config: TraversalConfig,
    output: OutputFormat = OutputFormat.TEXT,
    *,
    contents: bool = True,
    echo: bool = True,
) -> str:
    """
    Render one input path and return its plain rendering.

    Paths in the rendering keep the spelling of ``path`` (a leading ``./`` is
    not dropped).

    With ``echo``, the rendering is also written to standard output as it is
    produced (styled, for text trees).

    Raises
    ------
    InputNotFound
        If ``path`` does not exist.
    InputNotFileOrDir
        If ``path`` exists but is neither a regular file nor a directory.
    ReadError
        If ``path`` is a file that cannot be read as text.
    """
    logger.debug("Processing %s", path)
    fs_path = Path(path)
    if not fs_path.exists():
        raise InputNotFound(path)

    if is_file(fs_path):
        text = render_file(path)
        if echo:
            click.echo(text, nl=False)
        return text

    if not is_dir(fs_path):
        raise InputNotFileOrDir(path)

    if output is OutputFormat.JSON:
        text = render_json(path, config)
        if echo:
            click.echo(text)
        return text + "\n"

    targets = [TerminalTarget()] if echo else []
    return render_text(path, config, targets=targets, contents=contents)


def run(
    paths: Sequence[Path | str],
    config: TraversalConfig,
    output: OutputFormat = OutputFormat.TEXT,
    *,
    contents: bool = True,
    echo: bool = True,
    on_error: Callable[[SdirError], None] | None = None,
) -> RunResult:
    """
    Process every input path and accumulate the output buffer.

    With a single path, any error propagates. With several, a failing path is
    reported through ``on_error``, recorded in the result and skipped.
    """
    result = RunResult()
    sections: list[str] = []

    for path in paths:
        try:
            sections.append(
                process_path(path, config, output, contents=contents, echo=echo)
            )
        except SdirError as exc:
            if len(paths) == 1:
                raise
            result.errors.append(exc)
            if on_error is not None:
                on_error(exc)

    result.buffer = "\n".join(sections)
    return result


def save_output(text: str, path: Path) -> None:
    """
    Write the output buffer verbatim to ``path``.

    Raises
    ------
    WriteError
        If the file cannot be written.
    """
    try:
        path.write_bytes(text.encode("utf-8"))
    except OSError as exc:
        raise WriteError(path, exc) from exc
