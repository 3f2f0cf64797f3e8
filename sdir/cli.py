# sdir/cli.py

"""
Command line interface.

``sdir [PATHS]...`` renders each path (a file as its content, a directory as a
tree), prints the rendering, and copies the combined plain output to the
clipboard unless ``--no-copy`` is given. Every option can also be set through
an ``SDIR_<OPTION>`` environment variable.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sdir.app import run, save_output
from sdir.clipboard import ClipboardSink, NullSink, PyperclipSink
from sdir.config import OutputFormat, TraversalConfig
from sdir.errors import ClipboardUnavailable, SdirError, WriteError

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def report_error(exc: SdirError) -> None:
    click.echo(f"Error: {exc.message}", err=True)


@click.command(context_settings={"auto_envvar_prefix": "SDIR"})
@click.version_option(package_name="sdir")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--dirs-only", is_flag=True, help="Show only directories.")
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=None,
    help="Do not expand directories deeper than this level.",
)
@click.option(
    "--output",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    show_default=True,
    help="Render directories as an indented tree or as JSON.",
)
@click.option("--no-copy", is_flag=True, help="Do not copy the output to the clipboard.")
@click.option("--include-locks", is_flag=True, help="Show lock files (hidden by default).")
@click.option(
    "--include-files",
    "include_glob",
    metavar="PATTERN",
    default=None,
    help="Only show files matching this glob, and directories containing such files.",
)
@click.option(
    "--save",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the plain output to this file.",
)
@click.option("--no-contents", is_flag=True, help="Do not append file contents after the tree.")
@click.option("--hidden", "show_hidden", is_flag=True, help="Show hidden (dot) entries.")
@click.option("--no-ignore", is_flag=True, help="Do not honor .gitignore and .ignore files.")
@click.option("--follow-symlinks", is_flag=True, help="Expand symbolic links to directories.")
@click.option("-v", "--verbose", count=True, help="Log more (repeat for debug output).")
@click.pass_context
def main(
    ctx: click.Context,
    paths: tuple[str, ...],
    dirs_only: bool,
    max_depth: int | None,
    output: str,
    no_copy: bool,
    include_locks: bool,
    include_glob: str | None,
    save: Path | None,
    no_contents: bool,
    show_hidden: bool,
    no_ignore: bool,
    follow_symlinks: bool,
    verbose: int,
) -> None:
    """Render files and directory trees, and copy the result to the clipboard."""
    configure_logging(verbose)

    config = TraversalConfig(
        max_depth=max_depth,
        dirs_only=dirs_only,
        include_locks=include_locks,
        include_glob=include_glob,
        show_hidden=show_hidden,
        follow_symlinks=follow_symlinks,
        respect_ignore_files=not no_ignore,
    )

    try:
        result = run(
            paths or (".",),
            config,
            OutputFormat(output),
            contents=not no_contents,
            on_error=report_error,
        )
    except SdirError as exc:
        report_error(exc)
        ctx.exit(1)

    if save is not None:
        try:
            save_output(result.buffer, save)
        except WriteError as exc:
            logger.error("%s", exc.message)
        else:
            click.echo(f"Output saved to {save}.", err=True)

    sink: ClipboardSink
    if no_copy:
        sink = NullSink()
    else:
        sink = (ctx.obj or {}).get("clipboard") or PyperclipSink()

    if result.buffer:
        try:
            sink.copy(result.buffer)
        except ClipboardUnavailable as exc:
            logger.warning("%s", exc.message)
        else:
            if not no_copy:
                click.echo("Output copied to clipboard.", err=True)
