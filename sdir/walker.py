# sdir/walker.py

"""
Ignore-aware, one-level directory listing.

The walker is the layer below the entry filter: it hides dot-entries (unless
configured otherwise) and anything matched by ``.gitignore`` / ``.ignore``
files, the way ``git`` and ``ripgrep`` would. Entries it drops never reach the
entry filter.

Ignore files are looked up in the listed directory and in every ancestor up to
the top of the enclosing git work tree, or up to the traversal root when the
root is not inside a repository. ``.gitignore`` files and the repository's
``.git/info/exclude`` only count inside a git work tree; ``.ignore`` files
count everywhere. Rules from deeper directories take precedence over rules
from shallower ones. Inside one directory, ``.ignore`` beats ``.gitignore``,
which beats ``info/exclude``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from pathspec import GitIgnoreSpec

from sdir.config import TraversalConfig

logger = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"
IGNORE_NAME = ".ignore"
GIT_EXCLUDE = Path(".git", "info", "exclude")


def is_dir(p: Path) -> bool:
    """Return ``p.is_dir()``, or ``False`` if the status cannot be determined."""
    try:
        return p.is_dir()
    except OSError:
        return False


def is_file(p: Path) -> bool:
    """Return ``p.is_file()``, or ``False`` if the status cannot be determined."""
    try:
        return p.is_file()
    except OSError:
        return False


def find_repo_root(start: Path) -> Path | None:
    """Return the nearest ancestor of ``start`` (inclusive) containing ``.git``."""
    p = start.resolve()
    for candidate in (p, *p.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


class IgnoreRules:
    """
    Gitignore-style rules collected from the ignore files of a directory tree.

    Parameters
    ----------
    top : pathlib.Path
        Outermost directory whose ignore files are honored. Must be resolved.
    in_repo : bool, default=False
        Whether ``top`` is the top of a git work tree. Git's own ignore
        files are only honored inside one.
    """

    def __init__(self, top: Path, *, in_repo: bool = False) -> None:
        self.top = top
        self.in_repo = in_repo
        self._specs: dict[Path, GitIgnoreSpec | None] = {}

    def _spec_for(self, directory: Path) -> GitIgnoreSpec | None:
        if directory in self._specs:
            return self._specs[directory]

        # Lowest precedence first; later lines win.
        ignore_files: list[Path] = []
        if self.in_repo:
            if directory == self.top:
                ignore_files.append(directory / GIT_EXCLUDE)
            ignore_files.append(directory / GITIGNORE_NAME)
        ignore_files.append(directory / IGNORE_NAME)

        lines: list[str] = []
        for ignore_file in ignore_files:
            if not is_file(ignore_file):
                continue
            try:
                lines.extend(ignore_file.read_text(encoding="utf-8").splitlines())
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Cannot read ignore file %s: %s", ignore_file, exc)

        spec = GitIgnoreSpec.from_lines(lines) if lines else None
        self._specs[directory] = spec
        return spec

    def _rule_dirs(self, directory: Path) -> list[Path]:
        # Deepest first.
        if directory != self.top and self.top not in directory.parents:
            return [directory]
        dirs = [directory]
        for parent in directory.parents:
            if parent != self.top and self.top not in parent.parents:
                break
            dirs.append(parent)
        return dirs

    def is_ignored(self, directory: Path, name: str, entry_is_dir: bool) -> bool:
        """
        Tell whether the entry ``name`` of the resolved ``directory`` is ignored.

        The deepest ignore file with a matching rule decides; a negated rule
        (``!pattern``) re-includes the entry.
        """
        for rule_dir in self._rule_dirs(directory):
            spec = self._spec_for(rule_dir)
            if spec is None:
                continue
            rel = (directory / name).relative_to(rule_dir).as_posix()
            if entry_is_dir:
                rel += "/"
            result = spec.check_file(rel)
            if result.include is not None:
                return result.include
        return False


class DirectoryWalker:
    """
    List directories one level at a time under the standard ignore rules.

    Parameters
    ----------
    root : pathlib.Path
        Root of the traversal. Used to locate the ignore-file boundary.
    config : TraversalConfig
        Supplies hidden-entry visibility, ignore-file and symlink policies.
    """

    def __init__(self, root: Path, config: TraversalConfig) -> None:
        self.config = config
        repo = find_repo_root(root)
        top = repo or root.resolve()
        self.rules = (
            IgnoreRules(top, in_repo=repo is not None)
            if config.respect_ignore_files
            else None
        )

    def can_descend(self, p: Path) -> bool:
        """Whether ``p`` is a directory the traversal is allowed to enter."""
        return is_dir(p) and (self.config.follow_symlinks or not p.is_symlink())

    def _visible(self, resolved_dir: Path, entry: Path) -> bool:
        if not self.config.show_hidden and entry.name.startswith("."):
            return False
        if self.rules is not None and self.rules.is_ignored(
            resolved_dir, entry.name, is_dir(entry)
        ):
            return False
        return True

    def list_dir(self, directory: Path) -> list[Path]:
        """
        Return the visible direct children of ``directory``, sorted by path.

        An unreadable directory yields an empty list and a warning.
        """
        try:
            children = list(directory.iterdir())
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            return []

        resolved = directory.resolve()
        visible = [c for c in children if self._visible(resolved, c)]
        visible.sort(key=str)
        return visible

    def iter_files(self, directory: Path) -> Iterator[Path]:
        """Yield every visible regular file below ``directory``, depth-first."""
        for child in self.list_dir(directory):
            if self.can_descend(child):
                yield from self.iter_files(child)
            elif is_file(child):
                yield child
