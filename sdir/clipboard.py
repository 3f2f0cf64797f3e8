# sdir/clipboard.py

"""
Clipboard sinks.

The system clipboard is reached through a small sink interface so that the
command line can swap it for a no-op (``--no-copy``) and tests for a
recording double.
"""

from __future__ import annotations

from typing import Protocol

import pyperclip

from sdir.errors import ClipboardUnavailable


class ClipboardSink(Protocol):
    def copy(self, text: str) -> None:
        """Put ``text`` on the clipboard, raising ``ClipboardUnavailable`` on failure."""


class PyperclipSink:
    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardUnavailable(exc) from exc


class NullSink:
    """Discards the text; used for ``--no-copy``."""

    def copy(self, text: str) -> None:
        pass


class MemorySink:
    """Keeps every copied text, most recent last."""

    def __init__(self) -> None:
        self.copied: list[str] = []

    def copy(self, text: str) -> None:
        self.copied.append(text)

    @property
    def last(self) -> str | None:
        return self.copied[-1] if self.copied else None
