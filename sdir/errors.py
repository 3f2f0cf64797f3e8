# sdir/errors.py

"""
Error types raised by sdir.

Every error carries the offending path (when there is one) so that callers can
report it without re-deriving context. Whether an error is fatal is decided by
the caller, not by the error itself.
"""

from __future__ import annotations

from pathlib import Path


class SdirError(Exception):
    """Base class for all sdir errors."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.message = message


class InputNotFound(SdirError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(f"'{path}' does not exist.", path)


class InputNotFileOrDir(SdirError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(f"'{path}' is neither a valid file nor directory.", path)


class ReadError(SdirError):
    def __init__(self, path: Path | str, reason: object) -> None:
        super().__init__(f"Cannot read file '{path}': {reason}", path)


class ClipboardUnavailable(SdirError):
    def __init__(self, reason: object) -> None:
        super().__init__(f"Could not copy to clipboard: {reason}")


class WriteError(SdirError):
    def __init__(self, path: Path | str, reason: object) -> None:
        super().__init__(f"Could not write output to '{path}': {reason}", path)
