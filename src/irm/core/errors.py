"""Errors raised by the scan and deletion passes."""

from __future__ import annotations

from pathlib import Path


class IrmError(Exception):
    """Base class for fatal filesystem errors during a remove operation."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {cause.strerror or cause}")


class ScanError(IrmError):
    """Raised when an entry cannot be listed or statted while sizing a tree."""


class DeletionError(IrmError):
    """Raised when a file or directory cannot be removed."""
