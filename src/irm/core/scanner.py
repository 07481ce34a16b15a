"""Directory size computation ahead of a deletion pass."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from irm.core.errors import ScanError
from irm.models.scan_result import ScanResult

log = logging.getLogger(__name__)


def scan(path: Path | str) -> int:
    """Return the total size in bytes of all regular files under *path*."""
    return scan_tree(path).total_bytes


def scan_tree(path: Path | str) -> ScanResult:
    """Size the tree under *path* and record every regular file in it.

    Symlinks and special files are neither followed nor counted, and the
    root directory itself contributes nothing.  The first entry that cannot
    be listed or statted raises :class:`ScanError`, since a partial total
    would misreport progress during deletion.
    """
    total = 0
    files: set[Path] = set()
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            raise ScanError(current, e) from e
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    stack.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    total += entry.stat(follow_symlinks=False).st_size
                    files.add(Path(entry.path))
            except OSError as e:
                raise ScanError(entry.path, e) from e

    log.debug("Scanned %s: %d bytes in %d files", path, total, len(files))
    return ScanResult(total_bytes=total, files=frozenset(files))
