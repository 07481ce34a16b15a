"""File and directory-tree deletion with read-only protection."""

from __future__ import annotations

import errno
import logging
import os
import stat
from pathlib import Path
from typing import Callable, Collection

from irm.core.errors import DeletionError
from irm.models.outcome import AbortReason, Aborted, DeletionPolicy, Deleted, Outcome, ProgressEvent
from irm.models.target import TargetKind

log = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def is_read_only(mode: int) -> bool:
    """Check whether permission bits grant nobody write access."""
    return not stat.S_IMODE(mode) & _WRITE_BITS


def delete_file(path: Path | str, policy: DeletionPolicy) -> Outcome:
    """Delete a single file, honouring the read-only policy.

    Returns :class:`Aborted` without touching the file when it is
    read-only and ``policy.force`` is off.

    Raises:
        DeletionError: The file could not be statted or removed.
    """
    path = Path(path)
    try:
        st = path.lstat()
    except OSError as e:
        raise DeletionError(path, e) from e

    if stat.S_ISREG(st.st_mode) and is_read_only(st.st_mode):
        if not policy.force:
            log.info("Refusing to delete read-only file: %s", path)
            return Aborted(path=path, reason=AbortReason.READ_ONLY)
        _make_writable(path, st.st_mode)

    _unlink(path)
    log.info("Deleted file %s (%d bytes)", path, st.st_size)
    return Deleted(kind=TargetKind.FILE, bytes=st.st_size)


def delete_tree(
    path: Path | str,
    total: int,
    policy: DeletionPolicy,
    on_progress: ProgressCallback | None = None,
    expected: Collection[Path] | None = None,
) -> Outcome:
    """Delete a directory tree, reporting progress against *total*.

    Files are removed depth-first, regular files of a directory before its
    subdirectories, both in name order.  Directories are only removed once
    every file is gone, deepest first and the root last.  The first read-only
    file met without ``policy.force`` ends the walk with :class:`Aborted`:
    files deleted up to that point stay deleted, every directory stays.

    Args:
        path: Existing directory to remove.
        total: Byte total from the scan pass, used as progress denominator.
        policy: Read-only handling.
        on_progress: Called with a :class:`ProgressEvent` after each
            regular file is deleted.
        expected: Regular files recorded by the scan pass.  When given, a
            recorded file that is no longer on disk raises
            :class:`DeletionError` instead of being skipped.

    Raises:
        DeletionError: Any listing, stat or removal failure.  Nothing is
            rolled back.
    """
    root = Path(path)
    deleted = 0
    visited: list[Path] = []
    stack = [root]
    pending = _group_by_parent(expected) if expected is not None else {}

    while stack:
        current = stack.pop()
        visited.append(current)
        files, subdirs = _list_dir(current)
        _check_present(current, pending.pop(current, set()), files)

        for entry in files:
            file_path = Path(entry.path)
            try:
                st = entry.stat(follow_symlinks=False)
            except OSError as e:
                raise DeletionError(file_path, e) from e

            if not stat.S_ISREG(st.st_mode):
                _unlink(file_path)
                log.debug("Unlinked non-regular entry %s", file_path)
                continue

            if is_read_only(st.st_mode):
                if not policy.force:
                    log.info("Aborting at read-only file: %s", file_path)
                    return Aborted(path=file_path, reason=AbortReason.READ_ONLY)
                _make_writable(file_path, st.st_mode)

            _unlink(file_path)
            deleted += st.st_size
            log.debug("Deleted %s (%d/%d bytes)", file_path, deleted, total)
            if on_progress:
                on_progress(ProgressEvent(bytes_deleted=deleted, total_bytes=total, path=file_path))

        # Reversed so the stack pops subdirectories in name order.
        stack.extend(Path(d.path) for d in reversed(subdirs))

    # Recorded files whose whole directory disappeared.
    for directory in sorted(pending):
        _check_present(directory, pending[directory], [])

    for directory in reversed(visited):
        try:
            directory.rmdir()
        except OSError as e:
            raise DeletionError(directory, e) from e
        log.debug("Removed directory %s", directory)

    log.info("Deleted directory %s (%d bytes)", root, deleted)
    return Deleted(kind=TargetKind.DIRECTORY, bytes=deleted)


def _list_dir(path: Path) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
    """Split the entries of *path* into (non-directories, directories)."""
    files: list[os.DirEntry] = []
    subdirs: list[os.DirEntry] = []
    try:
        with os.scandir(path) as it:
            for entry in sorted(it, key=lambda e: e.name):
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry)
                else:
                    files.append(entry)
    except OSError as e:
        raise DeletionError(path, e) from e
    return files, subdirs


def _group_by_parent(paths: Collection[Path]) -> dict[Path, set[str]]:
    grouped: dict[Path, set[str]] = {}
    for p in paths:
        grouped.setdefault(p.parent, set()).add(p.name)
    return grouped


def _check_present(directory: Path, names: set[str], entries: list[os.DirEntry]) -> None:
    """Raise for the first of *names* missing from the listed *entries*."""
    missing = names - {e.name for e in entries}
    if missing:
        vanished = directory / min(missing)
        cause = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(vanished))
        raise DeletionError(vanished, cause)


def _unlink(path: Path) -> None:
    try:
        path.unlink()
    except OSError as e:
        raise DeletionError(path, e) from e


def _make_writable(path: Path, mode: int) -> None:
    """Clear the read-only attribute where unlinking requires it (Windows)."""
    if os.name != "nt":
        return
    try:
        os.chmod(path, stat.S_IMODE(mode) | stat.S_IWRITE)
    except OSError as e:
        raise DeletionError(path, e) from e
