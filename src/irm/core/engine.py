"""Remove orchestration: resolve, size, then delete."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from irm.core.errors import ScanError
from irm.core.scanner import scan, scan_tree
from irm.core.walker import ProgressCallback, delete_file, delete_tree
from irm.models.outcome import DeletionPolicy, NotFound, Outcome
from irm.models.target import Target, TargetKind, resolve_target

log = logging.getLogger(__name__)

ResolveCallback = Callable[[Target], None]
ScanCallback = Callable[[Target, int], None]  # (target, total_bytes)


class RemoveEngine:
    """Runs a single remove operation from a user-supplied path to an Outcome."""

    def remove(
        self,
        path: Path | str,
        policy: DeletionPolicy,
        on_resolve: ResolveCallback | None = None,
        on_scan: ScanCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> Outcome:
        """Remove the file or directory tree at *path*.

        Directories are sized first, and the total is handed to *on_scan*
        before any deletion starts.  The total is not recomputed if the tree
        changes during the deletion pass; a scanned file that has gone
        missing by then raises DeletionError.

        Args:
            path: Target path, relative paths resolved against the CWD.
            policy: Read-only handling.
            on_resolve: Optional callback fired with the resolved target.
            on_scan: Optional callback fired once the directory total is known.
            on_progress: Optional callback fired after each deleted file.

        Returns:
            Exactly one Outcome: Deleted, Aborted or NotFound.

        Raises:
            ScanError: The target could not be inspected or the directory
                could not be fully sized; nothing deleted.
            DeletionError: A removal failed part way through.
        """
        target = resolve_target(path)
        log.info("Resolved %s as %s (force=%s)", target.path, target.kind.value, policy.force)
        if on_resolve:
            on_resolve(target)

        match target.kind:
            case TargetKind.MISSING:
                return NotFound(path=target.path)
            case TargetKind.FILE:
                return delete_file(target.path, policy)

        result = scan_tree(target.path)
        log.info("Directory %s holds %d bytes", target.path, result.total_bytes)
        if on_scan:
            on_scan(target, result.total_bytes)
        return delete_tree(
            target.path,
            result.total_bytes,
            policy,
            on_progress=on_progress,
            expected=result.files,
        )

    def preview(self, path: Path | str) -> tuple[Target, int]:
        """Resolve and size *path* without deleting anything.

        Missing targets report zero bytes.

        Raises:
            ScanError: The target could not be sized.
        """
        target = resolve_target(path)
        match target.kind:
            case TargetKind.MISSING:
                return target, 0
            case TargetKind.FILE:
                try:
                    return target, target.path.lstat().st_size
                except OSError as e:
                    raise ScanError(target.path, e) from e
        return target, scan(target.path)
