"""Deletion policy, progress events and terminal outcomes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from irm.models.target import TargetKind


@dataclass(frozen=True, slots=True)
class DeletionPolicy:
    """Whether read-only files may be deleted."""

    force: bool = False


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """Emitted after each regular file removed during a tree deletion."""

    bytes_deleted: int
    total_bytes: int
    path: Path


class AbortReason(enum.Enum):
    """Why a deletion stopped without an error."""

    READ_ONLY = "read_only"


class Outcome:
    """Terminal result of a single remove operation."""

    __slots__ = ()

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Deleted(Outcome):
    """The target was removed completely."""

    kind: TargetKind
    bytes: int

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Aborted(Outcome):
    """The operation stopped at *path*; nothing after it was touched."""

    path: Path
    reason: AbortReason


@dataclass(frozen=True, slots=True)
class NotFound(Outcome):
    """The target did not exist when it was resolved."""

    path: Path
