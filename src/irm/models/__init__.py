"""irm data models."""

from irm.models.outcome import AbortReason, Aborted, DeletionPolicy, Deleted, NotFound, Outcome, ProgressEvent
from irm.models.scan_result import ScanResult
from irm.models.target import Target, TargetKind, resolve_target

__all__ = [
    "AbortReason",
    "Aborted",
    "DeletionPolicy",
    "Deleted",
    "NotFound",
    "Outcome",
    "ProgressEvent",
    "ScanResult",
    "Target",
    "TargetKind",
    "resolve_target",
]
