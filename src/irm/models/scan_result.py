"""Scan result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Size of a directory tree and the regular files that make it up.

    ``files`` lets the deletion pass notice files that disappeared between
    the two passes.
    """

    total_bytes: int = 0
    files: frozenset[Path] = field(default_factory=frozenset)
