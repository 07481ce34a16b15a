"""Target path resolution."""

from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from irm.core.errors import ScanError


class TargetKind(enum.Enum):
    """What the user-specified path points at."""

    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class Target:
    """A path to remove, resolved once at the start of an operation.

    ``path`` is absolute but a trailing symlink is not followed, so a link
    to a directory resolves as ``FILE`` and only the link itself is removed.
    """

    path: Path
    kind: TargetKind


def resolve_target(path: Path | str) -> Target:
    """Resolve *path* to an absolute :class:`Target`.

    A path with a missing component, or one running through a regular file,
    resolves as ``MISSING``.

    Raises:
        ScanError: The path exists but cannot be inspected, e.g. a parent
            directory without search permission.
    """
    absolute = Path(os.path.abspath(path))
    try:
        st = absolute.lstat()
    except (FileNotFoundError, NotADirectoryError):
        return Target(path=absolute, kind=TargetKind.MISSING)
    except OSError as e:
        raise ScanError(absolute, e) from e
    if stat.S_ISDIR(st.st_mode):
        return Target(path=absolute, kind=TargetKind.DIRECTORY)
    return Target(path=absolute, kind=TargetKind.FILE)
