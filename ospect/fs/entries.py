"""Plain records describing filesystem inspection results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExtAttr:
    """An extended attribute of a file: its name and raw value."""

    name: str
    value: bytes


@dataclass(frozen=True)
class Mount:
    """Information about a mounted filesystem.

    ``name`` is the mounted device, ``path`` the mount point and ``fs_type``
    the type of the filesystem (e.g. ``ext4``, ``ramfs``, ``proc``).
    """

    name: str
    path: Path
    fs_type: str

    def __post_init__(self) -> None:
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))