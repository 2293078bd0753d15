"""Linux-specific filesystem inspection."""

from __future__ import annotations

import fcntl
import os
import struct
from collections.abc import Iterable, Iterator
from typing import IO

from ospect.fs.entries import Mount

_LONG = "l"
_LONG_SIZE = struct.calcsize(_LONG)

# _IOR('f', 1, long)
FS_IOC_GETFLAGS = (2 << 30) | (_LONG_SIZE << 16) | (ord("f") << 8) | 1

_MOUNT_FILES = ("/proc/mounts", "/etc/mtab")


def flags(path: str | os.PathLike) -> int:
    """Return the extended flags (as shown by ``lsattr``) of a file."""
    fd = os.open(path, os.O_RDONLY)
    try:
        buf = bytearray(_LONG_SIZE)
        fcntl.ioctl(fd, FS_IOC_GETFLAGS, buf, True)
    finally:
        os.close(fd)
    (value,) = struct.unpack(_LONG, bytes(buf))
    return value & 0xFFFFFFFF


def ext_attr_names(path: str | os.PathLike) -> list[str]:
    """Return names of all extended attributes of a file, not following symlinks."""
    return os.listxattr(path, follow_symlinks=False)


def ext_attr_value(path: str | os.PathLike, name: str | bytes) -> bytes:
    """Return the value of the named extended attribute, not following symlinks."""
    null = b"\0" if isinstance(name, bytes) else "\0"
    if null in name:
        raise ValueError(f"attribute name contains a null character: {name!r}")
    return os.getxattr(path, name, follow_symlinks=False)


def parse_mounts(lines: Iterable[str]) -> Iterator[Mount]:
    """Parse mtab-style lines into mounts, skipping blank lines.

    Only the first three space-separated columns are used; a line with fewer
    columns raises ``ValueError``.
    """
    for line in lines:
        if not line.strip():
            continue
        cols = line.rstrip("\r\n").split(" ")
        if len(cols) < 3:
            raise ValueError(f"malformed mount entry: {line!r}")
        name, path, fs_type = cols[:3]
        yield Mount(name=name, path=path, fs_type=fs_type)


def _read_mounts(file: IO[str]) -> Iterator[Mount]:
    with file:
        yield from parse_mounts(file)


def mounts() -> Iterator[Mount]:
    """Return an iterator over mounted filesystems.

    Reads ``/proc/mounts`` and falls back to ``/etc/mtab`` if it is missing.
    """
    primary, fallback = _MOUNT_FILES
    try:
        file = open(primary, encoding="utf-8", errors="surrogateescape")
    except FileNotFoundError:
        file = open(fallback, encoding="utf-8", errors="surrogateescape")
    return _read_mounts(file)