"""Windows-specific filesystem inspection."""

from __future__ import annotations

import errno
import os
from collections.abc import Iterator

import psutil

from ospect.fs.entries import Mount

_UNSUPPORTED_MESSAGE = "extended file attributes are not supported on Windows"


def _unsupported() -> OSError:
    return OSError(errno.ENOTSUP, _UNSUPPORTED_MESSAGE)


def ext_attr_names(path: str | os.PathLike) -> list[str]:
    """Always fail: Windows has no extended file attributes."""
    raise _unsupported()


def ext_attr_value(path: str | os.PathLike, name: str | bytes) -> bytes:
    """Always fail: Windows has no extended file attributes."""
    raise _unsupported()


def mounts() -> Iterator[Mount]:
    """Return an iterator over mounted volumes.

    The listing is collected eagerly; the number of mount points is expected
    to be small.
    """
    entries = [
        Mount(name=part.device, path=part.mountpoint, fs_type=part.fstype)
        for part in psutil.disk_partitions(all=True)
    ]
    return iter(entries)