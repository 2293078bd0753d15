"""Filesystem inspection that works the same on every supported platform."""

from __future__ import annotations

import errno
import os
import sys
from collections.abc import Iterable, Iterator
from types import ModuleType

from ospect.fs.entries import ExtAttr, Mount

_platform: ModuleType | None
if sys.platform.startswith("linux"):
    from ospect.fs import linux as _platform
elif sys.platform == "darwin":
    from ospect.fs import macos as _platform
elif sys.platform == "win32":
    from ospect.fs import windows as _platform
else:
    _platform = None


def _backend() -> ModuleType:
    if _platform is None:
        raise OSError(
            errno.ENOTSUP,
            f"filesystem inspection is not supported on {sys.platform}",
        )
    return _platform


class ExtAttrs:
    """Iterator over the extended attributes of a file.

    Values are fetched lazily, one name at a time. Fetching a value can fail,
    e.g. when the attribute was removed after the names were listed. The error
    is then raised from ``__next__`` and iteration may continue afterwards.
    """

    def __init__(self, path: str | os.PathLike, names: Iterable[str]) -> None:
        self._path = path
        self._names = iter(names)

    def __iter__(self) -> ExtAttrs:
        return self

    def __next__(self) -> ExtAttr:
        name = next(self._names)
        value = _backend().ext_attr_value(self._path, name)
        return ExtAttr(name=name, value=value)


def ext_attrs(path: str | os.PathLike) -> ExtAttrs:
    """Return an iterator over extended attributes of the file at ``path``.

    For a symlink the attributes of the link itself are returned. Fails with
    ``OSError`` if the file does not exist, cannot be accessed or the platform
    has no extended attributes.
    """
    names = ext_attr_names(path)
    return ExtAttrs(path, names)


def ext_attr_names(path: str | os.PathLike) -> list[str]:
    """Return the names of all extended attributes of the file at ``path``."""
    return list(_backend().ext_attr_names(path))


def ext_attr_value(path: str | os.PathLike, name: str | bytes) -> bytes:
    """Return the value of the extended attribute ``name`` of the file at ``path``."""
    return _backend().ext_attr_value(path, name)


def mounts() -> Iterator[Mount]:
    """Return an iterator over mounted filesystems."""
    return _backend().mounts()