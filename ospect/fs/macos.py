"""macOS-specific filesystem inspection."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterator, Sequence

import psutil

from ospect.fs.entries import Mount

ENOATTR = 93
"""The macOS error number reported for a missing extended attribute."""

_XATTR = "xattr"


def _check_path(path: str | os.PathLike) -> str:
    """Validate ``path`` and make sure the file itself (not its target) exists."""
    # Raises ``ValueError`` for embedded null characters and the proper
    # ``OSError`` subclass for missing files or denied access.
    os.lstat(path)
    return os.fsdecode(path)


def _run_xattr(args: Sequence[str], path: str, name: str | None = None) -> bytes:
    """Run the ``xattr`` utility without following symlinks and return its output."""
    result = subprocess.run(
        [_XATTR, *args, "-s", path],
        capture_output=True,
        check=False,
    )
    if result.returncode != 0:
        message = os.fsdecode(result.stderr).strip()
        if "No such xattr" in message:
            raise OSError(ENOATTR, "Attribute not found", path)
        if "No such file" in message:
            raise FileNotFoundError(2, "No such file or directory", path)
        if "Permission denied" in message or "Operation not permitted" in message:
            raise PermissionError(13, "Permission denied", path)
        raise OSError(
            f"xattr failed for {path!r}"
            + (f" (attribute {name!r})" if name is not None else "")
            + (f": {message}" if message else "")
        )
    return result.stdout


def ext_attr_names(path: str | os.PathLike) -> list[str]:
    """Return names of all extended attributes of a file, not following symlinks."""
    file_path = _check_path(path)
    output = _run_xattr([], file_path)
    return [os.fsdecode(line) for line in output.splitlines() if line]


def ext_attr_value(path: str | os.PathLike, name: str | bytes) -> bytes:
    """Return the value of the named extended attribute, not following symlinks."""
    attr_name = os.fsdecode(name)
    if "\0" in attr_name:
        raise ValueError(f"attribute name contains a null character: {name!r}")
    file_path = _check_path(path)
    output = _run_xattr(["-p", "-x", attr_name], file_path, attr_name)
    return bytes.fromhex("".join(os.fsdecode(output).split()))


def mounts() -> Iterator[Mount]:
    """Return an iterator over mounted filesystems."""
    entries = [
        Mount(name=part.device, path=part.mountpoint, fs_type=part.fstype)
        for part in psutil.disk_partitions(all=True)
    ]
    return iter(entries)