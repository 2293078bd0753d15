import errno
import io
import os
import struct
from pathlib import Path
from unittest import mock

import pytest

from ospect.fs import linux
from ospect.fs.entries import Mount

FS_NOATIME_FL = 0x00000080


def test_flags_non_existing(tmp_path):
    with pytest.raises(FileNotFoundError):
        linux.flags(tmp_path / "foo")


def test_flags_noatime(tmp_path):
    target = tmp_path / "foo"
    target.write_bytes(b"")
    seen = {}

    def fake_ioctl(fd, request, buf, mutate):
        seen["request"] = request
        buf[:] = struct.pack("l", FS_NOATIME_FL)
        return 0

    with mock.patch("fcntl.ioctl", side_effect=fake_ioctl):
        result = linux.flags(target)

    assert result & FS_NOATIME_FL == FS_NOATIME_FL
    assert seen["request"] == linux.FS_IOC_GETFLAGS


def test_flags_truncated_to_32_bits(tmp_path):
    target = tmp_path / "foo"
    target.write_bytes(b"")

    def fake_ioctl(fd, request, buf, mutate):
        buf[:] = struct.pack("l", -1)
        return 0

    with mock.patch("fcntl.ioctl", side_effect=fake_ioctl):
        assert linux.flags(target) == 0xFFFFFFFF


def test_flags_ioctl_error_propagates(tmp_path):
    target = tmp_path / "foo"
    target.write_bytes(b"")
    error = OSError(errno.ENOTTY, "Inappropriate ioctl for device")
    with mock.patch("fcntl.ioctl", side_effect=error):
        with pytest.raises(OSError) as info:
            linux.flags(target)
    assert info.value.errno == errno.ENOTTY


def test_ext_attr_names_none(tmp_path):
    target = tmp_path / "foo"
    target.write_bytes(b"")
    assert linux.ext_attr_names(target) == []


def test_ext_attr_names_non_existing(tmp_path):
    with pytest.raises(FileNotFoundError):
        linux.ext_attr_names(tmp_path / "foo")


def test_ext_attr_names_multiple_does_not_follow_symlinks(tmp_path):
    with mock.patch("os.listxattr", return_value=["user.abc", "user.def", "user.ghi"]) as listxattr:
        names = sorted(linux.ext_attr_names(tmp_path))
    assert names == ["user.abc", "user.def", "user.ghi"]
    assert listxattr.call_args.kwargs["follow_symlinks"] is False


def test_ext_attr_value_not_existing(tmp_path):
    target = tmp_path / "foo"
    target.write_bytes(b"")
    with pytest.raises(OSError) as info:
        linux.ext_attr_value(target, "user.foo")
    assert info.value.errno == errno.ENODATA


def test_ext_attr_value_single_not_unicode(tmp_path):
    with mock.patch("os.getxattr", return_value=b"\xff\xfe\xff") as getxattr:
        value = linux.ext_attr_value(tmp_path, "user.foo")
    assert value == b"\xff\xfe\xff"
    assert getxattr.call_args.kwargs["follow_symlinks"] is False


def test_ext_attr_value_null_in_name(tmp_path):
    with pytest.raises(ValueError):
        linux.ext_attr_value(tmp_path, "user.f\0oo")


def test_mounts_empty_mtab():
    assert list(linux.parse_mounts(io.StringIO(""))) == []


def test_mounts_fake_mtab():
    mtab = (
        "sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0\n"
        "proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0\n"
        "/dev/foobar / ext4 rw,relatime 0 0\n"
        "/dev/quux /usr/quux ext4 rw,relatime 0 0\n"
        "        "
    )
    mounts = list(linux.parse_mounts(io.StringIO(mtab)))

    assert len(mounts) == 4

    assert mounts[0].name == "sysfs"
    assert mounts[0].path == Path("/sys")
    assert mounts[0].fs_type == "sysfs"

    assert mounts[1].name == "proc"
    assert mounts[1].path == Path("/proc")
    assert mounts[1].fs_type == "proc"

    assert mounts[2].name == "/dev/foobar"
    assert mounts[2].path == Path("/")
    assert mounts[2].fs_type == "ext4"

    assert mounts[3].name == "/dev/quux"
    assert mounts[3].path == Path("/usr/quux")
    assert mounts[3].fs_type == "ext4"


def test_mounts_three_columns_only():
    mounts = list(linux.parse_mounts(["proc /proc proc\n"]))
    assert mounts == [Mount("proc", Path("/proc"), "proc")]


def test_mounts_malformed_line():
    with pytest.raises(ValueError):
        list(linux.parse_mounts(["sysfs /sys\n"]))


def test_mounts_root_exists():
    assert any(mount.path == Path("/") for mount in linux.mounts())


def test_mounts_fallback_to_mtab(tmp_path):
    mtab = tmp_path / "mtab"
    mtab.write_text("/dev/foobar / ext4 rw,relatime 0 0\n")
    missing = os.fspath(tmp_path / "missing")
    with mock.patch.object(linux, "_MOUNT_FILES", (missing, os.fspath(mtab))):
        result = list(linux.mounts())
    assert result == [Mount("/dev/foobar", Path("/"), "ext4")]


def test_mounts_both_missing(tmp_path):
    paths = (os.fspath(tmp_path / "a"), os.fspath(tmp_path / "b"))
    with mock.patch.object(linux, "_MOUNT_FILES", paths):
        with pytest.raises(FileNotFoundError):
            linux.mounts()