import errno
from collections import namedtuple
from pathlib import Path
from unittest import mock

import pytest

from ospect.fs import windows
from ospect.fs.entries import Mount

_Part = namedtuple("_Part", ["device", "mountpoint", "fstype", "opts"])


def test_ext_attr_names_unsupported(tmp_path):
    with pytest.raises(OSError) as info:
        windows.ext_attr_names(tmp_path)
    assert info.value.errno == errno.ENOTSUP


def test_ext_attr_names_unsupported_for_missing_file(tmp_path):
    with pytest.raises(OSError) as info:
        windows.ext_attr_names(tmp_path / "foo")
    assert info.value.errno == errno.ENOTSUP


def test_ext_attr_value_unsupported(tmp_path):
    with pytest.raises(OSError) as info:
        windows.ext_attr_value(tmp_path, "user.foo")
    assert info.value.errno == errno.ENOTSUP


def test_mounts_converts_partitions():
    parts = [
        _Part("C:\\", "C:\\", "NTFS", "rw,fixed"),
        _Part("D:\\", "D:\\", "FAT32", "rw,removable"),
    ]
    with mock.patch.object(windows.psutil, "disk_partitions", return_value=parts):
        result = list(windows.mounts())

    assert result == [
        Mount(name="C:\\", path=Path("C:\\"), fs_type="NTFS"),
        Mount(name="D:\\", path=Path("D:\\"), fs_type="FAT32"),
    ]


def test_mounts_empty():
    with mock.patch.object(windows.psutil, "disk_partitions", return_value=[]):
        assert list(windows.mounts()) == []


def test_mounts_requests_all_partitions():
    with mock.patch.object(
        windows.psutil, "disk_partitions", return_value=[]
    ) as disk_partitions:
        result = list(windows.mounts())
    assert result == []
    disk_partitions.assert_called_once_with(all=True)
    assert disk_partitions.call_args.kwargs == {"all": True}


def test_mounts_paths_are_path_objects():
    parts = [_Part("E:\\", "E:\\", "exFAT", "rw")]
    with mock.patch.object(windows.psutil, "disk_partitions", return_value=parts):
        (mount,) = windows.mounts()
    assert isinstance(mount.path, Path)
    assert mount.path == Path("E:\\")
    assert mount.fs_type == "exFAT"