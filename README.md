# ospect

A library for inspecting the running operating system from Python. It reads
extended file attributes, lists mounted filesystems and network interfaces,
and lists the TCP and UDP connections that processes hold.

## Installation

```
pip install .
```

The only runtime dependency is `psutil`.

## Filesystem

`ospect.fs.api` picks the right implementation for the current platform
(Linux, macOS or Windows):

```python
from ospect.fs.api import ext_attrs, ext_attr_names, ext_attr_value, mounts

for attr in ext_attrs("/tmp/foo"):
    print(attr.name, attr.value)

print(ext_attr_names("/tmp/foo"))
print(ext_attr_value("/tmp/foo", "user.bar"))

for mount in mounts():
    print(mount.name, mount.path, mount.fs_type)
```

- `ext_attrs(path)` lists the attribute names at once and returns an
  `ExtAttrs` iterator. The iterator fetches each value as it is reached and
  yields `ExtAttr(name, value)` records. If fetching a value fails, for
  example because the attribute was removed in the meantime, `__next__`
  raises the error.
- The attributes of a symlink are those of the link itself, not of its
  target.
- `mounts()` yields `Mount(name, path, fs_type)` records. `path` is a
  `pathlib.Path`.
- System errors are raised as `OSError` and its subclasses, such as
  `FileNotFoundError` and `PermissionError`. An attribute name that contains
  a null character raises `ValueError`. On any other platform the calls
  raise `OSError` with `ENOTSUP`.

### Per-platform notes

- **Linux** (`ospect.fs.linux`):
  - Attributes come from `os.listxattr` and `os.getxattr`.
  - `mounts()` reads `/proc/mounts`, or `/etc/mtab` if that file is missing.
  - `parse_mounts(lines)` turns mtab-style lines into `Mount` records. It
    skips blank lines and raises `ValueError` for a line with fewer than
    three columns.
  - `flags(path)` returns the ext-filesystem flags of a file, as `lsattr`
    shows them.
- **macOS** (`ospect.fs.macos`):
  - Attributes are read with the system `xattr` utility.
  - A missing attribute raises `OSError` with errno `ENOATTR` (93).
  - Mounts come from `psutil.disk_partitions`.
- **Windows** (`ospect.fs.windows`):
  - There are no extended attributes, so those calls always raise `OSError`
    (`ENOTSUP`).
  - Mounts come from `psutil.disk_partitions`.

## Network

```python
import os
from ospect.net.connections import interfaces, connections, all_connections

for iface in interfaces():
    print(iface.name, list(iface.ipv4_addrs()), list(iface.ipv6_addrs()), iface.mac_addr)

for conn in connections(os.getpid()):
    print(conn.local_addr, conn.pid)
```

### Records

The records are defined in `ospect.net.addresses`:

- `MacAddr` holds six octets. `str()` gives the colon-separated lower-case
  hex form.
- `Interface` has a `name`, a tuple of `ip_addrs` and an optional
  `mac_addr`.
- `TcpConnectionV4` and `TcpConnectionV6` carry `local_addr`, `remote_addr`,
  `state` and `pid`. Addresses are `(ip_address, port)` tuples and `state` is
  a `TcpState`.
- `UdpConnectionV4` and `UdpConnectionV6` carry `local_addr` and `pid`.

### Functions

The functions are in `ospect.net.connections`:

- `tcp_v4_connections(pid)`, `tcp_v6_connections(pid)`,
  `udp_v4_connections(pid)` and `udp_v6_connections(pid)` list the
  connections of one process.
- `tcp_connections(pid)` and `udp_connections(pid)` chain the IPv4 results
  before the IPv6 ones.
- `connections(pid)` chains TCP before UDP.
- `all_tcp_v4_connections()`, `all_tcp_v6_connections()`,
  `all_udp_v4_connections()`, `all_udp_v6_connections()`,
  `all_tcp_connections()`, `all_udp_connections()` and `all_connections()`
  do the same for all processes.

### Errors

- A missing process raises `ProcessLookupError`.
- Denied access raises `PermissionError`.

## What this package does not do

- It is a library only and installs no command-line program.
- It does not inspect processes or other operating-system details beyond the
  filesystem and network functions listed above.

## Running the tests

```
pip install .[test]
pytest
```