"""Listing of network interfaces and of TCP and UDP connections."""

from __future__ import annotations

import errno
import ipaddress
import itertools
import re
import socket
from collections.abc import Iterable, Iterator
from typing import Any, Callable, TypeVar

import psutil

from ospect.net.addresses import (
    Connection,
    Interface,
    MacAddr,
    TcpConnection,
    TcpConnectionV4,
    TcpConnectionV6,
    TcpState,
    UdpConnection,
    UdpConnectionV4,
    UdpConnectionV6,
)

_T = TypeVar("_T")

_TCP_STATES = {
    psutil.CONN_LISTEN: TcpState.LISTEN,
    psutil.CONN_SYN_SENT: TcpState.SYN_SENT,
    psutil.CONN_SYN_RECV: TcpState.SYN_RECEIVED,
    psutil.CONN_ESTABLISHED: TcpState.ESTABLISHED,
    psutil.CONN_FIN_WAIT1: TcpState.FIN_WAIT1,
    psutil.CONN_FIN_WAIT2: TcpState.FIN_WAIT2,
    psutil.CONN_CLOSE_WAIT: TcpState.CLOSE_WAIT,
    psutil.CONN_CLOSING: TcpState.CLOSING,
    psutil.CONN_LAST_ACK: TcpState.LAST_ACK,
    psutil.CONN_TIME_WAIT: TcpState.TIME_WAIT,
    psutil.CONN_CLOSE: TcpState.CLOSED,
    "DELETE_TCB": TcpState.CLOSED,
}

_MAC_PATTERN = re.compile(r"^[0-9A-Fa-f]{2}([:-][0-9A-Fa-f]{2}){5}$")

_UNSPECIFIED_V4 = ipaddress.IPv4Address(0)
_UNSPECIFIED_V6 = ipaddress.IPv6Address(0)


def _parse_mac(text: str) -> MacAddr | None:
    if not _MAC_PATTERN.match(text):
        return None
    return MacAddr(bytes(int(part, 16) for part in re.split(r"[:-]", text)))


def _strip_scope(host: str) -> str:
    return host.split("%", 1)[0]


def interfaces() -> Iterator[Interface]:
    """Return an iterator over the network interfaces of the system."""
    try:
        table = psutil.net_if_addrs()
    except psutil.AccessDenied as error:
        raise PermissionError(errno.EACCES, "access to interfaces denied") from error

    result = []
    for name, entries in table.items():
        ip_addrs = []
        mac_addr = None
        for entry in entries:
            if entry.family in (socket.AF_INET, socket.AF_INET6):
                ip_addrs.append(ipaddress.ip_address(_strip_scope(entry.address)))
            elif entry.family == psutil.AF_LINK and mac_addr is None:
                mac_addr = _parse_mac(entry.address)
        result.append(Interface(name=name, ip_addrs=tuple(ip_addrs), mac_addr=mac_addr))
    return iter(result)


def _fetch(kind: str, pid: int | None = None) -> list[Any]:
    """Collect raw connection records of ``kind``, for one process or all."""
    try:
        if pid is None:
            return list(psutil.net_connections(kind=kind))
        proc = psutil.Process(pid)
        method = getattr(proc, "net_connections", None) or proc.connections
        return list(method(kind=kind))
    except psutil.NoSuchProcess as error:
        raise ProcessLookupError(errno.ESRCH, f"no such process: {pid}") from error
    except psutil.AccessDenied as error:
        raise PermissionError(
            errno.EACCES, "access to connection information denied"
        ) from error


def _addr(addr: Any, unspecified: Any) -> tuple:
    if not addr:
        return (unspecified, 0)
    host, port = addr[0], addr[1]
    return (_strip_scope(host), port)


def _tcp_state(status: str) -> TcpState:
    try:
        return _TCP_STATES[status]
    except KeyError:
        raise ValueError(f"unknown TCP connection state: {status!r}") from None


def _owner(record: Any, pid: int | None) -> int:
    if pid is not None:
        return pid
    owner = getattr(record, "pid", None)
    return 0 if owner is None else owner


def _tcp(records: Iterable[Any], pid: int | None, cls: Callable[..., _T], unspecified: Any) -> Iterator[_T]:
    for record in records:
        yield cls(
            local_addr=_addr(record.laddr, unspecified),
            remote_addr=_addr(record.raddr, unspecified),
            state=_tcp_state(record.status),
            pid=_owner(record, pid),
        )


def _udp(records: Iterable[Any], pid: int | None, cls: Callable[..., _T], unspecified: Any) -> Iterator[_T]:
    for record in records:
        yield cls(local_addr=_addr(record.laddr, unspecified), pid=_owner(record, pid))


def tcp_v4_connections(pid: int) -> Iterator[TcpConnectionV4]:
    """Return an iterator over IPv4 TCP connections of process ``pid``."""
    return _tcp(_fetch("tcp4", pid), pid, TcpConnectionV4, _UNSPECIFIED_V4)


def tcp_v6_connections(pid: int) -> Iterator[TcpConnectionV6]:
    """Return an iterator over IPv6 TCP connections of process ``pid``."""
    return _tcp(_fetch("tcp6", pid), pid, TcpConnectionV6, _UNSPECIFIED_V6)


def udp_v4_connections(pid: int) -> Iterator[UdpConnectionV4]:
    """Return an iterator over IPv4 UDP sockets of process ``pid``."""
    return _udp(_fetch("udp4", pid), pid, UdpConnectionV4, _UNSPECIFIED_V4)


def udp_v6_connections(pid: int) -> Iterator[UdpConnectionV6]:
    """Return an iterator over IPv6 UDP sockets of process ``pid``."""
    return _udp(_fetch("udp6", pid), pid, UdpConnectionV6, _UNSPECIFIED_V6)


def tcp_connections(pid: int) -> Iterator[TcpConnection]:
    """Return an iterator over TCP connections (IPv4 first) of process ``pid``."""
    v4 = tcp_v4_connections(pid)
    v6 = tcp_v6_connections(pid)
    return itertools.chain(v4, v6)


def udp_connections(pid: int) -> Iterator[UdpConnection]:
    """Return an iterator over UDP sockets (IPv4 first) of process ``pid``."""
    v4 = udp_v4_connections(pid)
    v6 = udp_v6_connections(pid)
    return itertools.chain(v4, v6)


def connections(pid: int) -> Iterator[Connection]:
    """Return an iterator over TCP, then UDP, connections of process ``pid``."""
    tcp = tcp_connections(pid)
    udp = udp_connections(pid)
    return itertools.chain(tcp, udp)


def all_tcp_v4_connections() -> Iterator[TcpConnectionV4]:
    """Return an iterator over IPv4 TCP connections of all processes."""
    return _tcp(_fetch("tcp4"), None, TcpConnectionV4, _UNSPECIFIED_V4)


def all_tcp_v6_connections() -> Iterator[TcpConnectionV6]:
    """Return an iterator over IPv6 TCP connections of all processes."""
    return _tcp(_fetch("tcp6"), None, TcpConnectionV6, _UNSPECIFIED_V6)


def all_udp_v4_connections() -> Iterator[UdpConnectionV4]:
    """Return an iterator over IPv4 UDP sockets of all processes."""
    return _udp(_fetch("udp4"), None, UdpConnectionV4, _UNSPECIFIED_V4)


def all_udp_v6_connections() -> Iterator[UdpConnectionV6]:
    """Return an iterator over IPv6 UDP sockets of all processes."""
    return _udp(_fetch("udp6"), None, UdpConnectionV6, _UNSPECIFIED_V6)


def all_tcp_connections() -> Iterator[TcpConnection]:
    """Return an iterator over TCP connections (IPv4 first) of all processes."""
    v4 = all_tcp_v4_connections()
    v6 = all_tcp_v6_connections()
    return itertools.chain(v4, v6)


def all_udp_connections() -> Iterator[UdpConnection]:
    """Return an iterator over UDP sockets (IPv4 first) of all processes."""
    v4 = all_udp_v4_connections()
    v6 = all_udp_v6_connections()
    return itertools.chain(v4, v6)


def all_connections() -> Iterator[Connection]:
    """Return an iterator over TCP, then UDP, connections of all processes."""
    tcp = all_tcp_connections()
    udp = all_udp_connections()
    return itertools.chain(tcp, udp)