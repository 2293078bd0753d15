"""Network records: MAC addresses, interfaces and connection descriptions."""

from __future__ import annotations

import enum
import ipaddress
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Tuple, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
SocketAddrV4 = Tuple[ipaddress.IPv4Address, int]
SocketAddrV6 = Tuple[ipaddress.IPv6Address, int]


@dataclass(frozen=True, order=True)
class MacAddr:
    """A 48-bit IEEE 802 MAC address."""

    octets: bytes

    def __post_init__(self) -> None:
        if isinstance(self.octets, int):
            raise TypeError("MAC address octets must be a sequence of integers")
        octets = bytes(self.octets)
        if len(octets) != 6:
            raise ValueError(
                f"MAC address must have 6 octets, got {len(octets)}"
            )
        object.__setattr__(self, "octets", octets)

    def __str__(self) -> str:
        return ":".join(f"{octet:02x}" for octet in self.octets)


@dataclass(frozen=True)
class Interface:
    """A network interface: its system name, IP addresses and MAC address."""

    name: str
    ip_addrs: tuple[IPAddress, ...] = ()
    mac_addr: MacAddr | None = None

    def __post_init__(self) -> None:
        addrs = tuple(ipaddress.ip_address(addr) for addr in self.ip_addrs)
        object.__setattr__(self, "ip_addrs", addrs)

    def ipv4_addrs(self) -> Iterator[ipaddress.IPv4Address]:
        """Yield the IPv4 addresses of this interface."""
        return (a for a in self.ip_addrs if isinstance(a, ipaddress.IPv4Address))

    def ipv6_addrs(self) -> Iterator[ipaddress.IPv6Address]:
        """Yield the IPv6 addresses of this interface."""
        return (a for a in self.ip_addrs if isinstance(a, ipaddress.IPv6Address))


class TcpState(enum.Enum):
    """Possible states of a TCP connection."""

    LISTEN = "listen"
    SYN_SENT = "syn_sent"
    SYN_RECEIVED = "syn_received"
    ESTABLISHED = "established"
    FIN_WAIT1 = "fin_wait1"
    FIN_WAIT2 = "fin_wait2"
    CLOSE_WAIT = "close_wait"
    CLOSING = "closing"
    LAST_ACK = "last_ack"
    TIME_WAIT = "time_wait"
    CLOSED = "closed"


def _socket_addr(addr: Iterable, family: type) -> tuple:
    host, port = addr
    ip = ipaddress.ip_address(host)
    if not isinstance(ip, family):
        raise ValueError(f"expected {family.__name__} address, got {ip!r}")
    port = int(port)
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")
    return (ip, port)


@dataclass(frozen=True)
class TcpConnectionV4:
    """A TCP connection over IPv4 and the process that owns it."""

    local_addr: SocketAddrV4
    remote_addr: SocketAddrV4
    state: TcpState
    pid: int

    def __post_init__(self) -> None:
        v4 = ipaddress.IPv4Address
        object.__setattr__(self, "local_addr", _socket_addr(self.local_addr, v4))
        object.__setattr__(self, "remote_addr", _socket_addr(self.remote_addr, v4))
        object.__setattr__(self, "state", TcpState(self.state))


@dataclass(frozen=True)
class TcpConnectionV6:
    """A TCP connection over IPv6 and the process that owns it."""

    local_addr: SocketAddrV6
    remote_addr: SocketAddrV6
    state: TcpState
    pid: int

    def __post_init__(self) -> None:
        v6 = ipaddress.IPv6Address
        object.__setattr__(self, "local_addr", _socket_addr(self.local_addr, v6))
        object.__setattr__(self, "remote_addr", _socket_addr(self.remote_addr, v6))
        object.__setattr__(self, "state", TcpState(self.state))


@dataclass(frozen=True)
class UdpConnectionV4:
    """A UDP socket over IPv4 and the process that owns it."""

    local_addr: SocketAddrV4
    pid: int

    def __post_init__(self) -> None:
        v4 = ipaddress.IPv4Address
        object.__setattr__(self, "local_addr", _socket_addr(self.local_addr, v4))


@dataclass(frozen=True)
class UdpConnectionV6:
    """A UDP socket over IPv6 and the process that owns it."""

    local_addr: SocketAddrV6
    pid: int

    def __post_init__(self) -> None:
        v6 = ipaddress.IPv6Address
        object.__setattr__(self, "local_addr", _socket_addr(self.local_addr, v6))


TcpConnection = Union[TcpConnectionV4, TcpConnectionV6]
UdpConnection = Union[UdpConnectionV4, UdpConnectionV6]
Connection = Union[TcpConnection, UdpConnection]