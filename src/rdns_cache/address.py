"""
Network Address Value Type

Binary address keyed by family and raw bytes, as used for reverse lookups.
"""

import ipaddress
import socket
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Address:
    """Immutable network address (family discriminator + raw bytes)"""

    family: int
    raw: bytes

    def __post_init__(self) -> None:
        """Normalize raw to an immutable bytes copy"""
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError(f"Address bytes must be bytes-like: {self.raw!r}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_ip(
        cls, ip: Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
    ) -> "Address":
        """Build an address from an ipaddress object"""
        family = socket.AF_INET if ip.version == 4 else socket.AF_INET6
        return cls(family=family, raw=ip.packed)

    @classmethod
    def from_string(cls, text: str) -> "Address":
        """Parse dotted-quad or IPv6 text.

        Raises:
            ValueError: If text is not a valid IPv4 or IPv6 address
        """
        return cls.from_ip(ipaddress.ip_address(text.strip()))

    def __len__(self) -> int:
        return len(self.raw)

    def is_zero(self) -> bool:
        """Check for the unspecified address (0.0.0.0, ::)"""
        return not any(self.raw)

    def ntoa(self) -> str:
        """Text form of the address"""
        if self.family == socket.AF_INET and len(self.raw) == 4:
            return str(ipaddress.IPv4Address(self.raw))
        if self.family == socket.AF_INET6 and len(self.raw) == 16:
            return str(ipaddress.IPv6Address(self.raw))
        return ":".join(f"{b:02x}" for b in self.raw)

    def to_sockaddr(self) -> Tuple:
        """Socket address tuple for getnameinfo()

        Raises:
            ValueError: If the family has no socket address form
        """
        if self.family == socket.AF_INET:
            return (self.ntoa(), 0)
        if self.family == socket.AF_INET6:
            return (self.ntoa(), 0, 0, 0)
        raise ValueError(f"Unsupported address family: {self.family}")

    def __str__(self) -> str:
        return self.ntoa()
