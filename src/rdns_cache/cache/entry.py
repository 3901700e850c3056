"""
Reverse Lookup Cache Entry

One cached resolution outcome per address, positive or negative.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..address import Address

# FNV-1 32-bit parameters
FNV1_32_INIT = 0x811C9DC5
FNV_32_PRIME = 0x01000193


class CacheEntryType(Enum):
    """Type of cache entry"""

    POSITIVE = "positive"  # Resolved hostname
    NEGATIVE = "negative"  # Resolution attempted and failed


@dataclass(frozen=True)
class CacheEntry:
    """Cached outcome for one address, immutable once stored"""

    address: Address
    hostname: str = ""
    entry_type: CacheEntryType = CacheEntryType.POSITIVE

    @property
    def is_negative(self) -> bool:
        return self.entry_type == CacheEntryType.NEGATIVE


def create_cache_entry(address: Address, hostname: Optional[str]) -> CacheEntry:
    """Create an entry; a None hostname records a negative result"""
    if hostname is None:
        return create_negative_cache_entry(address)
    return CacheEntry(
        address=address, hostname=str(hostname), entry_type=CacheEntryType.POSITIVE
    )


def create_negative_cache_entry(address: Address) -> CacheEntry:
    """Create a cache entry for a failed resolution"""
    return CacheEntry(address=address, hostname="", entry_type=CacheEntryType.NEGATIVE)


def fnv_32(data: bytes) -> int:
    """32-bit FNV-1 hash over a byte sequence"""
    hval = FNV1_32_INIT
    for byte in data:
        hval = (hval * FNV_32_PRIME) & 0xFFFFFFFF
        hval ^= byte
    return hval
