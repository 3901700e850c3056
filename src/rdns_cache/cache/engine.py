"""
Reverse Lookup Cache Engine

Fixed-size bucket table of address -> hostname entries. Buckets are chained
lists, newest entry first. Entries are never evicted, expired or replaced:
the first writer for an address wins for the lifetime of the table.
"""

import logging
import threading
from typing import Dict, Iterator, List, Optional

from ..address import Address
from .entry import CacheEntry, create_cache_entry, fnv_32

DEFAULT_TABLE_BITS = 9  # 512 buckets
MAX_TABLE_BITS = 24


class AddressCache:
    """Hash table of cached reverse lookups keyed by binary address"""

    def __init__(self, table_bits: int = DEFAULT_TABLE_BITS):
        """
        Initialize the bucket table

        Args:
            table_bits: log2 of the bucket count, fixed for the table's lifetime
        """
        if not isinstance(table_bits, int) or not 0 <= table_bits <= MAX_TABLE_BITS:
            raise ValueError(f"Invalid table bits: {table_bits}")

        self.table_bits = table_bits
        self._mask = (1 << table_bits) - 1
        self._buckets: List[List[CacheEntry]] = [
            [] for _ in range(1 << table_bits)
        ]
        self._size = 0

        # Guards check-then-prepend and publishes writes to readers
        self._lock = threading.Lock()

        self.logger = logging.getLogger(__name__)

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def bucket_index(self, address: Address) -> int:
        """Bucket for an address, hashed over its actual byte length"""
        return fnv_32(address.raw) & self._mask

    def _find(self, chain: List[CacheEntry], address: Address) -> Optional[CacheEntry]:
        for entry in chain:
            if entry.address == address:
                return entry
        return None

    def lookup(self, address: Address) -> Optional[CacheEntry]:
        """Get the cached entry for address, or None on a miss"""
        with self._lock:
            entry = self._find(self._buckets[self.bucket_index(address)], address)

        if entry is not None:
            self.logger.debug(f"Cache lookup: found {address} -> {entry.hostname!r}")
        return entry

    def lookup_hostname(self, address: Address) -> Optional[str]:
        """Get the cached hostname ("" for a negative entry), or None on a miss"""
        entry = self.lookup(address)
        return entry.hostname if entry is not None else None

    def insert_if_absent(self, address: Address, hostname: Optional[str]) -> bool:
        """Cache a result unless the address already has one.

        Args:
            address: Address the result belongs to
            hostname: Resolved name, or None to record a failed resolution

        Returns:
            True if a new entry was stored, False if one already existed
        """
        index = self.bucket_index(address)

        with self._lock:
            chain = self._buckets[index]
            if self._find(chain, address) is not None:
                return False

            entry = create_cache_entry(address, hostname)
            chain.insert(0, entry)
            self._size += 1

        self.logger.debug(
            f"Cache insert: {address} -> {entry.hostname!r} ({entry.entry_type.value})"
        )
        return True

    def __len__(self) -> int:
        with self._lock:
            return self._size

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, Address):
            return False
        return self.lookup(address) is not None

    def chain_length(self, index: int) -> int:
        """Number of entries in one bucket"""
        with self._lock:
            return len(self._buckets[index])

    def entries(self) -> Iterator[CacheEntry]:
        """Iterate over a snapshot of all entries, bucket by bucket"""
        with self._lock:
            snapshot = [entry for chain in self._buckets for entry in chain]
        return iter(snapshot)

    def get_cache_info(self) -> Dict:
        """Get table occupancy information"""
        with self._lock:
            lengths = [len(chain) for chain in self._buckets]
            negatives = sum(
                1 for chain in self._buckets for entry in chain if entry.is_negative
            )
            size = self._size

        return {
            "entries": size,
            "positive_entries": size - negatives,
            "negative_entries": negatives,
            "bucket_count": len(lengths),
            "used_buckets": sum(1 for length in lengths if length),
            "longest_chain": max(lengths) if lengths else 0,
            "load_factor": round(size / len(lengths), 4) if lengths else 0.0,
        }
