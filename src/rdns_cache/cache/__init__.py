"""
Reverse Lookup Cache Module

Fixed-size hashed table of address -> hostname results with first-writer-wins
inserts, negative caching, statistics and passive warming.
"""

from .engine import AddressCache
from .entry import (
    CacheEntry,
    CacheEntryType,
    create_cache_entry,
    create_negative_cache_entry,
    fnv_32,
)
from .manager import CacheManager
from .stats import ResolutionStats, ResolutionStatsManager

__all__ = [
    # Cache Engine
    "AddressCache",
    # Cache Entry Management
    "CacheEntry",
    "CacheEntryType",
    "create_cache_entry",
    "create_negative_cache_entry",
    "fnv_32",
    # Statistics
    "ResolutionStats",
    "ResolutionStatsManager",
    # Cache Management
    "CacheManager",
]
