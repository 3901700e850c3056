"""
Reverse DNS Cache

Address -> hostname cache with cache-first reverse resolution.
"""

from .address import Address
from .cache import AddressCache, CacheEntry, CacheEntryType, CacheManager
from .core import (
    ResolutionOrchestrator,
    ResolveResult,
    ResolveStatus,
    create_hostname_resolver,
)

__version__ = "0.1.0"

__all__ = [
    "Address",
    "AddressCache",
    "CacheEntry",
    "CacheEntryType",
    "CacheManager",
    "ResolutionOrchestrator",
    "ResolveResult",
    "ResolveStatus",
    "create_hostname_resolver",
]
