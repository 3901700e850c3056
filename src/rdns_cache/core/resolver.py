"""
Reverse Resolution Engine

Resolves addresses to hostnames through the address cache:
- Unspecified addresses are never handled
- Cached results (negative ones included) are returned without resolving
- Misses are resolved only while resolution is enabled
- Every resolver outcome is cached, failures as negative entries
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..address import Address
from ..cache.engine import AddressCache
from ..cache.stats import ResolutionStatsManager
from .backends import HostnameResolver

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOSTNAME_LENGTH = 64


class ResolveStatus(Enum):
    """Outcome of a resolve() call"""

    SUCCESS = "success"
    NOT_FOUND = "not_found"  # Display the raw address instead
    NOT_HANDLED = "not_handled"  # Unspecified address, display nothing


@dataclass(frozen=True)
class ResolveResult:
    """Result of resolving one address"""

    status: ResolveStatus
    hostname: str = ""
    from_cache: bool = False
    negative: bool = False

    @property
    def ok(self) -> bool:
        return self.status == ResolveStatus.SUCCESS


NOT_HANDLED = ResolveResult(ResolveStatus.NOT_HANDLED)


def _always_enabled() -> bool:
    return True


class ResolutionOrchestrator:
    """Cache-first reverse resolver"""

    def __init__(
        self,
        cache: AddressCache,
        resolver: HostnameResolver,
        resolution_enabled: Optional[Callable[[], bool]] = None,
        max_hostname_length: int = DEFAULT_MAX_HOSTNAME_LENGTH,
    ):
        """
        Initialize the orchestrator

        Args:
            cache: Shared address cache, also written by passive paths
            resolver: Blocking reverse lookup backend
            resolution_enabled: Polled on every cache miss
            max_hostname_length: Buffer size for returned names, terminator
                and one reserved byte included
        """
        self.cache = cache
        self.resolver = resolver
        self.resolution_enabled = resolution_enabled or _always_enabled
        self.max_hostname_length = max_hostname_length
        self.stats = ResolutionStatsManager()

    def resolve(self, address: Address) -> ResolveResult:
        """Resolve an address to a hostname, consulting the cache first"""
        if address.is_zero():
            self.stats.record("not_handled")
            return NOT_HANDLED

        self.stats.record("total_requests")

        # A cached failure is still a hit: never retry it
        entry = self.cache.lookup(address)
        if entry is not None:
            self.stats.record("cache_hits")
            if entry.is_negative:
                self.stats.record("negative_hits")
            return ResolveResult(
                ResolveStatus.SUCCESS,
                hostname=self._truncate(entry.hostname),
                from_cache=True,
                negative=entry.is_negative,
            )

        self.stats.record("cache_misses")

        # Leave the cache untouched so passive inserts can still land
        if not self.resolution_enabled():
            self.stats.record("disabled_skips")
            return ResolveResult(ResolveStatus.NOT_FOUND)

        logger.debug(f"Resolving {address}")
        self.stats.record("resolver_calls")
        hostname = self.resolver.resolve_hostname(address)

        if hostname is None:
            self.stats.record("resolver_failures")
            self.cache.insert_if_absent(address, None)
            return ResolveResult(ResolveStatus.NOT_FOUND, negative=True)

        # The cache keeps the full name, only the returned copy is cut
        self.cache.insert_if_absent(address, hostname)
        return ResolveResult(ResolveStatus.SUCCESS, hostname=self._truncate(hostname))

    def _truncate(self, hostname: str) -> str:
        return hostname[: self.max_hostname_length - 2]

    def cache_insert(self, address: Address, hostname: Optional[str]) -> bool:
        """Pre-populate the cache without resolving (passive observation)"""
        inserted = self.cache.insert_if_absent(address, hostname)
        self.stats.record("passive_inserts" if inserted else "passive_duplicates")
        return inserted

    def display_name(self, address: Address) -> str:
        """Hostname to show for address, falling back to the address text"""
        result = self.resolve(address)
        if result.ok and result.hostname:
            return result.hostname
        return address.ntoa()
