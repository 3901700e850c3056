"""
Reverse Lookup Cache Manager

Passive cache warming from hosts-style files and address/name pairs, plus
cache inspection. Warming goes through insert-if-absent, so it never
replaces a result that is already cached.
"""

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Tuple, Union

from ..address import Address

if TYPE_CHECKING:
    from ..core.resolver import ResolutionOrchestrator


class CacheManager:
    """Cache warming and inspection interface"""

    def __init__(self, orchestrator: "ResolutionOrchestrator"):
        self.orchestrator = orchestrator
        self.cache = orchestrator.cache
        self.logger = logging.getLogger(__name__)

    def warm_cache_from_pairs(
        self, pairs: Iterable[Tuple[Union[str, Address], str]]
    ) -> Dict[str, Any]:
        """
        Warm cache with (address, hostname) pairs

        Args:
            pairs: Address text or Address objects with their hostnames
        """
        start_time = time.time()
        inserted = 0
        skipped = 0
        failed = 0

        for address, hostname in pairs:
            try:
                if not isinstance(address, Address):
                    address = Address.from_string(address)
            except ValueError as e:
                self.logger.warning(f"Skipping invalid address {address!r}: {e}")
                failed += 1
                continue

            if self.orchestrator.cache_insert(address, hostname):
                inserted += 1
            else:
                skipped += 1

        duration_ms = (time.time() - start_time) * 1000

        result = {
            "operation": "warm_cache",
            "inserted": inserted,
            "skipped": skipped,
            "failed": failed,
            "duration_ms": round(duration_ms, 2),
            "success": True,
            "timestamp": time.time(),
        }

        self.logger.info(
            f"Cache warming completed: {inserted} inserted, {skipped} already cached, "
            f"{failed} invalid"
        )
        return result

    def warm_cache_from_hosts_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Warm cache from a hosts(5) style file

        Each line is an address followed by one or more names; the first
        name is cached. Comments and blank lines are ignored.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Hosts file not found: {path}")

        pairs: List[Tuple[str, str]] = []
        malformed = 0

        with open(path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.split("#", 1)[0].strip()
                if not line:
                    continue

                fields = line.split()
                if len(fields) < 2:
                    self.logger.warning(f"{path}:{lineno}: missing hostname")
                    malformed += 1
                    continue

                pairs.append((fields[0], fields[1]))

        result = self.warm_cache_from_pairs(pairs)
        result["operation"] = "warm_cache_from_hosts_file"
        result["file"] = str(path)
        result["failed"] += malformed
        return result

    def export_entries(self) -> List[Dict[str, Any]]:
        """Export cached entries for display"""
        return [
            {
                "address": entry.address.ntoa(),
                "hostname": entry.hostname,
                "type": entry.entry_type.value,
            }
            for entry in self.cache.entries()
        ]

    def get_cache_info(self) -> Dict[str, Any]:
        """Get combined table and resolution statistics"""
        info = self.cache.get_cache_info()
        info["resolution"] = self.orchestrator.stats.get_stats()
        return info
