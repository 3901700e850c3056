"""
Reverse Resolution Statistics

Counters for cache hits, misses and resolver activity.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class ResolutionStats:
    """Resolution statistics data structure"""

    # Request outcome statistics
    total_requests: int = 0
    not_handled: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    negative_hits: int = 0  # Hits on negative cache entries
    disabled_skips: int = 0  # Misses while resolution was disabled

    # Resolver statistics
    resolver_calls: int = 0
    resolver_failures: int = 0

    # Direct inserts from passive paths
    passive_inserts: int = 0
    passive_duplicates: int = 0

    start_time: float = field(default_factory=time.time)

    def hit_ratio(self) -> float:
        """Calculate cache hit ratio over handled requests"""
        handled = self.cache_hits + self.cache_misses
        if handled == 0:
            return 0.0
        return self.cache_hits / handled

    def failure_ratio(self) -> float:
        """Calculate resolver failure ratio"""
        if self.resolver_calls == 0:
            return 0.0
        return self.resolver_failures / self.resolver_calls

    def uptime_seconds(self) -> float:
        return time.time() - self.start_time


class ResolutionStatsManager:
    """Thread-safe manager for resolution statistics"""

    def __init__(self):
        self.stats = ResolutionStats()
        self._lock = threading.Lock()

    def record(self, counter: str, amount: int = 1) -> None:
        """Increment a named counter"""
        with self._lock:
            setattr(self.stats, counter, getattr(self.stats, counter) + amount)

    def get_stats(self) -> Dict:
        """Get a snapshot of all statistics"""
        with self._lock:
            return {
                "total_requests": self.stats.total_requests,
                "not_handled": self.stats.not_handled,
                "cache_hits": self.stats.cache_hits,
                "cache_misses": self.stats.cache_misses,
                "negative_hits": self.stats.negative_hits,
                "disabled_skips": self.stats.disabled_skips,
                "resolver_calls": self.stats.resolver_calls,
                "resolver_failures": self.stats.resolver_failures,
                "passive_inserts": self.stats.passive_inserts,
                "passive_duplicates": self.stats.passive_duplicates,
                "hit_ratio": round(self.stats.hit_ratio(), 4),
                "failure_ratio": round(self.stats.failure_ratio(), 4),
                "uptime_seconds": round(self.stats.uptime_seconds(), 2),
            }

    def reset_stats(self) -> None:
        """Reset all statistics"""
        with self._lock:
            self.stats = ResolutionStats()
