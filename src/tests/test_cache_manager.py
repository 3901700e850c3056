"""Tests for passive cache warming and inspection."""

import pytest

from rdns_cache.address import Address
from rdns_cache.cache import CacheManager

HOSTS_CONTENT = """\
# static hosts
10.0.0.1    router.local router
2001:db8::1 v6.example   # inline comment

10.0.0.2
not-an-ip   broken.example
10.0.0.1    duplicate.example
"""


@pytest.fixture()
def manager(orchestrator):
    return CacheManager(orchestrator)


class TestCacheManager:
    """Test warming through insert-if-absent."""

    def test_warm_from_pairs(self, manager, orchestrator, fake_resolver):
        """Pairs are inserted and then served without resolving."""
        result = manager.warm_cache_from_pairs(
            [("10.0.0.5", "printer.local"), (Address.from_string("10.0.0.6"), "nas.local")]
        )

        assert result["inserted"] == 2
        assert result["skipped"] == 0
        assert result["failed"] == 0
        assert result["success"] is True

        assert orchestrator.resolve(Address.from_string("10.0.0.5")).hostname == "printer.local"
        assert orchestrator.resolve(Address.from_string("10.0.0.6")).hostname == "nas.local"
        assert fake_resolver.calls == []

    def test_warm_does_not_overwrite(self, manager, orchestrator):
        """Already cached addresses are skipped."""
        orchestrator.resolve(Address.from_string("10.0.0.1"))

        result = manager.warm_cache_from_pairs([("10.0.0.1", "other.example")])

        assert result["inserted"] == 0
        assert result["skipped"] == 1
        assert orchestrator.cache.lookup_hostname(Address.from_string("10.0.0.1")) == "router.local"

    def test_invalid_address_counted(self, manager):
        result = manager.warm_cache_from_pairs([("bogus", "x.example")])
        assert result["failed"] == 1
        assert result["inserted"] == 0

    def test_warm_from_hosts_file(self, manager, cache, tmp_path):
        """Hosts files load the first name per line and skip bad lines."""
        hosts = tmp_path / "hosts"
        hosts.write_text(HOSTS_CONTENT, encoding="utf-8")

        result = manager.warm_cache_from_hosts_file(hosts)

        assert result["operation"] == "warm_cache_from_hosts_file"
        assert result["file"] == str(hosts)
        assert result["inserted"] == 2
        assert result["skipped"] == 1
        assert result["failed"] == 2
        assert cache.lookup_hostname(Address.from_string("10.0.0.1")) == "router.local"
        assert cache.lookup_hostname(Address.from_string("2001:db8::1")) == "v6.example"
        assert Address.from_string("10.0.0.2") not in cache

    def test_missing_hosts_file(self, manager, tmp_path):
        with pytest.raises(FileNotFoundError):
            manager.warm_cache_from_hosts_file(tmp_path / "missing")

    def test_export_entries(self, manager, orchestrator):
        """Exported entries show address, hostname and type."""
        orchestrator.resolve(Address.from_string("10.0.0.1"))
        orchestrator.resolve(Address.from_string("192.0.2.1"))

        entries = sorted(manager.export_entries(), key=lambda e: e["address"])

        assert entries == [
            {"address": "10.0.0.1", "hostname": "router.local", "type": "positive"},
            {"address": "192.0.2.1", "hostname": "", "type": "negative"},
        ]

    def test_cache_info(self, manager, orchestrator):
        """Cache info merges table and resolution statistics."""
        manager.warm_cache_from_pairs([("10.0.0.5", "printer.local")])
        orchestrator.resolve(Address.from_string("10.0.0.5"))

        info = manager.get_cache_info()

        assert info["entries"] == 1
        assert info["resolution"]["passive_inserts"] == 1
        assert info["resolution"]["cache_hits"] == 1
