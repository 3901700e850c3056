"""Shared fixtures for the reverse cache test suite."""

from typing import Dict, List, Optional

import pytest

from rdns_cache.address import Address
from rdns_cache.cache.engine import AddressCache
from rdns_cache.core.resolver import ResolutionOrchestrator


class FakeResolver:
    """Hostname resolver answering from a fixed table and recording calls."""

    def __init__(self, names: Optional[Dict[str, str]] = None):
        self.names = names or {}
        self.calls: List[Address] = []

    def resolve_hostname(self, address: Address) -> Optional[str]:
        self.calls.append(address)
        return self.names.get(address.ntoa())


class Switch:
    """Mutable resolution-enabled flag."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.polls = 0

    def __call__(self) -> bool:
        self.polls += 1
        return self.enabled


@pytest.fixture()
def cache():
    return AddressCache()


@pytest.fixture()
def fake_resolver():
    return FakeResolver({"10.0.0.1": "router.local", "2001:db8::1": "v6.example"})


@pytest.fixture()
def switch():
    return Switch()


@pytest.fixture()
def orchestrator(cache, fake_resolver, switch):
    return ResolutionOrchestrator(cache, fake_resolver, resolution_enabled=switch)
