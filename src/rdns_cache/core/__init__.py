"""
Reverse Resolution Core Module

This module exports the resolution orchestrator and resolver backends.
"""

from .backends import (
    DnsPythonResolver,
    HostnameResolver,
    SocketHostnameResolver,
    create_hostname_resolver,
)
from .resolver import (
    NOT_HANDLED,
    ResolutionOrchestrator,
    ResolveResult,
    ResolveStatus,
)

__all__ = [
    # Orchestration
    "ResolutionOrchestrator",
    "ResolveResult",
    "ResolveStatus",
    "NOT_HANDLED",
    # Resolver backends
    "HostnameResolver",
    "SocketHostnameResolver",
    "DnsPythonResolver",
    "create_hostname_resolver",
]
