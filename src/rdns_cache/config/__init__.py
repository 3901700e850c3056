"""
Reverse Cache Configuration Module
"""

from .loader import ConfigLoader, load_config_from_file
from .schema import (
    CacheConfig,
    LoggingConfig,
    RDNSCacheConfig,
    ResolverConfig,
    create_default_config,
)

__all__ = [
    "ConfigLoader",
    "load_config_from_file",
    "CacheConfig",
    "LoggingConfig",
    "RDNSCacheConfig",
    "ResolverConfig",
    "create_default_config",
]
