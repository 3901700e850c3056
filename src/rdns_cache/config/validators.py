"""
Configuration Validators

This module provides validation functions for reverse cache configuration
parameters.
"""

import ipaddress
from pathlib import Path
from typing import List

from ..cache.engine import MAX_TABLE_BITS

RESOLVER_BACKENDS = ("socket", "dnspython")


def validate_boolean(value) -> bool:
    """Validate boolean value."""
    return isinstance(value, bool)


def validate_file_path(path: str) -> bool:
    """Validate file path format."""
    if not path:
        return False

    try:
        Path(path)
        return True
    except (TypeError, ValueError):
        return False


def validate_log_level(level: str) -> bool:
    """Validate log level."""
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    return isinstance(level, str) and level.upper() in valid_levels


def validate_positive_float(value: float) -> bool:
    """Validate positive float."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and value > 0
    )


def validate_positive_int(value: int) -> bool:
    """Validate positive integer."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_table_bits(bits: int) -> bool:
    """Validate bucket table size exponent (1..16M buckets)."""
    return (
        isinstance(bits, int)
        and not isinstance(bits, bool)
        and 0 <= bits <= MAX_TABLE_BITS
    )


def validate_hostname_length(length: int) -> bool:
    """Validate hostname buffer length, keeps at least one character."""
    return validate_positive_int(length) and 3 <= length <= 1025


def validate_backend(backend: str) -> bool:
    """Validate resolver backend name."""
    return backend in RESOLVER_BACKENDS


def validate_nameservers(servers: List[str]) -> bool:
    """Validate list of nameserver IP addresses (may be empty)."""
    if not isinstance(servers, list):
        return False

    for server in servers:
        try:
            ipaddress.ip_address(server)
        except (TypeError, ValueError):
            return False

    return True
