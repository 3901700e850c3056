"""
Reverse Cache Configuration Schema

Configuration schema covering the address cache table, the reverse resolver
and logging.
"""

from dataclasses import dataclass, field
from typing import List

from .validators import (
    validate_backend,
    validate_boolean,
    validate_file_path,
    validate_hostname_length,
    validate_log_level,
    validate_nameservers,
    validate_positive_float,
    validate_positive_int,
    validate_table_bits,
)


@dataclass
class CacheConfig:
    """Address cache configuration section."""

    table_bits: int = 9

    def __post_init__(self) -> None:
        """Validate cache configuration."""
        if not validate_table_bits(self.table_bits):
            raise ValueError(f"Invalid table bits: {self.table_bits}")

    @property
    def bucket_count(self) -> int:
        return 1 << self.table_bits


@dataclass
class ResolverConfig:
    """Reverse resolver configuration section."""

    enabled: bool = True
    backend: str = "socket"
    timeout: float = 2.0
    nameservers: List[str] = field(default_factory=list)
    max_hostname_length: int = 64

    def __post_init__(self) -> None:
        """Validate resolver configuration."""
        if not validate_boolean(self.enabled):
            raise ValueError(f"Resolver enabled must be boolean: {self.enabled}")

        if not validate_backend(self.backend):
            raise ValueError(f"Invalid resolver backend: {self.backend}")

        if not validate_positive_float(self.timeout):
            raise ValueError(f"Resolver timeout must be positive: {self.timeout}")

        if not validate_nameservers(self.nameservers):
            raise ValueError(f"Invalid nameservers: {self.nameservers}")

        if not validate_hostname_length(self.max_hostname_length):
            raise ValueError(
                f"Invalid max hostname length: {self.max_hostname_length}"
            )


@dataclass
class LoggingConfig:
    """Logging configuration section."""

    level: str = "INFO"
    format: str = "structured"
    file: str = ""
    max_size_mb: int = 10
    backup_count: int = 3

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        if not validate_log_level(self.level):
            raise ValueError(f"Invalid log level: {self.level}")

        if self.format not in ["simple", "structured"]:
            raise ValueError(f"Invalid log format: {self.format}")

        # Empty file means console only
        if self.file and not validate_file_path(self.file):
            raise ValueError(f"Invalid log file path: {self.file}")

        if not validate_positive_int(self.max_size_mb):
            raise ValueError(f"Max size MB must be positive: {self.max_size_mb}")

        if not validate_positive_int(self.backup_count):
            raise ValueError(f"Backup count must be positive: {self.backup_count}")


@dataclass
class RDNSCacheConfig:
    """Main reverse cache configuration."""

    cache: CacheConfig = field(default_factory=CacheConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def create_default_config() -> RDNSCacheConfig:
    """Create a default configuration instance."""
    return RDNSCacheConfig()
