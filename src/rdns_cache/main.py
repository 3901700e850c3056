"""
Reverse DNS Cache Main Entry Point

Resolves addresses given on the command line (or one per line on stdin)
through the address cache and prints "address<TAB>hostname" lines.
"""

import argparse
import json
import sys
from typing import Iterable, List, Optional, TextIO

import yaml

from .address import Address
from .cache import AddressCache, CacheManager
from .config.loader import ConfigLoader
from .core import ResolutionOrchestrator, create_hostname_resolver
from .rdns_logging import get_logger, log_exception, setup_logging

NO_NAME = "-"


class RDNSCacheApp:
    """Reverse DNS cache application"""

    def __init__(
        self,
        config_path: Optional[str] = None,
        resolve: Optional[bool] = None,
        backend: Optional[str] = None,
        watch_config: bool = False,
    ):
        self.config_path = config_path
        self.watch_config = watch_config
        self.resolve_override = resolve
        self.backend_override = backend
        self.config_loader = None
        self.config = None
        self.cache = None
        self.orchestrator = None
        self.manager = None
        self.logger = None

    def initialize(self) -> None:
        """Load configuration and build the cache and resolver"""
        self.config_loader = ConfigLoader(
            self.config_path,
            enable_hot_reload=self.watch_config,
            reload_callback=self._on_config_reload,
        )
        self.config = self.config_loader.load_config()

        setup_logging(self.config.logging)
        self.logger = get_logger("rdns_cache.main")

        resolver_config = self.config.resolver
        if self.backend_override:
            resolver_config.backend = self.backend_override

        self.cache = AddressCache(table_bits=self.config.cache.table_bits)
        self.orchestrator = ResolutionOrchestrator(
            cache=self.cache,
            resolver=create_hostname_resolver(
                resolver_config.backend,
                nameservers=resolver_config.nameservers,
                timeout=resolver_config.timeout,
            ),
            resolution_enabled=self._resolution_enabled,
            max_hostname_length=resolver_config.max_hostname_length,
        )
        self.manager = CacheManager(self.orchestrator)

        self.logger.info(
            "Reverse cache initialized",
            bucket_count=self.cache.bucket_count,
            backend=resolver_config.backend,
            resolution_enabled=self._resolution_enabled(),
        )

    def start_watching(self) -> None:
        """Follow config file edits while addresses are being resolved"""
        self.config_loader.start_hot_reload()

    def stop_watching(self) -> None:
        self.config_loader.stop_hot_reload()

    def _on_config_reload(self, config) -> None:
        # Only resolver.enabled is re-read; the table and backend stay as built
        self.config = config
        self.logger.info(
            "Configuration reloaded", resolution_enabled=self._resolution_enabled()
        )

    def _resolution_enabled(self) -> bool:
        if self.resolve_override is not None:
            return self.resolve_override
        return self.config_loader.resolution_enabled()

    def load_hosts_files(self, paths: Iterable[str]) -> None:
        """Passively pre-populate the cache from hosts files"""
        for path in paths:
            result = self.manager.warm_cache_from_hosts_file(path)
            self.logger.info(
                "Hosts file loaded",
                file=result["file"],
                inserted=result["inserted"],
                skipped=result["skipped"],
                failed=result["failed"],
            )

    def format_line(self, text: str) -> str:
        """Resolve one address and format its output line"""
        text = text.strip()
        try:
            address = Address.from_string(text)
        except ValueError:
            self.logger.warning("Invalid address", address=text)
            return f"{text}\t{NO_NAME}"

        result = self.orchestrator.resolve(address)
        name = result.hostname if result.ok and result.hostname else NO_NAME
        return f"{address.ntoa()}\t{name}"

    def run(self, addresses: Iterable[str], out: Optional[TextIO] = None) -> None:
        """Resolve every address, skipping blank input lines"""
        out = out or sys.stdout
        for text in addresses:
            if not text.strip():
                continue
            print(self.format_line(text), file=out)

    def get_stats(self) -> dict:
        return self.manager.get_cache_info()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reverse DNS cache")
    parser.add_argument("addresses", nargs="*", help="Addresses to resolve")
    parser.add_argument("--config", "-c", help="Configuration file path")
    parser.add_argument(
        "--no-resolve",
        action="store_true",
        help="Only answer from the cache, never perform lookups",
    )
    parser.add_argument(
        "--backend", choices=["socket", "dnspython"], help="Resolver backend"
    )
    parser.add_argument(
        "--hosts",
        action="append",
        default=[],
        metavar="FILE",
        help="Hosts file to pre-populate the cache with (repeatable)",
    )
    parser.add_argument(
        "--stats", action="store_true", help="Print cache statistics when done"
    )
    parser.add_argument(
        "--watch-config",
        action="store_true",
        help="Reload the config file when it changes (useful with stdin input)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function"""
    args = build_parser().parse_args(argv)

    app = RDNSCacheApp(
        config_path=args.config,
        resolve=False if args.no_resolve else None,
        backend=args.backend,
        watch_config=args.watch_config,
    )

    try:
        app.initialize()
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Failed to initialize: {e}", file=sys.stderr)
        return 1

    app.start_watching()
    try:
        app.load_hosts_files(args.hosts)
        app.run(args.addresses or sys.stdin)
    except (OSError, ValueError) as e:
        log_exception(app.logger, "Reverse resolution failed", e)
        return 1
    except KeyboardInterrupt:
        return 130
    finally:
        app.stop_watching()

    if args.stats:
        print(json.dumps(app.get_stats(), indent=2), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
