"""Configuration loader for the reverse cache.

This module handles loading configuration from files and environment variables,
with validation and hot reload capabilities.
"""

import json
import logging
import os
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .schema import (
    CacheConfig,
    LoggingConfig,
    RDNSCacheConfig,
    ResolverConfig,
    create_default_config,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "RDNS_CACHE_"


class ConfigLoader:
    """Configuration loader with hot reload support."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        enable_hot_reload: bool = True,
        reload_callback: Optional[Callable[[RDNSCacheConfig], None]] = None,
    ):
        """Initialize configuration loader.

        Args:
            config_file: Path to configuration file (YAML or JSON)
            enable_hot_reload: Enable file watching for hot reload
            reload_callback: Callback function called when config changes
        """
        self.config_file = config_file
        self.enable_hot_reload = enable_hot_reload
        self.reload_callback = reload_callback
        self._config: Optional[RDNSCacheConfig] = None
        self._observer: Optional[Observer] = None
        self._last_reload_time = 0.0

    def load_config(self) -> RDNSCacheConfig:
        """Load configuration from file and environment variables.

        Returns:
            Loaded and validated configuration

        Raises:
            FileNotFoundError: If config file is specified but not found
            ValueError: If configuration is invalid
            yaml.YAMLError: If YAML parsing fails
            json.JSONDecodeError: If JSON parsing fails
        """
        config_dict = asdict(create_default_config())

        if self.config_file:
            file_config = self._load_from_file(self.config_file)
            config_dict = self._merge_configs(config_dict, file_config)

        config_dict = self._apply_env_overrides(config_dict)

        self._config = self._dict_to_config(config_dict)

        return self._config

    def get_config(self) -> Optional[RDNSCacheConfig]:
        """Get current configuration."""
        return self._config

    def resolution_enabled(self) -> bool:
        """Current resolver.enabled setting, re-read on every call."""
        config = self._config or self.load_config()
        return config.resolver.enabled

    def start_hot_reload(self) -> None:
        """Start file watching for hot reload."""
        if not self.enable_hot_reload or not self.config_file:
            return

        config_path = Path(self.config_file)
        if not config_path.exists():
            return

        event_handler = ConfigFileHandler(str(config_path), self._on_config_change)
        self._observer = Observer()
        self._observer.schedule(
            event_handler, str(config_path.resolve().parent), recursive=False
        )
        self._observer.start()
        logger.debug(f"Watching {config_path} for changes")

    def stop_hot_reload(self) -> None:
        """Stop file watching."""
        if self._observer and self._observer.is_alive():
            self._observer.stop()
            self._observer.join()

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file.

        Args:
            file_path: Path to configuration file

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If file is not found
            ValueError: If file format is not supported
            yaml.YAMLError: If YAML parsing fails
            json.JSONDecodeError: If JSON parsing fails
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, "r", encoding="utf-8") as f:
            content = f.read()

        if path.suffix.lower() in [".yaml", ".yml"]:
            result = yaml.safe_load(content)
            return result if isinstance(result, dict) else {}
        elif path.suffix.lower() == ".json":
            json_result = json.loads(content)
            return json_result if isinstance(json_result, dict) else {}
        else:
            # Try YAML first, then JSON
            try:
                result = yaml.safe_load(content)
                return result if isinstance(result, dict) else {}
            except yaml.YAMLError:
                try:
                    json_result = json.loads(content)
                    return json_result if isinstance(json_result, dict) else {}
                except json.JSONDecodeError:
                    raise ValueError(f"Unsupported file format: {file_path}")

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> RDNSCacheConfig:
        """Convert dictionary to configuration object.

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            return RDNSCacheConfig(
                cache=CacheConfig(**config_dict.get("cache", {})),
                resolver=ResolverConfig(**config_dict.get("resolver", {})),
                logging=LoggingConfig(**config_dict.get("logging", {})),
            )
        except TypeError as e:
            # Unknown keys in a section
            raise ValueError(f"Invalid configuration: {e}") from e

    def _merge_configs(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Merge two configuration dictionaries.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary

        Returns:
            Merged configuration dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration.

        Environment variables use the format RDNS_CACHE_<SECTION>_<KEY>
        For example: RDNS_CACHE_RESOLVER_ENABLED=false

        Args:
            config_dict: Base configuration dictionary

        Returns:
            Configuration dictionary with environment overrides applied
        """
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            key_parts = env_key[len(ENV_PREFIX) :].lower().split("_")
            if len(key_parts) < 2:
                continue

            section = key_parts[0]
            config_key = "_".join(key_parts[1:])

            if not isinstance(config_dict.get(section), dict):
                continue

            if section == "resolver" and config_key == "nameservers":
                # Comma-separated list
                config_dict[section][config_key] = [
                    s.strip() for s in env_value.split(",") if s.strip()
                ]
            else:
                config_dict[section][config_key] = self._convert_env_value(
                    env_value, config_dict[section].get(config_key)
                )

        return config_dict

    def _convert_env_value(self, value: str, current: Any = None) -> Any:
        """Convert environment variable value to appropriate Python type.

        Args:
            value: Environment variable value as string
            current: Value being overridden; boolean settings also take 1 and 0

        Returns:
            Converted value
        """
        if isinstance(current, bool):
            if value.lower() in ("true", "yes", "on", "1"):
                return True
            if value.lower() in ("false", "no", "off", "0"):
                return False
            return value

        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def _on_config_change(self, file_path: str) -> None:
        """Handle configuration file change event.

        Args:
            file_path: Path to changed file
        """
        # Debounce rapid changes
        current_time = time.time()
        if current_time - self._last_reload_time < 1.0:
            return
        self._last_reload_time = current_time

        try:
            new_config = self.load_config()
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error reloading configuration: {e}")
            return

        if self.reload_callback:
            self.reload_callback(new_config)

        logger.info(f"Configuration reloaded from {file_path}")


class ConfigFileHandler(FileSystemEventHandler):
    """File system event handler for configuration changes."""

    def __init__(self, config_path: str, callback: Callable[[str], None]):
        """Initialize handler.

        Args:
            config_path: Configuration file to watch within its directory
            callback: Function to call when config file changes
        """
        self.config_path = Path(config_path).resolve()
        self.callback = callback

    def on_modified(self, event: Any) -> None:
        """Handle file modification event."""
        self._dispatch(event, event.src_path)

    def on_moved(self, event: Any) -> None:
        """Handle a file renamed over the config (atomic save)."""
        self._dispatch(event, event.dest_path)

    def _dispatch(self, event: Any, path: str) -> None:
        if event.is_directory:
            return
        if Path(path).resolve() == self.config_path:
            self.callback(path)


def load_config_from_file(
    config_file: Optional[str] = None,
    enable_hot_reload: bool = True,
    reload_callback: Optional[Callable[[RDNSCacheConfig], None]] = None,
) -> Tuple[RDNSCacheConfig, ConfigLoader]:
    """Convenience function to load configuration.

    Args:
        config_file: Path to configuration file
        enable_hot_reload: Enable hot reload
        reload_callback: Callback for configuration changes

    Returns:
        Tuple of (loaded config, config loader instance)
    """
    loader = ConfigLoader(config_file, enable_hot_reload, reload_callback)
    config = loader.load_config()

    if enable_hot_reload:
        loader.start_hot_reload()

    return config, loader
