"""
Configuration for the asset converter.

Settings come from `config.yaml` (found at the project root, or named by
ASSET_CONVERTER_CONFIG) with secrets such as the ExchangeRate.host access
key read from the environment, which `.env` may populate.
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from asset_converter.utils.errors import ConfigurationError
from asset_converter.utils.logging import setup_logging
from asset_converter.utils.paths import resolve_project_path

logger = logging.getLogger(__name__)


CONFIG_ENV_VAR = "ASSET_CONVERTER_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"
REQUIRED_SECTIONS = ("app", "cache")
CACHE_TYPES = ("file", "memory")

# Seconds each bucket's snapshot stays fresh
DEFAULT_TTLS = {
    "crypto": 30,
    "fiat": 600,
    "metals": 900,
    "stocks": 300,
}


def ttl_group(bucket: str) -> str:
    """Both equity buckets share the `stocks` TTL."""
    return "stocks" if bucket.startswith("stocks") else bucket


class Config:
    """YAML settings with dot-path lookup and typed accessors."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = self._read()
        self._validate()
        self._configure_logging()
        logger.info(f"Configuration loaded from {self.config_path}")

    def _read(self) -> Dict[str, Any]:
        load_dotenv()

        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not data:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {self.config_path} must be a mapping")
        return data

    def _validate(self) -> None:
        missing = [s for s in REQUIRED_SECTIONS if s not in self._config]
        if missing:
            raise ConfigurationError(f"Missing required config section: {', '.join(missing)}")

        if self.cache_type not in CACHE_TYPES:
            raise ConfigurationError(f"Unsupported cache.type: {self.cache_type}")

        for region, table in self.vehicles.items():
            if not isinstance(table, dict) or 'currency' not in table:
                raise ConfigurationError(f"Missing vehicles.{region}.currency in config")

    def _configure_logging(self) -> None:
        setup_logging(
            level=os.getenv('LOG_LEVEL', self.get('logging.level', 'INFO')),
            log_file=self.get('logging.file'),
            format_type=self.get('logging.format', 'json'),
            enabled=self.get('logging.enabled', True)
        )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dot-separated key such as ``cache.ttl.crypto``.

        Returns `default` when any segment is missing or null.
        """
        node: Any = self._config
        for part in key.split('.'):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def get_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(key, default)

    def require_env(self, key: str) -> str:
        value = os.getenv(key)
        if value is None:
            raise ConfigurationError(f"Required environment variable not set: {key}")
        return value

    # App

    @property
    def app_name(self) -> str:
        return self.get('app.name', 'Asset Converter')

    @property
    def app_version(self) -> str:
        return self.get('app.version', '0.1.0')

    @property
    def debug(self) -> bool:
        return bool(self.get('app.debug', False))

    @property
    def base_currency(self) -> str:
        return self.get('app.base_currency', 'USD')

    # Cache

    @property
    def cache_type(self) -> str:
        return self.get('cache.type', 'file')

    @property
    def cache_dir(self) -> Path:
        """Directory holding one JSON file per cache bucket."""
        return resolve_project_path(self.get('cache.dir', 'cache'))

    def bucket_ttl(self, bucket: str) -> int:
        group = ttl_group(bucket)
        return int(self.get(f'cache.ttl.{group}', DEFAULT_TTLS.get(group, 300)))

    # Upstream APIs

    @property
    def api_timeout(self) -> float:
        """Per-call upstream timeout in seconds."""
        return float(self.get('api.timeout', 3))

    def provider_url(self, provider: str, default: str) -> str:
        return self.get(f'api.{provider}.base_url', default)

    # Asset tables

    @property
    def assets(self) -> Dict[str, Any]:
        return self.get('assets', {})

    @property
    def vehicles(self) -> Dict[str, Any]:
        return self.get('vehicles', {})


_config: Optional[Config] = None


def load_config(config_path: Optional[str] = None) -> Config:
    """Return the process-wide Config, reading it on first use."""
    global _config
    if _config is None:
        path = config_path or os.getenv(CONFIG_ENV_VAR) or str(resolve_project_path(DEFAULT_CONFIG_PATH))
        _config = Config(path)
    return _config


def get_config() -> Config:
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def reset_config() -> None:
    """Drop the global instance so the next load_config() re-reads the file."""
    global _config
    _config = None
