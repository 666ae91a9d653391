"""
Unified configuration state management.

This module provides a single source of truth for all application configuration,
combining hierarchical YAML files with environment overrides, type validation,
and sensible defaults. Components never read ``ConfigState`` directly: the
composition root converts it into frozen value objects
(see ``vendor_gateway.ingestion.config.value_objects``).
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from vendor_gateway.ingestion.config.value_objects import (
    DEFAULT_USER_AGENT,
    YAHOO_INTERVALS,
    BulkDownloadConfig,
    CacheConfig,
    HttpClientConfig,
    YahooFinanceConfig,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class HttpSettings(BaseModel):
    """Outbound HTTP transport settings."""

    model_config = ConfigDict(extra="allow")

    timeout: float = Field(default=30.0, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)


class YahooSettings(BaseModel):
    """Yahoo Finance chart endpoint settings."""

    model_config = ConfigDict(extra="allow")

    base_url: str = Field(default="https://query1.finance.yahoo.com/v8/finance/chart/")
    intervals: list[str] = Field(default_factory=lambda: list(YAHOO_INTERVALS))
    quote_range: str = Field(default="1d")
    default_period: str = Field(default="1mo")
    probe_symbol: str = Field(default="AAPL")
    cache_ttl_ms: float = Field(default=30_000, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Chart URLs are built by appending the symbol."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Yahoo base_url must be an http(s) URL")
        return v if v.endswith("/") else f"{v}/"


class BulkSettings(BaseModel):
    """Bulk historical download settings."""

    model_config = ConfigDict(extra="allow")

    batch_size: int = Field(default=10, ge=1)
    cooldown_seconds: float = Field(default=1.0, ge=0)
    period: str = Field(default="1mo")


class VendorEntry(BaseModel):
    """A vendor to register at startup."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    provider: str = Field(default="yahoo_finance")
    enabled: bool = Field(default=True)
    connect_on_startup: bool = Field(default=False)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="allow")

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for all app config.

    Provides unified access to all settings with type safety, validation,
    and sensible defaults.
    """

    model_config = ConfigDict(extra="allow")

    http: HttpSettings = Field(default_factory=HttpSettings)
    yahoo: YahooSettings = Field(default_factory=YahooSettings)
    bulk: BulkSettings = Field(default_factory=BulkSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    vendors: list[VendorEntry] = Field(
        default_factory=lambda: [VendorEntry(id="yfinance")]
    )

    # Environment metadata
    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")

    def to_http_config(self) -> HttpClientConfig:
        return HttpClientConfig(
            timeout=self.http.timeout,
            connect_timeout=self.http.connect_timeout,
            headers={"User-Agent": self.http.user_agent},
        )

    def to_yahoo_config(self) -> YahooFinanceConfig:
        return YahooFinanceConfig(
            base_url=self.yahoo.base_url,
            intervals=tuple(self.yahoo.intervals),
            quote_range=self.yahoo.quote_range,
            default_period=self.yahoo.default_period,
            probe_symbol=self.yahoo.probe_symbol,
            cache_config=CacheConfig(ttl_ms=self.yahoo.cache_ttl_ms),
            bulk_config=BulkDownloadConfig(
                batch_size=self.bulk.batch_size,
                cooldown_seconds=self.bulk.cooldown_seconds,
                period=self.bulk.period,
            ),
        )


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


class ConfigLoader:
    """
    Load and validate configuration from hierarchical YAML files.

    Merges:
      1. Global defaults (hardcoded)
      2. YAML files from config_dir
      3. Environment-specific YAML (env/<env>.yaml)
      4. Environment variable overrides
    """

    CONFIG_FILES = ("vendors.yaml", "bulk.yaml", "logging.yaml")

    def __init__(self, config_dir: str = "./config"):
        self.config_dir = Path(config_dir)
        self._yaml_cache: dict[Path, Any] = {}
        self.env = os.getenv("GATEWAY_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load YAML file with caching."""
        if path in self._yaml_cache:
            return self._yaml_cache[path]

        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        self._yaml_cache[path] = data
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        if base_url := os.getenv("YAHOO_BASE_URL"):
            config.setdefault("yahoo", {})["base_url"] = base_url

        if ttl := os.getenv("CACHE_TTL_MS"):
            config.setdefault("yahoo", {})["cache_ttl_ms"] = float(ttl)

        if batch_size := os.getenv("BULK_BATCH_SIZE"):
            config.setdefault("bulk", {})["batch_size"] = int(batch_size)

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Returns:
            ConfigState: Validated configuration object

        Raises:
            pydantic.ValidationError: If configuration is invalid
        """
        logger.info(f"Loading configuration from {self.config_dir} (env: {self.env})")

        config: dict[str, Any] = {}

        for config_file in self.CONFIG_FILES:
            file_config = self._load_yaml(self.config_dir / config_file)
            config = self._merge_dicts(config, file_config)

        env_config = self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        config = self._merge_dicts(config, env_config)

        config = self._apply_env_overrides(config)

        try:
            state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        logger.info(
            f"Configuration loaded: vendors={[v.id for v in state.vendors]}, "
            f"cache_ttl_ms={state.yahoo.cache_ttl_ms}, "
            f"batch_size={state.bulk.batch_size}"
        )
        return state


def get_config(config_dir: str | None = None) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to $GATEWAY_CONFIG_DIR or ./config

    Returns:
        ConfigState: Validated configuration object
    """
    if config_dir is None:
        config_dir = os.getenv("GATEWAY_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            logger.warning(f"Config directory not found at {config_dir}, using defaults")

    loader = ConfigLoader(config_dir=config_dir)
    return loader.load()


__all__ = [
    "BulkSettings",
    "ConfigLoader",
    "ConfigState",
    "HttpSettings",
    "LoggingConfig",
    "VendorEntry",
    "YahooSettings",
    "get_config",
]
