"""Configuration value objects for dependency injection.

Instead of injecting the global settings object, inject specific configuration
dataclasses into each component. Enables:
- Easy testing with different configurations
- Clear constructor contracts
- Validation at composition root
"""

from dataclasses import dataclass, field

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; vendor-gateway/0.1)"

YAHOO_INTERVALS: tuple[str, ...] = (
    "1m",
    "2m",
    "5m",
    "15m",
    "30m",
    "60m",
    "90m",
    "1h",
    "1d",
    "5d",
    "1wk",
    "1mo",
    "3mo",
)


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 30.0
    connect_timeout: float = 10.0
    headers: dict[str, str] = field(
        default_factory=lambda: {"User-Agent": DEFAULT_USER_AGENT}
    )


@dataclass(frozen=True)
class CacheConfig:
    """Configuration for per-adapter result caches."""

    ttl_ms: float = 30_000


@dataclass(frozen=True)
class BulkDownloadConfig:
    """Configuration for batched historical downloads."""

    batch_size: int = 10
    cooldown_seconds: float = 1.0
    period: str = "1mo"

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.cooldown_seconds < 0:
            raise ValueError(
                f"cooldown_seconds must be >= 0, got {self.cooldown_seconds}"
            )


@dataclass(frozen=True)
class YahooFinanceConfig:
    """Configuration for the Yahoo Finance chart adapter."""

    base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart/"
    intervals: tuple[str, ...] = YAHOO_INTERVALS
    quote_range: str = "1d"
    default_period: str = "1mo"
    probe_symbol: str = "AAPL"
    cache_config: CacheConfig = None
    bulk_config: BulkDownloadConfig = None

    def __post_init__(self):
        """Set defaults for nested configs."""
        if self.cache_config is None:
            object.__setattr__(self, "cache_config", CacheConfig())
        if self.bulk_config is None:
            object.__setattr__(self, "bulk_config", BulkDownloadConfig())
