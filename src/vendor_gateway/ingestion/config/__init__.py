from vendor_gateway.ingestion.config.value_objects import (
    YAHOO_INTERVALS,
    BulkDownloadConfig,
    CacheConfig,
    HttpClientConfig,
    YahooFinanceConfig,
)

__all__ = [
    "YAHOO_INTERVALS",
    "BulkDownloadConfig",
    "CacheConfig",
    "HttpClientConfig",
    "YahooFinanceConfig",
]
