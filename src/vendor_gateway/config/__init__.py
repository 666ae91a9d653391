"""
Configuration exports for vendor_gateway.

Exposes the validated ``ConfigState`` and its loader; call ``get_config()``
once at the composition root and pass the result down.
"""

from vendor_gateway.config.state import (
    BulkSettings,
    ConfigLoader,
    ConfigState,
    HttpSettings,
    LoggingConfig,
    VendorEntry,
    YahooSettings,
    get_config,
)

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
