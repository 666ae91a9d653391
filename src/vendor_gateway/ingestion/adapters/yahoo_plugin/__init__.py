"""
Yahoo Finance plugin for quote, history and analytics data.

This plugin provides:
- Chart endpoint client with HTTP status classification
- Quote caching per symbol and interval
- Batched historical downloads with inter-batch cooldown
- Daily/weekly analytics scoring
"""

from .adapter import YahooFinanceAdapter
from .client import YahooFinanceClient
from .factory_registration import (
    YAHOO_FINANCE_PROVIDER,
    create_yahoo_finance_adapter,
    create_yahoo_finance_client,
    register_yahoo_finance_adapters,
)
from .mappers import cache_key, normalize_symbol, unique_symbols, validate_interval

__all__ = [
    "YahooFinanceAdapter",
    "YahooFinanceClient",
    "YAHOO_FINANCE_PROVIDER",
    "cache_key",
    "create_yahoo_finance_adapter",
    "create_yahoo_finance_client",
    "normalize_symbol",
    "register_yahoo_finance_adapters",
    "unique_symbols",
    "validate_interval",
]
