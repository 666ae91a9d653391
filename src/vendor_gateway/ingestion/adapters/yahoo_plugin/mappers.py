"""
Request mapping helpers for Yahoo Finance.
"""

from __future__ import annotations

from collections.abc import Iterable


def normalize_symbol(symbol: str) -> str:
    """Strip and upper-case a ticker (``" aapl "`` -> ``"AAPL"``)."""
    normalized = (symbol or "").strip().upper()
    if not normalized:
        raise ValueError("Symbol must be a non-empty string")
    return normalized


def validate_interval(interval: str, supported: Iterable[str]) -> str:
    supported = tuple(supported)
    if interval not in supported:
        raise ValueError(
            f"Unsupported interval '{interval}'. Supported: {', '.join(supported)}"
        )
    return interval


def cache_key(symbol: str, interval: str) -> str:
    return f"{symbol}_{interval}"


def unique_symbols(symbols: Iterable[str]) -> list[str]:
    """Normalize tickers and drop repeats, keeping first-seen order.

    Entries that cannot be normalized are passed through unchanged so the
    fetch for them is reported as a failure.
    """
    seen: dict[str, None] = {}
    for symbol in symbols:
        try:
            key = normalize_symbol(symbol)
        except (AttributeError, ValueError):
            key = symbol
        seen.setdefault(key, None)
    return list(seen)
