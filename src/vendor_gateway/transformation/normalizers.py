"""Chart payload normalizers.

Provides:
- YahooChartNormalizer: converts a provider chart envelope into a canonical
  Quote or HistoricalSeries
- compute_change: zero-safe change / change-percent arithmetic

Expected envelope (every sub-object except ``chart.result[0]`` is optional):

    {
      "chart": {
        "result": [
          {
            "meta": {"regularMarketPrice": ..., "previousClose": ..., ...},
            "timestamp": [epoch_seconds, ...],
            "indicators": {
              "quote": [{"open": [...], "high": [...], "low": [...],
                         "close": [...], "volume": [...]}]
            }
          }
        ],
        "error": null
      }
    }
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from vendor_gateway.infrastructure.impls.system import SystemClock
from vendor_gateway.infrastructure.observability import get_processing_logger
from vendor_gateway.infrastructure.ports.system import IClock
from vendor_gateway.ingestion.exceptions import ParseError
from vendor_gateway.shared.models.market_data import (
    HistoricalRecord,
    HistoricalSeries,
    Quote,
)

log = get_processing_logger("chart-normalizer")


def compute_change(price: float, previous_close: float) -> tuple[float, float]:
    """Return ``(change, change_percent)``.

    ``change_percent`` is 0 when ``previous_close`` is zero or the arithmetic
    is not finite; ``change`` is 0 when not finite.
    """
    change = price - previous_close
    if not math.isfinite(change):
        change = 0.0

    if previous_close == 0:
        return change, 0.0

    change_percent = change / previous_close * 100
    if not math.isfinite(change_percent):
        change_percent = 0.0
    return change, change_percent


def _number(value: Any) -> float | None:
    """Coerce a payload value to float, treating null/garbage as missing."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _reported(value: Any) -> float | None:
    """Like ``_number`` but a zero means the provider has no figure."""
    number = _number(value)
    return number if number else None


def _at(values: Any, index: int) -> float | None:
    if not isinstance(values, list) or index >= len(values):
        return None
    return _number(values[index])


def _first(values: Any) -> float | None:
    return _at(values, 0)


def _last(values: Any) -> float | None:
    if not isinstance(values, list) or not values:
        return None
    return _number(values[-1])


class YahooChartNormalizer:
    """Normalizer for the Yahoo Finance v8 chart envelope."""

    def __init__(self, clock: IClock | None = None):
        """
        Args:
            clock: Source of the quote timestamp (defaults to system clock)
        """
        self._clock = clock or SystemClock()

    # ------------------------------------------------------------------ #
    # Envelope access
    # ------------------------------------------------------------------ #

    @staticmethod
    def _extract_result(payload: Any, symbol: str) -> dict[str, Any]:
        """Return ``chart.result[0]`` or raise ParseError."""
        chart = payload.get("chart") if isinstance(payload, dict) else None
        if not isinstance(chart, dict):
            raise ParseError(f"Invalid response format for {symbol}: missing chart")

        results = chart.get("result")
        if isinstance(results, list) and results and isinstance(results[0], dict):
            return results[0]

        message = f"Invalid response format for {symbol}: missing result"
        error = chart.get("error")
        if isinstance(error, dict) and error.get("description"):
            message = f"{message} ({error['description']})"
        raise ParseError(message)

    @staticmethod
    def _extract_quote_block(result: dict[str, Any]) -> dict[str, Any]:
        indicators = result.get("indicators")
        if not isinstance(indicators, dict):
            return {}
        quotes = indicators.get("quote")
        if isinstance(quotes, list) and quotes and isinstance(quotes[0], dict):
            return quotes[0]
        return {}

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def parse_quote(self, payload: Any, symbol: str) -> Quote:
        """Normalize a chart envelope into a Quote.

        Args:
            payload: Decoded provider JSON
            symbol: Symbol the request was made for

        Returns:
            Quote with zero-safe change figures

        Raises:
            ParseError: If the top-level result object is absent
        """
        result = self._extract_result(payload, symbol)
        meta = result.get("meta")
        if not isinstance(meta, dict):
            meta = {}
        quote = self._extract_quote_block(result)

        price = _number(meta.get("regularMarketPrice")) or 0.0
        previous_close = _number(meta.get("previousClose"))
        if previous_close is None:
            previous_close = _number(meta.get("chartPreviousClose")) or 0.0
        change, change_percent = compute_change(price, previous_close)

        day_high = _number(meta.get("regularMarketDayHigh"))
        day_low = _number(meta.get("regularMarketDayLow"))

        high = _last(quote.get("high"))
        low = _last(quote.get("low"))
        open_ = _first(quote.get("open"))

        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=_number(meta.get("regularMarketVolume")) or 0.0,
            high=high if high is not None else day_high,
            low=low if low is not None else day_low,
            open=open_ if open_ is not None else day_low,
            previous_close=previous_close,
            market_cap=_reported(meta.get("marketCap")),
            pe=_reported(meta.get("trailingPE")),
            timestamp=self._clock.utcnow(),
        )

    def parse_historical_series(self, payload: Any, symbol: str) -> HistoricalSeries:
        """Normalize parallel chart arrays into a HistoricalSeries.

        Indexes whose close is null are dropped; the remaining records keep
        their upstream order.

        Raises:
            ParseError: If the top-level result object is absent
        """
        result = self._extract_result(payload, symbol)
        timestamps = result.get("timestamp") or []
        if not isinstance(timestamps, list):
            raise ParseError(f"Invalid timestamp array for {symbol}")
        quote = self._extract_quote_block(result)

        records: list[HistoricalRecord] = []
        dropped = 0
        for index, epoch_seconds in enumerate(timestamps):
            close = _at(quote.get("close"), index)
            seconds = _number(epoch_seconds)
            if close is None or seconds is None:
                dropped += 1
                continue

            records.append(
                HistoricalRecord(
                    timestamp=datetime.fromtimestamp(seconds, tz=UTC),
                    open=_at(quote.get("open"), index),
                    high=_at(quote.get("high"), index),
                    low=_at(quote.get("low"), index),
                    close=close,
                    volume=_at(quote.get("volume"), index),
                )
            )

        if dropped:
            log.debug(
                "null_close_records_dropped",
                symbol=symbol,
                dropped=dropped,
                kept=len(records),
            )

        return HistoricalSeries(symbol=symbol, records=records)
