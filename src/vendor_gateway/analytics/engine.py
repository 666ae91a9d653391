"""
Analytics Engine

Builds an AnalyticsSnapshot from a daily and a weekly quote:
- classify_volatility: LOW / MEDIUM / HIGH tier from the absolute change percents
- weekly_trend: UP / DOWN from the weekly absolute change
- recommend: BUY / SELL / HOLD from a momentum, liquidity and valuation score

The scoring functions accept a Quote, any object with the matching
attributes, or a mapping keyed by snake_case or camelCase field names.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Protocol

from vendor_gateway.infrastructure.observability import get_analytics_logger
from vendor_gateway.ingestion.exceptions import AggregationError
from vendor_gateway.ingestion.models.enums import (
    Recommendation,
    Trend,
    VolatilityTier,
)
from vendor_gateway.ingestion.models.results import AdapterResult
from vendor_gateway.shared.models.market_data import AnalyticsSnapshot, Quote

log = get_analytics_logger()

DAILY_INTERVAL = "1d"
WEEKLY_INTERVAL = "1wk"

HIGH_DAILY_MOVE = 5.0
HIGH_WEEKLY_MOVE = 15.0
MEDIUM_DAILY_MOVE = 2.0
MEDIUM_WEEKLY_MOVE = 8.0

MOMENTUM_THRESHOLD = 2.0
LIQUID_VOLUME = 1_000_000
CHEAP_PE = 15.0
EXPENSIVE_PE = 30.0
BUY_SCORE = 1.0
SELL_SCORE = -1.0


class QuoteSource(Protocol):
    async def get_market_data(
        self, symbol: str, interval: str = "1d"
    ) -> AdapterResult[Quote]: ...


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _field(quote: Any, name: str, default: Any = None) -> Any:
    if isinstance(quote, Mapping):
        if name in quote:
            return quote[name]
        return quote.get(_to_camel(name), default)
    return getattr(quote, name, default)


def classify_volatility(daily: Any, weekly: Any) -> VolatilityTier:
    daily_move = abs(_field(daily, "change_percent", 0.0) or 0.0)
    weekly_move = abs(_field(weekly, "change_percent", 0.0) or 0.0)

    if daily_move > HIGH_DAILY_MOVE or weekly_move > HIGH_WEEKLY_MOVE:
        return VolatilityTier.HIGH
    if daily_move > MEDIUM_DAILY_MOVE or weekly_move > MEDIUM_WEEKLY_MOVE:
        return VolatilityTier.MEDIUM
    return VolatilityTier.LOW


def weekly_trend(weekly: Any) -> Trend:
    return Trend.UP if (_field(weekly, "change", 0.0) or 0.0) > 0 else Trend.DOWN


def recommendation_score(daily: Any) -> float:
    """Additive score behind ``recommend``."""
    change_percent = _field(daily, "change_percent", 0.0) or 0.0
    volume = _field(daily, "volume", 0.0) or 0.0
    pe = _field(daily, "pe")

    score = 0.0
    if change_percent > MOMENTUM_THRESHOLD:
        score += 1
    if change_percent < -MOMENTUM_THRESHOLD:
        score -= 1
    if volume > LIQUID_VOLUME:
        score += 0.5
    if pe is not None and pe < CHEAP_PE:
        score += 0.5
    if pe is not None and pe > EXPENSIVE_PE:
        score -= 0.5
    return score


def recommend(daily: Any) -> Recommendation:
    score = recommendation_score(daily)
    if score > BUY_SCORE:
        return Recommendation.BUY
    if score < SELL_SCORE:
        return Recommendation.SELL
    return Recommendation.HOLD


class AnalyticsEngine:
    """Fan-out/fan-in analytics over a quote source."""

    def __init__(self, quote_source: QuoteSource):
        self.quote_source = quote_source

    async def get_analytics(self, symbol: str) -> AnalyticsSnapshot:
        """Fetch the daily and weekly quote concurrently and score them.

        Raises:
            AggregationError: If either quote could not be obtained
        """
        daily_result, weekly_result = await asyncio.gather(
            self.quote_source.get_market_data(symbol, DAILY_INTERVAL),
            self.quote_source.get_market_data(symbol, WEEKLY_INTERVAL),
            return_exceptions=True,
        )

        failed = []
        for interval, result in (
            (DAILY_INTERVAL, daily_result),
            (WEEKLY_INTERVAL, weekly_result),
        ):
            if isinstance(result, BaseException):
                failed.append(f"{interval}: {result}")
            elif not result.success:
                message = result.error.message if result.error else "unknown error"
                failed.append(f"{interval}: {message}")

        if failed:
            log.warning("analytics_leg_failed", symbol=symbol, failed=failed)
            raise AggregationError(
                f"Failed to fetch analytics data for {symbol} ({'; '.join(failed)})"
            )

        return self.build_snapshot(symbol, daily_result.data, weekly_result.data)

    @staticmethod
    def build_snapshot(symbol: str, daily: Quote, weekly: Quote) -> AnalyticsSnapshot:
        snapshot = AnalyticsSnapshot(
            symbol=symbol,
            price=daily.price,
            change=daily.change,
            change_percent=daily.change_percent,
            volume=daily.volume,
            market_cap=daily.market_cap,
            pe=daily.pe,
            volatility=classify_volatility(daily, weekly),
            weekly_trend=weekly_trend(weekly),
            recommendation=recommend(daily),
        )
        log.debug(
            "analytics_snapshot_built",
            symbol=symbol,
            volatility=snapshot.volatility.value,
            trend=snapshot.weekly_trend.value,
            recommendation=snapshot.recommendation.value,
        )
        return snapshot
