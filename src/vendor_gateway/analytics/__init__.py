"""Derived analytics: volatility tier, weekly trend and recommendation scoring."""

from vendor_gateway.analytics.engine import (
    AnalyticsEngine,
    QuoteSource,
    classify_volatility,
    recommend,
    recommendation_score,
    weekly_trend,
)

__all__ = [
    "AnalyticsEngine",
    "QuoteSource",
    "classify_volatility",
    "recommend",
    "recommendation_score",
    "weekly_trend",
]
