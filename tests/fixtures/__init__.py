"""
Test fixtures package.

Provides recorded chart responses, chart payload builders, and deterministic
clock / sleeper doubles.
"""

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from vendor_gateway.infrastructure.ports.system import IClock, ISleeper
from vendor_gateway.ingestion.ports.http import HttpResponse


def load_fixture(fixture_name: str) -> Any:
    """
    Load fixture data from chart_responses.json.

    Args:
        fixture_name: Name of the fixture to load

    Returns:
        Fixture data (dict, list, etc.)

    Example:
        >>> payload = load_fixture("aapl_quote_1d")
    """
    fixtures_path = Path(__file__).parent / "chart_responses.json"

    with open(fixtures_path) as f:
        all_fixtures = json.load(f)

    if fixture_name not in all_fixtures:
        raise KeyError(f"Fixture '{fixture_name}' not found")

    return all_fixtures[fixture_name]


# Test doubles


class FakeClock(IClock):
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 2, 15, 30, tzinfo=UTC)

    def now(self) -> datetime:
        return self.current.replace(tzinfo=None)

    def utcnow(self) -> datetime:
        return self.current

    def advance(self, milliseconds: float) -> None:
        self.current += timedelta(milliseconds=milliseconds)


class RecordingSleeper(ISleeper):
    """Records requested delays instead of sleeping."""

    def __init__(self):
        self.calls: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.calls.append(seconds)


# Payload builders


def create_chart_payload(
    meta: dict[str, Any] | None = None,
    quote: dict[str, list] | None = None,
    timestamps: list[int] | None = None,
) -> dict[str, Any]:
    """Chart envelope with a single result; omitted parts are left out."""
    result: dict[str, Any] = {"meta": meta or {}}
    if quote is not None:
        result["indicators"] = {"quote": [quote]}
    if timestamps is not None:
        result["timestamp"] = timestamps
    return {"chart": {"result": [result], "error": None}}


def create_quote_payload(
    price: float = 150.0,
    previous_close: float = 100.0,
    volume: float = 2_000_000,
    **meta: Any,
) -> dict[str, Any]:
    return create_chart_payload(
        meta={
            "regularMarketPrice": price,
            "previousClose": previous_close,
            "regularMarketVolume": volume,
            **meta,
        },
        quote={"open": [101.0], "high": [155.0], "low": [99.0]},
    )


def create_history_payload(
    closes: list[float | None], start: int = 1_704_153_600
) -> dict[str, Any]:
    """Daily bars starting at ``start`` (epoch seconds); None closes mark gaps."""
    return create_chart_payload(
        meta={"symbol": "AAPL"},
        quote={
            "open": [c - 1 if c is not None else None for c in closes],
            "high": [c + 1 if c is not None else None for c in closes],
            "low": [c - 2 if c is not None else None for c in closes],
            "close": closes,
            "volume": [1000 * (i + 1) for i in range(len(closes))],
        },
        timestamps=[start + i * 86_400 for i in range(len(closes))],
    )


def create_http_response(
    body: Any, status_code: int = 200, url: str = "https://query1.test/chart/AAPL"
) -> HttpResponse:
    return HttpResponse(status_code=status_code, body=body, headers={}, url=url)


__all__ = [
    "FakeClock",
    "RecordingSleeper",
    "create_chart_payload",
    "create_history_payload",
    "create_http_response",
    "create_quote_payload",
    "load_fixture",
]
