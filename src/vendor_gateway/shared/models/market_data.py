"""Canonical market-data records exchanged with callers.

Models for:
- CapabilitySet: The five capability flags an adapter declares
- Quote: Normalized price/volume snapshot for a symbol
- HistoricalRecord / HistoricalSeries: Per-bar price history
- AnalyticsSnapshot: Derived volatility/trend/recommendation view
- OrderRequest / OrderAck / PortfolioSnapshot: Order and portfolio shapes

All models use:
- Pydantic for validation
- snake_case attributes with camelCase JSON aliases (the stable interchange format)
- Timezone-aware UTC datetimes, serialized as ISO-8601
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vendor_gateway.ingestion.models.enums import (
    AdapterOperation,
    Capability,
    Recommendation,
    Trend,
    VolatilityTier,
)


class CanonicalModel(BaseModel):
    """Base for all interchange records (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class CapabilitySet(CanonicalModel):
    """Capability flags, fixed once an adapter is constructed."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    market_data: bool = False
    order_management: bool = False
    portfolio: bool = False
    analytics: bool = False
    realtime: bool = False

    @classmethod
    def none(cls) -> CapabilitySet:
        """All-false set (used for unknown vendors)."""
        return cls()

    @classmethod
    def of(cls, *capabilities: Capability) -> CapabilitySet:
        return cls(**{capability.value: True for capability in capabilities})

    def supports(self, capability: Capability | str) -> bool:
        return bool(getattr(self, Capability.parse(capability).value))

    def enabled(self) -> list[Capability]:
        return [capability for capability in Capability if self.supports(capability)]

    def operations(self) -> frozenset[AdapterOperation]:
        """Adapter Contract operations these flags make callable."""
        return frozenset(
            operation
            for operation in AdapterOperation
            if operation.required_capability is None
            or self.supports(operation.required_capability)
        )


class Quote(CanonicalModel):
    """Normalized quote for a symbol at fetch time."""

    symbol: str = Field(..., min_length=1)
    price: float
    change: float
    change_percent: float
    volume: float
    high: float | None = None
    low: float | None = None
    open: float | None = None
    previous_close: float
    market_cap: float | None = None
    pe: float | None = None
    timestamp: datetime


class HistoricalRecord(CanonicalModel):
    """Single bar. Close is mandatory; other fields may be sparse."""

    timestamp: datetime
    open: float | None = None
    high: float | None = None
    low: float | None = None
    close: float
    volume: float | None = None


class HistoricalSeries(CanonicalModel):
    """Bars for a symbol in upstream chronological order."""

    symbol: str
    records: list[HistoricalRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


class AnalyticsSnapshot(CanonicalModel):
    """Daily quote figures plus derived classification."""

    symbol: str
    price: float
    change: float
    change_percent: float
    volume: float
    market_cap: float | None = None
    pe: float | None = None
    volatility: VolatilityTier
    weekly_trend: Trend
    recommendation: Recommendation


class ConnectionStatus(CanonicalModel):
    connected: bool


class OrderRequest(CanonicalModel):
    symbol: str = Field(..., min_length=1)
    side: str = Field(..., pattern="^(buy|sell)$")
    quantity: float = Field(..., gt=0)
    order_type: str = "market"
    limit_price: float | None = None


class OrderAck(CanonicalModel):
    order_id: str
    status: str


class Position(CanonicalModel):
    symbol: str
    quantity: float
    market_value: float


class PortfolioSnapshot(CanonicalModel):
    total_value: float
    positions: list[Position] = Field(default_factory=list)
