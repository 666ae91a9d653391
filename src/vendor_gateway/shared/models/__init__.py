from vendor_gateway.shared.models.market_data import (
    AnalyticsSnapshot,
    CanonicalModel,
    CapabilitySet,
    ConnectionStatus,
    HistoricalRecord,
    HistoricalSeries,
    OrderAck,
    OrderRequest,
    PortfolioSnapshot,
    Position,
    Quote,
)

__all__ = [
    "AnalyticsSnapshot",
    "CanonicalModel",
    "CapabilitySet",
    "ConnectionStatus",
    "HistoricalRecord",
    "HistoricalSeries",
    "OrderAck",
    "OrderRequest",
    "PortfolioSnapshot",
    "Position",
    "Quote",
]
