from vendor_gateway.ingestion.models.enums import (
    AdapterOperation,
    Capability,
    ClientType,
    ConnectionType,
    Recommendation,
    Trend,
    VolatilityTier,
)
from vendor_gateway.ingestion.models.results import AdapterResult, ErrorEnvelope

__all__ = [
    "AdapterOperation",
    "AdapterResult",
    "Capability",
    "ClientType",
    "ConnectionType",
    "ErrorEnvelope",
    "Recommendation",
    "Trend",
    "VolatilityTier",
]
