"""
Foundational enums for the capability-negotiated adapter framework.

Capabilities and operations form closed sets: dispatch by name is resolved
against these enums rather than by reflection on adapter attributes.
"""

from __future__ import annotations

from enum import Enum


class Capability(str, Enum):
    """
    Capability flags an adapter may declare.

    Values are snake_case; the camelCase names used in the canonical JSON
    surface ("marketData", ...) are accepted through ``parse``.
    """

    MARKET_DATA = "market_data"
    ORDER_MANAGEMENT = "order_management"
    PORTFOLIO = "portfolio"
    ANALYTICS = "analytics"
    REALTIME = "realtime"

    @property
    def json_name(self) -> str:
        head, *rest = self.value.split("_")
        return head + "".join(part.title() for part in rest)

    @classmethod
    def parse(cls, value: Capability | str) -> Capability:
        """Resolve a capability from its enum, snake_case or camelCase name.

        Raises:
            ValueError: If the name is not a known capability
        """
        if isinstance(value, cls):
            return value
        for capability in cls:
            if value in (capability.value, capability.json_name):
                return capability
        raise ValueError(f"Unknown capability: {value!r}")


class AdapterOperation(str, Enum):
    """
    Closed set of Adapter Contract operations available for dispatch.

    Each member's value is the adapter method name it resolves to.
    """

    CONNECT = "connect"
    DISCONNECT = "disconnect"
    GET_MARKET_DATA = "get_market_data"
    GET_HISTORICAL_DATA = "get_historical_data"
    PLACE_ORDER = "place_order"
    GET_PORTFOLIO = "get_portfolio"
    GET_ANALYTICS = "get_analytics"

    @property
    def method_name(self) -> str:
        return self.value

    @property
    def required_capability(self) -> Capability | None:
        """Capability gating this operation (None for lifecycle operations)."""
        return _OPERATION_CAPABILITY.get(self)

    @classmethod
    def parse(cls, value: AdapterOperation | str) -> AdapterOperation:
        """Resolve an operation from its snake_case or camelCase name.

        Raises:
            ValueError: If the name is not an Adapter Contract operation
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"{value!r} is not an operation name")
        normalized = "".join(
            f"_{ch.lower()}" if ch.isupper() else ch for ch in value
        ).lstrip("_")
        return cls(normalized)


_OPERATION_CAPABILITY: dict[AdapterOperation, Capability] = {
    AdapterOperation.GET_MARKET_DATA: Capability.MARKET_DATA,
    AdapterOperation.GET_HISTORICAL_DATA: Capability.MARKET_DATA,
    AdapterOperation.PLACE_ORDER: Capability.ORDER_MANAGEMENT,
    AdapterOperation.GET_PORTFOLIO: Capability.PORTFOLIO,
    AdapterOperation.GET_ANALYTICS: Capability.ANALYTICS,
}


class ClientType(str, Enum):
    """
    Type of client implementation used by adapter.

    - NATIVE: Direct integration with provider's API
    - WRAPPER: Uses third-party wrapper library
    - SIMULATED: Synthetic data (demo/test vendors)
    """

    NATIVE = "native"
    WRAPPER = "wrapper"
    SIMULATED = "simulated"


class ConnectionType(str, Enum):
    """Network connection type used by adapter."""

    REST = "rest"
    WEBSOCKET = "websocket"
    NONE = "none"


class VolatilityTier(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Trend(str, Enum):
    UP = "UP"
    DOWN = "DOWN"


class Recommendation(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"
