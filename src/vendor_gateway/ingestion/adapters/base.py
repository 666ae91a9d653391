"""
Base vendor adapter with capability-gated operations.

Every provider integration subclasses BaseVendorAdapter and overrides the
operations its capabilities allow. Adapters never raise across their
boundary: each operation returns an AdapterResult, and internal failures are
converted to an ErrorEnvelope by ``_handle_error``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from vendor_gateway.infrastructure.observability import get_adapter_logger
from vendor_gateway.ingestion.exceptions import CapabilityNotImplementedError
from vendor_gateway.ingestion.models.enums import (
    AdapterOperation,
    ClientType,
    ConnectionType,
)
from vendor_gateway.ingestion.models.results import AdapterResult, ErrorEnvelope
from vendor_gateway.shared.models.market_data import (
    AnalyticsSnapshot,
    CapabilitySet,
    ConnectionStatus,
    HistoricalSeries,
    OrderAck,
    OrderRequest,
    PortfolioSnapshot,
    Quote,
)


class BaseVendorAdapter(ABC):
    """
    Abstract adapter implementing the fixed operation set.

    Attributes:
        name: Human-readable vendor name, used in error envelopes and logs
        config: Provider-specific settings mapping
        client_type: Type of client implementation (NATIVE, WRAPPER, ...)
        connection_type: Network protocol (REST, WEBSOCKET, ...)
        default_capabilities: Capabilities used when none are passed in

    Examples:
        class StaticQuoteAdapter(BaseVendorAdapter):
            default_capabilities = CapabilitySet.of(Capability.MARKET_DATA)

            async def connect(self):
                self._connected = True
                return AdapterResult.ok(ConnectionStatus(connected=True))

            async def get_market_data(self, symbol, interval="1d"):
                ...
    """

    client_type: ClientType = ClientType.NATIVE
    connection_type: ConnectionType = ConnectionType.REST
    default_capabilities: CapabilitySet = CapabilitySet.none()

    def __init__(
        self,
        name: str,
        config: dict[str, Any] | None = None,
        capabilities: CapabilitySet | None = None,
    ):
        """Initialize adapter state.

        Args:
            name: Vendor name
            config: Provider-specific settings
            capabilities: Capability flags (defaults to ``default_capabilities``)
        """
        self.name = name
        self.config = dict(config or {})
        self._capabilities = capabilities or self.default_capabilities
        self._connected = False
        self.log = get_adapter_logger(self.__class__.__name__, vendor=name)

    # ========== LIFECYCLE ==========

    @property
    def is_connected(self) -> bool:
        return self._connected

    @abstractmethod
    async def connect(self) -> AdapterResult[ConnectionStatus]:
        """Establish (or probe) the provider connection. Never raises."""
        pass

    async def disconnect(self) -> None:
        """Mark the adapter as disconnected (idempotent)."""
        if self._connected:
            self.log.info("adapter_disconnected")
        self._connected = False

    async def __aenter__(self) -> BaseVendorAdapter:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    # ========== CAPABILITIES ==========

    def get_capabilities(self) -> CapabilitySet:
        """Capability flags declared at construction."""
        return self._capabilities

    def supported_operations(self) -> frozenset[AdapterOperation]:
        """Operations callable through the registry for this adapter."""
        return self._capabilities.operations()

    # ========== CAPABILITY-GATED OPERATIONS ==========

    async def get_market_data(
        self, symbol: str, interval: str = "1d"
    ) -> AdapterResult[Quote]:
        return self._not_implemented(AdapterOperation.GET_MARKET_DATA)

    async def get_historical_data(
        self, symbol: str, interval: str = "1d", period: str = "1mo"
    ) -> AdapterResult[HistoricalSeries]:
        return self._not_implemented(AdapterOperation.GET_HISTORICAL_DATA)

    async def place_order(self, order: OrderRequest) -> AdapterResult[OrderAck]:
        return self._not_implemented(AdapterOperation.PLACE_ORDER)

    async def get_portfolio(self) -> AdapterResult[PortfolioSnapshot]:
        return self._not_implemented(AdapterOperation.GET_PORTFOLIO)

    async def get_analytics(self, symbol: str) -> AdapterResult[AnalyticsSnapshot]:
        return self._not_implemented(AdapterOperation.GET_ANALYTICS)

    # ========== ERROR HANDLING ==========

    def _not_implemented(self, operation: AdapterOperation) -> AdapterResult[Any]:
        error = CapabilityNotImplementedError(operation.method_name, self.name)
        return AdapterResult.fail(
            ErrorEnvelope.from_exception(error, self.name, operation.method_name)
        )

    def _handle_error(self, error: Exception, context: str) -> AdapterResult[Any]:
        """Log ``error`` and convert it to a failed AdapterResult."""
        self.log.warning(
            "adapter_operation_failed",
            context=context,
            error=str(error),
            error_type=error.__class__.__name__,
        )
        return AdapterResult.fail(
            ErrorEnvelope.from_exception(error, self.name, context)
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, connected={self._connected})"
