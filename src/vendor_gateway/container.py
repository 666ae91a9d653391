"""
Composition root for the gateway.

Wires together:
- HTTP client (aiohttp wrapper)
- Clock and sleeper
- Adapter factory with provider registrations
- One adapter per configured vendor
- Vendor registry (startup registration, shutdown teardown)
"""

from __future__ import annotations

from vendor_gateway.common.factories.adapter_factory import (
    AdapterBuildContext,
    AdapterFactory,
)
from vendor_gateway.common.registry.vendor_registry import VendorRegistry
from vendor_gateway.config.state import ConfigState
from vendor_gateway.infrastructure.impls.system import AsyncioSleeper, SystemClock
from vendor_gateway.infrastructure.observability import get_infrastructure_logger
from vendor_gateway.infrastructure.ports.system import IClock, ISleeper
from vendor_gateway.ingestion.adapters.yahoo_plugin import (
    register_yahoo_finance_adapters,
)
from vendor_gateway.ingestion.connectors.aiohttp_client import AiohttpClient
from vendor_gateway.ingestion.ports.http import IHttpClient

log = get_infrastructure_logger("gateway-container")


class GatewayContainer:
    """
    Single place where all concrete implementations are chosen.

    Usage:
        async with GatewayContainer(get_config()) as container:
            result = await container.registry.dispatch("yfinance", "get_market_data", "AAPL")
    """

    def __init__(
        self,
        config: ConfigState | None = None,
        http_client: IHttpClient | None = None,
        clock: IClock | None = None,
        sleeper: ISleeper | None = None,
    ):
        self.config = config or ConfigState()
        self.http_client = http_client or AiohttpClient(self.config.to_http_config())
        self.clock = clock or SystemClock()
        self.sleeper = sleeper or AsyncioSleeper()

        self.adapter_factory = AdapterFactory()
        register_yahoo_finance_adapters(self.adapter_factory)

        self.registry = VendorRegistry()
        self._started = False

    def create_build_context(self) -> AdapterBuildContext:
        return AdapterBuildContext(
            http_client=self.http_client,
            clock=self.clock,
            sleeper=self.sleeper,
            yahoo_config=self.config.to_yahoo_config(),
        )

    async def startup(self) -> VendorRegistry:
        """Register every enabled vendor, connecting those flagged for startup."""
        if self._started:
            return self.registry

        context = self.create_build_context()
        for entry in self.config.vendors:
            if not entry.enabled:
                log.debug("vendor_disabled", vendor_id=entry.id)
                continue

            adapter = self.adapter_factory.create(entry.provider, context)
            if not self.registry.register(entry.id, adapter):
                continue

            if entry.connect_on_startup:
                result = await adapter.connect()
                if not result.success:
                    log.warning(
                        "vendor_startup_connect_failed",
                        vendor_id=entry.id,
                        error=result.error.message if result.error else None,
                    )

        self._started = True
        log.info("gateway_started", vendors=self.registry.ids())
        return self.registry

    async def shutdown(self) -> None:
        """Disconnect all adapters and release the HTTP session."""
        await self.registry.shutdown()
        await self.http_client.close()
        self._started = False
        log.info("gateway_stopped")

    async def __aenter__(self) -> GatewayContainer:
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.shutdown()
