"""
Yahoo Finance adapter.

Capabilities: market data, analytics, realtime. Quotes are cached per
``SYMBOL_interval`` for the configured TTL; historical series are always
fetched fresh.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict

from vendor_gateway.analytics.engine import AnalyticsEngine
from vendor_gateway.infrastructure.cache import TTLCache
from vendor_gateway.infrastructure.impls.system import SystemClock
from vendor_gateway.infrastructure.ports.system import IClock, ISleeper
from vendor_gateway.ingestion.adapters.base import BaseVendorAdapter
from vendor_gateway.ingestion.adapters.yahoo_plugin.client import YahooFinanceClient
from vendor_gateway.ingestion.adapters.yahoo_plugin.mappers import (
    cache_key,
    normalize_symbol,
    unique_symbols,
    validate_interval,
)
from vendor_gateway.ingestion.bulk.scheduler import (
    BulkDownloadResult,
    BulkFetchScheduler,
)
from vendor_gateway.ingestion.config.value_objects import YahooFinanceConfig
from vendor_gateway.ingestion.exceptions import VendorConnectionError
from vendor_gateway.ingestion.models.enums import (
    Capability,
    ClientType,
    ConnectionType,
)
from vendor_gateway.ingestion.models.results import AdapterResult
from vendor_gateway.shared.models.market_data import (
    AnalyticsSnapshot,
    CapabilitySet,
    ConnectionStatus,
    HistoricalSeries,
    Quote,
)
from vendor_gateway.transformation.normalizers import YahooChartNormalizer

DEFAULT_VENDOR_NAME = "Yahoo Finance"


class YahooFinanceAdapter(BaseVendorAdapter):
    """
    Reference provider adapter over the Yahoo Finance v8 chart endpoint.

    Composes:
    - YahooFinanceClient for transport
    - YahooChartNormalizer for payload interpretation
    - TTLCache for quotes
    - BulkFetchScheduler for batched history downloads
    - AnalyticsEngine for daily/weekly scoring
    """

    client_type = ClientType.NATIVE
    connection_type = ConnectionType.REST
    default_capabilities = CapabilitySet.of(
        Capability.MARKET_DATA, Capability.ANALYTICS, Capability.REALTIME
    )

    def __init__(
        self,
        client: YahooFinanceClient,
        config: YahooFinanceConfig | None = None,
        name: str = DEFAULT_VENDOR_NAME,
        clock: IClock | None = None,
        sleeper: ISleeper | None = None,
    ):
        """
        Args:
            client: Chart endpoint client
            config: Adapter configuration
            name: Vendor name reported in envelopes
            clock: Time source for quote timestamps and cache expiry
            sleeper: Awaitable delay for the bulk cooldown
        """
        self.settings = config or YahooFinanceConfig()
        super().__init__(name, config=asdict(self.settings))

        clock = clock or SystemClock()
        self.client = client
        self.normalizer = YahooChartNormalizer(clock=clock)
        self.cache: TTLCache[Quote] = TTLCache(
            ttl_ms=self.settings.cache_config.ttl_ms, clock=clock
        )
        self.scheduler = BulkFetchScheduler(
            self, sleeper=sleeper, config=self.settings.bulk_config
        )
        self.analytics = AnalyticsEngine(self)

    async def connect(self) -> AdapterResult[ConnectionStatus]:
        """Probe the endpoint with a quote for the configured symbol."""
        probe = await self.get_market_data(self.settings.probe_symbol)
        self._connected = probe.success

        if probe.success:
            self.log.info("adapter_connected", probe_symbol=self.settings.probe_symbol)
            return AdapterResult.ok(ConnectionStatus(connected=True))

        reason = probe.error.message if probe.error else "probe failed"
        return self._handle_error(
            VendorConnectionError(f"Failed to connect to {self.name}: {reason}"),
            "connect",
        )

    async def get_market_data(
        self, symbol: str, interval: str = "1d"
    ) -> AdapterResult[Quote]:
        context = f"get_market_data({symbol}, {interval})"
        try:
            symbol = normalize_symbol(symbol)
            validate_interval(interval, self.settings.intervals)

            key = cache_key(symbol, interval)
            cached = self.cache.get(key)
            if cached is not None:
                self.log.debug("quote_cache_hit", symbol=symbol, interval=interval)
                return AdapterResult.ok(cached)

            payload = await self.client.fetch_chart(
                symbol, interval, self.settings.quote_range
            )
            quote = self.normalizer.parse_quote(payload, symbol)
            self.cache.set(key, quote)
            return AdapterResult.ok(quote)
        except Exception as e:
            return self._handle_error(e, context)

    async def get_historical_data(
        self, symbol: str, interval: str = "1d", period: str | None = None
    ) -> AdapterResult[HistoricalSeries]:
        period = period or self.settings.default_period
        context = f"get_historical_data({symbol}, {interval}, {period})"
        try:
            symbol = normalize_symbol(symbol)
            validate_interval(interval, self.settings.intervals)

            payload = await self.client.fetch_chart(symbol, interval, period)
            series = self.normalizer.parse_historical_series(payload, symbol)
            self.log.debug(
                "historical_data_fetched",
                symbol=symbol,
                interval=interval,
                period=period,
                records=len(series),
            )
            return AdapterResult.ok(series)
        except Exception as e:
            return self._handle_error(e, context)

    async def get_analytics(self, symbol: str) -> AdapterResult[AnalyticsSnapshot]:
        try:
            snapshot = await self.analytics.get_analytics(normalize_symbol(symbol))
            return AdapterResult.ok(snapshot)
        except Exception as e:
            return self._handle_error(e, f"get_analytics({symbol})")

    async def bulk_download(
        self,
        symbols: Iterable[str],
        intervals: Iterable[str] = ("1d",),
        period: str | None = None,
        batch_size: int | None = None,
    ) -> AdapterResult[BulkDownloadResult]:
        """
        Download history for many symbols in rate-limited batches.

        The result is successful even when individual pairs failed; those
        are listed in ``data.failures``.
        """
        try:
            report = await self.scheduler.bulk_download(
                unique_symbols(symbols),
                intervals,
                period=period,
                batch_size=batch_size,
            )
            return AdapterResult.ok(report)
        except Exception as e:
            return self._handle_error(e, "bulk_download")
