"""
Tests for the Yahoo Finance adapter over a mocked HTTP transport.
"""

import aiohttp
import pytest

from tests.fixtures import (
    create_history_payload,
    create_http_response,
    create_quote_payload,
    load_fixture,
)
from vendor_gateway.ingestion.models.enums import (
    AdapterOperation,
    Recommendation,
    Trend,
    VolatilityTier,
)


def route_by_interval(payloads):
    """side_effect for IHttpClient.get keyed by the interval query param."""

    async def _get(url, params=None, **kwargs):
        return create_http_response(payloads[params["interval"]], url=url)

    return _get


class TestYahooCapabilities:
    def test_declared_capabilities(self, yahoo_adapter):
        capabilities = yahoo_adapter.get_capabilities()

        assert capabilities.market_data
        assert capabilities.analytics
        assert capabilities.realtime
        assert not capabilities.order_management
        assert not capabilities.portfolio

    def test_supported_operations(self, yahoo_adapter):
        operations = yahoo_adapter.supported_operations()

        assert AdapterOperation.GET_ANALYTICS in operations
        assert AdapterOperation.GET_HISTORICAL_DATA in operations
        assert AdapterOperation.PLACE_ORDER not in operations

    @pytest.mark.asyncio
    async def test_portfolio_not_implemented(self, yahoo_adapter):
        result = await yahoo_adapter.get_portfolio()

        assert result.error.error_type == "CapabilityNotImplementedError"


class TestGetMarketData:
    @pytest.mark.asyncio
    async def test_quote_request_and_normalization(self, yahoo_adapter, mock_http_client):
        result = await yahoo_adapter.get_market_data("AAPL")

        assert result.success
        assert result.data.symbol == "AAPL"
        assert result.data.change == 50
        assert result.data.change_percent == 50
        mock_http_client.get.assert_awaited_once_with(
            "https://query1.test/chart/AAPL", params={"interval": "1d", "range": "1d"}
        )

    @pytest.mark.asyncio
    async def test_symbol_is_normalized(self, yahoo_adapter, mock_http_client):
        result = await yahoo_adapter.get_market_data(" aapl ")

        assert result.data.symbol == "AAPL"
        assert mock_http_client.get.await_args.args[0].endswith("/AAPL")

    @pytest.mark.asyncio
    async def test_cache_hit_within_ttl(self, yahoo_adapter, mock_http_client, fake_clock):
        first = await yahoo_adapter.get_market_data("AAPL")
        fake_clock.advance(29_999)
        second = await yahoo_adapter.get_market_data("AAPL")

        assert second.data is first.data
        assert mock_http_client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_refetch_after_expiry(self, yahoo_adapter, mock_http_client, fake_clock):
        await yahoo_adapter.get_market_data("AAPL")
        fake_clock.advance(30_001)
        await yahoo_adapter.get_market_data("AAPL")

        assert mock_http_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_cache_keyed_by_interval(self, yahoo_adapter, mock_http_client):
        await yahoo_adapter.get_market_data("AAPL", "1d")
        await yahoo_adapter.get_market_data("AAPL", "1wk")

        assert mock_http_client.get.await_count == 2
        assert "AAPL_1d" in yahoo_adapter.cache
        assert "AAPL_1wk" in yahoo_adapter.cache

    @pytest.mark.asyncio
    async def test_unsupported_interval(self, yahoo_adapter, mock_http_client):
        result = await yahoo_adapter.get_market_data("AAPL", "7m")

        assert not result.success
        assert result.error.error_type == "ValueError"
        assert "Unsupported interval" in result.error.message
        mock_http_client.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_http_error_becomes_envelope(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.return_value = create_http_response(
            load_fixture("symbol_not_found"), status_code=404
        )

        result = await yahoo_adapter.get_market_data("ZZZZ")

        assert not result.success
        assert result.error.error_type == "HttpError"
        assert "status: 404" in result.error.message
        assert "delisted" in result.error.message
        assert result.error.vendor_name == "Yahoo Finance"

    @pytest.mark.asyncio
    async def test_transport_error_becomes_envelope(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.side_effect = aiohttp.ClientConnectionError("refused")

        result = await yahoo_adapter.get_market_data("AAPL")

        assert not result.success
        assert result.error.error_type == "ClientConnectionError"

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.return_value = create_http_response({}, status_code=500)
        await yahoo_adapter.get_market_data("AAPL")

        mock_http_client.get.return_value = create_http_response(create_quote_payload())
        result = await yahoo_adapter.get_market_data("AAPL")

        assert result.success
        assert mock_http_client.get.await_count == 2


class TestGetHistoricalData:
    @pytest.mark.asyncio
    async def test_series_is_never_cached(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.return_value = create_http_response(
            load_fixture("aapl_history_1d_5d")
        )

        first = await yahoo_adapter.get_historical_data("AAPL", "1d", "5d")
        await yahoo_adapter.get_historical_data("AAPL", "1d", "5d")

        assert len(first.data) == 4
        assert mock_http_client.get.await_count == 2
        mock_http_client.get.assert_awaited_with(
            "https://query1.test/chart/AAPL", params={"interval": "1d", "range": "5d"}
        )

    @pytest.mark.asyncio
    async def test_default_period(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.return_value = create_http_response(
            create_history_payload([1.0, 2.0])
        )

        await yahoo_adapter.get_historical_data("AAPL")

        assert mock_http_client.get.await_args.kwargs["params"]["range"] == "1mo"

    @pytest.mark.asyncio
    async def test_malformed_payload(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.return_value = create_http_response({"chart": {}})

        result = await yahoo_adapter.get_historical_data("AAPL")

        assert result.error.error_type == "ParseError"


class TestConnect:
    @pytest.mark.asyncio
    async def test_probe_success(self, yahoo_adapter, mock_http_client):
        result = await yahoo_adapter.connect()

        assert result.success
        assert result.data.connected is True
        assert yahoo_adapter.is_connected
        assert mock_http_client.get.await_args.args[0].endswith("/AAPL")

    @pytest.mark.asyncio
    async def test_probe_failure(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.return_value = create_http_response({}, status_code=503)

        result = await yahoo_adapter.connect()

        assert not result.success
        assert result.error.error_type == "VendorConnectionError"
        assert result.error.operation_context == "connect"
        assert not yahoo_adapter.is_connected


class TestGetAnalytics:
    @pytest.mark.asyncio
    async def test_snapshot_from_daily_and_weekly(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.side_effect = route_by_interval(
            {
                "1d": create_quote_payload(price=103, previous_close=100, trailingPE=10),
                "1wk": create_quote_payload(price=99, previous_close=100),
            }
        )

        result = await yahoo_adapter.get_analytics("AAPL")

        assert result.success
        snapshot = result.data
        assert snapshot.change_percent == pytest.approx(3)
        assert snapshot.volatility is VolatilityTier.MEDIUM
        assert snapshot.weekly_trend is Trend.DOWN
        assert snapshot.recommendation is Recommendation.BUY
        assert snapshot.pe == 10
        assert mock_http_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_failing_leg(self, yahoo_adapter, mock_http_client):
        async def _get(url, params=None, **kwargs):
            if params["interval"] == "1wk":
                return create_http_response({}, status_code=500, url=url)
            return create_http_response(create_quote_payload(), url=url)

        mock_http_client.get.side_effect = _get

        result = await yahoo_adapter.get_analytics("AAPL")

        assert not result.success
        assert result.error.error_type == "AggregationError"
        assert "1wk" in result.error.message


class TestBulkDownload:
    @pytest.mark.asyncio
    async def test_batches_and_cooldown(self, yahoo_adapter, mock_http_client, recording_sleeper):
        mock_http_client.get.return_value = create_http_response(
            create_history_payload([1.0, 2.0, 3.0])
        )
        symbols = [f"SYM{i}" for i in range(12)]

        result = await yahoo_adapter.bulk_download(symbols, ["1d"], batch_size=10)

        assert result.success
        assert result.data.batches == 2
        assert recording_sleeper.calls == [1.0]
        assert list(result.data) == symbols
        assert mock_http_client.get.await_count == 12

    @pytest.mark.asyncio
    async def test_partial_failure_is_still_success(self, yahoo_adapter, mock_http_client):
        async def _get(url, params=None, **kwargs):
            if url.endswith("/BAD"):
                return create_http_response({}, status_code=404, url=url)
            return create_http_response(create_history_payload([1.0]), url=url)

        mock_http_client.get.side_effect = _get

        result = await yahoo_adapter.bulk_download(["AAPL", "BAD", "MSFT"], ["1d", "1wk"])

        assert result.success
        assert set(result.data) == {"AAPL", "MSFT"}
        assert set(result.data["AAPL"]) == {"1d", "1wk"}
        assert [(f.symbol, f.interval) for f in result.data.failures] == [
            ("BAD", "1d"),
            ("BAD", "1wk"),
        ]

    @pytest.mark.asyncio
    async def test_symbols_normalized_and_deduplicated(self, yahoo_adapter, mock_http_client):
        mock_http_client.get.return_value = create_http_response(
            create_history_payload([1.0, 2.0])
        )

        result = await yahoo_adapter.bulk_download([" aapl", "AAPL", "msft", ""], ["1d"])

        assert result.success
        assert list(result.data) == ["AAPL", "MSFT"]
        assert mock_http_client.get.await_count == 2
        assert [f.symbol for f in result.data.failures] == [""]

    @pytest.mark.asyncio
    async def test_invalid_batch_size(self, yahoo_adapter):
        result = await yahoo_adapter.bulk_download(["AAPL"], batch_size=0)

        assert not result.success
        assert result.error.error_type == "ValueError"
