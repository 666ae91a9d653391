"""
Tests for the adapter contract defaults: capability gating, envelopes,
lifecycle and supported operation sets.
"""

import pytest
from pydantic import ValidationError

from vendor_gateway.ingestion.adapters.base import BaseVendorAdapter
from vendor_gateway.ingestion.models.enums import AdapterOperation, Capability
from vendor_gateway.ingestion.models.results import AdapterResult
from vendor_gateway.shared.models.market_data import (
    CapabilitySet,
    ConnectionStatus,
    OrderRequest,
)


class ConnectOnlyAdapter(BaseVendorAdapter):
    async def connect(self):
        self._connected = True
        return AdapterResult.ok(ConnectionStatus(connected=True))


class FailingAdapter(BaseVendorAdapter):
    default_capabilities = CapabilitySet.of(Capability.MARKET_DATA)

    async def connect(self):
        return AdapterResult.ok(ConnectionStatus(connected=True))

    async def get_market_data(self, symbol, interval="1d"):
        try:
            raise RuntimeError("upstream exploded")
        except Exception as e:
            return self._handle_error(e, f"get_market_data({symbol})")


class TestCapabilityGating:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation, args",
        [
            ("get_market_data", ("AAPL",)),
            ("get_historical_data", ("AAPL",)),
            ("get_portfolio", ()),
            ("get_analytics", ("AAPL",)),
        ],
    )
    async def test_default_operations_return_not_implemented(self, operation, args):
        adapter = ConnectOnlyAdapter("Static")

        result = await getattr(adapter, operation)(*args)

        assert result.success is False
        assert result.error.error_type == "CapabilityNotImplementedError"
        assert result.error.vendor_name == "Static"
        assert result.error.operation_context == operation
        assert "not implemented" in result.error.message

    @pytest.mark.asyncio
    async def test_place_order_not_implemented(self):
        adapter = ConnectOnlyAdapter("Static")
        order = OrderRequest(symbol="AAPL", side="buy", quantity=1)

        result = await adapter.place_order(order)

        assert not result.success
        assert result.to_dict()["errorType"] == "CapabilityNotImplementedError"

    def test_supported_operations_follow_capabilities(self):
        adapter = ConnectOnlyAdapter(
            "Static",
            capabilities=CapabilitySet.of(Capability.MARKET_DATA, Capability.PORTFOLIO),
        )

        assert adapter.supported_operations() == {
            AdapterOperation.CONNECT,
            AdapterOperation.DISCONNECT,
            AdapterOperation.GET_MARKET_DATA,
            AdapterOperation.GET_HISTORICAL_DATA,
            AdapterOperation.GET_PORTFOLIO,
        }

    def test_default_capabilities_all_false(self):
        adapter = ConnectOnlyAdapter("Static")

        assert adapter.get_capabilities() == CapabilitySet.none()
        assert adapter.supported_operations() == {
            AdapterOperation.CONNECT,
            AdapterOperation.DISCONNECT,
        }

    def test_capabilities_are_frozen(self):
        adapter = ConnectOnlyAdapter("Static")

        with pytest.raises(ValidationError):
            adapter.get_capabilities().market_data = True


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_internal_failure_becomes_envelope(self):
        adapter = FailingAdapter("Flaky")

        result = await adapter.get_market_data("AAPL")

        assert result.to_dict() == {
            "success": False,
            "message": "upstream exploded",
            "vendorName": "Flaky",
            "operationContext": "get_market_data(AAPL)",
            "errorType": "RuntimeError",
        }

    def test_unwrap_failure_raises(self):
        result = AdapterResult.fail(
            FailingAdapter("Flaky")._handle_error(ValueError("bad"), "ctx").error
        )

        with pytest.raises(ValueError, match="bad"):
            result.unwrap()


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_disconnect_marks_state(self):
        adapter = ConnectOnlyAdapter("Static")
        await adapter.connect()
        assert adapter.is_connected

        await adapter.disconnect()

        assert not adapter.is_connected

    @pytest.mark.asyncio
    async def test_async_context_manager(self):
        adapter = ConnectOnlyAdapter("Static")

        async with adapter as connected:
            assert connected is adapter
            assert adapter.is_connected

        assert not adapter.is_connected

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BaseVendorAdapter("Abstract")
