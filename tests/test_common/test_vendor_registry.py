"""
Tests for the vendor registry: registration contract, capability lookup,
closed-set dispatch and lifecycle.
"""

from unittest.mock import AsyncMock

import pytest

from vendor_gateway.common.registry import VendorRegistry
from vendor_gateway.ingestion.adapters.base import BaseVendorAdapter
from vendor_gateway.ingestion.exceptions import MethodNotFoundError
from vendor_gateway.ingestion.models.enums import AdapterOperation, Capability
from vendor_gateway.ingestion.models.results import AdapterResult
from vendor_gateway.shared.models.market_data import CapabilitySet, ConnectionStatus


class StubAdapter(BaseVendorAdapter):
    def __init__(self, name="Stub", capabilities=None, connect_ok=True):
        super().__init__(name, capabilities=capabilities)
        self.connect_ok = connect_ok
        self.calls = []

    async def connect(self):
        self._connected = self.connect_ok
        return AdapterResult.ok(ConnectionStatus(connected=self.connect_ok))

    async def get_market_data(self, symbol, interval="1d"):
        self.calls.append((symbol, interval))
        return AdapterResult.ok({"symbol": symbol, "interval": interval})


class NamelessAdapter:
    name = ""

    def get_capabilities(self):
        return CapabilitySet.none()


class NoCapabilityQueryAdapter:
    name = "Broken"


MARKET = CapabilitySet.of(Capability.MARKET_DATA)
ANALYTICS = CapabilitySet.of(Capability.MARKET_DATA, Capability.ANALYTICS)


@pytest.fixture
def registry():
    return VendorRegistry()


class TestRegister:
    def test_register_valid_adapter(self, registry):
        assert registry.register("stub", StubAdapter(capabilities=MARKET)) is True
        assert registry.ids() == ["stub"]
        assert "stub" in registry

    @pytest.mark.parametrize("adapter", [NamelessAdapter(), NoCapabilityQueryAdapter(), object()])
    def test_invalid_adapter_rejected(self, registry, adapter):
        registry.register("existing", StubAdapter())

        assert registry.register("bad", adapter) is False
        assert registry.ids() == ["existing"]

    def test_empty_id_rejected(self, registry):
        assert registry.register("", StubAdapter()) is False
        assert len(registry) == 0

    def test_duplicate_id_rejected(self, registry):
        first = StubAdapter("First", capabilities=MARKET)
        registry.register("v", first)

        assert registry.register("v", StubAdapter("Second", capabilities=ANALYTICS)) is False
        assert registry.get("v") is first
        assert registry.capabilities_of("v") == MARKET

    def test_ids_are_case_sensitive(self, registry):
        assert registry.register("yahoo", StubAdapter())
        assert registry.register("Yahoo", StubAdapter())
        assert registry.ids() == ["yahoo", "Yahoo"]


class TestLookup:
    def test_unknown_vendor_capabilities_all_false(self, registry):
        capabilities = registry.capabilities_of("nope")

        assert capabilities == CapabilitySet.none()
        assert capabilities.to_json_dict() == {
            "marketData": False,
            "orderManagement": False,
            "portfolio": False,
            "analytics": False,
            "realtime": False,
        }

    def test_get_unknown_is_none(self, registry):
        assert registry.get("nope") is None

    def test_ids_with_capability_in_registration_order(self, registry):
        registry.register("b", StubAdapter(capabilities=ANALYTICS))
        registry.register("a", StubAdapter(capabilities=MARKET))
        registry.register("c", StubAdapter(capabilities=ANALYTICS))

        assert registry.ids_with_capability("marketData") == ["b", "a", "c"]
        assert registry.ids_with_capability(Capability.ANALYTICS) == ["b", "c"]
        assert registry.ids_with_capability("analytics") == ["b", "c"]
        assert registry.ids_with_capability("realtime") == []

    def test_unknown_capability_flag(self, registry):
        registry.register("a", StubAdapter(capabilities=MARKET))

        assert registry.ids_with_capability("teleport") == []

    def test_describe(self, registry):
        registry.register("a", StubAdapter("Alpha", capabilities=MARKET))

        info = registry.describe("a")

        assert info["exists"] is True
        assert info["name"] == "Alpha"
        assert info["capabilities"]["marketData"] is True
        assert info["connected"] is False
        assert registry.describe("zzz") == {"exists": False}

    def test_snapshot_not_requeried(self, registry):
        adapter = StubAdapter(capabilities=MARKET)
        registry.register("a", adapter)
        adapter._capabilities = ANALYTICS

        assert registry.capabilities_of("a") == MARKET


class TestDispatch:
    @pytest.mark.asyncio
    async def test_dispatch_returns_result_as_is(self, registry):
        adapter = StubAdapter(capabilities=MARKET)
        registry.register("a", adapter)

        result = await registry.dispatch("a", "get_market_data", "AAPL", interval="1wk")

        assert result.data == {"symbol": "AAPL", "interval": "1wk"}
        assert adapter.calls == [("AAPL", "1wk")]

    @pytest.mark.asyncio
    async def test_camel_case_and_enum_operation_names(self, registry):
        registry.register("a", StubAdapter(capabilities=MARKET))

        by_camel = await registry.dispatch("a", "getMarketData", "AAPL")
        by_enum = await registry.dispatch("a", AdapterOperation.GET_MARKET_DATA, "MSFT")

        assert by_camel.success and by_enum.success

    @pytest.mark.asyncio
    async def test_unknown_vendor(self, registry):
        with pytest.raises(MethodNotFoundError, match="vendor nope"):
            await registry.dispatch("nope", "get_market_data", "AAPL")

    @pytest.mark.asyncio
    async def test_operation_outside_contract(self, registry):
        registry.register("a", StubAdapter(capabilities=MARKET))

        with pytest.raises(MethodNotFoundError):
            await registry.dispatch("a", "__init__")
        with pytest.raises(MethodNotFoundError):
            await registry.dispatch("a", "bulk_download", ["AAPL"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", [None, 42, b"connect"])
    async def test_non_string_operation(self, registry, operation):
        registry.register("a", StubAdapter(capabilities=MARKET))

        with pytest.raises(MethodNotFoundError):
            await registry.dispatch("a", operation)

    @pytest.mark.asyncio
    async def test_operation_outside_capabilities(self, registry):
        registry.register("a", StubAdapter(capabilities=MARKET))

        with pytest.raises(MethodNotFoundError, match="get_analytics"):
            await registry.dispatch("a", "get_analytics", "AAPL")

    @pytest.mark.asyncio
    async def test_adapter_exception_propagates(self, registry):
        adapter = StubAdapter(capabilities=MARKET)
        adapter.get_market_data = AsyncMock(side_effect=RuntimeError("boom"))
        registry.register("a", adapter)

        with pytest.raises(RuntimeError, match="boom"):
            await registry.dispatch("a", "get_market_data", "AAPL")

    @pytest.mark.asyncio
    async def test_lifecycle_operations_always_dispatchable(self, registry):
        adapter = StubAdapter()
        registry.register("a", adapter)

        await registry.dispatch("a", "connect")
        assert adapter.is_connected
        await registry.dispatch("a", "disconnect")
        assert not adapter.is_connected


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_test_vendor(self, registry):
        registry.register("a", StubAdapter(capabilities=MARKET))

        report = await registry.test_vendor("a")

        assert report["success"] is True
        assert report["vendor"] == "a"
        assert report["connection"] == {"success": True, "data": {"connected": True}}
        assert report["capabilities"]["marketData"] is True

    @pytest.mark.asyncio
    async def test_test_unknown_vendor(self, registry):
        report = await registry.test_vendor("nope")

        assert report == {"success": False, "error": "Vendor not found", "vendor": "nope"}

    @pytest.mark.asyncio
    async def test_connect_all_and_shutdown(self, registry):
        good, bad = StubAdapter("Good"), StubAdapter("Bad", connect_ok=False)
        registry.register("good", good)
        registry.register("bad", bad)

        results = await registry.connect_all()

        assert results["good"].success
        assert good.is_connected and not bad.is_connected

        await registry.shutdown()

        assert not good.is_connected
        assert registry.ids() == ["good", "bad"]
