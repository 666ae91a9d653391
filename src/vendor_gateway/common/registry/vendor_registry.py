"""
Vendor Registry

Maps vendor ids to adapter instances and dispatches Adapter Contract
operations by name. The registry is constructed explicitly by the
composition root and handed to its consumers; it is mutated during startup
only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vendor_gateway.infrastructure.observability import get_registry_logger
from vendor_gateway.ingestion.adapters.base import BaseVendorAdapter
from vendor_gateway.ingestion.exceptions import (
    InvalidAdapterError,
    MethodNotFoundError,
)
from vendor_gateway.ingestion.models.enums import AdapterOperation, Capability
from vendor_gateway.ingestion.models.results import AdapterResult
from vendor_gateway.shared.models.market_data import CapabilitySet

log = get_registry_logger()


@dataclass(frozen=True)
class RegisteredVendor:
    """Adapter reference plus the capability snapshot taken at registration."""

    vendor_id: str
    adapter: BaseVendorAdapter
    capabilities: CapabilitySet

    @property
    def operations(self) -> frozenset[AdapterOperation]:
        return self.capabilities.operations()


class VendorRegistry:
    """Vendor id to adapter mapping with capability-gated dispatch."""

    def __init__(self) -> None:
        self._vendors: dict[str, RegisteredVendor] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @staticmethod
    def _snapshot_capabilities(vendor_id: Any, adapter: Any) -> CapabilitySet:
        """Validate the registration contract and return the capability snapshot.

        Raises:
            InvalidAdapterError: If the id, name or capability query is invalid
        """
        if not isinstance(vendor_id, str) or not vendor_id:
            raise InvalidAdapterError("Vendor id must be a non-empty string")

        name = getattr(adapter, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise InvalidAdapterError("Adapter must have a non-empty name")

        get_capabilities = getattr(adapter, "get_capabilities", None)
        if not callable(get_capabilities):
            raise InvalidAdapterError("Adapter must implement get_capabilities()")

        try:
            capabilities = get_capabilities()
        except Exception as e:
            raise InvalidAdapterError(f"get_capabilities() failed: {e}") from e

        if not isinstance(capabilities, CapabilitySet):
            raise InvalidAdapterError(
                f"get_capabilities() returned {type(capabilities).__name__}, "
                "expected CapabilitySet"
            )
        return capabilities

    def register(self, vendor_id: str, adapter: BaseVendorAdapter) -> bool:
        """Register ``adapter`` under ``vendor_id``.

        Returns:
            True on success; False (state unchanged) on a contract violation
            or a duplicate id
        """
        try:
            capabilities = self._snapshot_capabilities(vendor_id, adapter)
        except InvalidAdapterError as e:
            log.error("vendor_registration_rejected", vendor_id=vendor_id, reason=str(e))
            return False

        if vendor_id in self._vendors:
            log.error(
                "vendor_registration_rejected",
                vendor_id=vendor_id,
                reason="vendor id already registered",
            )
            return False

        self._vendors[vendor_id] = RegisteredVendor(vendor_id, adapter, capabilities)
        log.info(
            "vendor_registered",
            vendor_id=vendor_id,
            name=adapter.name,
            capabilities=[c.value for c in capabilities.enabled()],
        )
        return True

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, vendor_id: str) -> BaseVendorAdapter | None:
        entry = self._vendors.get(vendor_id)
        return entry.adapter if entry else None

    def ids(self) -> list[str]:
        """All registered ids in registration order."""
        return list(self._vendors)

    def capabilities_of(self, vendor_id: str) -> CapabilitySet:
        """Capability snapshot for ``vendor_id``; all-false when unknown."""
        entry = self._vendors.get(vendor_id)
        return entry.capabilities if entry else CapabilitySet.none()

    def ids_with_capability(self, capability: Capability | str) -> list[str]:
        """Ids whose snapshot has ``capability`` set, in registration order."""
        try:
            flag = Capability.parse(capability)
        except ValueError:
            log.warning("unknown_capability_flag", capability=capability)
            return []

        return [
            vendor_id
            for vendor_id, entry in self._vendors.items()
            if entry.capabilities.supports(flag)
        ]

    def describe(self, vendor_id: str) -> dict[str, Any]:
        entry = self._vendors.get(vendor_id)
        if entry is None:
            return {"exists": False}

        return {
            "exists": True,
            "name": entry.adapter.name,
            "capabilities": entry.capabilities.to_json_dict(),
            "connected": bool(getattr(entry.adapter, "is_connected", False)),
        }

    def __contains__(self, vendor_id: object) -> bool:
        return vendor_id in self._vendors

    def __len__(self) -> int:
        return len(self._vendors)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def resolve(
        self, vendor_id: str, operation: AdapterOperation | str
    ) -> tuple[RegisteredVendor, AdapterOperation]:
        """Resolve ``operation`` against the vendor's supported set.

        Raises:
            MethodNotFoundError: Unknown id, unknown operation, or operation
                outside the vendor's capabilities
        """
        name = getattr(operation, "value", operation)
        entry = self._vendors.get(vendor_id)
        if entry is None:
            raise MethodNotFoundError(vendor_id, name)

        try:
            resolved = AdapterOperation.parse(operation)
        except ValueError:
            raise MethodNotFoundError(vendor_id, name) from None

        if resolved not in entry.operations:
            raise MethodNotFoundError(vendor_id, resolved.method_name)
        return entry, resolved

    async def dispatch(
        self, vendor_id: str, operation: AdapterOperation | str, *args: Any, **kwargs: Any
    ) -> Any:
        """Invoke ``operation`` on the vendor's adapter and return its result as-is.

        Raises:
            MethodNotFoundError: See ``resolve``
            Exception: Anything the adapter operation raises propagates
        """
        entry, resolved = self.resolve(vendor_id, operation)
        method = getattr(entry.adapter, resolved.method_name)

        log.debug("vendor_dispatch", vendor_id=vendor_id, operation=resolved.method_name)
        try:
            return await method(*args, **kwargs)
        except Exception as e:
            log.error(
                "vendor_dispatch_failed",
                vendor_id=vendor_id,
                operation=resolved.method_name,
                error=str(e),
            )
            raise

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def test_vendor(self, vendor_id: str) -> dict[str, Any]:
        """Connect ``vendor_id`` and report the outcome. Never raises."""
        entry = self._vendors.get(vendor_id)
        if entry is None:
            return {"success": False, "error": "Vendor not found", "vendor": vendor_id}

        try:
            connection = await entry.adapter.connect()
        except Exception as e:
            log.error("vendor_test_failed", vendor_id=vendor_id, error=str(e))
            return {"success": False, "error": str(e), "vendor": vendor_id}

        return {
            "success": connection.success,
            "connection": connection.to_dict(),
            "capabilities": entry.capabilities.to_json_dict(),
            "vendor": vendor_id,
        }

    async def connect_all(self) -> dict[str, AdapterResult]:
        """Connect every adapter sequentially, in registration order."""
        results: dict[str, AdapterResult] = {}
        for vendor_id, entry in self._vendors.items():
            results[vendor_id] = await entry.adapter.connect()
            log.info(
                "vendor_connect_attempted",
                vendor_id=vendor_id,
                success=results[vendor_id].success,
            )
        return results

    async def shutdown(self) -> None:
        """Disconnect every adapter."""
        for vendor_id, entry in self._vendors.items():
            try:
                await entry.adapter.disconnect()
            except Exception as e:
                log.error("vendor_disconnect_failed", vendor_id=vendor_id, error=str(e))
        log.info("vendor_registry_shutdown", vendors=len(self._vendors))
