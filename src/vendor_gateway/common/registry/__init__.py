from vendor_gateway.common.registry.vendor_registry import (
    RegisteredVendor,
    VendorRegistry,
)

__all__ = ["RegisteredVendor", "VendorRegistry"]
