from vendor_gateway.ingestion.adapters.base import BaseVendorAdapter

__all__ = ["BaseVendorAdapter"]
