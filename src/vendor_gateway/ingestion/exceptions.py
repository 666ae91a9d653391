"""
Vendor Gateway Exception Hierarchy

Provides specific exception types for the failure scenarios of the adapter
framework, so that adapters can classify errors before converting them to
the uniform error envelope, and registry callers can tell dispatch failures
apart from provider failures.
"""


class VendorGatewayError(Exception):
    """Base exception for all gateway errors."""

    pass


class VendorConnectionError(VendorGatewayError):
    """Connecting to (or probing) a vendor failed."""

    pass


class CapabilityNotImplementedError(VendorGatewayError):
    """Operation called on an adapter lacking the capability."""

    def __init__(self, operation: str, vendor: str):
        super().__init__(f"{operation} is not implemented by {vendor}")
        self.operation = operation
        self.vendor = vendor


class ParseError(VendorGatewayError):
    """Provider payload is malformed or missing its result object."""

    pass


class HttpError(VendorGatewayError):
    """Non-success transport status."""

    def __init__(self, message: str, status_code: int, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class MethodNotFoundError(VendorGatewayError):
    """Registry dispatch on an unknown vendor id or operation."""

    def __init__(self, vendor_id: str, operation: str):
        super().__init__(f"Method {operation} not available for vendor {vendor_id}")
        self.vendor_id = vendor_id
        self.operation = operation


class InvalidAdapterError(VendorGatewayError):
    """Adapter violates the registration contract."""

    pass


class AggregationError(VendorGatewayError):
    """A fan-out leg needed to build a derived result failed."""

    pass
