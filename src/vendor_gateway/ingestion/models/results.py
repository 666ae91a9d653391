"""
Explicit result type returned by every Adapter Contract operation.

Adapters never raise across their boundary: success carries ``data``,
failure carries a uniform ``ErrorEnvelope``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorEnvelope:
    """Uniform failure description produced at the adapter boundary."""

    message: str
    vendor_name: str
    operation_context: str
    error_type: str = "VendorGatewayError"

    @property
    def success(self) -> bool:
        return False

    @classmethod
    def from_exception(
        cls, error: BaseException, vendor_name: str, operation_context: str
    ) -> ErrorEnvelope:
        return cls(
            message=str(error) or error.__class__.__name__,
            vendor_name=vendor_name,
            operation_context=operation_context,
            error_type=error.__class__.__name__,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "vendorName": self.vendor_name,
            "operationContext": self.operation_context,
            "errorType": self.error_type,
        }


@dataclass(frozen=True)
class AdapterResult(Generic[T]):
    """Success/failure outcome of an adapter operation."""

    success: bool
    data: T | None = None
    error: ErrorEnvelope | None = None

    @classmethod
    def ok(cls, data: T) -> AdapterResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ErrorEnvelope) -> AdapterResult[T]:
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return ``data`` or raise ``ValueError`` describing the failure."""
        if not self.success:
            message = self.error.message if self.error else "unknown error"
            raise ValueError(message)
        return self.data

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return self.error.to_dict() if self.error else {"success": False}
        return {"success": True, "data": _jsonable(self.data)}


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_json_dict"):
        return value.to_json_dict()
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value
