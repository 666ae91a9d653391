from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from vendor_gateway.common.registry.vendor_registry import VendorRegistry
from vendor_gateway.infrastructure.observability import get_api_logger
from vendor_gateway.ingestion.exceptions import MethodNotFoundError
from vendor_gateway.ingestion.models.enums import AdapterOperation
from vendor_gateway.shared.models.market_data import OrderRequest
from vendor_gateway_api.dependencies import get_registry

logger = get_api_logger("vendors")

router = APIRouter(tags=["vendors"])


class DispatchRequest(BaseModel):
    """Positional and keyword arguments for an adapter operation."""

    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)


def _coerce_order(args: list[Any], kwargs: dict[str, Any]) -> None:
    if args and isinstance(args[0], dict):
        args[0] = OrderRequest.model_validate(args[0])
    if isinstance(kwargs.get("order"), dict):
        kwargs["order"] = OrderRequest.model_validate(kwargs["order"])


@router.get("")
async def list_vendors(
    capability: str | None = None,
    registry: VendorRegistry = Depends(get_registry),
) -> dict[str, Any]:
    ids = registry.ids() if capability is None else registry.ids_with_capability(capability)
    return {
        "vendors": [{"id": vendor_id, **registry.describe(vendor_id)} for vendor_id in ids]
    }


@router.get("/{vendor_id}")
async def get_vendor(
    vendor_id: str, registry: VendorRegistry = Depends(get_registry)
) -> dict[str, Any]:
    info = registry.describe(vendor_id)
    if not info["exists"]:
        raise HTTPException(status_code=404, detail=f"Vendor {vendor_id} not found")
    return {"id": vendor_id, **info}


@router.get("/{vendor_id}/capabilities")
async def get_vendor_capabilities(
    vendor_id: str, registry: VendorRegistry = Depends(get_registry)
) -> dict[str, bool]:
    return registry.capabilities_of(vendor_id).to_json_dict()


@router.post("/{vendor_id}/test")
async def test_vendor(
    vendor_id: str, registry: VendorRegistry = Depends(get_registry)
) -> dict[str, Any]:
    return await registry.test_vendor(vendor_id)


@router.post("/{vendor_id}/dispatch/{operation}")
async def dispatch_operation(
    vendor_id: str,
    operation: str,
    request: DispatchRequest | None = None,
    registry: VendorRegistry = Depends(get_registry),
) -> dict[str, Any]:
    request = request or DispatchRequest()
    args = list(request.args)
    kwargs = dict(request.kwargs)

    try:
        _, resolved = registry.resolve(vendor_id, operation)
        if resolved is AdapterOperation.PLACE_ORDER:
            _coerce_order(args, kwargs)
        result = await registry.dispatch(vendor_id, resolved, *args, **kwargs)
    except MethodNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (TypeError, ValueError) as e:
        logger.warning(
            "dispatch_bad_arguments", vendor_id=vendor_id, operation=operation, error=str(e)
        )
        raise HTTPException(status_code=422, detail=str(e)) from e

    if result is None:
        return {"success": True}
    return result.to_dict()
