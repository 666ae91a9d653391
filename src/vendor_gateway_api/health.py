from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from vendor_gateway import __version__
from vendor_gateway.common.registry.vendor_registry import VendorRegistry
from vendor_gateway.infrastructure.observability import get_api_logger
from vendor_gateway_api.dependencies import get_registry

logger = get_api_logger("health")

router = APIRouter()


@router.get("/health")
async def health_check(registry: VendorRegistry = Depends(get_registry)) -> dict[str, Any]:
    """Process health plus per-vendor connection state."""
    return {
        "status": "healthy",
        "vendors": {
            vendor_id: registry.describe(vendor_id)["connected"]
            for vendor_id in registry.ids()
        },
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(registry: VendorRegistry = Depends(get_registry)) -> dict[str, Any]:
    """Readiness check: at least one vendor registered."""
    if len(registry) == 0:
        logger.warning("readiness_failed", reason="no vendors registered")
        raise HTTPException(
            status_code=503, detail={"status": "not_ready", "vendors": 0}
        )
    return {"status": "ready", "vendors": len(registry)}
