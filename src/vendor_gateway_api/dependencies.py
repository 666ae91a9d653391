from fastapi import HTTPException, Request

from vendor_gateway.common.registry.vendor_registry import VendorRegistry
from vendor_gateway.container import GatewayContainer


def get_container(request: Request) -> GatewayContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(status_code=503, detail="Gateway not started")
    return container


def get_registry(request: Request) -> VendorRegistry:
    return get_container(request).registry
