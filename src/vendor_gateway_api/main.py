from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vendor_gateway.config.state import get_config
from vendor_gateway.container import GatewayContainer
from vendor_gateway.infrastructure.observability import get_api_logger, setup_logging
from vendor_gateway_api.health import router as health_router
from vendor_gateway_api.routes.vendors import router as vendors_router

logger = get_api_logger()


def create_app(container: GatewayContainer | None = None) -> FastAPI:
    """Build the API; the registry lives for the duration of the lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        gateway = container
        if gateway is None:
            config = get_config()
            setup_logging(config.logging.level, json_logs=config.logging.json_logs)
            gateway = GatewayContainer(config)

        await gateway.startup()
        app.state.container = gateway
        logger.info("api_started", vendors=gateway.registry.ids())
        try:
            yield
        finally:
            await gateway.shutdown()
            logger.info("api_stopped")

    app = FastAPI(title="Vendor Gateway API", version="0.1.0", lifespan=lifespan)
    app.include_router(health_router, prefix="")  # /health directly
    app.include_router(vendors_router, prefix="/vendors")

    @app.get("/")
    async def root():
        return {"message": "Vendor Gateway API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
