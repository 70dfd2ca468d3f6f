"""Main FastAPI application for the shipment tracking relay."""

import sys
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from . import __version__
from .config import Settings, settings
from .exceptions import TrackingValidationError
from .models.tracking import TrackingRecord
from .tracking.handler import TrackingHandler


# Configure logging
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    level=settings.log_level
)


def create_app(
    config: Settings = settings,
    handler: Optional[TrackingHandler] = None
) -> FastAPI:
    """Build the FastAPI app with its tracking handler attached."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan - startup and shutdown."""
        logger.info("🚀 Starting ShipStation Tracking API")
        logger.info(f"Environment: {config.environment}")
        logger.info(f"Allowed origin: {config.shopify_store_url}")
        if not config.upstream_enabled:
            logger.warning("SHIPSTATION_API_KEY not set - serving generated timelines only")

        yield

        logger.info("Tracking API shut down complete")

    app = FastAPI(
        title="ShipStation Tracking API",
        description="Carrier detection and shipment status for storefronts",
        version=__version__,
        lifespan=lifespan
    )

    # Allow CORS from the Shopify store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.state.config = config
    app.state.tracking_handler = handler or TrackingHandler(config)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness endpoint."""
        return "ShipStation Tracking API is running"

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": config.environment
        }

    @app.get("/tracking", response_model=TrackingRecord)
    async def get_tracking(
        request: Request,
        tracking_number: Optional[str] = None,
        carrier: Optional[str] = None
    ):
        """Return normalized tracking information for a shipment."""
        try:
            tracking_handler: TrackingHandler = request.app.state.tracking_handler
            return await tracking_handler.track(tracking_number, carrier)

        except TrackingValidationError as e:
            return JSONResponse(
                status_code=400,
                content={"error": str(e), "status": "error"}
            )

        except Exception as e:
            logger.exception(f"Error processing tracking request: {e}")
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Failed to fetch tracking information",
                    "details": str(e),
                    "status": "error"
                }
            )

    return app


app = create_app()


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="ShipStation Tracking API")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Listening port")
    args = parser.parse_args()

    uvicorn.run(
        "shiptrack.main:app",
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
        reload=not settings.is_production
    )
