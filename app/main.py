"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.middleware.rate_limit import limiter
from app.api.v1.routers import fields, satellite

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    from app.infrastructure.modis_client import get_modis_client
    from app.infrastructure.sentinel_hub_auth import get_sentinel_hub_auth
    from app.infrastructure.sentinel_hub_client import get_sentinel_hub_client
    from app.services.application.satellite_auth_service import (
        initialize_satellite_authentication,
    )

    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Sentinel Hub config: lookback_days={settings.sentinel_hub_lookback_days}, "
                f"max_cloud_coverage={settings.sentinel_hub_max_cloud_coverage}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")
    await initialize_satellite_authentication()

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await get_sentinel_hub_client().close()
    await get_modis_client().close()
    await get_sentinel_hub_auth().close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Satellite Field Intelligence API for the CropGenius Platform

    This API analyzes field polygons and returns a normalized vegetation health
    report built from the best satellite source available at request time.

    ## Features

    - **Multi-Source Fallback**: Sentinel Hub → NASA MODIS → Landsat simulation →
      location-based estimate; an analysis is always returned
    - **Normalized Output**: Health score, vegetation indices (NDVI, EVI, SAVI, NDMI),
      moisture stress, yield estimate, problem areas, recommendations and alerts
    - **Provenance Metadata**: Data source, resolution, confidence, execution time,
      API cost and whether a fallback was used
    - **Source Status**: Sentinel Hub credential checks and NASA MODIS liveness checks
    - **Rate Limiting**: Protects the API from abuse
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(fields.router, prefix="/api/v1")
app.include_router(satellite.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
