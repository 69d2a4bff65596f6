"""
API router for field analysis endpoints.
"""
from fastapi import APIRouter, Request

from app.api.dependencies import SatelliteEngineDep
from app.api.v1.models.requests import FieldAnalysisRequest
from app.domain.models import FieldAnalysis
from app.middleware.rate_limit import ANALYSIS_RATE_LIMIT, limiter


router = APIRouter(
    prefix="/fields",
    tags=["fields"],
)


@router.post(
    "/analysis",
    response_model=FieldAnalysis,
    summary="Analyze field vegetation health",
    description="""
    Analyze a field polygon using the best satellite source available.

    Sources are tried in order and the first success wins:
    1. Sentinel Hub statistics (10 m), when credentials are configured
    2. NASA MODIS MOD13Q1 NDVI (250 m)
    3. Simulated Landsat 8 OLI analysis (30 m)
    4. Location and season based regional estimate

    The response always contains an analysis. `soilAnalysis.fallback_used`
    and `soilAnalysis.data_source` tell which source produced it.
    """,
    responses={
        200: {
            "description": "Field analysis from the first source that answered",
        },
        422: {
            "description": "Invalid polygon (fewer than 3 vertices or malformed coordinates)",
        },
        429: {
            "description": "Rate limit exceeded",
        },
    }
)
@limiter.limit(ANALYSIS_RATE_LIMIT)
async def analyze_field(
    request: Request,
    body: FieldAnalysisRequest,
    engine: SatelliteEngineDep,
) -> FieldAnalysis:
    """
    Analyze a field.

    Args:
        request: Incoming request (used by the rate limiter)
        body: Polygon and optional farmer hint
        engine: Satellite engine (injected dependency)

    Returns:
        FieldAnalysis
    """
    # Delegate to service layer (no business logic here)
    return await engine.analyze_with_fallback(body.coordinates, body.farmer_id)
