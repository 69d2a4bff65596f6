"""
API router for satellite source status endpoints.
"""
from fastapi import APIRouter

from app.api.dependencies import SatelliteAuthServiceDep
from app.api.v1.models.responses import SatelliteStatusResponse
from app.services.application.satellite_auth_service import SatelliteAuthenticationService


router = APIRouter(
    prefix="/satellite",
    tags=["satellite"],
)


def _status_response(service: SatelliteAuthenticationService) -> SatelliteStatusResponse:
    return SatelliteStatusResponse(
        status=service.get_status(),
        best_source=service.best_source(),
        summary=service.summary(),
    )


@router.get(
    "/status",
    response_model=SatelliteStatusResponse,
    summary="Get satellite source status",
)
async def get_satellite_status(
    auth_service: SatelliteAuthServiceDep,
) -> SatelliteStatusResponse:
    """Return the last recorded availability of each source."""
    return _status_response(auth_service)


@router.post(
    "/status/refresh",
    response_model=SatelliteStatusResponse,
    summary="Re-check satellite source status",
    description="Verifies Sentinel Hub credentials with a live request and pings NASA MODIS.",
)
async def refresh_satellite_status(
    auth_service: SatelliteAuthServiceDep,
) -> SatelliteStatusResponse:
    await auth_service.check_status()
    await auth_service.test_modis()
    return _status_response(auth_service)
