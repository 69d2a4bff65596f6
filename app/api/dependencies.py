"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from app.config import settings
from app.infrastructure.modis_client import ModisClient, get_modis_client
from app.infrastructure.sentinel_hub_client import SentinelHubClient, get_sentinel_hub_client
from app.services.application.satellite_auth_service import (
    SatelliteAuthenticationService,
    get_satellite_auth_service,
)
from app.services.application.satellite_engine import MultiSourceSatelliteEngine
from app.services.domain.field_analysis_normalizer import FieldAnalysisNormalizer
from app.services.providers.estimate import LocationEstimateProvider
from app.services.providers.landsat import LandsatSimulationProvider
from app.services.providers.modis import ModisProvider
from app.services.providers.sentinel import SentinelHubProvider


def get_field_analysis_normalizer() -> FieldAnalysisNormalizer:
    """
    Dependency factory for FieldAnalysisNormalizer.

    Returns:
        FieldAnalysisNormalizer instance
    """
    return FieldAnalysisNormalizer(modis_scale_factor=settings.modis_ndvi_scale_factor)


def get_satellite_engine(
    sentinel_client: Annotated[SentinelHubClient, Depends(get_sentinel_hub_client)],
    modis_client: Annotated[ModisClient, Depends(get_modis_client)],
    auth_service: Annotated[SatelliteAuthenticationService, Depends(get_satellite_auth_service)],
    normalizer: Annotated[FieldAnalysisNormalizer, Depends(get_field_analysis_normalizer)],
) -> MultiSourceSatelliteEngine:
    """
    Dependency factory for MultiSourceSatelliteEngine.

    Args:
        sentinel_client: Sentinel Hub client (injected)
        modis_client: MODIS client (injected)
        auth_service: Availability tracker (injected)
        normalizer: Field analysis normalizer (injected)

    Returns:
        MultiSourceSatelliteEngine instance
    """
    return MultiSourceSatelliteEngine(
        auth_service=auth_service,
        primary=SentinelHubProvider(sentinel_client, normalizer),
        secondary=ModisProvider(modis_client, normalizer),
        tertiary=LandsatSimulationProvider(normalizer),
        estimate=LocationEstimateProvider(normalizer),
    )


# Type aliases for cleaner route signatures
SatelliteEngineDep = Annotated[MultiSourceSatelliteEngine, Depends(get_satellite_engine)]
SatelliteAuthServiceDep = Annotated[
    SatelliteAuthenticationService, Depends(get_satellite_auth_service)
]
