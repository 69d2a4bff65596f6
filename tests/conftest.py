"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample field polygons
- Sample Sentinel Hub and MODIS payloads
- Deterministic clock and random generator
- Provider clients wired to mock base URLs
- FastAPI test client
"""
import pytest
import numpy as np
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from fastapi.testclient import TestClient

from app.main import app
from app.domain.models import GeoLocation
from app.infrastructure.modis_client import ModisClient
from app.infrastructure.sentinel_hub_client import SentinelHubClient
from app.services.application.satellite_auth_service import SatelliteAuthenticationService
from app.services.application.satellite_engine import MultiSourceSatelliteEngine
from app.services.domain.field_analysis_normalizer import FieldAnalysisNormalizer
from app.services.providers.estimate import LocationEstimateProvider
from app.services.providers.landsat import LandsatSimulationProvider
from app.services.providers.modis import ModisProvider
from app.services.providers.sentinel import SentinelHubProvider


SENTINEL_URL = "https://sentinel.test"
MODIS_URL = "https://modis.test"

# March: wet season
WET_SEASON_DATE = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
# August: dry season
DRY_SEASON_DATE = datetime(2024, 8, 15, 12, 0, tzinfo=timezone.utc)


class StaticTokenAuth:
    """Stand-in for SentinelHubAuth with a fixed configuration state."""

    def __init__(self, configured: bool = True):
        self.configured = configured

    @property
    def has_credentials(self) -> bool:
        return self.configured

    def is_configured(self) -> bool:
        return self.configured

    async def refresh_if_needed(self) -> bool:
        return self.configured

    async def initialize(self) -> bool:
        return self.configured

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": "Bearer test-token"}


def sentinel_statistics_payload(
    ndvi: float = 0.8,
    evi: float = 0.6,
    savi: float = 0.7,
    moisture: float = 0.5,
    ndvi_stdev: Optional[float] = None,
) -> Dict[str, Any]:
    """Build a Statistical API response with one aggregation interval."""

    def output(mean: float, st_dev: Optional[float] = None) -> Dict[str, Any]:
        stats: Dict[str, Any] = {"mean": mean, "min": mean - 0.1, "max": mean + 0.1}
        if st_dev is not None:
            stats["stDev"] = st_dev
        return {"bands": {"B0": {"stats": stats}}}

    return {
        "data": [{
            "interval": {"from": "2024-03-01T00:00:00Z", "to": "2024-03-02T00:00:00Z"},
            "outputs": {
                "ndvi": output(ndvi, ndvi_stdev),
                "evi": output(evi),
                "savi": output(savi),
                "moisture": output(moisture),
            },
        }],
        "status": "OK",
    }


def modis_subset_payload(*values: float) -> Dict[str, Any]:
    return {
        "latitude": -1.2916,
        "longitude": 36.8224,
        "band": "250m_16_days_NDVI",
        "subset": [{
            "band": "250m_16_days_NDVI",
            "calendar_date": "2024-03-05",
            "modis_date": "A2024065",
            "data": list(values),
        }],
    }


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def field_polygon() -> list[GeoLocation]:
    """Open square field near Nairobi."""
    return [
        GeoLocation(lat=-1.2921, lng=36.8219),
        GeoLocation(lat=-1.2921, lng=36.8229),
        GeoLocation(lat=-1.2911, lng=36.8229),
        GeoLocation(lat=-1.2911, lng=36.8219),
    ]


@pytest.fixture
def closed_field_polygon(field_polygon) -> list[GeoLocation]:
    return field_polygon + [field_polygon[0]]


@pytest.fixture
def temperate_polygon() -> list[GeoLocation]:
    """Field well outside the equatorial band (Free State, South Africa)."""
    return [
        GeoLocation(lat=-28.50, lng=26.80),
        GeoLocation(lat=-28.50, lng=26.81),
        GeoLocation(lat=-28.49, lng=26.81),
        GeoLocation(lat=-28.49, lng=26.80),
    ]


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def normalizer(rng) -> FieldAnalysisNormalizer:
    return FieldAnalysisNormalizer(rng=rng, clock=lambda: WET_SEASON_DATE)


@pytest.fixture
def dry_season_normalizer(rng) -> FieldAnalysisNormalizer:
    return FieldAnalysisNormalizer(rng=rng, clock=lambda: DRY_SEASON_DATE)


# ============================================================
# Provider and Engine Fixtures
# ============================================================

@pytest.fixture
def sentinel_client() -> SentinelHubClient:
    return SentinelHubClient(StaticTokenAuth(configured=True), base_url=SENTINEL_URL)


@pytest.fixture
def modis_client() -> ModisClient:
    return ModisClient(base_url=MODIS_URL)


def build_engine(
    normalizer: FieldAnalysisNormalizer,
    modis_client: ModisClient,
    primary_configured: bool,
) -> MultiSourceSatelliteEngine:
    sentinel_client = SentinelHubClient(
        StaticTokenAuth(configured=primary_configured), base_url=SENTINEL_URL
    )
    auth_service = SatelliteAuthenticationService(
        sentinel_client=sentinel_client,
        modis_client=modis_client,
        clock=normalizer.clock,
    )
    return MultiSourceSatelliteEngine(
        auth_service=auth_service,
        primary=SentinelHubProvider(sentinel_client, normalizer),
        secondary=ModisProvider(modis_client, normalizer),
        tertiary=LandsatSimulationProvider(normalizer),
        estimate=LocationEstimateProvider(normalizer),
    )


@pytest.fixture
def configured_engine(normalizer, modis_client) -> MultiSourceSatelliteEngine:
    return build_engine(normalizer, modis_client, primary_configured=True)


@pytest.fixture
def unconfigured_engine(normalizer, modis_client) -> MultiSourceSatelliteEngine:
    return build_engine(normalizer, modis_client, primary_configured=False)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
