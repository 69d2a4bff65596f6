"""
Secondary provider: NASA MODIS MOD13Q1 NDVI at the field centroid (250 m).
"""
from typing import Optional, Sequence, Tuple

from app.domain.models import DataSource, FieldAnalysis, GeoLocation
from app.infrastructure.modis_client import ModisClient
from app.services.domain.field_analysis_normalizer import FieldAnalysisNormalizer
from app.services.providers.base import SatelliteDataProvider
from app.utils.geo_polygon import centroid


class ModisProvider(SatelliteDataProvider):
    """Free, coarse NDVI time series from the ORNL DAAC web service."""

    source = DataSource.SECONDARY
    name = "NASA MODIS"

    def __init__(self, client: ModisClient, normalizer: FieldAnalysisNormalizer):
        self.client = client
        self.normalizer = normalizer

    async def _analyze(
        self,
        polygon: Sequence[GeoLocation],
        farmer_id: Optional[str],
    ) -> Tuple[FieldAnalysis, float]:
        center = centroid(polygon)
        subset = await self.client.get_subset(latitude=center.lat, longitude=center.lng)
        return self.normalizer.from_modis_subset(subset, polygon), 0.0
