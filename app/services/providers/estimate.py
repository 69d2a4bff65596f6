"""
Terminal provider: deterministic location/season-based estimate.
"""
from typing import Optional, Sequence, Tuple

from app.domain.models import DataSource, FieldAnalysis, GeoLocation
from app.services.domain.field_analysis_normalizer import FieldAnalysisNormalizer
from app.services.providers.base import SatelliteDataProvider


class LocationEstimateProvider(SatelliteDataProvider):
    """
    Regional estimate used when every satellite source has failed.

    It has no failure path for a polygon of at least 3 vertices, which is
    what lets the cascade promise a result.
    """

    source = DataSource.ESTIMATED
    name = "Location estimate"

    def __init__(self, normalizer: FieldAnalysisNormalizer):
        self.normalizer = normalizer

    async def _analyze(
        self,
        polygon: Sequence[GeoLocation],
        farmer_id: Optional[str],
    ) -> Tuple[FieldAnalysis, float]:
        return self.normalizer.location_estimate(polygon), 0.0
