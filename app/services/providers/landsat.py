"""
Tertiary provider: simulated Landsat 8 OLI analysis (30 m), no network.
"""
from typing import Optional, Sequence, Tuple

from app.domain.models import DataSource, FieldAnalysis, GeoLocation
from app.services.domain.field_analysis_normalizer import FieldAnalysisNormalizer
from app.services.providers.base import SatelliteDataProvider
from app.utils.geo_polygon import centroid


class LandsatSimulationProvider(SatelliteDataProvider):
    source = DataSource.TERTIARY
    name = "Landsat"

    def __init__(self, normalizer: FieldAnalysisNormalizer):
        self.normalizer = normalizer

    async def _analyze(
        self,
        polygon: Sequence[GeoLocation],
        farmer_id: Optional[str],
    ) -> Tuple[FieldAnalysis, float]:
        ndvi = self.normalizer.simulate_seasonal_ndvi(centroid(polygon).lat)
        return self.normalizer.from_landsat_simulation(ndvi, polygon), 0.0
