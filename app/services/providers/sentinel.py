"""
Primary provider: Sentinel Hub statistics over the field polygon (10 m).
"""
from datetime import timedelta
from typing import Optional, Sequence, Tuple

from app.config import settings
from app.domain.models import DataSource, FieldAnalysis, GeoLocation
from app.infrastructure.external_api_client import ExternalAPIError
from app.infrastructure.sentinel_hub_client import SentinelHubClient
from app.services.domain.field_analysis_normalizer import FieldAnalysisNormalizer
from app.services.providers.base import SatelliteDataProvider
from app.utils.geo_polygon import ensure_closed_polygon


class SentinelHubProvider(SatelliteDataProvider):
    """Sentinel-2 L2A index statistics via the Statistical API."""

    source = DataSource.PRIMARY
    name = "Sentinel Hub"

    def __init__(
        self,
        client: SentinelHubClient,
        normalizer: FieldAnalysisNormalizer,
        lookback_days: int = settings.sentinel_hub_lookback_days,
        max_cloud_coverage: int = settings.sentinel_hub_max_cloud_coverage,
        request_cost: float = settings.sentinel_hub_request_cost_usd,
    ):
        self.client = client
        self.normalizer = normalizer
        self.lookback_days = lookback_days
        self.max_cloud_coverage = max_cloud_coverage
        self.request_cost = request_cost

    async def _analyze(
        self,
        polygon: Sequence[GeoLocation],
        farmer_id: Optional[str],
    ) -> Tuple[FieldAnalysis, float]:
        if not self.client.auth.is_configured():
            raise ExternalAPIError("Sentinel Hub credentials not configured")

        now = self.normalizer.clock()
        statistics = await self.client.get_field_statistics(
            ensure_closed_polygon(polygon),
            time_from=now - timedelta(days=self.lookback_days),
            time_to=now,
            max_cloud_coverage=self.max_cloud_coverage,
        )
        analysis = self.normalizer.from_sentinel_statistics(statistics, polygon)
        return analysis, self.request_cost
