"""
Infrastructure layer: Sentinel Hub Statistical API client.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from pydantic import BaseModel, Field

from app.config import settings
from app.domain.models import GeoLocation
from app.infrastructure.api_constants import APIConstants, SentinelHubEndpoints
from app.infrastructure.external_api_client import BaseAPIClient, ExternalAPIError
from app.infrastructure.sentinel_hub_auth import SentinelHubAuth, get_sentinel_hub_auth
from app.utils.geo_polygon import to_geojson_polygon


# Band math for the four indices; Sentinel-2 L2A bands.
MULTI_INDEX_EVALSCRIPT = """//VERSION=3
function setup() {
  return {
    input: [{ bands: ['B02', 'B04', 'B08', 'B11', 'dataMask'] }],
    output: [
      { id: 'ndvi', bands: 1, sampleType: 'FLOAT32' },
      { id: 'evi', bands: 1, sampleType: 'FLOAT32' },
      { id: 'savi', bands: 1, sampleType: 'FLOAT32' },
      { id: 'moisture', bands: 1, sampleType: 'FLOAT32' },
      { id: 'dataMask', bands: 1 }
    ]
  };
}

function evaluatePixel(sample) {
  const ndvi = (sample.B08 - sample.B04) / (sample.B08 + sample.B04);
  const evi = 2.5 * ((sample.B08 - sample.B04) / (sample.B08 + 6 * sample.B04 - 7.5 * sample.B02 + 1));
  const L = 0.5;
  const savi = ((sample.B08 - sample.B04) / (sample.B08 + sample.B04 + L)) * (1 + L);
  const moisture = (sample.B08 - sample.B11) / (sample.B08 + sample.B11);

  return {
    ndvi: [ndvi],
    evi: [evi],
    savi: [savi],
    moisture: [moisture],
    dataMask: [sample.dataMask]
  };
}"""

INDEX_OUTPUTS = ("ndvi", "evi", "savi", "moisture")


# Pydantic models for API responses
class BandStatistics(BaseModel):
    """Per-band statistics of one index output."""
    mean: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    st_dev: Optional[float] = Field(default=None, alias="stDev")
    sample_count: Optional[int] = Field(default=None, alias="sampleCount")
    percentiles: Optional[Dict[str, float]] = None

    class Config:
        populate_by_name = True


class BandOutput(BaseModel):
    stats: BandStatistics = Field(default_factory=BandStatistics)


class IndexOutput(BaseModel):
    bands: Dict[str, BandOutput] = Field(default_factory=dict)

    def band_statistics(self, band: str = "B0") -> BandStatistics:
        output = self.bands.get(band)
        return output.stats if output else BandStatistics()


class StatisticsInterval(BaseModel):
    interval: Optional[Dict[str, str]] = None
    outputs: Optional[Dict[str, IndexOutput]] = None


class StatisticsResponse(BaseModel):
    """Response from the statistics endpoint."""
    data: List[StatisticsInterval] = Field(default_factory=list)
    status: Optional[str] = None

    def first_outputs(self) -> Dict[str, IndexOutput]:
        """
        Outputs of the first aggregation interval.

        Raises:
            ExternalAPIError: If the response carries no outputs
        """
        if not self.data or not self.data[0].outputs:
            raise ExternalAPIError("Invalid Sentinel Hub statistics response")
        return self.data[0].outputs

    def index_statistics(self, index: str) -> BandStatistics:
        output = self.first_outputs().get(index)
        return output.band_statistics() if output else BandStatistics()


def build_statistics_payload(
    polygon: Sequence[GeoLocation],
    time_from: datetime,
    time_to: datetime,
    max_cloud_coverage: int,
) -> Dict[str, Any]:
    """
    Build a Statistical API request body for a field polygon.

    Args:
        polygon: Field vertices, open or closed
        time_from: Start of the imagery window
        time_to: End of the imagery window
        max_cloud_coverage: Maximum scene cloud coverage in percent

    Returns:
        JSON-serializable request body
    """
    time_range = {"from": time_from.isoformat(), "to": time_to.isoformat()}
    full_stats = {"default": {"stats": ["mean", "min", "max", "stDev", "percentiles"]}}
    basic_stats = {"default": {"stats": ["mean", "min", "max", "stDev"]}}

    return {
        "input": {
            "bounds": {"geometry": to_geojson_polygon(polygon)},
            "data": [{
                "type": SentinelHubEndpoints.COLLECTION,
                "dataFilter": {
                    "timeRange": time_range,
                    "maxCloudCoverage": max_cloud_coverage,
                },
            }],
        },
        "aggregation": {
            "timeRange": time_range,
            "aggregationInterval": {"of": SentinelHubEndpoints.AGGREGATION_INTERVAL},
            "evalscript": MULTI_INDEX_EVALSCRIPT,
        },
        "calculations": {
            "ndvi": {"statistics": full_stats},
            "evi": {"statistics": basic_stats},
            "savi": {"statistics": basic_stats},
            "moisture": {"statistics": basic_stats},
        },
    }


class SentinelHubClient(BaseAPIClient):
    """Authenticated client for the Sentinel Hub process and configuration APIs."""

    def __init__(self, auth: SentinelHubAuth, base_url: Optional[str] = None):
        super().__init__(base_url or settings.sentinel_hub_base_url)
        self.auth = auth

    async def get_field_statistics(
        self,
        polygon: Sequence[GeoLocation],
        time_from: datetime,
        time_to: datetime,
        max_cloud_coverage: int = settings.sentinel_hub_max_cloud_coverage,
    ) -> StatisticsResponse:
        """
        Fetch index statistics for a field polygon.

        Raises:
            ExternalAPIError: If not authenticated, the request fails or the
                response cannot be parsed
        """
        payload = build_statistics_payload(polygon, time_from, time_to, max_cloud_coverage)
        try:
            data = await self._make_request(
                "POST",
                SentinelHubEndpoints.STATISTICS,
                json=payload,
                headers={
                    **self.auth.auth_headers(),
                    "Content-Type": APIConstants.CONTENT_TYPE_JSON,
                },
            )
        except ExternalAPIError as e:
            raise ExternalAPIError(f"Sentinel Hub API failed: {e.message}", e.status_code)
        return StatisticsResponse(**data)

    async def list_wms_instances(self) -> List[Dict[str, Any]]:
        """
        Lightweight authenticated call used to verify credentials.

        Raises:
            ExternalAPIError: If not authenticated or the request fails
        """
        data = await self._make_request(
            "GET",
            SentinelHubEndpoints.WMS_INSTANCES,
            headers=self.auth.auth_headers(),
            timeout=APIConstants.LIVENESS_TIMEOUT,
        )
        return data if isinstance(data, list) else []


# Singleton instance
_sentinel_hub_client: Optional[SentinelHubClient] = None


def get_sentinel_hub_client() -> SentinelHubClient:
    """
    Get or create the singleton Sentinel Hub client.

    Returns:
        SentinelHubClient instance
    """
    global _sentinel_hub_client
    if _sentinel_hub_client is None:
        _sentinel_hub_client = SentinelHubClient(get_sentinel_hub_auth())
    return _sentinel_hub_client
