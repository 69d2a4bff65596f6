"""
Infrastructure layer: NASA ORNL DAAC MODIS subset client.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from app.config import settings
from app.infrastructure.api_constants import APIConstants, ModisEndpoints
from app.infrastructure.external_api_client import BaseAPIClient, ExternalAPIError


# Pydantic models for API responses
class ModisSubsetRecord(BaseModel):
    """One band/date record of a MODIS subset."""
    band: Optional[str] = None
    calendar_date: Optional[str] = None
    modis_date: Optional[str] = None
    data: List[float] = Field(default_factory=list, description="Scaled pixel values")


class ModisSubsetResponse(BaseModel):
    """Response from the subset endpoint."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    band: Optional[str] = None
    subset: List[ModisSubsetRecord] = Field(default_factory=list)

    def latest_value(self) -> float:
        """
        Most recent scaled value of the first subset record.

        Raises:
            ExternalAPIError: If the response carries no values
        """
        if not self.subset or not self.subset[0].data:
            raise ExternalAPIError("MODIS subset response contains no NDVI values")
        return self.subset[0].data[-1]


class ModisClient(BaseAPIClient):
    """Unauthenticated client for the MODIS web service."""

    def __init__(self, base_url: Optional[str] = None):
        super().__init__(base_url or settings.modis_base_url)
        self.product = settings.modis_product

    async def get_subset(
        self,
        latitude: float,
        longitude: float,
        start_date: str = settings.modis_start_date,
        end_date: str = settings.modis_end_date,
        km_above_below: int = settings.modis_km_above_below,
        km_left_right: int = settings.modis_km_left_right,
        timeout: float = settings.request_timeout,
    ) -> ModisSubsetResponse:
        """
        Fetch a vegetation index subset around a point.

        Args:
            latitude: Point latitude in degrees
            longitude: Point longitude in degrees
            start_date: Start date in AYYYYDDD format
            end_date: End date in AYYYYDDD format
            km_above_below: Subset half-height in kilometres
            km_left_right: Subset half-width in kilometres
            timeout: Request timeout in seconds

        Returns:
            ModisSubsetResponse instance

        Raises:
            ExternalAPIError: If the request fails
        """
        try:
            data = await self._make_request(
                "GET",
                ModisEndpoints.get_subset(self.product),
                params={
                    "latitude": latitude,
                    "longitude": longitude,
                    "startDate": start_date,
                    "endDate": end_date,
                    "kmAboveBelow": km_above_below,
                    "kmLeftRight": km_left_right,
                },
                timeout=timeout,
            )
        except ExternalAPIError as e:
            raise ExternalAPIError(f"NASA MODIS API failed: {e.message}", e.status_code)
        return ModisSubsetResponse(**data)

    async def ping(self) -> bool:
        """
        Cheap liveness check: a one-pixel, one-period subset at (0, 0).

        Returns:
            True if the service answered with a 2xx status
        """
        try:
            await self._make_request(
                "GET",
                ModisEndpoints.get_subset(self.product),
                params={
                    "latitude": 0,
                    "longitude": 0,
                    "startDate": "A2024001",
                    "endDate": "A2024002",
                    "kmAboveBelow": 0,
                    "kmLeftRight": 0,
                },
                timeout=APIConstants.LIVENESS_TIMEOUT,
            )
        except ExternalAPIError:
            return False
        return True


# Singleton instance
_modis_client: Optional[ModisClient] = None


def get_modis_client() -> ModisClient:
    """
    Get or create the singleton MODIS client.

    Returns:
        ModisClient instance
    """
    global _modis_client
    if _modis_client is None:
        _modis_client = ModisClient()
    return _modis_client
