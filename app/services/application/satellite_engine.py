"""
Application service: multi-source satellite analysis with cascading fallback.
"""
import logging
import time
from typing import Optional, Sequence

from app.domain.models import DataSource, DataSourceResult, FieldAnalysis, GeoLocation
from app.services.application.satellite_auth_service import SatelliteAuthenticationService
from app.services.providers.base import SatelliteDataProvider
from app.utils.clock import elapsed_ms

logger = logging.getLogger(__name__)


class MultiSourceSatelliteEngine:
    """
    Tries satellite sources in strict priority order.

    Sentinel Hub (10 m) → NASA MODIS (250 m) → Landsat simulation (30 m) →
    location-based estimate. Each provider is attempted only after the
    previous one has failed; the estimate always succeeds, so a result is
    always returned.
    """

    def __init__(
        self,
        auth_service: SatelliteAuthenticationService,
        primary: SatelliteDataProvider,
        secondary: SatelliteDataProvider,
        tertiary: SatelliteDataProvider,
        estimate: SatelliteDataProvider,
    ):
        """
        Initialize the engine with its providers.

        Args:
            auth_service: Tracker consulted before the primary provider
            primary: High-resolution provider, attempted only when configured
            secondary: Coarse free provider
            tertiary: Simulated provider
            estimate: Terminal provider that never fails
        """
        self.auth_service = auth_service
        self.primary = primary
        self.secondary = secondary
        self.tertiary = tertiary
        self.estimate = estimate

    async def analyze_with_fallback(
        self,
        polygon: Sequence[GeoLocation],
        farmer_id: Optional[str] = None,
    ) -> FieldAnalysis:
        """
        Analyze a field using the best source that answers.

        Args:
            polygon: Field vertices, at least 3; never modified
            farmer_id: Optional hint identifying the requesting farmer

        Returns:
            FieldAnalysis stamped with execution time, cost and fallback flag

        Raises:
            RuntimeError: If even the location estimate fails, which only
                happens for a polygon without vertices. The HTTP API rejects
                polygons with fewer than 3 vertices before reaching here.
        """
        logger.info("Starting multi-source satellite analysis...")
        start = time.perf_counter()
        vertices = list(polygon)

        if self.auth_service.is_primary_configured():
            result = await self.primary.analyze(vertices, farmer_id)
            if result.success:
                return self._finish(result, start)
        else:
            logger.info("Sentinel Hub not configured, skipping primary source")

        for provider in (self.secondary, self.tertiary):
            result = await provider.analyze(vertices, farmer_id)
            if result.success:
                return self._finish(result, start)

        logger.warning("All satellite APIs failed, using location-based estimate")
        result = await self.estimate.analyze(vertices, farmer_id)
        if not result.success:
            raise RuntimeError(f"Location-based estimate failed: {result.error}")
        return self._finish(result, start)

    def _finish(self, result: DataSourceResult, start: float) -> FieldAnalysis:
        logger.info(f"{result.source.value} analysis successful in {result.execution_time}ms "
                    f"(total {elapsed_ms(start, time.perf_counter())}ms)")
        return self.enhance_with_metadata(result)

    @staticmethod
    def enhance_with_metadata(result: DataSourceResult) -> FieldAnalysis:
        """
        Copy the winning analysis with provenance metadata attached.

        Args:
            result: Successful provider result

        Returns:
            New FieldAnalysis; the provider's instance is left untouched
        """
        soil_analysis = result.data.soil_analysis.model_copy(update={
            "execution_time_ms": result.execution_time,
            "api_cost_usd": result.cost or 0.0,
            "fallback_used": result.source != DataSource.PRIMARY,
            "source": result.source,
        })
        return result.data.model_copy(update={"soil_analysis": soil_analysis})
