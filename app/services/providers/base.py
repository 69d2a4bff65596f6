"""
Base class for satellite data providers.

Every provider turns a field polygon into a DataSourceResult. ``analyze``
never raises: network errors, bad statuses, malformed payloads and
validation failures all come back as ``success=False``.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from app.domain.models import DataSource, DataSourceResult, FieldAnalysis, GeoLocation
from app.utils.clock import elapsed_ms

logger = logging.getLogger(__name__)


class SatelliteDataProvider(ABC):
    """A single strategy in the satellite fallback cascade."""

    source: DataSource
    name: str

    async def analyze(
        self,
        polygon: Sequence[GeoLocation],
        farmer_id: Optional[str] = None,
    ) -> DataSourceResult:
        """
        Analyze a field polygon.

        Args:
            polygon: Field vertices (at least 3)
            farmer_id: Optional hint identifying the requesting farmer

        Returns:
            DataSourceResult describing success or failure
        """
        start = time.perf_counter()
        try:
            analysis, cost = await self._analyze(polygon, farmer_id)
            return DataSourceResult(
                success=True,
                data=analysis,
                source=self.source,
                execution_time=elapsed_ms(start, time.perf_counter()),
                cost=cost,
            )
        except Exception as e:
            logger.error(f"{self.name} analysis failed: {str(e)}")
            return DataSourceResult(
                success=False,
                error=str(e) or f"Unknown {self.name} error ({type(e).__name__})",
                source=self.source,
                execution_time=elapsed_ms(start, time.perf_counter()),
            )

    @abstractmethod
    async def _analyze(
        self,
        polygon: Sequence[GeoLocation],
        farmer_id: Optional[str],
    ) -> Tuple[FieldAnalysis, float]:
        """Produce the analysis and the estimated cost in USD."""
        pass
