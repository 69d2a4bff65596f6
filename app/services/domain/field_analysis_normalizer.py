"""
Domain service: converts provider payloads into the common FieldAnalysis.

Each provider has its own normalizing method because the sources differ in
what they measure:
- Sentinel Hub reports per-index statistics for the whole polygon
- MODIS reports a single scaled NDVI value near the centroid
- The Landsat simulation and the regional estimate derive everything from
  latitude and season
"""
import logging
import math
from typing import Optional, Sequence
import numpy as np

from app.domain.models import FieldAnalysis, GeoLocation, SoilAnalysis, VegetationIndices
from app.infrastructure.modis_client import ModisSubsetResponse
from app.infrastructure.sentinel_hub_client import StatisticsResponse
from app.services.domain.vegetation_health import (
    ESTIMATED_HEALTH_BASELINE,
    SIMULATED_NDVI_BASELINE,
    clamp,
    classify_estimated_moisture_stress,
    classify_moisture_stress,
    classify_simulated_moisture_stress,
    field_alerts,
    generate_problem_areas,
    is_dry_season,
    precision_recommendations,
    seasonal_alerts,
    seasonal_recommendations,
)
from app.utils.clock import Clock, utc_now
from app.utils.geo_polygon import centroid

logger = logging.getLogger(__name__)

# Fallback means when an index is missing from a statistics response
SENTINEL_DEFAULT_MEANS = {"ndvi": 0.5, "evi": 0.3, "savi": 0.4, "moisture": 0.2}
DEFAULT_NDVI_STDEV = 0.1
SIMULATED_NDVI_STDEV = 0.15


def _stat_or_default(value: Optional[float], default: float) -> float:
    if value is None or math.isnan(value):
        return default
    return value


class FieldAnalysisNormalizer:
    """
    Builds FieldAnalysis instances from provider-specific inputs.

    Randomness (problem-area placement, simulated NDVI) and the current
    date are injected so results can be reproduced in tests.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        clock: Clock = utc_now,
        modis_scale_factor: float = 10000.0,
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock
        self.modis_scale_factor = modis_scale_factor

    def from_sentinel_statistics(
        self,
        statistics: StatisticsResponse,
        polygon: Sequence[GeoLocation],
    ) -> FieldAnalysis:
        """
        Normalize a Sentinel Hub statistics response.

        Args:
            statistics: Parsed statistics response
            polygon: Field vertices (non-closed ring)

        Returns:
            FieldAnalysis

        Raises:
            ExternalAPIError: If the response carries no outputs
        """
        ndvi_stats = statistics.index_statistics("ndvi")
        means = {
            index: clamp(_stat_or_default(
                statistics.index_statistics(index).mean, default
            ))
            for index, default in SENTINEL_DEFAULT_MEANS.items()
        }
        ndvi, evi, savi, moisture = means["ndvi"], means["evi"], means["savi"], means["moisture"]
        ndvi_stdev = _stat_or_default(ndvi_stats.st_dev, 0.0)

        field_health = ndvi * 0.4 + evi * 0.3 + savi * 0.3
        logger.debug(f"Sentinel indices ndvi={ndvi:.3f} evi={evi:.3f} savi={savi:.3f} "
                     f"moisture={moisture:.3f} health={field_health:.3f}")

        return FieldAnalysis(
            field_health=field_health,
            vegetation_indices=VegetationIndices(ndvi=ndvi, evi=evi, savi=savi, ndmi=moisture),
            moisture_stress=classify_moisture_stress(moisture),
            yield_prediction=round(4.5 * field_health * max(0.5, moisture + 0.5), 1),
            problem_areas=generate_problem_areas(
                polygon, ndvi, ndvi_stdev or DEFAULT_NDVI_STDEV, self.rng
            ),
            soil_analysis=SoilAnalysis(
                data_source="Sentinel-2_L2A",
                spatial_resolution="10m",
                confidence_score=min(95.0, 60 + field_health * 35),
                analysis_date=self.clock(),
                ndvi_variation=ndvi_stdev,
                cloud_coverage="low",
            ),
            recommendations=precision_recommendations(field_health, moisture),
            alerts=field_alerts(field_health, moisture, ndvi),
        )

    def from_modis_subset(
        self,
        subset: ModisSubsetResponse,
        polygon: Sequence[GeoLocation],
    ) -> FieldAnalysis:
        """
        Normalize a MODIS subset using its most recent NDVI value.

        Raises:
            ExternalAPIError: If the subset carries no values
        """
        raw_ndvi = subset.latest_value()
        ndvi = clamp(raw_ndvi / self.modis_scale_factor)
        evi = clamp(ndvi * 0.8)
        savi = clamp(ndvi * 0.9)
        moisture = clamp(0.5 + (ndvi - 0.5) * 0.3)
        field_health = ndvi

        return FieldAnalysis(
            field_health=field_health,
            vegetation_indices=VegetationIndices(ndvi=ndvi, evi=evi, savi=savi, ndmi=moisture),
            moisture_stress=classify_moisture_stress(moisture),
            yield_prediction=round(field_health * 5.5, 1),
            problem_areas=generate_problem_areas(polygon, ndvi, DEFAULT_NDVI_STDEV, self.rng),
            soil_analysis=SoilAnalysis(
                data_source="NASA_MODIS_MOD13Q1",
                spatial_resolution="250m",
                confidence_score=85,
                analysis_date=self.clock(),
                ndvi_raw=raw_ndvi,
            ),
            recommendations=precision_recommendations(field_health, moisture),
            alerts=field_alerts(field_health, moisture, ndvi),
        )

    def simulate_seasonal_ndvi(self, latitude: float) -> float:
        """Plausible NDVI for the latitude band and current month."""
        base = SIMULATED_NDVI_BASELINE.value_for(latitude, self.clock().month)
        return clamp(base + (self.rng.random() - 0.5) * 0.2, 0.2, 0.9)

    def from_landsat_simulation(
        self,
        ndvi: float,
        polygon: Sequence[GeoLocation],
    ) -> FieldAnalysis:
        evi = ndvi * 0.85
        savi = ndvi * 0.9
        moisture = 0.3 + ndvi * 0.4
        field_health = ndvi

        return FieldAnalysis(
            field_health=field_health,
            vegetation_indices=VegetationIndices(ndvi=ndvi, evi=evi, savi=savi, ndmi=moisture),
            moisture_stress=classify_simulated_moisture_stress(moisture),
            yield_prediction=round(field_health * 4.2, 1),
            problem_areas=generate_problem_areas(polygon, ndvi, SIMULATED_NDVI_STDEV, self.rng),
            soil_analysis=SoilAnalysis(
                data_source="Landsat_8_OLI",
                spatial_resolution="30m",
                confidence_score=70,
                analysis_date=self.clock(),
                location_based_estimate=True,
            ),
            recommendations=precision_recommendations(field_health, moisture),
            alerts=field_alerts(field_health, moisture, ndvi),
        )

    def location_estimate(self, polygon: Sequence[GeoLocation]) -> FieldAnalysis:
        """
        Deterministic regional estimate from latitude and season.

        Makes no network calls and uses no randomness.
        """
        center = centroid(polygon)
        month = self.clock().month
        dry_season = is_dry_season(month)
        field_health = clamp(ESTIMATED_HEALTH_BASELINE.value_for(center.lat, month), 0.3, 0.9)

        return FieldAnalysis(
            field_health=field_health,
            vegetation_indices=VegetationIndices(
                ndvi=field_health * 0.8,
                evi=field_health * 0.7,
                savi=field_health * 0.75,
                ndmi=field_health * 0.6,
            ),
            moisture_stress=classify_estimated_moisture_stress(field_health),
            yield_prediction=round(field_health * 3.5, 1),
            problem_areas=[],
            soil_analysis=SoilAnalysis(
                data_source="Location_Based_Estimate",
                spatial_resolution="Regional",
                confidence_score=60,
                analysis_date=self.clock(),
                location_based_estimate=True,
                latitude=center.lat,
                longitude=center.lng,
            ),
            recommendations=seasonal_recommendations(field_health, dry_season),
            alerts=seasonal_alerts(field_health),
        )
