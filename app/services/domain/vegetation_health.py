"""
Vegetation health heuristics shared by the provider normalizers.

Provides:
- Range clamping and moisture stress classification
- Latitude/season baselines for providers without imagery
- Synthetic problem-area placement from NDVI variance
- Recommendation and alert text
"""
import math
from dataclasses import dataclass
from typing import List, Sequence
import numpy as np

from app.domain.models import (
    AlertSeverity,
    AlertType,
    FieldAlert,
    GeoLocation,
    MoistureStress,
    ProblemArea,
    ProblemSeverity,
)
from app.utils.geo_polygon import centroid

EQUATORIAL_LATITUDE = 10.0
DRY_SEASON_MONTHS = range(6, 11)  # June through October

PROBLEM_STDEV_THRESHOLD = 0.1
MAX_PROBLEM_AREAS = 5
PROBLEM_JITTER_DEGREES = 0.002


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


def classify_moisture_stress(moisture: float) -> MoistureStress:
    """Four-tier classification used for measured moisture."""
    if moisture < 0.2:
        return MoistureStress.CRITICAL
    if moisture < 0.4:
        return MoistureStress.HIGH
    if moisture < 0.6:
        return MoistureStress.MODERATE
    return MoistureStress.LOW


def classify_simulated_moisture_stress(moisture: float) -> MoistureStress:
    """Three-tier classification for simulated moisture; no critical tier."""
    if moisture < 0.3:
        return MoistureStress.HIGH
    if moisture < 0.5:
        return MoistureStress.MODERATE
    return MoistureStress.LOW


def classify_estimated_moisture_stress(field_health: float) -> MoistureStress:
    if field_health < 0.4:
        return MoistureStress.HIGH
    if field_health < 0.6:
        return MoistureStress.MODERATE
    return MoistureStress.LOW


def is_equatorial(latitude: float) -> bool:
    return abs(latitude) < EQUATORIAL_LATITUDE


def is_dry_season(month: int) -> bool:
    return month in DRY_SEASON_MONTHS


@dataclass(frozen=True)
class SeasonalBaseline:
    """Base vegetation level by latitude band and season."""
    default: float
    equatorial_wet: float
    temperate_dry: float

    def value_for(self, latitude: float, month: int) -> float:
        equatorial = is_equatorial(latitude)
        dry = is_dry_season(month)
        if equatorial and not dry:
            return self.equatorial_wet
        if not equatorial and dry:
            return self.temperate_dry
        return self.default


SIMULATED_NDVI_BASELINE = SeasonalBaseline(default=0.6, equatorial_wet=0.75, temperate_dry=0.4)
ESTIMATED_HEALTH_BASELINE = SeasonalBaseline(default=0.65, equatorial_wet=0.75, temperate_dry=0.45)


def problem_severity(ndvi: float) -> ProblemSeverity:
    if ndvi < 0.3:
        return ProblemSeverity.CRITICAL
    if ndvi < 0.5:
        return ProblemSeverity.HIGH
    return ProblemSeverity.MODERATE


def generate_problem_areas(
    polygon: Sequence[GeoLocation],
    mean_ndvi: float,
    stdev_ndvi: float,
    rng: np.random.Generator,
) -> List[ProblemArea]:
    """
    Place synthetic low-NDVI points near the field centroid.

    Nothing is generated unless the NDVI standard deviation exceeds 0.1;
    above that, higher variance yields more points, capped at five.

    Args:
        polygon: Field vertices (non-closed ring)
        mean_ndvi: Field mean NDVI
        stdev_ndvi: Field NDVI standard deviation
        rng: Random generator for point placement

    Returns:
        List of ProblemArea
    """
    if stdev_ndvi <= PROBLEM_STDEV_THRESHOLD:
        return []

    center = centroid(polygon)
    count = min(MAX_PROBLEM_AREAS, math.floor(stdev_ndvi * 15))
    areas = []
    for _ in range(count):
        ndvi = max(0.0, mean_ndvi - stdev_ndvi - rng.random() * 0.2)
        areas.append(ProblemArea(
            lat=center.lat + (rng.random() - 0.5) * PROBLEM_JITTER_DEGREES,
            lng=center.lng + (rng.random() - 0.5) * PROBLEM_JITTER_DEGREES,
            ndvi=ndvi,
            severity=problem_severity(ndvi),
        ))
    return areas


def precision_recommendations(health: float, moisture: float) -> List[str]:
    """Recommendations for analyses backed by measured or simulated imagery."""
    if health > 0.85:
        recommendations = [
            "EXCELLENT: Field showing optimal growth - maintain current practices",
            "Yield potential: 90-100% of regional maximum",
        ]
    elif health > 0.7:
        recommendations = [
            "GOOD: Strong vegetation health with optimization opportunities",
            "Yield potential: 75-90% - fine-tune irrigation and fertilization",
        ]
    elif health > 0.5:
        recommendations = [
            "MODERATE: Crop stress detected - intervention recommended",
            "Priority: Soil testing, irrigation audit, pest monitoring",
        ]
    else:
        recommendations = [
            "CRITICAL: Severe stress - emergency response required",
            "Immediate field inspection and corrective action needed",
        ]

    if moisture < 0.2:
        recommendations.append("WATER CRISIS: Critical irrigation needed within 24 hours")
    elif moisture < 0.4:
        recommendations.append("WATER STRESS: Increase irrigation frequency by 30%")

    return recommendations


def field_alerts(health: float, moisture: float, ndvi: float) -> List[FieldAlert]:
    alerts = []
    if moisture < 0.2:
        alerts.append(FieldAlert(
            type=AlertType.WATER_STRESS,
            severity=AlertSeverity.CRITICAL,
            message="Critical water stress detected - immediate irrigation required",
            action_required=True,
        ))
    if ndvi < 0.4 and health < 0.5:
        alerts.append(FieldAlert(
            type=AlertType.NUTRIENT_DEFICIENCY,
            severity=AlertSeverity.HIGH,
            message="Low vegetation index suggests nutrient deficiency",
            action_required=True,
        ))
    return alerts


def seasonal_recommendations(health: float, dry_season: bool) -> List[str]:
    """Recommendations for regional estimates made without imagery."""
    recommendations = [
        "Satellite analysis temporarily unavailable - using regional estimates",
        "Based on location and season, consider the following:",
    ]

    if dry_season:
        recommendations.append(
            "Dry season detected: Focus on water conservation and drought-resistant practices"
        )
        recommendations.append("Implement drip irrigation if possible to maximize water efficiency")
    else:
        recommendations.append("Wet season: Monitor for fungal diseases and ensure proper drainage")
        recommendations.append("Optimal time for planting and fertilizer application")

    if health < 0.5:
        recommendations.append("Regional conditions suggest potential crop stress")
        recommendations.append("Conduct field inspection and soil testing")

    return recommendations


def seasonal_alerts(health: float) -> List[FieldAlert]:
    if health >= 0.4:
        return []
    return [FieldAlert(
        type=AlertType.NUTRIENT_DEFICIENCY,
        severity=AlertSeverity.MEDIUM,
        message="Regional conditions suggest potential crop stress - field inspection recommended",
        action_required=True,
    )]
