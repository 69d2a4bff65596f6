"""
Domain models for field geometry and satellite vegetation analysis.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, provider payloads, etc.).
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class GeoLocation(BaseModel):
    """A single WGS84 vertex."""
    lat: float = Field(description="Latitude in degrees")
    lng: float = Field(description="Longitude in degrees")

    class Config:
        frozen = True


class DataSource(str, Enum):
    """Provider tiers of the fallback cascade, in priority order."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    ESTIMATED = "estimated"


class MoistureStress(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class ProblemSeverity(str, Enum):
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class AlertType(str, Enum):
    WATER_STRESS = "water_stress"
    NUTRIENT_DEFICIENCY = "nutrient_deficiency"


class AlertSeverity(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class VegetationIndices(BaseModel):
    """Field-level vegetation indices."""
    ndvi: float = Field(ge=-1.0, le=1.0, description="Normalized Difference Vegetation Index")
    evi: float = Field(ge=0.0, le=1.0, description="Enhanced Vegetation Index")
    savi: float = Field(ge=0.0, le=1.0, description="Soil Adjusted Vegetation Index")
    ndmi: float = Field(ge=0.0, le=1.0, description="Normalized Difference Moisture Index")


class ProblemArea(BaseModel):
    """Anomalous sub-location within the field."""
    lat: float
    lng: float
    ndvi: float
    severity: ProblemSeverity


class FieldAlert(BaseModel):
    """Actionable alert raised from the analysis."""
    type: AlertType
    severity: AlertSeverity
    message: str
    action_required: bool


class SoilAnalysis(BaseModel):
    """
    Provenance metadata for an analysis.

    Providers attach their own extra fields (e.g. ``ndvi_raw``); the
    orchestrator adds execution time, cost and fallback information.
    """
    data_source: str
    spatial_resolution: str
    confidence_score: float = Field(ge=0.0, le=100.0)
    analysis_date: datetime
    execution_time_ms: Optional[int] = Field(default=None, ge=0)
    api_cost_usd: Optional[float] = Field(default=None, ge=0.0)
    fallback_used: Optional[bool] = None
    source: Optional[DataSource] = None

    class Config:
        extra = "allow"


class FieldAnalysis(BaseModel):
    """Normalized vegetation-health analysis of a field."""
    field_health: float = Field(ge=0.0, le=1.0, description="Composite health score")
    vegetation_indices: VegetationIndices
    moisture_stress: MoistureStress
    yield_prediction: float = Field(ge=0.0, description="Estimated yield in tonnes/hectare")
    problem_areas: List[ProblemArea] = Field(default_factory=list)
    soil_analysis: SoilAnalysis
    recommendations: List[str] = Field(default_factory=list)
    alerts: List[FieldAlert] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DataSourceResult(BaseModel):
    """Outcome of a single provider attempt."""
    success: bool
    data: Optional[FieldAnalysis] = None
    error: Optional[str] = None
    source: DataSource
    execution_time: int = Field(ge=0, description="Attempt duration in milliseconds")
    cost: Optional[float] = Field(default=None, ge=0.0, description="Estimated cost in USD")

    @model_validator(mode="after")
    def check_outcome(self) -> "DataSourceResult":
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("A successful result carries data and no error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("A failed result carries an error and no data")
        return self


class SentinelHubStatus(BaseModel):
    configured: bool = False
    authenticated: bool = False
    error: Optional[str] = None
    last_check: datetime


class ProviderAvailability(BaseModel):
    available: bool = True
    last_check: datetime


class AuthenticationStatus(BaseModel):
    """Availability of each satellite data source."""
    sentinel_hub: SentinelHubStatus
    nasa_modis: ProviderAvailability
    landsat: ProviderAvailability
