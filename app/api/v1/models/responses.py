"""
API response models using Pydantic.
"""
from pydantic import BaseModel, Field

from app.domain.models import AuthenticationStatus, DataSource


class SatelliteStatusResponse(BaseModel):
    """Response model for the satellite status endpoints."""
    status: AuthenticationStatus = Field(
        description="Availability records for each satellite source"
    )
    best_source: DataSource = Field(
        description="Advisory best source; the cascade still falls through on failure"
    )
    summary: str = Field(
        description="Human-readable status summary"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "status": {
                    "sentinel_hub": {
                        "configured": False,
                        "authenticated": False,
                        "error": "Sentinel Hub credentials not configured",
                        "last_check": "2024-06-01T08:00:00Z",
                    },
                    "nasa_modis": {"available": True, "last_check": "2024-06-01T08:00:00Z"},
                    "landsat": {"available": True, "last_check": "2024-06-01T08:00:00Z"},
                },
                "best_source": "secondary",
                "summary": "Satellite Authentication Status: ...",
            }
        }
