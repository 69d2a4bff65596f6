"""
API request models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from app.domain.models import GeoLocation


class FieldAnalysisRequest(BaseModel):
    """Request body for a field analysis."""
    coordinates: List[GeoLocation] = Field(
        min_length=3,
        description="Field boundary vertices; the ring may be open or closed"
    )
    farmer_id: Optional[str] = Field(
        default=None,
        description="Optional identifier of the requesting farmer"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "coordinates": [
                    {"lat": -1.2921, "lng": 36.8219},
                    {"lat": -1.2921, "lng": 36.8229},
                    {"lat": -1.2911, "lng": 36.8229},
                    {"lat": -1.2911, "lng": 36.8219},
                ],
                "farmer_id": "farmer-123",
            }
        }
