"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Sentinel Hub (primary, high-resolution provider)
    sentinel_hub_base_url: str = Field(
        default="https://services.sentinel-hub.com",
        description="Base URL for the Sentinel Hub services"
    )
    sentinel_hub_client_id: str = Field(
        default="",
        description="OAuth client ID for Sentinel Hub"
    )
    sentinel_hub_client_secret: str = Field(
        default="",
        description="OAuth client secret for Sentinel Hub"
    )
    sentinel_hub_lookback_days: int = Field(
        default=14,
        description="Days of imagery to aggregate in a statistics request"
    )
    sentinel_hub_max_cloud_coverage: int = Field(
        default=20,
        description="Maximum acceptable scene cloud coverage in percent"
    )
    sentinel_hub_request_cost_usd: float = Field(
        default=0.05,
        description="Estimated cost of one statistics request in USD"
    )
    sentinel_hub_token_expiry_buffer: int = Field(
        default=60,
        description="Seconds subtracted from the token lifetime before refreshing"
    )

    # NASA MODIS (secondary, free provider)
    modis_base_url: str = Field(
        default="https://modis.ornl.gov",
        description="Base URL for the ORNL DAAC MODIS web service"
    )
    modis_product: str = Field(
        default="MOD13Q1",
        description="MODIS vegetation index product"
    )
    modis_start_date: str = Field(
        default="A2024001",
        description="Subset start date in AYYYYDDD format"
    )
    modis_end_date: str = Field(
        default="A2024365",
        description="Subset end date in AYYYYDDD format"
    )
    modis_km_above_below: int = Field(
        default=1,
        description="Subset half-height in kilometres"
    )
    modis_km_left_right: int = Field(
        default=1,
        description="Subset half-width in kilometres"
    )
    modis_ndvi_scale_factor: float = Field(
        default=10000.0,
        description="Scale factor applied to MODIS NDVI values"
    )

    # HTTP
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for outbound HTTP requests"
    )

    # Retry Configuration (OAuth token requests only)
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of attempts for token requests"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=1,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=8,
        description="Maximum wait time in seconds between retries"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="CropGenius Satellite Intelligence",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
