"""
API endpoint constants and configuration.

This module contains all external API endpoint paths and related constants.
Centralizing these values makes it easy to swap out endpoints or update API versions.
"""

# Sentinel Hub API Endpoints
class SentinelHubEndpoints:
    """Sentinel Hub endpoint paths."""

    OAUTH_TOKEN = "/oauth/token"
    STATISTICS = "/api/v1/statistics"
    WMS_INSTANCES = "/configuration/v1/wms/instances"

    # Collection and band-math identifiers used in statistics requests
    COLLECTION = "sentinel-2-l2a"
    AGGREGATION_INTERVAL = "P1D"


# NASA ORNL DAAC MODIS web service
class ModisEndpoints:
    """MODIS web service endpoint paths."""

    SUBSET = "/rst/api/v1/{product}/subset"

    @classmethod
    def get_subset(cls, product: str) -> str:
        """
        Get the subset endpoint for a MODIS product.

        Args:
            product: Product short name, e.g. MOD13Q1

        Returns:
            Formatted endpoint path
        """
        return cls.SUBSET.format(product=product)


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"
    CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

    # Timeouts (in seconds)
    DEFAULT_TIMEOUT = 30.0
    LIVENESS_TIMEOUT = 10.0
