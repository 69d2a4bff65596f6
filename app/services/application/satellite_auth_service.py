"""
Application service: tracks which satellite data sources can be used.
"""
import logging
from typing import Optional

from app.domain.models import (
    AuthenticationStatus,
    DataSource,
    ProviderAvailability,
    SentinelHubStatus,
)
from app.infrastructure.external_api_client import ExternalAPIError
from app.infrastructure.modis_client import ModisClient, get_modis_client
from app.infrastructure.sentinel_hub_client import SentinelHubClient, get_sentinel_hub_client
from app.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class SatelliteAuthenticationService:
    """
    In-memory availability records for the three satellite sources.

    ``best_source`` is advisory only; the fallback engine always walks the
    full cascade when a provider fails.
    """

    def __init__(
        self,
        sentinel_client: SentinelHubClient,
        modis_client: ModisClient,
        clock: Clock = utc_now,
    ):
        self.sentinel_client = sentinel_client
        self.modis_client = modis_client
        self._clock = clock
        now = clock()
        self._status = AuthenticationStatus(
            sentinel_hub=SentinelHubStatus(last_check=now),
            nasa_modis=ProviderAvailability(available=True, last_check=now),
            landsat=ProviderAvailability(available=True, last_check=now),
        )

    @property
    def auth(self):
        return self.sentinel_client.auth

    def get_status(self) -> AuthenticationStatus:
        return self._status.model_copy(deep=True)

    async def check_status(self) -> AuthenticationStatus:
        """
        Refresh all three records.

        Sentinel Hub is verified with a live authenticated request; MODIS
        and Landsat need no credentials and are marked available.
        """
        logger.info("Checking satellite authentication status...")
        await self._check_sentinel_hub()

        now = self._clock()
        self._status.nasa_modis = ProviderAvailability(available=True, last_check=now)
        self._status.landsat = ProviderAvailability(available=True, last_check=now)
        return self.get_status()

    async def _check_sentinel_hub(self) -> None:
        configured = await self.auth.refresh_if_needed()
        status = SentinelHubStatus(
            configured=configured,
            authenticated=False,
            last_check=self._clock(),
        )
        self._status.sentinel_hub = status

        if not configured:
            status.error = "Sentinel Hub credentials not configured"
            logger.warning("Sentinel Hub credentials not configured")
            return

        try:
            await self.sentinel_client.list_wms_instances()
        except ExternalAPIError as e:
            status.error = f"Authentication failed: {e.message}"
            logger.error(f"Sentinel Hub authentication failed: {e.message}")
            return

        status.authenticated = True
        logger.info("Sentinel Hub authentication successful")

    async def test_modis(self) -> bool:
        """
        Ping the MODIS web service and update its record.

        Returns:
            Whether the service is reachable
        """
        available = await self.modis_client.ping()
        self._status.nasa_modis = ProviderAvailability(
            available=available,
            last_check=self._clock(),
        )
        if available:
            logger.info("NASA MODIS API is available")
        else:
            logger.warning("NASA MODIS API test failed")
        return available

    def is_primary_configured(self) -> bool:
        """
        Whether the primary provider should be attempted.

        Reads the held token only. Acquiring or refreshing it happens at
        startup and in ``check_status``, never on the analysis path.
        """
        return self.auth.is_configured()

    def best_source(self) -> DataSource:
        sentinel = self._status.sentinel_hub
        if sentinel.configured and sentinel.authenticated:
            return DataSource.PRIMARY
        if self._status.nasa_modis.available:
            return DataSource.SECONDARY
        return DataSource.TERTIARY

    def summary(self) -> str:
        """Human-readable status summary for logs."""
        status = self._status
        sentinel = status.sentinel_hub

        def flag(value: bool, yes: str, no: str) -> str:
            return yes if value else no

        lines = [
            "Satellite Authentication Status:",
            f"  Sentinel Hub: {flag(sentinel.configured, 'Configured', 'Not Configured')} | "
            f"{flag(sentinel.authenticated, 'Authenticated', 'Not Authenticated')}",
            f"  NASA MODIS: {flag(status.nasa_modis.available, 'Available', 'Unavailable')}",
            f"  Landsat: {flag(status.landsat.available, 'Available', 'Unavailable')}",
            f"  Best Source: {self.best_source().value.upper()}",
        ]
        if sentinel.error:
            lines.append(f"  Sentinel Error: {sentinel.error}")
        return "\n".join(lines)


# Singleton instance
_auth_service: Optional[SatelliteAuthenticationService] = None


def get_satellite_auth_service() -> SatelliteAuthenticationService:
    """
    Get or create the singleton authentication service.

    Returns:
        SatelliteAuthenticationService instance
    """
    global _auth_service
    if _auth_service is None:
        _auth_service = SatelliteAuthenticationService(
            sentinel_client=get_sentinel_hub_client(),
            modis_client=get_modis_client(),
        )
    return _auth_service


async def initialize_satellite_authentication() -> AuthenticationStatus:
    """
    Startup routine: acquire a token, check every source, log a summary.

    Returns:
        AuthenticationStatus after the checks
    """
    logger.info("Initializing satellite authentication...")
    service = get_satellite_auth_service()
    await service.auth.initialize()
    await service.check_status()
    await service.test_modis()
    logger.info(service.summary())
    return service.get_status()
