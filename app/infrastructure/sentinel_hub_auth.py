"""
Infrastructure layer: Sentinel Hub OAuth2 client-credentials token manager.
"""
import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)

from app.config import settings
from app.infrastructure.api_constants import APIConstants, SentinelHubEndpoints
from app.infrastructure.external_api_client import ExternalAPIError
from app.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    """Retry on transport errors and server errors (5xx) only."""
    if isinstance(exc, httpx.RequestError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


class SentinelHubAuth:
    """
    Holds the bearer token used for Sentinel Hub requests.

    The token is fetched with the client-credentials grant and considered
    valid until ``expires_in`` minus a safety buffer. ``initialize`` never
    raises; a failed exchange leaves the manager unconfigured so the
    satellite cascade simply skips the primary provider.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        clock: Clock = utc_now,
    ):
        self.client_id = settings.sentinel_hub_client_id if client_id is None else client_id
        self.client_secret = (
            settings.sentinel_hub_client_secret if client_secret is None else client_secret
        )
        self.base_url = base_url or settings.sentinel_hub_base_url
        self._clock = clock
        self._token: Optional[str] = None
        self._token_expiry: Optional[datetime] = None
        self._initialized = False
        self._refresh_lock = asyncio.Lock()
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.request_timeout,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception(_is_retryable),
        reraise=True,
    )
    async def _request_token(self) -> Dict[str, Any]:
        response = await self.client.post(
            SentinelHubEndpoints.OAUTH_TOKEN,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
            headers={"Content-Type": APIConstants.CONTENT_TYPE_FORM},
        )
        response.raise_for_status()
        return response.json()

    async def initialize(self) -> bool:
        """
        Exchange the client credentials for an access token.

        The held token stays readable while the exchange is in flight and
        is replaced or cleared only once it completes.

        Returns:
            True if a token was obtained
        """
        if not self.has_credentials:
            self._clear_token()
            logger.warning("Sentinel Hub credentials not configured - using fallback satellite services")
            return False

        try:
            token_data = await self._request_token()
            expires_in = int(token_data["expires_in"])
            token = token_data["access_token"]
        except httpx.HTTPStatusError as e:
            self._clear_token()
            logger.warning(f"Sentinel Hub auth failed: {e.response.status_code}")
            return False
        except (httpx.RequestError, KeyError, TypeError, ValueError) as e:
            self._clear_token()
            logger.warning(f"Sentinel Hub auth initialization failed: {str(e)}")
            return False

        buffer = settings.sentinel_hub_token_expiry_buffer
        self._token = token
        self._token_expiry = self._clock() + timedelta(seconds=expires_in - buffer)
        self._initialized = True
        logger.info("Sentinel Hub authentication initialized")
        return True

    def _clear_token(self):
        self._initialized = False
        self._token = None
        self._token_expiry = None

    def is_configured(self) -> bool:
        """Whether a non-expired token is available."""
        return (
            self._initialized
            and self._token is not None
            and self._token_expiry is not None
            and self._token_expiry > self._clock()
        )

    async def refresh_if_needed(self) -> bool:
        """
        Re-acquire the token when it is missing or expired.

        Concurrent callers share a single token exchange.

        Returns:
            Whether a valid token is available afterwards
        """
        if self.is_configured():
            return True
        if not self.has_credentials:
            return False
        async with self._refresh_lock:
            if self.is_configured():
                return True
            return await self.initialize()

    def auth_headers(self) -> Dict[str, str]:
        """
        Authorization header for Sentinel Hub requests.

        Raises:
            ExternalAPIError: If no valid token is available
        """
        if not self.is_configured():
            raise ExternalAPIError(
                "Sentinel Hub auth not initialized. Call initialize() first."
            )
        return {"Authorization": f"Bearer {self._token}"}

    def status(self) -> Dict[str, Any]:
        """Snapshot of the token state."""
        seconds_left = None
        if self._token_expiry is not None:
            seconds_left = (self._token_expiry - self._clock()).total_seconds()
        return {
            "is_initialized": self._initialized,
            "has_token": self._token is not None,
            "token_expiry": self._token_expiry,
            "seconds_until_expiry": seconds_left,
        }


# Singleton instance
_sentinel_hub_auth: Optional[SentinelHubAuth] = None


def get_sentinel_hub_auth() -> SentinelHubAuth:
    """
    Get or create the singleton Sentinel Hub token manager.

    Returns:
        SentinelHubAuth instance
    """
    global _sentinel_hub_auth
    if _sentinel_hub_auth is None:
        _sentinel_hub_auth = SentinelHubAuth()
    return _sentinel_hub_auth
