"""
Infrastructure layer: shared async HTTP client for external satellite APIs.
"""
from typing import Any, Dict, Optional
import httpx

from app.config import settings
from app.infrastructure.api_constants import APIConstants


class ExternalAPIError(Exception):
    """Raised when an external API call fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BaseAPIClient:
    """
    Thin wrapper around ``httpx.AsyncClient``.

    Converts transport errors, non-2xx responses and undecodable bodies
    into ExternalAPIError. No retries: callers decide what a failure means.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = settings.request_timeout,
    ):
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers={"accept": APIConstants.CONTENT_TYPE_JSON, **(headers or {})},
            timeout=timeout,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs,
    ) -> Any:
        """
        Make an HTTP request and decode the JSON body.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Decoded JSON payload

        Raises:
            ExternalAPIError: If the request fails or the body is not JSON
        """
        try:
            response = await self.client.request(method, endpoint, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            raise ExternalAPIError(f"API request error: {str(e)}")

        try:
            return response.json()
        except ValueError as e:
            raise ExternalAPIError(f"Malformed JSON response from {endpoint}: {str(e)}")
