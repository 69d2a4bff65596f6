"""
Unit tests for the satellite availability tracker.

Tests cover:
- Sentinel Hub verification with and without credentials
- MODIS liveness check
- Advisory best-source selection
- Status snapshots and summary text
"""
import pytest
import httpx
import respx

from app.domain.models import DataSource
from app.infrastructure.sentinel_hub_auth import SentinelHubAuth
from app.infrastructure.sentinel_hub_client import SentinelHubClient
from app.services.application.satellite_auth_service import SatelliteAuthenticationService
from conftest import MODIS_URL, SENTINEL_URL, WET_SEASON_DATE, modis_subset_payload


TOKEN_URL = f"{SENTINEL_URL}/oauth/token"
WMS_URL = f"{SENTINEL_URL}/configuration/v1/wms/instances"
MODIS_SUBSET_URL = f"{MODIS_URL}/rst/api/v1/MOD13Q1/subset"


def build_service(modis_client, client_id="client", client_secret="secret"):
    auth = SentinelHubAuth(
        client_id=client_id,
        client_secret=client_secret,
        base_url=SENTINEL_URL,
        clock=lambda: WET_SEASON_DATE,
    )
    sentinel_client = SentinelHubClient(auth, base_url=SENTINEL_URL)
    return SatelliteAuthenticationService(
        sentinel_client=sentinel_client,
        modis_client=modis_client,
        clock=lambda: WET_SEASON_DATE,
    )


async def close_service(service):
    await service.sentinel_client.close()
    await service.modis_client.close()
    await service.auth.close()


# ============================================================
# Sentinel Hub Status Tests
# ============================================================

class TestSentinelHubCheck:
    """Tests for the Sentinel Hub record."""

    def test_initial_status(self, modis_client):
        """Before any check, only the credential-free sources are available."""
        service = build_service(modis_client)

        status = service.get_status()

        assert status.sentinel_hub.configured is False
        assert status.sentinel_hub.authenticated is False
        assert status.nasa_modis.available is True
        assert status.landsat.available is True
        assert status.sentinel_hub.last_check == WET_SEASON_DATE

    @pytest.mark.respx(assert_all_called=False)
    def test_primary_check_reads_held_token_only(self, respx_mock, modis_client):
        """Credentials without a token report unconfigured and fetch nothing."""
        token_route = respx_mock.post(TOKEN_URL).mock(return_value=httpx.Response(503))
        service = build_service(modis_client)

        assert service.is_primary_configured() is False
        assert service.is_primary_configured() is False
        assert not token_route.called

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_without_credentials(self, respx_mock, modis_client):
        token_route = respx_mock.post(TOKEN_URL)
        wms_route = respx_mock.get(WMS_URL)
        service = build_service(modis_client, client_id="", client_secret="")

        status = await service.check_status()

        assert status.sentinel_hub.configured is False
        assert status.sentinel_hub.authenticated is False
        assert status.sentinel_hub.error == "Sentinel Hub credentials not configured"
        assert not token_route.called
        assert not wms_route.called
        assert service.best_source() == DataSource.SECONDARY
        await close_service(service)

    @pytest.mark.asyncio
    @respx.mock
    async def test_authenticated(self, modis_client):
        respx.post(TOKEN_URL).mock(return_value=httpx.Response(
            200, json={"access_token": "abc", "expires_in": 3600}
        ))
        wms_route = respx.get(WMS_URL).mock(return_value=httpx.Response(200, json=[]))
        service = build_service(modis_client)

        status = await service.check_status()

        assert status.sentinel_hub.configured is True
        assert status.sentinel_hub.authenticated is True
        assert status.sentinel_hub.error is None
        assert wms_route.calls.last.request.headers["Authorization"] == "Bearer abc"
        assert service.best_source() == DataSource.PRIMARY
        assert service.is_primary_configured() is True
        await close_service(service)

    @pytest.mark.asyncio
    @respx.mock
    async def test_token_valid_but_verification_rejected(self, modis_client):
        respx.post(TOKEN_URL).mock(return_value=httpx.Response(
            200, json={"access_token": "abc", "expires_in": 3600}
        ))
        respx.get(WMS_URL).mock(return_value=httpx.Response(401, text="Unauthorized"))
        service = build_service(modis_client)

        status = await service.check_status()

        assert status.sentinel_hub.configured is True
        assert status.sentinel_hub.authenticated is False
        assert status.sentinel_hub.error.startswith("Authentication failed")
        assert service.best_source() == DataSource.SECONDARY
        await close_service(service)

    @pytest.mark.asyncio
    @respx.mock
    async def test_token_exchange_rejected(self, modis_client):
        route = respx.post(TOKEN_URL).mock(return_value=httpx.Response(401))
        service = build_service(modis_client)

        status = await service.check_status()

        assert status.sentinel_hub.configured is False
        assert service.is_primary_configured() is False
        assert route.call_count == 1
        await close_service(service)


# ============================================================
# MODIS Availability Tests
# ============================================================

class TestModisAvailability:
    """Tests for the MODIS record."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_available(self, modis_client):
        respx.get(MODIS_SUBSET_URL).mock(
            return_value=httpx.Response(200, json=modis_subset_payload(1))
        )
        service = build_service(modis_client, client_id="", client_secret="")

        assert await service.test_modis() is True
        assert service.get_status().nasa_modis.available is True
        await close_service(service)

    @pytest.mark.asyncio
    @respx.mock
    async def test_unavailable_falls_to_tertiary(self, modis_client):
        respx.get(MODIS_SUBSET_URL).mock(return_value=httpx.Response(500))
        service = build_service(modis_client, client_id="", client_secret="")

        assert await service.test_modis() is False

        assert service.get_status().nasa_modis.available is False
        assert service.best_source() == DataSource.TERTIARY
        await close_service(service)

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_check_status_resets_modis(self, respx_mock, modis_client):
        """check_status marks MODIS available without calling it."""
        modis_route = respx_mock.get(MODIS_SUBSET_URL).mock(return_value=httpx.Response(500))
        service = build_service(modis_client, client_id="", client_secret="")
        await service.test_modis()

        status = await service.check_status()

        assert status.nasa_modis.available is True
        assert modis_route.call_count == 1
        await close_service(service)


# ============================================================
# Snapshot and Summary Tests
# ============================================================

class TestStatusReporting:
    """Tests for snapshots and the summary text."""

    def test_status_is_a_copy(self, modis_client):
        service = build_service(modis_client)

        snapshot = service.get_status()
        snapshot.nasa_modis.available = False

        assert service.get_status().nasa_modis.available is True

    @pytest.mark.asyncio
    async def test_summary_without_credentials(self, modis_client):
        service = build_service(modis_client, client_id="", client_secret="")
        await service.check_status()

        summary = service.summary()

        assert "Sentinel Hub: Not Configured | Not Authenticated" in summary
        assert "NASA MODIS: Available" in summary
        assert "Best Source: SECONDARY" in summary
        assert "Sentinel Error: Sentinel Hub credentials not configured" in summary
        await close_service(service)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
