import pytest
from unittest.mock import patch
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.seed import SEED_CLIENT_ID
from conftest import BILLING_SECRET

CLIENT_HEADERS = {"X-User-Id": SEED_CLIENT_ID}


@pytest.mark.asyncio
async def test_health_no_api_key_required():
    """Health endpoint is always accessible, even with API_KEY configured."""
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_protected_routes_no_key_configured():
    """When API_KEY is empty, routes only need the caller's identity."""
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = ""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            plans = await client.get("/api/v1/plans")
            vehicles = await client.get("/api/v1/vehicles", headers=CLIENT_HEADERS)
        assert plans.status_code == 200
        assert vehicles.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, url",
    [
        ("GET", "/api/v1/plans"),
        ("GET", "/api/v1/vehicles"),
        ("GET", "/api/v1/service-requests"),
        ("GET", "/api/v1/subscriptions/me"),
    ],
)
async def test_protected_route_missing_key(method, url):
    """When API_KEY is set, request without header gets 403 even with an identity."""
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.request(method, url, headers=CLIENT_HEADERS)
        assert response.status_code == 403
        assert "API key" in response.json()["detail"]


@pytest.mark.asyncio
async def test_protected_route_correct_key():
    """When API_KEY is set, request with correct header succeeds."""
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(
                "/api/v1/subscriptions/me",
                headers={"X-API-Key": "secret123", **CLIENT_HEADERS},
            )
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_api_key_alone_cannot_sync_billing():
    """A client holding the shared API key still needs the billing token."""
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        mock_settings.billing_webhook_secret = BILLING_SECRET
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/v1/subscriptions/billing-sync",
                json={"user_id": SEED_CLIENT_ID, "tier": "premium"},
                headers={"X-API-Key": "secret123", **CLIENT_HEADERS},
            )
        assert response.status_code == 403
        assert "billing token" in response.json()["detail"]


@pytest.mark.asyncio
async def test_billing_sync_with_both_credentials():
    with patch("app.dependencies.settings") as mock_settings:
        mock_settings.api_key = "secret123"
        mock_settings.billing_webhook_secret = BILLING_SECRET
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/v1/subscriptions/billing-sync",
                json={"user_id": "ghost", "tier": "premium"},
                headers={"X-API-Key": "secret123", "X-Billing-Token": BILLING_SECRET},
            )
        # Past both guards; the unknown user is the only refusal.
        assert response.status_code == 404
