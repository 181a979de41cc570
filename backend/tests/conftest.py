"""
Shared fixtures: credentials and fake upstream transports.
"""

import httpx
import pytest
from adpulse.config import get_settings
from adpulse.models import GoogleAdsCredentials


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def credentials():
    return GoogleAdsCredentials(
        refresh_token="1//refresh",
        client_id="client-id.apps.googleusercontent.com",
        client_secret="client-secret",
        developer_token="dev-token",
        customer_id="123-456-7890",
    )


def mock_http_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler(request)``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def fake_http():
    return mock_http_client
