"""Root conftest: shared settings, pooled clients and the in-process API client.

Invariants:
    - Tests never use real API keys (fake keys set before the app is imported)
    - Every test gets explicit Settings injected through dependency_overrides
    - Outbound traffic goes through real httpx clients so respx can intercept it
"""

import os

# Ensure tests don't accidentally use real API keys
os.environ.setdefault("FSQ_API_KEY", "fsq-test-fake-key")
os.environ.setdefault("OPENROUTER_API_KEY", "or-test-fake-key")
os.environ.setdefault("GEMINI_API_KEY", "gemini-test-fake-key")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from tripgate.api.dependencies import get_api_client, get_page_client  # noqa: E402
from tripgate.config import Settings, get_settings  # noqa: E402
from tripgate.infrastructure.upstream_client import (  # noqa: E402
    UpstreamClient,
    create_api_http_client,
    create_page_http_client,
)
from tripgate.main import app  # noqa: E402

from tests.factories import make_settings  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
async def http_clients(settings):
    api = create_api_http_client(settings)
    page = create_page_http_client(settings)
    yield api, page
    await api.aclose()
    await page.aclose()


@pytest.fixture
async def client(settings, http_clients):
    """FastAPI test client with settings and outbound clients overridden."""
    api, page = http_clients
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_api_client] = lambda: UpstreamClient(api)
    app.dependency_overrides[get_page_client] = lambda: UpstreamClient(
        page, max_body_bytes=settings.og_max_page_bytes,
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
