import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from core.storage.memory.memory_dashboard_storage import MemoryDashboardStorage
from protocol._common.lifecycle import LifecycleDependencies
from tests.components._common import IntegrationTestClient


@pytest.fixture
def dashboard_storage() -> MemoryDashboardStorage:
    return MemoryDashboardStorage()


@pytest.fixture
async def test_api_server(dashboard_storage: MemoryDashboardStorage):
    from protocol.api.api_server import _lifespan, api  # pyright: ignore [reportPrivateUsage]

    # startup reuses the shared dependencies when they are already set
    LifecycleDependencies.shared = LifecycleDependencies(dashboard_storage)
    # making sure dependency overrides are cleared
    api.dependency_overrides = {}
    async with _lifespan(api):
        yield api
    LifecycleDependencies.shared = None


@pytest.fixture
async def test_api_client(test_api_server: FastAPI):
    # Manually trigger the lifespan events since ASGITransport doesn't do it automatically
    transport = ASGITransport(app=test_api_server)

    async with AsyncClient(
        transport=transport,
        base_url="http://0.0.0.0",
        headers={"X-User-Email": "user@example.com"},
    ) as api_client:
        yield IntegrationTestClient(api_client)
