"""API test fixtures — httpx client over the ASGI app with an isolated repository."""

import pytest
from httpx import ASGITransport, AsyncClient

from customer_registry.api.dependencies import get_repository
from customer_registry.infrastructure.memory_repository import InMemoryCustomerRepository
from customer_registry.main import app


@pytest.fixture
def api_repository():
    return InMemoryCustomerRepository()


@pytest.fixture
async def client(api_repository):
    app.dependency_overrides[get_repository] = lambda: api_repository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
