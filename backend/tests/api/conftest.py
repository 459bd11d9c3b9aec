"""API test fixtures — ASGI app around a mocked or in-memory service.

Invariants:
    - Every test builds a fresh app through create_app (no module-level app)
    - client drives the app in-process through httpx ASGITransport
    - wired_client uses the real service and gateway over FakeCollection

Design Decisions:
    - raise_app_exceptions=False: the catch-all handler's 500 response is
      what the test asserts, not the re-raised exception
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from perspective.infrastructure.user_repository import UserRepository
from perspective.main import create_app
from perspective.services.user_service import UserService


@pytest.fixture
def mock_service():
    service = MagicMock()
    service.create_user = AsyncMock()
    service.find_by_id = AsyncMock()
    service.update_user = AsyncMock()
    service.delete_user = AsyncMock(return_value=True)
    service.list_users = AsyncMock()
    return service


def _client_for(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def client(settings, mock_service, logger):
    app = create_app(settings, mock_service, logger)
    async with _client_for(app) as c:
        yield c


@pytest.fixture
async def wired_client(settings, fake_collection, logger):
    service = UserService(UserRepository(fake_collection, logger), logger)
    app = create_app(settings, service, logger)
    async with _client_for(app) as c:
        yield c


@pytest.fixture
def healthy_database():
    database = MagicMock()
    database.health_check = AsyncMock(return_value=True)
    return database


@pytest.fixture
async def ready_client(settings, mock_service, logger, healthy_database):
    app = create_app(settings, mock_service, logger, healthy_database)
    async with _client_for(app) as c:
        yield c
