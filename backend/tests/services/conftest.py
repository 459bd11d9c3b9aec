"""Service test fixtures — gateway replaced by an AsyncMock.

Invariants:
    - Every test gets a fresh mock repository (no call counts leak across tests)
    - create/update echo their argument, like the real gateway
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from perspective.services.user_service import UserService


@pytest.fixture
def mock_repository():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda user: user)
    repo.update = AsyncMock(side_effect=lambda user: user)
    repo.delete = AsyncMock(return_value=True)
    repo.find_by_id = AsyncMock(return_value=None)
    repo.list = AsyncMock()
    return repo


@pytest.fixture
def service(mock_repository, logger):
    return UserService(mock_repository, logger)
