"""MongoDatabase — lifecycle without a live server."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from perspective.infrastructure.database import MongoDatabase


async def test_health_check_is_false_before_connect(settings, logger):
    assert await MongoDatabase(settings, logger).health_check() is False


def test_client_before_connect_raises(settings, logger):
    with pytest.raises(RuntimeError):
        MongoDatabase(settings, logger).client


async def test_close_before_connect_is_a_no_op(settings, logger):
    await MongoDatabase(settings, logger).close()


async def test_health_check_reports_ping_failure(settings, logger):
    database = MongoDatabase(settings, logger)
    client = MagicMock()
    client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
    database._client = client
    assert await database.health_check() is False


def test_collection_uses_configured_names(settings, logger):
    database = MongoDatabase(settings, logger)
    client = MagicMock()
    database._client = client
    database.collection()
    client.__getitem__.assert_called_once_with("perspective")
    client.__getitem__.return_value.__getitem__.assert_called_once_with("users")
