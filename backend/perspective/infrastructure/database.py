"""Document Store Connection — async Mongo client lifecycle and health checks.

Invariants:
    - One AsyncMongoClient per MongoDatabase, created by connect(), released by close()
    - connect() fails fast with StorageError when the server is unreachable
    - health_check() never raises (readiness probes must answer)
    - Client is tz_aware: datetimes come back as UTC-aware values

Design Decisions:
    - Constructed by the bootstrap and passed down explicitly: no module singleton
    - pymongo's native async client over a thread-pool wrapper
"""

import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from perspective.config import Settings
from perspective.core.errors import StorageError


class MongoDatabase:
    """Owns the client connection for one configured database."""

    def __init__(self, settings: Settings, logger: logging.Logger):
        self._settings = settings
        self._logger = logger.getChild("data.mongodb")
        self._client: AsyncMongoClient | None = None

    @property
    def client(self) -> AsyncMongoClient:
        if self._client is None:
            raise RuntimeError("Database not connected")
        return self._client

    async def connect(self) -> None:
        """Create the client and verify the server answers."""
        self._logger.info("Creating connection to MongoDB")
        self._client = AsyncMongoClient(
            self._settings.mongodb_uri,
            tz_aware=True,
            serverSelectionTimeoutMS=self._settings.mongodb_timeout_ms,
        )
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            self._logger.error(f"MongoDB connection failed: {e}")
            await self.close()
            raise StorageError.from_exception(e, "connect")
        self._logger.info("Connection to MongoDB established")

    def collection(self, name: str | None = None) -> AsyncCollection:
        """Configured collection (or an explicitly named one) in the configured database."""
        db = self.client[self._settings.mongodb_dbname]
        return db[name or self._settings.mongodb_collection]

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            self._logger.error(f"MongoDB health check failed: {e}")
            return False

    async def close(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.close()
        self._logger.info("Connection to MongoDB closed")
