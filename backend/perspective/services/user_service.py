"""User Service — business rules between the HTTP boundary and the gateway.

Invariants:
    - Only this layer assigns id (uuid4) and created_at (UTC, millisecond precision)
    - find_by_id is the single place existence is enforced (UserNotFoundError)
    - update_user looks the user up first, so a missing target fails like a read
    - delete_user has no existence pre-check: unknown id returns False
    - Input reaching here is already validated; nothing is re-validated

Design Decisions:
    - uuid4 draws from os.urandom: collision-free in practice without a store round-trip
    - created_at truncated to milliseconds: BSON dates keep ms, so a read-back
      compares equal to what create_user returned
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Mapping

from perspective.core.domain_types import (
    DEFAULT_LIMIT, DEFAULT_PAGE, SortField, UserId,
)
from perspective.core.errors import UserNotFoundError
from perspective.core.merge_user import merge_user
from perspective.core.repository_protocols import UserStore
from perspective.models.user import User, UserPage


def new_user_id() -> UserId:
    return UserId(str(uuid.uuid4()))


def current_timestamp() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class UserService:
    """Orchestrates gateway calls for user CRUD."""

    def __init__(self, repository: UserStore, logger: logging.Logger):
        self._repository = repository
        self._logger = logger.getChild("service.users")

    async def create_user(self, fields: Mapping[str, object]) -> User:
        """Stamp id and created_at on validated {name, email} and persist."""
        user = User(
            id=new_user_id(),
            name=fields["name"],
            email=fields["email"],
            created_at=current_timestamp(),
        )
        created = await self._repository.create(user)
        self._logger.info(f"Created user {created.id}", extra={"user_id": created.id})
        return created

    async def find_by_id(self, user_id: UserId) -> User:
        user = await self._repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_user(
        self, user_id: UserId, fields: Mapping[str, object],
    ) -> User:
        """Merge partial fields over the existing user and persist the full record."""
        existing = await self.find_by_id(user_id)
        updated = await self._repository.update(merge_user(existing, fields))
        self._logger.info(f"Updated user {user_id}", extra={"user_id": user_id})
        return updated

    async def delete_user(self, user_id: UserId) -> bool:
        deleted = await self._repository.delete(user_id)
        self._logger.info(
            f"Delete user {user_id}: {'removed' if deleted else 'absent'}",
            extra={"user_id": user_id},
        )
        return deleted

    async def list_users(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        sort: SortField | None = None,
    ) -> UserPage:
        return await self._repository.list(page, limit, sort)
