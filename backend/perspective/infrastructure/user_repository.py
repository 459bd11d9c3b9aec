"""User Repository — Persistence Gateway over one document collection.

Invariants:
    - Documents are keyed by the business id field, never by the store's _id
    - _id is projected out of every read, so it never reaches a caller
    - update() strips id from the $set patch and uses it only as the filter
    - Absence is a value (None / False), never an exception
    - Every driver failure is re-raised as StorageError (core/errors.py)
    - No business field is invented or altered here

Design Decisions:
    - total comes from a separate count_documents({}) over the whole collection,
      so it does not depend on the requested window
    - Unique index on id created at startup: duplicate ids fail in the store
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from perspective.core.domain_types import SortField, UserId, UserProperty
from perspective.core.errors import StorageError
from perspective.core.repository_protocols import DocumentCollection
from perspective.models.user import User, UserPage

_EXCLUDE_INTERNAL_ID = {"_id": 0}


class UserRepository:
    """CRUD against the users collection."""

    def __init__(self, collection: DocumentCollection, logger: logging.Logger):
        self._collection = collection
        self._logger = logger.getChild("data.users")

    @contextmanager
    def _storage_operation(self, operation: str) -> Iterator[None]:
        """Map driver exceptions to StorageError."""
        try:
            yield
        except PyMongoError as e:
            self._logger.error(
                f"MongoDB {operation} failed: {e}", extra={"operation": operation},
            )
            raise StorageError.from_exception(e, operation) from e

    async def ensure_indexes(self) -> None:
        with self._storage_operation("create_index"):
            await self._collection.create_index("id", unique=True)

    async def create(self, user: User) -> User:
        self._logger.debug(f"Creating user {user.id}", extra={"user_id": user.id})
        with self._storage_operation("insert"):
            # insert_one adds _id to the dict it is given; hand it a fresh one
            await self._collection.insert_one(user.to_document())
        return user

    async def update(self, user: User) -> User:
        self._logger.debug(f"Updating user {user.id}", extra={"user_id": user.id})
        patch = user.to_document()
        patch.pop("id", None)
        with self._storage_operation("update"):
            await self._collection.update_one({"id": user.id}, {"$set": patch})
        return user

    async def delete(self, user_id: UserId) -> bool:
        self._logger.debug(f"Deleting user {user_id}", extra={"user_id": user_id})
        with self._storage_operation("delete"):
            result = await self._collection.delete_one({"id": user_id})
        return result.deleted_count == 1

    async def find_by(self, prop: UserProperty | str, value: object) -> User | None:
        key = UserProperty(prop).value
        self._logger.debug(f"Finding user by {key} with value {value}")
        with self._storage_operation("find"):
            document = await self._collection.find_one(
                {key: value}, _EXCLUDE_INTERNAL_ID,
            )
        return _to_user(document)

    async def find_by_id(self, user_id: UserId) -> User | None:
        self._logger.debug(f"Finding user by id {user_id}", extra={"user_id": user_id})
        with self._storage_operation("find"):
            document = await self._collection.find_one(
                {"id": user_id}, _EXCLUDE_INTERNAL_ID,
            )
        return _to_user(document)

    async def list(
        self, page: int, limit: int, sort: SortField | str | None = None,
    ) -> UserPage:
        """One page of users, optionally sorted ascending by a document key."""
        self._logger.debug(f"Listing users page={page} limit={limit} sort={sort}")
        with self._storage_operation("find"):
            cursor = self._collection.find({}, _EXCLUDE_INTERNAL_ID)
            if sort is not None:
                cursor = cursor.sort(SortField(sort).value, ASCENDING)
            cursor = cursor.skip((page - 1) * limit).limit(limit)
            documents = await cursor.to_list()
        with self._storage_operation("count"):
            total = await self._collection.count_documents({})
        self._logger.debug(f"Found {len(documents)} users")
        return UserPage(
            page=page,
            from_=(page - 1) * limit,
            to=page * limit,
            total=total,
            results=[_to_user(d) for d in documents],
        )


def _to_user(document: dict | None) -> User | None:
    if document is None:
        return None
    document = {k: v for k, v in document.items() if k != "_id"}
    return User.model_validate(document)
