"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so the pymongo collection, a test
      fake and an AsyncMock all satisfy the same contract
    - DocumentCursor.to_list and every collection method except find are async;
      find returns a cursor synchronously, mirroring the async Mongo driver
"""

from typing import Any, Mapping, Protocol

from perspective.core.domain_types import SortField, UserId, UserProperty
from perspective.models.user import User, UserPage


class DocumentCursor(Protocol):
    """Chainable result window over a find() query."""
    def sort(self, key: str, direction: int = 1) -> "DocumentCursor": ...
    def skip(self, count: int) -> "DocumentCursor": ...
    def limit(self, count: int) -> "DocumentCursor": ...
    async def to_list(self, length: int | None = None) -> list[dict]: ...


class DocumentCollection(Protocol):
    """Outbound store interface the Persistence Gateway requires."""
    async def insert_one(self, document: dict) -> Any: ...
    async def update_one(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> Any: ...
    async def delete_one(self, filter: Mapping[str, Any]) -> Any: ...
    async def find_one(
        self, filter: Mapping[str, Any], projection: Mapping[str, Any] | None = None,
    ) -> dict | None: ...
    def find(
        self, filter: Mapping[str, Any], projection: Mapping[str, Any] | None = None,
    ) -> DocumentCursor: ...
    async def count_documents(self, filter: Mapping[str, Any]) -> int: ...
    async def create_index(self, keys: Any, **kwargs: Any) -> str: ...


class UserStore(Protocol):
    """Contract for user persistence — implemented by the Persistence Gateway."""
    async def create(self, user: User) -> User: ...
    async def update(self, user: User) -> User: ...
    async def delete(self, user_id: UserId) -> bool: ...
    async def find_by(self, prop: UserProperty, value: object) -> User | None: ...
    async def find_by_id(self, user_id: UserId) -> User | None: ...
    async def list(
        self, page: int, limit: int, sort: SortField | None = None,
    ) -> UserPage: ...
