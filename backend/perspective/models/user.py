"""User Document — the sole persisted entity and the page descriptor for listings.

Invariants:
    - id is a UUID-formatted string assigned by the service, immutable thereafter
    - created_at (alias createdAt) is set once at creation, immutable thereafter
    - to_document() never contains the store's internal _id key
    - UserPage.total is the full collection count, independent of the window

Design Decisions:
    - populate_by_name: service code uses snake_case, store and API use createdAt
    - email kept as plain str here: format is validated at the HTTP boundary only
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A user as stored and as returned by the API."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    email: str
    created_at: datetime = Field(alias="createdAt")

    def to_document(self) -> dict:
        """Store representation: {id, name, email, createdAt}."""
        return self.model_dump(by_alias=True)


class UserPage(BaseModel):
    """Page descriptor returned by list operations."""
    model_config = ConfigDict(populate_by_name=True)

    page: int
    from_: int = Field(alias="from")
    to: int
    total: int
    results: list[User]
