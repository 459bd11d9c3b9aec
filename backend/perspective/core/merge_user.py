"""User Merge — pure partial-update semantics for the update flow.

Invariants:
    - merge_user is PURE: returns a new User, never mutates its inputs
    - id and created_at are never taken from the patch
    - Keys absent from the patch keep their existing values

Design Decisions:
    - Separated from the service: update semantics testable without any store
"""

from typing import Mapping

from perspective.models.user import User

IMMUTABLE_FIELDS: frozenset[str] = frozenset({"id", "created_at", "createdAt"})


def merge_user(existing: User, patch: Mapping[str, object]) -> User:
    """Overlay patch fields on an existing user, returning the full record."""
    changes = {
        key: value for key, value in patch.items()
        if key not in IMMUTABLE_FIELDS and key in User.model_fields
    }
    return existing.model_copy(update=changes)
