"""Document Models — pydantic models for entities persisted in the document store.

Invariants:
    - Field names on the wire and in the store use the camelCase aliases (createdAt)
    - User is frozen: updates produce new instances (see core.merge_user)

Design Decisions:
    - One file per entity for locality
"""

from perspective.models.user import User, UserPage  # noqa: F401
