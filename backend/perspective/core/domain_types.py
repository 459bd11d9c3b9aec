"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the canonical (lowercase, hyphenated) UUID string
    - SortField values are document keys as stored, never API parameter names
    - Pagination defaults live here only (page 1, limit 10)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to store queries without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


# ─── Pagination ──────────────────────────────────────────────────

DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 10


class SortField(str, Enum):
    """Document keys a listing may be sorted by (ascending)."""
    CREATED_AT = "createdAt"
    NAME = "name"
    EMAIL = "email"


# ─── Lookup Properties ───────────────────────────────────────────

class UserProperty(str, Enum):
    """Non-identity document keys accepted by find_by."""
    NAME = "name"
    EMAIL = "email"
    CREATED_AT = "createdAt"
