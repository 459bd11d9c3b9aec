"""Error Model — one tagged error type shared by every layer of the user pipeline.

Invariants:
    - Every error carries a code (str), a display name (str) and a kind (ErrorKind)
    - kind is the only discriminant the translation boundary looks at
    - http_status is derived from kind, never passed per call site
    - InvalidInputError always maps to 422 INVALID_INPUT with an errors[] list
    - StorageError and UnknownError share the UNKNOWN_ERROR code (500)

Design Decisions:
    - Single hierarchy with PerspectiveError base: one FastAPI handler catches all
      (ADR: uniform {code, message, name} envelope)
    - ValidationIssue as dataclass: transport-neutral field path, no pydantic import here
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class ErrorKind(str, Enum):
    """Discriminant for the translation boundary."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    UNKNOWN = "unknown"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE: 500,
    ErrorKind.UNKNOWN: 500,
}

# Location prefixes FastAPI prepends to request validation errors
_TRANSPORT_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})


@dataclass(frozen=True)
class ValidationIssue:
    """One failing field: path into the payload, human message, machine type."""
    path: list[str | int] = field(default_factory=list)
    message: str = ""
    type: str = "value_error"

    def to_dict(self) -> dict:
        return {"path": list(self.path), "message": self.message, "type": self.type}


class PerspectiveError(Exception):
    """Base exception for all user-pipeline errors."""

    def __init__(self, message: str, code: str, name: str, kind: ErrorKind):
        super().__init__(message)
        self.message = message
        self.code = code
        self.name = name
        self.kind = kind

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_response(self) -> dict[str, Any]:
        """Convert to the REST error envelope."""
        return {"code": self.code, "message": self.message, "name": self.name}


# ─── Boundary Errors (422) ──────────────────────────────────────

class InvalidInputError(PerspectiveError):
    """Malformed or missing input rejected at the HTTP boundary."""

    def __init__(self, issues: Iterable[ValidationIssue], message: str | None = None):
        self.issues = list(issues)
        super().__init__(
            message or _summarize(self.issues),
            "INVALID_INPUT", "ValidationError", ErrorKind.VALIDATION,
        )

    @classmethod
    def from_pydantic(cls, errors: Iterable[dict]) -> "InvalidInputError":
        """Build from pydantic / FastAPI error dicts (loc, msg, type)."""
        issues = []
        for error in errors:
            loc = list(error.get("loc", ()))
            if loc and loc[0] in _TRANSPORT_LOCATIONS:
                loc = loc[1:]
            issues.append(ValidationIssue(
                path=loc,
                message=str(error.get("msg", "")),
                type=str(error.get("type", "value_error")),
            ))
        return cls(issues)

    def to_response(self) -> dict[str, Any]:
        response = super().to_response()
        response["errors"] = [issue.to_dict() for issue in self.issues]
        return response


def _summarize(issues: list[ValidationIssue]) -> str:
    if not issues:
        return "Invalid input"
    parts = [
        f"{'.'.join(str(p) for p in issue.path) or '<root>'}: {issue.message}"
        for issue in issues
    ]
    return "Invalid input: " + "; ".join(parts)


# ─── Domain Errors (404) ────────────────────────────────────────

class UserNotFoundError(PerspectiveError):
    """Requested user does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found", "USER_NOT_FOUND", "UserNotFoundError",
            ErrorKind.NOT_FOUND,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500) ────────────────────────────────

class StorageError(PerspectiveError):
    """Document store operation failed."""

    def __init__(self, message: str, operation: str, name: str = "StorageError"):
        super().__init__(message, "UNKNOWN_ERROR", name, ErrorKind.STORAGE)
        self.operation = operation

    @classmethod
    def from_exception(cls, exc: BaseException, operation: str) -> "StorageError":
        """Wrap a driver failure, keeping its class name and message."""
        error = cls(str(exc) or type(exc).__name__, operation, type(exc).__name__)
        error.__cause__ = exc
        return error


class UnknownError(PerspectiveError):
    """Anything not anticipated by the pipeline."""

    def __init__(self, message: str, name: str = "Error"):
        super().__init__(message, "UNKNOWN_ERROR", name, ErrorKind.UNKNOWN)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UnknownError":
        error = cls(str(exc) or type(exc).__name__, type(exc).__name__)
        error.__cause__ = exc
        return error
