"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserCreate.name: required, stripped, non-empty
    - UserCreate.email: required, valid email syntax
    - UserUpdate: same fields, every one optional, but a present field must
      still satisfy its type (null and non-string values rejected)

Design Decisions:
    - EmailStr over a hand-written regex: email-validator handles the syntax rules
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


def _strip_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("name cannot be empty or whitespace")
    return value


class UserCreate(BaseModel):
    """User creation payload."""
    name: str = Field(min_length=1)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)


class UserUpdate(BaseModel):
    """Partial user update payload."""
    name: str | None = Field(None, min_length=1)
    email: EmailStr | None = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Defaults are not validated, so this only fires for explicit nulls
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)

    def to_patch(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)
