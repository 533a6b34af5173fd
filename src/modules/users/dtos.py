"""User DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.

- ``RegisterUserDTO``: input for public registration.
- ``CallerDTO``: the authenticated caller as seen by domain services
  (identity + role only).
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.users.models import User


class RegisterUserDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str) -> str:
        v = v.strip()
        if not 2 <= len(v) <= 100:
            raise ValueError("Name must have between 2 and 100 characters.")
        return v

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Email must be valid.")
        return v

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must have at least 6 characters.")
        return v


class CallerDTO(BaseModel):
    """Identity and role of whoever is calling a use-case."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    role: str

    @classmethod
    def from_user(cls, user: User) -> CallerDTO:
        return cls(id=user.id, role=user.role)
