"""Pydantic request/response schemas for Users API."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator


class UserIn(BaseModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=150)
    phone: Optional[str] = Field(default=None, max_length=15)

    # Trim before the length constraints apply.
    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def _email_has_at(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v

    @field_validator("phone")
    @classmethod
    def _blank_phone_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class UserCreateIn(UserIn):
    """Body of POST /api/users."""


class UserUpdateIn(UserIn):
    """Body of PUT /api/users/{id}; overwrites name, email and phone."""


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str]
    created_at: datetime = Field(serialization_alias="createdAt")

    @field_serializer("created_at")
    def _created_at_utc(self, v: datetime) -> str:
        # Stores without zone support hand back naive UTC values.
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v.isoformat()
