"""Schemas describing users as seen by the moderation APIs."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    first_name: str | None = None
    last_name: str | None = None
    active: bool = True
    role: str = "user"


class RoleUpdateRequest(BaseModel):
    role: str = Field(..., min_length=1, max_length=32)


__all__ = ["UserSummary", "RoleUpdateRequest"]
