"""Schemas for post reactions."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ..models.enums import ReactionType


class ReactionRequest(BaseModel):
    reaction_type: ReactionType = ReactionType.LIKE


class ReactionStateResponse(BaseModel):
    """Result of a toggle so clients can re-render without a second read."""

    model_config = ConfigDict(from_attributes=True)

    post_id: UUID
    reacted: bool
    reaction_type: ReactionType | None = None
    like_count: int
    total_count: int


class ReactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: ReactionType
    created_at: datetime
    user_id: UUID
    post_id: UUID


class ReactionListResponse(BaseModel):
    total: int
    items: list[ReactionResponse]


class ReactionSummaryResponse(BaseModel):
    post_id: UUID
    counts: dict[ReactionType, int]
    total: int


__all__ = [
    "ReactionRequest",
    "ReactionStateResponse",
    "ReactionResponse",
    "ReactionListResponse",
    "ReactionSummaryResponse",
]
