"""Pydantic schemas for post and comment resources."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .users import UserSummary


class PostCreate(BaseModel):
    """Payload used by API clients when constructing a post."""

    content: str = Field(..., min_length=1, max_length=1000)


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    author_id: UUID
    content: str
    created_at: datetime


class PostSummaryResponse(BaseModel):
    """Minimal post view embedded in report payloads.

    ``exists`` is false both for orphaned reports and for references whose row
    disappeared outside the normal deletion path.
    """

    id: UUID
    content: str
    author: UserSummary | None = None
    exists: bool


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=500)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    post_id: UUID
    author_id: UUID
    content: str
    created_at: datetime


__all__ = [
    "PostCreate",
    "PostResponse",
    "PostSummaryResponse",
    "CommentCreate",
    "CommentResponse",
]
