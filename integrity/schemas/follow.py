"""Schemas supporting follower APIs."""
from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from .users import UserSummary


class FollowStatsResponse(BaseModel):
    user_id: UUID
    followers: int
    followed: int
    follows: bool
    follows_you: bool


class FollowActionResponse(FollowStatsResponse):
    status: Literal["followed", "unfollowed"]


class FollowEdgeResponse(BaseModel):
    user: UserSummary
    follow_date: datetime


class FollowListResponse(BaseModel):
    total: int
    items: list[FollowEdgeResponse]


__all__ = ["FollowStatsResponse", "FollowActionResponse", "FollowEdgeResponse", "FollowListResponse"]
