"""Schemas for user reports."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..models.enums import ReportStatus
from .posts import PostSummaryResponse
from .users import UserSummary


class ReportCreateRequest(BaseModel):
    post_id: UUID
    reason: str = Field(min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=1000)


class ReportReviewRequest(BaseModel):
    status: ReportStatus
    admin_comment: str | None = Field(default=None, max_length=500)


class ReportResponse(BaseModel):
    id: UUID
    reason: str
    description: str | None = None
    status: ReportStatus
    report_date: datetime
    review_date: datetime | None = None
    reporter: UserSummary | None = None
    post: PostSummaryResponse


class ReportListResponse(BaseModel):
    total: int
    items: list[ReportResponse]


class ReportStatsResponse(BaseModel):
    pending: int
    reviewed: int
    rejected: int
    resolved: int


__all__ = [
    "ReportCreateRequest",
    "ReportReviewRequest",
    "ReportResponse",
    "ReportListResponse",
    "ReportStatsResponse",
]
