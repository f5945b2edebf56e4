"""Convenience exports for schema layer."""
from .admin_actions import AdminActionListResponse, AdminActionResponse
from .follow import FollowActionResponse, FollowEdgeResponse, FollowListResponse, FollowStatsResponse
from .posts import CommentCreate, CommentResponse, PostCreate, PostResponse, PostSummaryResponse
from .reactions import (
    ReactionListResponse,
    ReactionRequest,
    ReactionResponse,
    ReactionStateResponse,
    ReactionSummaryResponse,
)
from .reports import (
    ReportCreateRequest,
    ReportListResponse,
    ReportResponse,
    ReportReviewRequest,
    ReportStatsResponse,
)
from .users import RoleUpdateRequest, UserSummary

__all__ = [
    "AdminActionListResponse",
    "AdminActionResponse",
    "CommentCreate",
    "CommentResponse",
    "FollowActionResponse",
    "FollowEdgeResponse",
    "FollowListResponse",
    "FollowStatsResponse",
    "PostCreate",
    "PostResponse",
    "PostSummaryResponse",
    "ReactionListResponse",
    "ReactionRequest",
    "ReactionResponse",
    "ReactionStateResponse",
    "ReactionSummaryResponse",
    "ReportCreateRequest",
    "ReportListResponse",
    "ReportResponse",
    "ReportReviewRequest",
    "ReportStatsResponse",
    "RoleUpdateRequest",
    "UserSummary",
]
