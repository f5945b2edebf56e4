"""Convenience exports for ORM models."""
from .admin_action import AdminAction, AuditLogImmutableError
from .enums import ActionType, ReactionType, ReportStatus, TargetKind
from .follow import Follow
from .post import Comment, Post
from .reaction import Reaction
from .report import Report
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "ActionType",
    "AdminAction",
    "AuditLogImmutableError",
    "Comment",
    "Follow",
    "Post",
    "Reaction",
    "ReactionType",
    "Report",
    "ReportStatus",
    "ROLE_ADMIN",
    "ROLE_USER",
    "TargetKind",
    "User",
]
