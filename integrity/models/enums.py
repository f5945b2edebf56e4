"""Enumerations shared by the ORM models, schemas and services."""
from __future__ import annotations

import enum


class ReactionType(str, enum.Enum):
    # Only LIKE is offered today; the registry already handles type replacement.
    LIKE = "LIKE"


class ReportStatus(str, enum.Enum):
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    REJECTED = "REJECTED"
    RESOLVED = "RESOLVED"


class ActionType(str, enum.Enum):
    """Kinds of administrative operations recorded in the audit log."""

    ACTIVATE_USER = "ACTIVATE_USER"
    DEACTIVATE_USER = "DEACTIVATE_USER"
    UPDATE_USER = "UPDATE_USER"
    UPDATE_ROLE = "UPDATE_ROLE"
    DELETE_USER = "DELETE_USER"
    DELETE_POST = "DELETE_POST"
    DELETE_COMMENT = "DELETE_COMMENT"
    REVIEW_REPORT = "REVIEW_REPORT"
    RESOLVE_REPORT = "RESOLVE_REPORT"
    REJECT_REPORT = "REJECT_REPORT"
    CREATE_ADMIN = "CREATE_ADMIN"
    DELETE_ADMIN = "DELETE_ADMIN"


class TargetKind(str, enum.Enum):
    """Entity kinds an administrative action can point at."""

    USER = "USER"
    POST = "POST"
    REPORT = "REPORT"
    COMMENT = "COMMENT"

    @property
    def table_name(self) -> str:
        return _TABLE_NAMES[self]


_TABLE_NAMES = {
    TargetKind.USER: "users",
    TargetKind.POST: "posts",
    TargetKind.REPORT: "reports",
    TargetKind.COMMENT: "comments",
}


__all__ = ["ReactionType", "ReportStatus", "ActionType", "TargetKind"]
