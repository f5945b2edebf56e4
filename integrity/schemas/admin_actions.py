"""Schemas for the administrative audit log."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ..models.enums import ActionType, TargetKind


class AdminActionResponse(BaseModel):
    """Audit entry as presented to moderators.

    ``admin_*`` fields reflect the administrator's current profile (``"N/A"`` once
    the account is gone) while ``affected_*`` fields are the values captured when
    the action happened.
    """

    id: UUID
    action_type: ActionType
    reason: str | None = None
    description: str
    action_date: datetime

    target_kind: TargetKind
    target_id: UUID
    target_table: str

    admin_id: UUID
    admin_username: str
    admin_first_name: str | None = None
    admin_last_name: str | None = None
    recorded_admin_username: str

    affected_user_id: UUID | None = None
    affected_username: str | None = None
    affected_first_name: str | None = None
    affected_last_name: str | None = None


class AdminActionListResponse(BaseModel):
    total: int
    items: list[AdminActionResponse]


__all__ = ["AdminActionResponse", "AdminActionListResponse"]
