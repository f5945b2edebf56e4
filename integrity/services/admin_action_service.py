"""Append-only audit log of administrative operations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import ActionType, AdminAction, TargetKind
from ..schemas import AdminActionListResponse, AdminActionResponse
from .identity_service import capture_identity, find_user
from .pagination import normalize_pagination

logger = logging.getLogger(__name__)

_DESCRIPTION_LIMIT = 500
_REASON_LIMIT = 1000


@dataclass(frozen=True, slots=True)
class AdminActionTarget:
    """Typed pointer to the entity an action was applied to.

    The pointed-to row may be deleted later; the target is kept as a value.
    """

    kind: TargetKind
    id: UUID

    @classmethod
    def user(cls, user_id: UUID) -> "AdminActionTarget":
        return cls(TargetKind.USER, user_id)

    @classmethod
    def post(cls, post_id: UUID) -> "AdminActionTarget":
        return cls(TargetKind.POST, post_id)

    @classmethod
    def report(cls, report_id: UUID) -> "AdminActionTarget":
        return cls(TargetKind.REPORT, report_id)

    @classmethod
    def comment(cls, comment_id: UUID) -> "AdminActionTarget":
        return cls(TargetKind.COMMENT, comment_id)

    @property
    def table_name(self) -> str:
        return self.kind.table_name


def _clip(text: str | None, limit: int) -> str | None:
    if text is None:
        return None
    return text if len(text) <= limit else text[: limit - 3] + "..."


def record_admin_action(
    db: Session,
    *,
    action_type: ActionType,
    admin_id: UUID,
    target: AdminActionTarget,
    description: str,
    reason: str | None = None,
    affected_user_id: UUID | None = None,
    commit: bool = True,
) -> AdminAction:
    """Append an audit entry, capturing admin and affected-user identities by value.

    Unresolvable identities are written as ``"N/A"`` instead of failing. With
    ``commit=False`` the entry is only flushed so it joins the caller's
    transaction.
    """

    admin_snapshot = capture_identity(find_user(db, admin_id))

    affected_username = affected_first_name = affected_last_name = None
    if affected_user_id is not None:
        affected_snapshot = capture_identity(find_user(db, affected_user_id))
        affected_username = affected_snapshot.username
        affected_first_name = affected_snapshot.first_name
        affected_last_name = affected_snapshot.last_name

    action = AdminAction(
        action_type=action_type,
        description=_clip(description, _DESCRIPTION_LIMIT) or "",
        reason=_clip(reason, _REASON_LIMIT),
        target_kind=target.kind,
        target_id=target.id,
        admin_id=admin_id,
        admin_username=admin_snapshot.username,
        admin_first_name=admin_snapshot.first_name,
        admin_last_name=admin_snapshot.last_name,
        affected_user_id=affected_user_id,
        affected_username=affected_username,
        affected_first_name=affected_first_name,
        affected_last_name=affected_last_name,
    )
    db.add(action)

    if not commit:
        db.flush()
        logger.debug("Queued admin action %s on %s %s", action_type.value, target.kind.value, target.id)
        return action

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to record admin action %s by %s", action_type.value, admin_id)
        raise

    logger.info(
        "Admin action recorded (id=%s, type=%s, admin=%s)",
        action.id,
        action_type.value,
        admin_snapshot.username,
    )
    return action


def admin_action_to_response(db: Session, action: AdminAction) -> AdminActionResponse:
    """Render an entry with the admin's current identity and the captured affected user."""

    current_admin = capture_identity(find_user(db, action.admin_id))
    target_kind = TargetKind(action.target_kind)
    return AdminActionResponse(
        id=action.id,
        action_type=action.action_type,
        reason=action.reason,
        description=action.description,
        action_date=action.action_date,
        target_kind=target_kind,
        target_id=action.target_id,
        target_table=target_kind.table_name,
        admin_id=action.admin_id,
        admin_username=current_admin.username,
        admin_first_name=current_admin.first_name,
        admin_last_name=current_admin.last_name,
        recorded_admin_username=action.admin_username,
        affected_user_id=action.affected_user_id,
        affected_username=action.affected_username,
        affected_first_name=action.affected_first_name,
        affected_last_name=action.affected_last_name,
    )


def get_admin_action(db: Session, *, action_id: UUID) -> AdminAction:
    action = db.get(AdminAction, action_id)
    if action is None:
        raise NotFoundError("Admin action not found")
    return action


def list_admin_actions(
    db: Session,
    *,
    action_type: ActionType | None = None,
    admin_id: UUID | None = None,
    skip: int | None = None,
    limit: int | None = None,
) -> AdminActionListResponse:
    safe_skip, safe_limit = normalize_pagination(skip, limit)

    filters = []
    if action_type is not None:
        filters.append(AdminAction.action_type == action_type)
    if admin_id is not None:
        filters.append(AdminAction.admin_id == admin_id)

    total = int(db.scalar(select(func.count(AdminAction.id)).where(*filters)) or 0)
    rows = db.scalars(
        select(AdminAction)
        .where(*filters)
        .order_by(AdminAction.action_date.desc())
        .offset(safe_skip)
        .limit(safe_limit)
    ).all()
    return AdminActionListResponse(total=total, items=[admin_action_to_response(db, row) for row in rows])


__all__ = [
    "AdminActionTarget",
    "record_admin_action",
    "admin_action_to_response",
    "get_admin_action",
    "list_admin_actions",
]
