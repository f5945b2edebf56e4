"""SQLAlchemy ORM model for the append-only administrative audit log."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Index, String, event
from sqlalchemy.dialects.postgresql import UUID

from integrity.database import Base
from .enums import ActionType, TargetKind


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdminAction(Base):
    """A single administrative operation.

    ``target_kind``/``target_id`` and ``affected_user_id`` are plain columns rather
    than foreign keys: the referenced rows may be deleted later while the entry
    must stay readable. Identity fields are copied at write time and never
    refreshed from the live user rows.
    """

    __tablename__ = "admin_actions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    action_type = Column(Enum(ActionType, name="admin_action_type", native_enum=False, length=32), nullable=False)
    description = Column(String(500), nullable=False)
    reason = Column(String(1000), nullable=True)
    action_date = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    target_kind = Column(Enum(TargetKind, name="admin_action_target_kind", native_enum=False, length=16), nullable=False)
    target_id = Column(UUID(as_uuid=True), nullable=False)

    admin_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    admin_username = Column(String(150), nullable=False)
    admin_first_name = Column(String(100), nullable=True)
    admin_last_name = Column(String(100), nullable=True)

    affected_user_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    affected_username = Column(String(150), nullable=True)
    affected_first_name = Column(String(100), nullable=True)
    affected_last_name = Column(String(100), nullable=True)

    __table_args__ = (
        Index("ix_admin_actions_action_type", "action_type"),
        Index("ix_admin_actions_action_date", "action_date"),
        Index("ix_admin_actions_target", "target_kind", "target_id"),
    )

    def __repr__(self) -> str:  # pragma: no cover - repr helper
        return f"AdminAction(id={self.id!s}, action_type={self.action_type!s})"


class AuditLogImmutableError(RuntimeError):
    """Raised when code attempts to modify or remove a recorded admin action."""


@event.listens_for(AdminAction, "before_update")
def _refuse_update(mapper, connection, target: AdminAction) -> None:
    raise AuditLogImmutableError(f"Admin action {target.id} is append-only")


@event.listens_for(AdminAction, "before_delete")
def _refuse_delete(mapper, connection, target: AdminAction) -> None:
    raise AuditLogImmutableError(f"Admin action {target.id} is append-only")


__all__ = ["AdminAction", "AuditLogImmutableError"]
