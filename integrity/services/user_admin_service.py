"""Administrative operations on user accounts, each recorded in the audit log."""
from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import ForbiddenError, InvalidArgumentError, InvalidStateError
from ..models import ROLE_ADMIN, ROLE_USER, ActionType, Post, User
from .admin_action_service import AdminActionTarget, record_admin_action
from .identity_service import resolve_user
from .post_service import remove_post

logger = logging.getLogger(__name__)

_VALID_ROLES = {ROLE_USER, ROLE_ADMIN}


def _require_admin(actor: User) -> None:
    if not actor.is_admin:
        logger.warning("Non-admin %s attempted an administrative operation", actor.id)
        raise ForbiddenError("Admin privileges required")


def _other_admin_count(db: Session, *, excluding: UUID) -> int:
    return int(
        db.scalar(select(func.count(User.id)).where(func.lower(User.role) == ROLE_ADMIN, User.id != excluding)) or 0
    )


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def activate_user(db: Session, *, actor: User, user_id: UUID, reason: str | None = None) -> User:
    _require_admin(actor)
    user = resolve_user(db, user_id)
    if user.active:
        raise InvalidStateError("User is already active")

    user.active = True
    record_admin_action(
        db,
        action_type=ActionType.ACTIVATE_USER,
        admin_id=actor.id,
        target=AdminActionTarget.user(user.id),
        reason=reason,
        description=f"Activated user {user.username}",
        affected_user_id=user.id,
        commit=False,
    )
    _commit(db)
    logger.info("User %s activated by %s", user_id, actor.id)
    return user


def deactivate_user(db: Session, *, actor: User, user_id: UUID, reason: str | None = None) -> User:
    _require_admin(actor)
    user = resolve_user(db, user_id)
    if user.is_admin:
        raise ForbiddenError("Administrators cannot be deactivated")
    if not user.active:
        raise InvalidStateError("User is already inactive")

    user.active = False
    record_admin_action(
        db,
        action_type=ActionType.DEACTIVATE_USER,
        admin_id=actor.id,
        target=AdminActionTarget.user(user.id),
        reason=reason,
        description=f"Deactivated user {user.username}",
        affected_user_id=user.id,
        commit=False,
    )
    _commit(db)
    logger.info("User %s deactivated by %s", user_id, actor.id)
    return user


def update_user_role(db: Session, *, actor: User, user_id: UUID, new_role: str) -> User:
    """Promote or demote a user; the platform always keeps one admin."""

    _require_admin(actor)
    desired_role = (new_role or "").strip().lower()
    if desired_role not in _VALID_ROLES:
        raise InvalidArgumentError("Unknown role")

    user = resolve_user(db, user_id)
    current_role = (user.role or ROLE_USER).lower()
    if current_role == desired_role:
        return user

    if current_role == ROLE_ADMIN and _other_admin_count(db, excluding=user.id) == 0:
        raise InvalidStateError("Cannot demote the last administrator")

    user.role = desired_role
    record_admin_action(
        db,
        action_type=ActionType.CREATE_ADMIN if desired_role == ROLE_ADMIN else ActionType.DELETE_ADMIN,
        admin_id=actor.id,
        target=AdminActionTarget.user(user.id),
        description=f"Role of {user.username} changed from {current_role} to {desired_role}",
        affected_user_id=user.id,
        commit=False,
    )
    _commit(db)
    logger.info("User %s role changed to %s by %s", user_id, desired_role, actor.id)
    return user


def delete_user(db: Session, *, actor: User, user_id: UUID, reason: str | None = None) -> None:
    """Delete a user account.

    Posts are removed through the content store so report hooks run; follows,
    reactions and comments go with the user row.
    """

    _require_admin(actor)
    if actor.id == user_id:
        raise InvalidArgumentError("Cannot delete your own account")

    user = resolve_user(db, user_id)
    if user.is_admin and _other_admin_count(db, excluding=user.id) == 0:
        raise InvalidStateError("Cannot delete the last administrator")

    try:
        # snapshot is taken while the user row still exists
        record_admin_action(
            db,
            action_type=ActionType.DELETE_ADMIN if user.is_admin else ActionType.DELETE_USER,
            admin_id=actor.id,
            target=AdminActionTarget.user(user.id),
            reason=reason,
            description=f"Deleted user {user.username}",
            affected_user_id=user.id,
            commit=False,
        )
        for post in db.scalars(select(Post).where(Post.author_id == user.id)).all():
            remove_post(db, post)
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Deletion of user %s aborted", user_id)
        raise

    logger.info("User %s deleted by %s", user_id, actor.id)


__all__ = ["activate_user", "deactivate_user", "update_user_role", "delete_user"]
