"""Reaction registry: one reaction per user per post, toggled on repeat."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError
from ..models import Reaction, ReactionType
from ..schemas import ReactionListResponse, ReactionResponse
from .identity_service import resolve_user
from .pagination import normalize_pagination
from .post_service import resolve_post

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReactionState:
    post_id: UUID
    reacted: bool
    reaction_type: ReactionType | None
    like_count: int
    total_count: int


def _find_reaction(db: Session, *, user_id: UUID, post_id: UUID) -> Reaction | None:
    return db.scalar(select(Reaction).where(Reaction.user_id == user_id, Reaction.post_id == post_id))


def count_reactions(db: Session, *, post_id: UUID, reaction_type: ReactionType | None = None) -> int:
    stmt = select(func.count(Reaction.id)).where(Reaction.post_id == post_id)
    if reaction_type is not None:
        stmt = stmt.where(Reaction.type == reaction_type)
    return int(db.scalar(stmt) or 0)


def _reaction_state(db: Session, *, user_id: UUID, post_id: UUID) -> ReactionState:
    current = _find_reaction(db, user_id=user_id, post_id=post_id)
    return ReactionState(
        post_id=post_id,
        reacted=current is not None,
        reaction_type=current.type if current is not None else None,
        like_count=count_reactions(db, post_id=post_id, reaction_type=ReactionType.LIKE),
        total_count=count_reactions(db, post_id=post_id),
    )


def set_reaction(
    db: Session,
    *,
    user_id: UUID,
    post_id: UUID,
    reaction_type: ReactionType = ReactionType.LIKE,
) -> ReactionState:
    """Toggle a reaction.

    No reaction creates one, the same type removes it and a different type
    replaces it. A concurrent insert that trips the unique constraint is
    reported as a conflict.
    """

    resolve_user(db, user_id)
    resolve_post(db, post_id)

    existing = _find_reaction(db, user_id=user_id, post_id=post_id)
    if existing is None:
        db.add(Reaction(user_id=user_id, post_id=post_id, type=reaction_type))
        outcome = "added"
    elif existing.type == reaction_type:
        db.delete(existing)
        outcome = "removed"
    else:
        existing.type = reaction_type
        outcome = "changed"

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Duplicate reaction by user %s on post %s", user_id, post_id)
        raise ConflictError("Reaction already exists") from exc
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Reaction %s on post %s by user %s", outcome, post_id, user_id)
    return _reaction_state(db, user_id=user_id, post_id=post_id)


def remove_reaction(db: Session, *, user_id: UUID, post_id: UUID) -> ReactionState:
    existing = _find_reaction(db, user_id=user_id, post_id=post_id)
    if existing is None:
        raise NotFoundError("Reaction not found")

    db.delete(existing)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return _reaction_state(db, user_id=user_id, post_id=post_id)


def get_user_reaction(db: Session, *, user_id: UUID, post_id: UUID) -> Reaction | None:
    return _find_reaction(db, user_id=user_id, post_id=post_id)


def reaction_summary(db: Session, *, post_id: UUID) -> dict[ReactionType, int]:
    """Per-type counts for a post, zero-filled for every known type."""

    resolve_post(db, post_id)
    counts = {kind: 0 for kind in ReactionType}
    rows = db.execute(
        select(Reaction.type, func.count(Reaction.id)).where(Reaction.post_id == post_id).group_by(Reaction.type)
    ).all()
    for kind, amount in rows:
        counts[ReactionType(kind)] = int(amount)
    return counts


def list_post_reactions(
    db: Session,
    *,
    post_id: UUID,
    skip: int | None = None,
    limit: int | None = None,
) -> ReactionListResponse:
    resolve_post(db, post_id)
    safe_skip, safe_limit = normalize_pagination(skip, limit)
    rows = db.scalars(
        select(Reaction)
        .where(Reaction.post_id == post_id)
        .order_by(Reaction.created_at.desc())
        .offset(safe_skip)
        .limit(safe_limit)
    ).all()
    return ReactionListResponse(
        total=count_reactions(db, post_id=post_id),
        items=[ReactionResponse.model_validate(row) for row in rows],
    )


__all__ = [
    "ReactionState",
    "set_reaction",
    "remove_reaction",
    "count_reactions",
    "reaction_summary",
    "get_user_reaction",
    "list_post_reactions",
]
