"""Business logic for follower relationships."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import ConflictError, InvalidArgumentError, NotFoundError
from ..models import Follow, User
from ..schemas import FollowEdgeResponse, FollowListResponse, UserSummary
from .identity_service import resolve_user
from .pagination import normalize_pagination

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FollowStats:
    user_id: UUID
    followers: int
    followed: int
    follows: bool
    follows_you: bool


def _find_edge(db: Session, *, follower_id: UUID, followed_id: UUID) -> Follow | None:
    return db.scalar(select(Follow).where(Follow.follower_id == follower_id, Follow.followed_id == followed_id))


def is_following(db: Session, *, follower_id: UUID, followed_id: UUID) -> bool:
    return _find_edge(db, follower_id=follower_id, followed_id=followed_id) is not None


def follow(db: Session, *, follower_id: UUID, followed_id: UUID) -> Follow:
    if follower_id == followed_id:
        raise InvalidArgumentError("Cannot follow yourself")

    resolve_user(db, follower_id)
    resolve_user(db, followed_id)

    if is_following(db, follower_id=follower_id, followed_id=followed_id):
        raise ConflictError("Already following this user")

    record = Follow(follower_id=follower_id, followed_id=followed_id)
    db.add(record)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Concurrent follow %s -> %s rejected", follower_id, followed_id)
        raise ConflictError("Already following this user") from exc
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("User %s followed %s", follower_id, followed_id)
    return record


def unfollow(db: Session, *, follower_id: UUID, followed_id: UUID) -> None:
    record = _find_edge(db, follower_id=follower_id, followed_id=followed_id)
    if record is None:
        raise NotFoundError("Not following this user")

    db.delete(record)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("User %s unfollowed %s", follower_id, followed_id)


def get_stats(db: Session, *, user_id: UUID, viewer_id: UUID | None = None) -> FollowStats:
    """Counts and relationship flags for ``user_id`` as seen by ``viewer_id``.

    ``follows`` means the viewer follows the user; ``follows_you`` means the
    user follows the viewer. Both are false without a distinct viewer.
    """

    resolve_user(db, user_id)

    followers = db.scalar(select(func.count()).select_from(Follow).where(Follow.followed_id == user_id)) or 0
    followed = db.scalar(select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)) or 0

    follows = follows_you = False
    if viewer_id is not None and viewer_id != user_id:
        follows = is_following(db, follower_id=viewer_id, followed_id=user_id)
        follows_you = is_following(db, follower_id=user_id, followed_id=viewer_id)

    return FollowStats(
        user_id=user_id,
        followers=int(followers),
        followed=int(followed),
        follows=follows,
        follows_you=follows_you,
    )


def _list_edges(db: Session, *, user_id: UUID, skip: int | None, limit: int | None, incoming: bool) -> FollowListResponse:
    resolve_user(db, user_id)
    safe_skip, safe_limit = normalize_pagination(skip, limit)

    # incoming edges point at user_id; the other end is the follower
    anchor = Follow.followed_id if incoming else Follow.follower_id
    other = Follow.follower_id if incoming else Follow.followed_id

    total = db.scalar(select(func.count()).select_from(Follow).where(anchor == user_id)) or 0
    rows = db.execute(
        select(User, Follow.follow_date)
        .join(Follow, other == User.id)
        .where(anchor == user_id)
        .order_by(Follow.follow_date.desc())
        .offset(safe_skip)
        .limit(safe_limit)
    ).all()
    return FollowListResponse(
        total=int(total),
        items=[FollowEdgeResponse(user=UserSummary.model_validate(user), follow_date=date) for user, date in rows],
    )


def list_followers(
    db: Session, *, user_id: UUID, skip: int | None = None, limit: int | None = None
) -> FollowListResponse:
    return _list_edges(db, user_id=user_id, skip=skip, limit=limit, incoming=True)


def list_following(
    db: Session, *, user_id: UUID, skip: int | None = None, limit: int | None = None
) -> FollowListResponse:
    return _list_edges(db, user_id=user_id, skip=skip, limit=limit, incoming=False)


__all__ = [
    "FollowStats",
    "follow",
    "unfollow",
    "is_following",
    "get_stats",
    "list_followers",
    "list_following",
]
