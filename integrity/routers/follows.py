"""Follow management API routes."""
from __future__ import annotations

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import FollowActionResponse, FollowListResponse, FollowStatsResponse
from ..services.auth_service import get_current_user, get_optional_user
from ..services.follow_service import follow, get_stats, list_followers, list_following, unfollow

router = APIRouter(prefix="/follows", tags=["follows"])


@router.post("/{user_id}", response_model=FollowActionResponse, status_code=status.HTTP_201_CREATED)
async def follow_user_endpoint(
    user_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> FollowActionResponse:
    follow(db, follower_id=current_user.id, followed_id=user_id)
    stats = get_stats(db, user_id=user_id, viewer_id=current_user.id)
    return FollowActionResponse(**asdict(stats), status="followed")


@router.delete("/{user_id}", response_model=FollowActionResponse)
async def unfollow_user_endpoint(
    user_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> FollowActionResponse:
    unfollow(db, follower_id=current_user.id, followed_id=user_id)
    stats = get_stats(db, user_id=user_id, viewer_id=current_user.id)
    return FollowActionResponse(**asdict(stats), status="unfollowed")


@router.get("/stats/{user_id}", response_model=FollowStatsResponse)
async def follow_stats_endpoint(
    user_id: UUID,
    db: Session = Depends(get_session),
    viewer: User | None = Depends(get_optional_user),
) -> FollowStatsResponse:
    stats = get_stats(db, user_id=user_id, viewer_id=viewer.id if viewer else None)
    return FollowStatsResponse(**asdict(stats))


@router.get("/{user_id}/followers", response_model=FollowListResponse)
async def followers_endpoint(
    user_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_session),
) -> FollowListResponse:
    return list_followers(db, user_id=user_id, skip=skip, limit=limit)


@router.get("/{user_id}/following", response_model=FollowListResponse)
async def following_endpoint(
    user_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_session),
) -> FollowListResponse:
    return list_following(db, user_id=user_id, skip=skip, limit=limit)


__all__ = ["router"]
