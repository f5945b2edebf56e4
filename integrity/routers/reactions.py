"""Reaction endpoints nested under posts."""
from __future__ import annotations

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import ReactionType, User
from ..schemas import (
    ReactionListResponse,
    ReactionRequest,
    ReactionStateResponse,
    ReactionSummaryResponse,
)
from ..services.auth_service import get_current_user
from ..services.reaction_service import (
    list_post_reactions,
    reaction_summary,
    remove_reaction,
    set_reaction,
)

router = APIRouter(prefix="/posts", tags=["reactions"])


@router.post("/{post_id}/reactions", response_model=ReactionStateResponse)
async def toggle_reaction_endpoint(
    post_id: UUID,
    payload: ReactionRequest | None = None,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> ReactionStateResponse:
    reaction_type = payload.reaction_type if payload is not None else ReactionType.LIKE
    state = set_reaction(db, user_id=current_user.id, post_id=post_id, reaction_type=reaction_type)
    return ReactionStateResponse(**asdict(state))


@router.delete("/{post_id}/reactions", response_model=ReactionStateResponse)
async def remove_reaction_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> ReactionStateResponse:
    state = remove_reaction(db, user_id=current_user.id, post_id=post_id)
    return ReactionStateResponse(**asdict(state))


@router.get("/{post_id}/reactions", response_model=ReactionListResponse)
async def list_reactions_endpoint(
    post_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_session),
) -> ReactionListResponse:
    return list_post_reactions(db, post_id=post_id, skip=skip, limit=limit)


@router.get("/{post_id}/reactions/summary", response_model=ReactionSummaryResponse)
async def reaction_summary_endpoint(post_id: UUID, db: Session = Depends(get_session)) -> ReactionSummaryResponse:
    counts = reaction_summary(db, post_id=post_id)
    return ReactionSummaryResponse(post_id=post_id, counts=counts, total=sum(counts.values()))


__all__ = ["router"]
