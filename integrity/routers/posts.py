"""Post and comment API routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import CommentCreate, CommentResponse, PostCreate, PostResponse
from ..services.auth_service import get_current_user
from ..services.post_service import create_comment, create_post, delete_comment, delete_post

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
    payload: PostCreate,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> PostResponse:
    post = create_post(db, author_id=current_user.id, content=payload.content)
    return PostResponse.model_validate(post)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment_endpoint(
    comment_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> Response:
    delete_comment(db, comment_id=comment_id, requester=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> Response:
    delete_post(db, post_id=post_id, requester=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
    post_id: UUID,
    payload: CommentCreate,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> CommentResponse:
    comment = create_comment(db, post_id=post_id, author_id=current_user.id, content=payload.content)
    return CommentResponse.model_validate(comment)


__all__ = ["router"]
