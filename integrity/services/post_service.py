"""Content store operations: posts, comments and the post deletion hook chain."""
from __future__ import annotations

import logging
from typing import Callable, Iterator
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import COMMENT_CONTENT_MAX_LENGTH, POST_CONTENT_MAX_LENGTH
from ..errors import ForbiddenError, InvalidArgumentError, NotFoundError
from ..models import ActionType, Comment, Post, User
from .admin_action_service import AdminActionTarget, record_admin_action
from .identity_service import resolve_user

logger = logging.getLogger(__name__)

PostDeletionHook = Callable[[Session, Post], None]


class PostDeletionHooks:
    """Ordered hooks that must all succeed before a post row is deleted.

    Hooks run inside the deleting transaction and must not commit. Any
    exception aborts the deletion.
    """

    def __init__(self) -> None:
        self._hooks: list[PostDeletionHook] = []

    def register(self, hook: PostDeletionHook) -> PostDeletionHook:
        if hook not in self._hooks:
            self._hooks.append(hook)
        return hook

    def unregister(self, hook: PostDeletionHook) -> None:
        if hook in self._hooks:
            self._hooks.remove(hook)

    def __iter__(self) -> Iterator[PostDeletionHook]:
        return iter(list(self._hooks))

    def __len__(self) -> int:
        return len(self._hooks)

    def run(self, db: Session, post: Post) -> None:
        for hook in list(self._hooks):
            hook(db, post)


post_deletion_hooks = PostDeletionHooks()


def _clean_text(value: str | None, *, field: str, limit: int) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidArgumentError(f"{field} cannot be empty")
    if len(text) > limit:
        raise InvalidArgumentError(f"{field} must be at most {limit} characters")
    return text


def find_post(db: Session, post_id: UUID | None) -> Post | None:
    if post_id is None:
        return None
    return db.get(Post, post_id)


def resolve_post(db: Session, post_id: UUID) -> Post:
    post = find_post(db, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def create_post(db: Session, *, author_id: UUID, content: str) -> Post:
    """Create and persist a new post for the given user."""

    text = _clean_text(content, field="Content", limit=POST_CONTENT_MAX_LENGTH)
    resolve_user(db, author_id)

    post = Post(author_id=author_id, content=text)
    db.add(post)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(post)
    return post


def create_comment(db: Session, *, post_id: UUID, author_id: UUID, content: str) -> Comment:
    text = _clean_text(content, field="Comment", limit=COMMENT_CONTENT_MAX_LENGTH)
    post = resolve_post(db, post_id)
    resolve_user(db, author_id)

    comment = Comment(post_id=post.id, author_id=author_id, content=text)
    db.add(comment)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(comment)
    return comment


def remove_post(db: Session, post: Post) -> None:
    """Run the deletion hooks and delete ``post`` without committing."""

    post_deletion_hooks.run(db, post)
    db.delete(post)
    db.flush()


def _content_excerpt(content: str | None, limit: int = 100) -> str:
    text = content or ""
    return text if len(text) <= limit else text[:limit] + "..."


def delete_post(db: Session, *, post_id: UUID, requester: User) -> None:
    """Delete a post when requester is the author or an admin.

    Hooks, the audit entry for admin removals and the row deletion share one
    transaction.
    """

    post = resolve_post(db, post_id)
    author_id = post.author_id
    is_author = author_id == requester.id
    if not is_author and not requester.is_admin:
        logger.warning("User %s attempted to delete post %s without permission", requester.id, post_id)
        raise ForbiddenError("Not allowed to delete this post")

    try:
        if not is_author:
            record_admin_action(
                db,
                action_type=ActionType.DELETE_POST,
                admin_id=requester.id,
                target=AdminActionTarget.post(post.id),
                reason="Post removed by an administrator",
                description=f"Post content: {_content_excerpt(post.content)}",
                affected_user_id=author_id,
                commit=False,
            )
        remove_post(db, post)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Deletion of post %s aborted", post_id)
        raise

    logger.info("Post %s deleted by user %s", post_id, requester.id)


def delete_comment(db: Session, *, comment_id: UUID, requester: User) -> None:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    is_author = comment.author_id == requester.id
    if not is_author and not requester.is_admin:
        raise ForbiddenError("Not allowed to delete this comment")

    try:
        if not is_author:
            record_admin_action(
                db,
                action_type=ActionType.DELETE_COMMENT,
                admin_id=requester.id,
                target=AdminActionTarget.comment(comment.id),
                reason="Comment removed by an administrator",
                description=f"Comment content: {_content_excerpt(comment.content)}",
                affected_user_id=comment.author_id,
                commit=False,
            )
        db.delete(comment)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Comment %s deleted by user %s", comment_id, requester.id)


__all__ = [
    "PostDeletionHook",
    "PostDeletionHooks",
    "post_deletion_hooks",
    "find_post",
    "resolve_post",
    "create_post",
    "create_comment",
    "remove_post",
    "delete_post",
    "delete_comment",
]
