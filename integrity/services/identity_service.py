"""Read-only identity lookups used across the moderation services."""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.orm import Session

from ..constants import NOT_AVAILABLE
from ..errors import NotFoundError
from ..models import User
from ..schemas import UserSummary


@dataclass(frozen=True, slots=True)
class IdentitySnapshot:
    """Identity fields copied by value for historical records."""

    username: str
    first_name: str | None
    last_name: str | None

    @classmethod
    def unavailable(cls) -> "IdentitySnapshot":
        return cls(username=NOT_AVAILABLE, first_name=NOT_AVAILABLE, last_name=NOT_AVAILABLE)


def find_user(db: Session, user_id: UUID | None) -> User | None:
    if user_id is None:
        return None
    return db.get(User, user_id)


def resolve_user(db: Session, user_id: UUID) -> User:
    user = find_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def capture_identity(user: User | None) -> IdentitySnapshot:
    if user is None:
        return IdentitySnapshot.unavailable()
    return IdentitySnapshot(
        username=str(user.username),
        first_name=user.first_name,
        last_name=user.last_name,
    )


def summarize_user(user: User | None) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary.model_validate(user)


__all__ = ["IdentitySnapshot", "find_user", "resolve_user", "capture_identity", "summarize_user"]
