"""SQLAlchemy ORM model for post reactions."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from integrity.database import Base
from .enums import ReactionType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Reaction(Base):
    __tablename__ = "reactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(
        Enum(ReactionType, name="reaction_type", native_enum=False, length=16),
        nullable=False,
        default=ReactionType.LIKE,
    )
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(UUID(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="reactions")
    post = relationship("Post", back_populates="reactions")

    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_reactions_user_post"),)


__all__ = ["Reaction"]
