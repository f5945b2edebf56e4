"""SQLAlchemy ORM model for follower relationships."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from integrity.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Follow(Base):
    __tablename__ = "follows"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    follow_date = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    follower_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    followed_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    follower = relationship("User", foreign_keys=[follower_id], back_populates="following_relations")
    followed = relationship("User", foreign_keys=[followed_id], back_populates="follower_relations")

    __table_args__ = (UniqueConstraint("follower_id", "followed_id", name="uq_follows_follower_followed"),)


__all__ = ["Follow"]
