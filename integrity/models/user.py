"""SQLAlchemy ORM model for application users."""
from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression, func

from integrity.database import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(150), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    active = Column(Boolean, nullable=False, server_default=expression.true(), default=True)
    role = Column(String(32), nullable=False, server_default=ROLE_USER, default=ROLE_USER)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    posts = relationship("Post", back_populates="author", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="author", cascade="all, delete-orphan")
    reactions = relationship("Reaction", back_populates="user", cascade="all, delete-orphan")
    follower_relations = relationship(
        "Follow",
        foreign_keys="Follow.followed_id",
        back_populates="followed",
        cascade="all, delete-orphan",
    )
    following_relations = relationship(
        "Follow",
        foreign_keys="Follow.follower_id",
        back_populates="follower",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return (self.role or ROLE_USER).lower() == ROLE_ADMIN

    def __repr__(self) -> str:  # pragma: no cover - repr helper
        return f"User(id={self.id!s}, username={self.username!r})"


__all__ = ["User", "ROLE_USER", "ROLE_ADMIN"]
