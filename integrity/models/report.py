"""SQLAlchemy ORM model for user-submitted post reports."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from integrity.database import Base
from .enums import ReportStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Report(Base):
    __tablename__ = "reports"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reason = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(ReportStatus, name="report_status", native_enum=False, length=16),
        nullable=False,
        default=ReportStatus.PENDING,
        index=True,
    )
    report_date = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    review_date = Column(DateTime(timezone=True), nullable=True)

    reporter_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Nulled by the post deletion hook; SET NULL only backs up purges that bypass it.
    post_id = Column(UUID(as_uuid=True), ForeignKey("posts.id", ondelete="SET NULL"), nullable=True, index=True)

    reporter = relationship("User", foreign_keys=[reporter_id])
    post = relationship("Post", foreign_keys=[post_id])

    __table_args__ = (
        # One report per reporter per live post; orphaned reports never collide.
        Index(
            "uq_reports_reporter_post",
            "reporter_id",
            "post_id",
            unique=True,
            postgresql_where=post_id.isnot(None),
            sqlite_where=post_id.isnot(None),
        ),
        Index("ix_reports_status_report_date", "status", "report_date"),
    )


__all__ = ["Report"]
