"""Services for creating, reviewing and resolving post reports."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from ..constants import (
    DELETED_POST_CONTENT,
    DELETED_POST_ID,
    REPORT_DESCRIPTION_MAX_LENGTH,
    REPORT_REASON_MAX_LENGTH,
)
from ..errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from ..models import ActionType, Post, Report, ReportStatus, User
from ..schemas import PostSummaryResponse, ReportListResponse, ReportResponse
from .admin_action_service import AdminActionTarget, record_admin_action
from .identity_service import find_user, resolve_user, summarize_user
from .pagination import normalize_pagination
from .post_service import find_post, post_deletion_hooks, resolve_post

logger = logging.getLogger(__name__)

REVIEW_OUTCOMES = {
    ReportStatus.REVIEWED: ActionType.REVIEW_REPORT,
    ReportStatus.REJECTED: ActionType.REJECT_REPORT,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _find_report_id(db: Session, *, reporter_id: UUID, post_id: UUID) -> UUID | None:
    return db.scalar(select(Report.id).where(Report.reporter_id == reporter_id, Report.post_id == post_id))


def create_report(
    db: Session,
    *,
    reporter_id: UUID,
    post_id: UUID,
    reason: str,
    description: str | None = None,
) -> Report:
    safe_reason = (reason or "").strip()
    safe_description = (description or "").strip() or None
    if not safe_reason:
        raise InvalidArgumentError("Reason is required")
    if len(safe_reason) > REPORT_REASON_MAX_LENGTH:
        raise InvalidArgumentError(f"Reason must be at most {REPORT_REASON_MAX_LENGTH} characters")
    if safe_description is not None and len(safe_description) > REPORT_DESCRIPTION_MAX_LENGTH:
        raise InvalidArgumentError(f"Description must be at most {REPORT_DESCRIPTION_MAX_LENGTH} characters")

    resolve_user(db, reporter_id)
    post = resolve_post(db, post_id)
    if post.author_id == reporter_id:
        raise InvalidArgumentError("Cannot report your own post")

    if _find_report_id(db, reporter_id=reporter_id, post_id=post_id) is not None:
        raise ConflictError("You have already reported this post")

    report = Report(
        reporter_id=reporter_id,
        post_id=post_id,
        reason=safe_reason,
        description=safe_description,
        status=ReportStatus.PENDING,
        report_date=_utcnow(),
    )
    db.add(report)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Duplicate report by %s on post %s", reporter_id, post_id)
        raise ConflictError("You have already reported this post") from exc
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Report %s filed by %s against post %s", report.id, reporter_id, post_id)
    return report


def review_report(
    db: Session,
    *,
    report_id: UUID,
    new_status: ReportStatus,
    reviewer: User,
    admin_comment: str | None = None,
) -> Report:
    """Move a PENDING report to REVIEWED or REJECTED and audit the decision.

    The transition is a conditional UPDATE, so a decision committed by another
    moderator after this session read the row is never overwritten.
    """

    if not reviewer.is_admin:
        raise ForbiddenError("Admin privileges required")
    if new_status not in REVIEW_OUTCOMES:
        raise InvalidArgumentError("Reports can only be marked REVIEWED or REJECTED")

    report = db.get(Report, report_id)
    if report is None:
        raise NotFoundError("Report not found")
    if report.status != ReportStatus.PENDING:
        logger.warning("Report %s already %s; review by %s refused", report_id, report.status, reviewer.id)
        raise InvalidStateError("Report has already been processed")

    post = find_post(db, report.post_id)
    comment = (admin_comment or "").strip() or None
    try:
        result = db.execute(
            update(Report)
            .where(Report.id == report_id, Report.status == ReportStatus.PENDING)
            .values(status=new_status, review_date=_utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
            logger.warning("Report %s was processed concurrently; review by %s refused", report_id, reviewer.id)
            raise InvalidStateError("Report has already been processed")

        record_admin_action(
            db,
            action_type=REVIEW_OUTCOMES[new_status],
            admin_id=reviewer.id,
            target=AdminActionTarget.report(report.id),
            reason=comment,
            description=f"Report marked {new_status.value}: {report.reason}",
            affected_user_id=post.author_id if post is not None else None,
            commit=False,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(report)
    logger.info("Report %s marked %s by %s", report_id, new_status.value, reviewer.id)
    return report


@post_deletion_hooks.register
def on_post_deleted(db: Session, post: Post) -> int:
    """Detach every report from ``post`` and resolve the pending ones.

    Reviewed and rejected reports keep their status, including decisions
    committed after this session loaded them. Never commits; the caller owns
    the transaction. Returns the number of reports resolved.
    """

    db.flush()
    resolved = db.execute(
        update(Report)
        .where(Report.post_id == post.id, Report.status == ReportStatus.PENDING)
        .values(status=ReportStatus.RESOLVED, review_date=_utcnow())
        .execution_options(synchronize_session=False)
    ).rowcount
    detached = db.execute(
        update(Report)
        .where(Report.post_id == post.id)
        .values(post_id=None)
        .execution_options(synchronize_session=False)
    ).rowcount
    # rows were changed behind the identity map
    for loaded in [obj for obj in db.identity_map.values() if isinstance(obj, Report)]:
        db.expire(loaded)

    if detached:
        logger.info("Post %s deletion detached %d report(s), resolved %d", post.id, detached, resolved)
    return resolved


def _post_summary(db: Session, post_id: UUID | None) -> PostSummaryResponse:
    if post_id is None:
        return PostSummaryResponse(id=DELETED_POST_ID, content=DELETED_POST_CONTENT, author=None, exists=False)

    post = find_post(db, post_id)
    if post is None:
        return PostSummaryResponse(id=post_id, content=DELETED_POST_CONTENT, author=None, exists=False)

    return PostSummaryResponse(
        id=post.id,
        content=post.content,
        author=summarize_user(find_user(db, post.author_id)),
        exists=True,
    )


def summarize_report(db: Session, report: Report) -> ReportResponse:
    return ReportResponse(
        id=report.id,
        reason=report.reason,
        description=report.description,
        status=report.status,
        report_date=report.report_date,
        review_date=report.review_date,
        reporter=summarize_user(find_user(db, report.reporter_id)),
        post=_post_summary(db, report.post_id),
    )


def get_report(db: Session, *, report_id: UUID, viewer: User) -> Report:
    report = db.get(Report, report_id)
    if report is None:
        raise NotFoundError("Report not found")
    if report.reporter_id != viewer.id and not viewer.is_admin:
        raise ForbiddenError("Not allowed to view this report")
    return report


def list_reports(
    db: Session,
    *,
    status: ReportStatus | None = None,
    search: str | None = None,
    post_id: UUID | None = None,
    skip: int | None = None,
    limit: int | None = None,
) -> ReportListResponse:
    safe_skip, safe_limit = normalize_pagination(skip, limit)

    reporter_alias = aliased(User)
    stmt = select(Report).join(reporter_alias, Report.reporter_id == reporter_alias.id)
    if status is not None:
        stmt = stmt.where(Report.status == status)
    if post_id is not None:
        stmt = stmt.where(Report.post_id == post_id)
    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(
            func.lower(Report.reason).like(pattern)
            | func.lower(func.coalesce(Report.description, "")).like(pattern)
            | func.lower(reporter_alias.username).like(pattern)
        )

    total = int(db.scalar(select(func.count()).select_from(stmt.subquery())) or 0)
    rows = db.scalars(stmt.order_by(Report.report_date.desc()).offset(safe_skip).limit(safe_limit)).all()
    return ReportListResponse(total=total, items=[summarize_report(db, row) for row in rows])


def list_pending_reports(db: Session, *, skip: int | None = None, limit: int | None = None) -> ReportListResponse:
    return list_reports(db, status=ReportStatus.PENDING, skip=skip, limit=limit)


def list_reports_for_post(
    db: Session, *, post_id: UUID, skip: int | None = None, limit: int | None = None
) -> ReportListResponse:
    resolve_post(db, post_id)
    return list_reports(db, post_id=post_id, skip=skip, limit=limit)


def count_reports_by_status(db: Session) -> dict[ReportStatus, int]:
    counts = {status: 0 for status in ReportStatus}
    rows = db.execute(select(Report.status, func.count(Report.id)).group_by(Report.status)).all()
    for status, amount in rows:
        counts[ReportStatus(status)] = int(amount)
    return counts


__all__ = [
    "create_report",
    "review_report",
    "on_post_deleted",
    "summarize_report",
    "get_report",
    "list_reports",
    "list_pending_reports",
    "list_reports_for_post",
    "count_reports_by_status",
]
