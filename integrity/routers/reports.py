"""Report submission and review endpoints."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import ReportStatus, User
from ..schemas import (
    ReportCreateRequest,
    ReportListResponse,
    ReportResponse,
    ReportReviewRequest,
    ReportStatsResponse,
)
from ..services.auth_service import get_current_user, require_admin
from ..services.report_service import (
    count_reports_by_status,
    create_report,
    get_report,
    list_pending_reports,
    list_reports,
    list_reports_for_post,
    review_report,
    summarize_report,
)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report_endpoint(
    payload: ReportCreateRequest,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> ReportResponse:
    report = create_report(
        db,
        reporter_id=current_user.id,
        post_id=payload.post_id,
        reason=payload.reason,
        description=payload.description,
    )
    return summarize_report(db, report)


@router.get("", response_model=ReportListResponse)
async def list_reports_endpoint(
    status_filter: ReportStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportListResponse:
    return list_reports(db, status=status_filter, search=search, skip=skip, limit=limit)


@router.get("/pending", response_model=ReportListResponse)
async def pending_reports_endpoint(
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportListResponse:
    return list_pending_reports(db, skip=skip, limit=limit)


@router.get("/stats", response_model=ReportStatsResponse)
async def report_stats_endpoint(
    db: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportStatsResponse:
    counts = count_reports_by_status(db)
    return ReportStatsResponse(**{state.value.lower(): amount for state, amount in counts.items()})


@router.get("/post/{post_id}", response_model=ReportListResponse)
async def post_reports_endpoint(
    post_id: UUID,
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> ReportListResponse:
    return list_reports_for_post(db, post_id=post_id, skip=skip, limit=limit)


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report_endpoint(
    report_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> ReportResponse:
    return summarize_report(db, get_report(db, report_id=report_id, viewer=current_user))


@router.post("/{report_id}/review", response_model=ReportResponse)
async def review_report_endpoint(
    report_id: UUID,
    payload: ReportReviewRequest,
    db: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> ReportResponse:
    report = review_report(
        db,
        report_id=report_id,
        new_status=payload.status,
        reviewer=admin,
        admin_comment=payload.admin_comment,
    )
    return summarize_report(db, report)


__all__ = ["router"]
