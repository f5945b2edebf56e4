"""Tests for the report lifecycle and the post deletion cascade."""
from __future__ import annotations

import os
from typing import Callable, Iterator
from uuid import UUID, uuid4

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_reports.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from integrity.database import Base, SessionLocal, engine  # noqa: E402
from integrity.errors import (  # noqa: E402
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from integrity.models import ActionType, AdminAction, Post, Report, ReportStatus, User  # noqa: E402
from integrity.services import report_service  # noqa: E402
from integrity.services.post_service import create_post, delete_post, post_deletion_hooks  # noqa: E402


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(AdminAction))
        session.execute(delete(Report))
        session.execute(delete(Post))
        session.execute(delete(User))
        session.commit()
    yield


@pytest.fixture
def db() -> Iterator[Session]:
    with SessionLocal() as session:
        yield session


@pytest.fixture
def user_factory() -> Callable[..., User]:
    def _factory(username: str, *, role: str = "user") -> User:
        with SessionLocal() as session:
            user = User(username=username, first_name=username.title(), role=role)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
    return _factory


def _load_report(report_id: UUID) -> Report:
    with SessionLocal() as session:
        report = session.get(Report, report_id)
        assert report is not None
        return report


def test_create_report_starts_pending(db, user_factory):
    author = user_factory("author")
    reporter = user_factory("reporter")
    post = create_post(db, author_id=author.id, content="questionable")

    report = report_service.create_report(
        db, reporter_id=reporter.id, post_id=post.id, reason="  spam  ", description="buy now"
    )

    stored = _load_report(report.id)
    assert stored.status == ReportStatus.PENDING
    assert stored.reason == "spam"
    assert stored.review_date is None
    assert stored.post_id == post.id


def test_second_report_by_same_reporter_conflicts(db, user_factory):
    author = user_factory("dup-author")
    reporter = user_factory("dup-reporter")
    post = create_post(db, author_id=author.id, content="again")

    report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")
    with pytest.raises(ConflictError):
        report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="still spam")


def test_different_reporters_may_report_same_post(db, user_factory):
    author = user_factory("shared-author")
    post = create_post(db, author_id=author.id, content="shared")
    for name in ("first-reporter", "second-reporter"):
        reporter = user_factory(name)
        report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    assert report_service.list_reports_for_post(db, post_id=post.id).total == 2


@pytest.mark.parametrize(
    "reason, description",
    [("   ", None), ("x" * 501, None), ("spam", "d" * 1001)],
)
def test_invalid_report_text_is_rejected(db, user_factory, reason, description):
    author = user_factory("text-author")
    reporter = user_factory("text-reporter")
    post = create_post(db, author_id=author.id, content="text")

    with pytest.raises(InvalidArgumentError):
        report_service.create_report(
            db, reporter_id=reporter.id, post_id=post.id, reason=reason, description=description
        )


def test_reporting_own_post_is_rejected(db, user_factory):
    author = user_factory("self-reporter")
    post = create_post(db, author_id=author.id, content="mine")

    with pytest.raises(InvalidArgumentError):
        report_service.create_report(db, reporter_id=author.id, post_id=post.id, reason="oops")


def test_reporting_missing_post_is_not_found(db, user_factory):
    reporter = user_factory("lost-reporter")
    with pytest.raises(NotFoundError):
        report_service.create_report(db, reporter_id=reporter.id, post_id=uuid4(), reason="spam")


def test_review_records_audit_entry(db, user_factory):
    author = user_factory("reviewed-author")
    reporter = user_factory("reviewed-reporter")
    admin = user_factory("moderator", role="admin")
    post = create_post(db, author_id=author.id, content="borderline")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="rude")

    report_service.review_report(
        db, report_id=report.id, new_status=ReportStatus.REJECTED, reviewer=admin, admin_comment="fine"
    )

    stored = _load_report(report.id)
    assert stored.status == ReportStatus.REJECTED
    assert stored.review_date is not None

    with SessionLocal() as session:
        action = session.scalar(select(AdminAction).where(AdminAction.target_id == report.id))
        assert action is not None
        assert action.action_type == ActionType.REJECT_REPORT
        assert action.reason == "fine"
        assert action.affected_username == "reviewed-author"
        assert action.admin_username == "moderator"


def test_second_review_fails_and_keeps_review_date(db, user_factory):
    author = user_factory("twice-author")
    reporter = user_factory("twice-reporter")
    admin = user_factory("twice-admin", role="admin")
    post = create_post(db, author_id=author.id, content="twice")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")
    report_service.review_report(db, report_id=report.id, new_status=ReportStatus.REVIEWED, reviewer=admin)
    reviewed_at = _load_report(report.id).review_date

    with pytest.raises(InvalidStateError):
        report_service.review_report(db, report_id=report.id, new_status=ReportStatus.REJECTED, reviewer=admin)

    stored = _load_report(report.id)
    assert stored.status == ReportStatus.REVIEWED
    assert stored.review_date == reviewed_at


@pytest.mark.parametrize("status", [ReportStatus.PENDING, ReportStatus.RESOLVED])
def test_review_only_accepts_reviewed_or_rejected(db, user_factory, status):
    author = user_factory("status-author")
    reporter = user_factory("status-reporter")
    admin = user_factory("status-admin", role="admin")
    post = create_post(db, author_id=author.id, content="status")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    with pytest.raises(InvalidArgumentError):
        report_service.review_report(db, report_id=report.id, new_status=status, reviewer=admin)
    assert _load_report(report.id).status == ReportStatus.PENDING


def test_review_requires_admin(db, user_factory):
    author = user_factory("plain-author")
    reporter = user_factory("plain-reporter")
    post = create_post(db, author_id=author.id, content="plain")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    with pytest.raises(ForbiddenError):
        report_service.review_report(db, report_id=report.id, new_status=ReportStatus.REVIEWED, reviewer=reporter)


def test_post_deletion_resolves_pending_and_keeps_processed_reports(db, user_factory):
    author = user_factory("cascade-author")
    pending_reporter = user_factory("pending-reporter")
    rejected_reporter = user_factory("rejected-reporter")
    admin = user_factory("cascade-admin", role="admin")
    post = create_post(db, author_id=author.id, content="to be removed")

    pending = report_service.create_report(db, reporter_id=pending_reporter.id, post_id=post.id, reason="spam")
    rejected = report_service.create_report(db, reporter_id=rejected_reporter.id, post_id=post.id, reason="rude")
    report_service.review_report(db, report_id=rejected.id, new_status=ReportStatus.REJECTED, reviewer=admin)
    rejected_at = _load_report(rejected.id).review_date

    delete_post(db, post_id=post.id, requester=author)

    resolved = _load_report(pending.id)
    assert resolved.status == ReportStatus.RESOLVED
    assert resolved.review_date is not None
    assert resolved.post_id is None

    kept = _load_report(rejected.id)
    assert kept.status == ReportStatus.REJECTED
    assert kept.review_date == rejected_at
    assert kept.post_id is None

    with SessionLocal() as session:
        assert session.get(Post, post.id) is None


def test_orphaned_report_summary_uses_placeholder(db, user_factory):
    author = user_factory("orphan-author")
    reporter = user_factory("orphan-reporter")
    post = create_post(db, author_id=author.id, content="short lived")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    live = report_service.summarize_report(db, _load_report(report.id))
    assert live.post.exists is True
    assert live.post.content == "short lived"
    assert live.post.author is not None and live.post.author.username == "orphan-author"

    delete_post(db, post_id=post.id, requester=author)

    summary = report_service.summarize_report(db, _load_report(report.id))
    assert summary.post.exists is False
    assert summary.post.content == "Post deleted"
    assert summary.post.id == UUID(int=0)
    assert summary.post.author is None
    assert summary.reporter is not None and summary.reporter.username == "orphan-reporter"


def test_failing_hook_rolls_back_deletion(db, user_factory):
    author = user_factory("hook-author")
    reporter = user_factory("hook-reporter")
    post = create_post(db, author_id=author.id, content="sticky")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    def _explode(session, doomed):
        raise RuntimeError("hook failed")

    post_deletion_hooks.register(_explode)
    try:
        with pytest.raises(RuntimeError):
            delete_post(db, post_id=post.id, requester=author)
    finally:
        post_deletion_hooks.unregister(_explode)

    with SessionLocal() as session:
        assert session.get(Post, post.id) is not None
    stored = _load_report(report.id)
    assert stored.status == ReportStatus.PENDING
    assert stored.post_id == post.id
    assert stored.review_date is None


def test_report_visible_to_reporter_and_admin_only(db, user_factory):
    author = user_factory("view-author")
    reporter = user_factory("view-reporter")
    stranger = user_factory("view-stranger")
    admin = user_factory("view-admin", role="admin")
    post = create_post(db, author_id=author.id, content="view")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    assert report_service.get_report(db, report_id=report.id, viewer=reporter).id == report.id
    assert report_service.get_report(db, report_id=report.id, viewer=admin).id == report.id
    with pytest.raises(ForbiddenError):
        report_service.get_report(db, report_id=report.id, viewer=stranger)


def test_listing_and_counting_by_status(db, user_factory):
    author = user_factory("stats-author")
    admin = user_factory("stats-admin", role="admin")
    first = create_post(db, author_id=author.id, content="first")
    second = create_post(db, author_id=author.id, content="second")
    reporter = user_factory("stats-reporter")

    open_report = report_service.create_report(db, reporter_id=reporter.id, post_id=first.id, reason="spam")
    closed = report_service.create_report(db, reporter_id=reporter.id, post_id=second.id, reason="abusive words")
    report_service.review_report(db, report_id=closed.id, new_status=ReportStatus.REVIEWED, reviewer=admin)

    counts = report_service.count_reports_by_status(db)
    assert counts[ReportStatus.PENDING] == 1
    assert counts[ReportStatus.REVIEWED] == 1
    assert counts[ReportStatus.REJECTED] == 0
    assert counts[ReportStatus.RESOLVED] == 0

    pending = report_service.list_pending_reports(db)
    assert [item.id for item in pending.items] == [open_report.id]

    searched = report_service.list_reports(db, search="ABUSIVE")
    assert [item.id for item in searched.items] == [closed.id]


def test_stale_review_cannot_overwrite_committed_decision(db, user_factory):
    author = user_factory("stale-author")
    reporter = user_factory("stale-reporter")
    first_admin = user_factory("first-moderator", role="admin")
    second_admin = user_factory("second-moderator", role="admin")
    post = create_post(db, author_id=author.id, content="contested")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    with SessionLocal() as slow, SessionLocal() as fast:
        assert slow.get(Report, report.id).status == ReportStatus.PENDING

        report_service.review_report(fast, report_id=report.id, new_status=ReportStatus.REVIEWED, reviewer=first_admin)

        with pytest.raises(InvalidStateError):
            report_service.review_report(
                slow, report_id=report.id, new_status=ReportStatus.REJECTED, reviewer=second_admin
            )

    assert _load_report(report.id).status == ReportStatus.REVIEWED
    with SessionLocal() as session:
        entries = session.scalar(select(func.count(AdminAction.id)).where(AdminAction.target_id == report.id))
    assert entries == 1


def test_deletion_keeps_decision_committed_after_reports_were_loaded(db, user_factory):
    author = user_factory("late-author")
    reporter = user_factory("late-reporter")
    admin = user_factory("late-moderator", role="admin")
    post = create_post(db, author_id=author.id, content="late decision")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    with SessionLocal() as deleting, SessionLocal() as moderating:
        loaded = deleting.scalars(select(Report).where(Report.post_id == post.id)).all()
        assert [item.status for item in loaded] == [ReportStatus.PENDING]

        report_service.review_report(
            moderating, report_id=report.id, new_status=ReportStatus.REJECTED, reviewer=admin
        )
        rejected_at = _load_report(report.id).review_date

        delete_post(deleting, post_id=post.id, requester=author)

    stored = _load_report(report.id)
    assert stored.status == ReportStatus.REJECTED
    assert stored.review_date == rejected_at
    assert stored.post_id is None


def test_concurrent_duplicate_report_is_reported_as_conflict(db, user_factory, monkeypatch):
    author = user_factory("race-author")
    reporter = user_factory("race-reporter")
    post = create_post(db, author_id=author.id, content="raced")

    with SessionLocal() as other:
        other.add(Report(reporter_id=reporter.id, post_id=post.id, reason="spam", status=ReportStatus.PENDING))
        other.commit()

    # Simulate the other writer committing between our check and our insert.
    monkeypatch.setattr(report_service, "_find_report_id", lambda db, *, reporter_id, post_id: None)

    with pytest.raises(ConflictError):
        report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam again")

    with SessionLocal() as session:
        total = session.scalar(select(func.count(Report.id)).where(Report.reporter_id == reporter.id))
    assert total == 1


def test_same_reporter_may_hold_several_orphaned_reports(db, user_factory):
    author = user_factory("serial-author")
    reporter = user_factory("serial-reporter")
    posts = [create_post(db, author_id=author.id, content=f"post {index}") for index in range(3)]
    for post in posts:
        report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    for post in posts:
        delete_post(db, post_id=post.id, requester=author)

    with SessionLocal() as session:
        orphaned = session.scalars(
            select(Report).where(Report.reporter_id == reporter.id, Report.post_id.is_(None))
        ).all()
    assert len(orphaned) == 3
    assert {item.status for item in orphaned} == {ReportStatus.RESOLVED}


def test_summary_of_reference_to_purged_post_keeps_its_id(db, user_factory):
    author = user_factory("purged-author")
    reporter = user_factory("purged-reporter")
    post = create_post(db, author_id=author.id, content="purged elsewhere")
    report = report_service.create_report(db, reporter_id=reporter.id, post_id=post.id, reason="spam")

    # Remove the row without the hook chain or the SET NULL rule.
    with engine.connect() as connection:
        connection.exec_driver_sql("PRAGMA foreign_keys=OFF")
        try:
            connection.execute(delete(Post).where(Post.id == post.id))
            connection.commit()
        finally:
            connection.exec_driver_sql("PRAGMA foreign_keys=ON")

    stored = _load_report(report.id)
    assert stored.post_id == post.id

    summary = report_service.summarize_report(db, stored)
    assert summary.post.exists is False
    assert summary.post.id == post.id
    assert summary.post.content == "Post deleted"
    assert summary.post.author is None
