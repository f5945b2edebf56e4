"""HTTP-level tests for the moderation routers."""
from __future__ import annotations

import os
from typing import Callable, Iterator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_api.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from integrity.database import Base, SessionLocal, engine  # noqa: E402
from integrity.main import app  # noqa: E402
from integrity.models import AdminAction, Follow, Post, Reaction, Report, User  # noqa: E402
from integrity.services.auth_service import create_access_token, get_current_user  # noqa: E402


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
        session.execute(delete(Follow))
        session.execute(delete(Reaction))
        session.execute(delete(Post))
        session.execute(delete(User))
        session.commit()
    yield


@pytest.fixture
def user_factory() -> Callable[..., User]:
    def _factory(username: str, *, role: str = "user", active: bool = True) -> User:
        with SessionLocal() as session:
            user = User(username=username, role=role, active=active)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
    return _factory


@pytest.fixture
def authed_client() -> Iterator[Callable[[User], TestClient]]:
    with TestClient(app) as client:
        def _with_user(user: User) -> TestClient:
            def _override() -> User:
                return user
            app.dependency_overrides[get_current_user] = _override
            return client
        yield _with_user
    app.dependency_overrides.clear()


def test_health_and_api_info() -> None:
    with TestClient(app) as client:
        assert client.get("/health").json() == {"status": "ok"}
        assert "version" in client.get("/api").json()


def test_reaction_toggle_round_trip(authed_client, user_factory):
    author = user_factory("api-author")
    fan = user_factory("api-fan")

    client = authed_client(author)
    created = client.post("/posts", json={"content": "hello world"})
    assert created.status_code == 201, created.text
    post_id = created.json()["id"]

    client = authed_client(fan)
    liked = client.post(f"/posts/{post_id}/reactions", json={"reaction_type": "LIKE"})
    assert liked.status_code == 200, liked.text
    assert liked.json()["reacted"] is True
    assert liked.json()["like_count"] == 1

    summary = client.get(f"/posts/{post_id}/reactions/summary")
    assert summary.json() == {"post_id": post_id, "counts": {"LIKE": 1}, "total": 1}

    unliked = client.post(f"/posts/{post_id}/reactions")
    assert unliked.json()["reacted"] is False
    assert unliked.json()["like_count"] == 0

    missing = client.delete(f"/posts/{post_id}/reactions")
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Reaction not found"}


def test_follow_endpoints_map_domain_errors(authed_client, user_factory):
    fan = user_factory("api-follower")
    star = user_factory("api-star")
    client = authed_client(fan)

    followed = client.post(f"/follows/{star.id}")
    assert followed.status_code == 201, followed.text
    body = followed.json()
    assert body["status"] == "followed"
    assert body["followers"] == 1
    assert body["follows"] is True

    assert client.post(f"/follows/{star.id}").status_code == 409
    assert client.post(f"/follows/{fan.id}").status_code == 422

    followers = client.get(f"/follows/{star.id}/followers")
    assert followers.json()["total"] == 1
    assert followers.json()["items"][0]["user"]["username"] == "api-follower"

    unfollowed = client.delete(f"/follows/{star.id}")
    assert unfollowed.json()["status"] == "unfollowed"
    assert client.delete(f"/follows/{star.id}").status_code == 404


def test_report_review_and_cascade_over_http(authed_client, user_factory):
    author = user_factory("http-author")
    reporter = user_factory("http-reporter")
    admin = user_factory("http-admin", role="admin")

    client = authed_client(author)
    post_id = client.post("/posts", json={"content": "report me"}).json()["id"]

    client = authed_client(reporter)
    filed = client.post("/reports", json={"post_id": post_id, "reason": "spam"})
    assert filed.status_code == 201, filed.text
    report_id = filed.json()["id"]
    assert filed.json()["status"] == "PENDING"
    assert filed.json()["post"]["exists"] is True

    assert client.post("/reports", json={"post_id": post_id, "reason": "spam"}).status_code == 409
    assert client.get("/reports/pending").status_code == 403

    client = authed_client(admin)
    assert client.get("/reports/stats").json() == {"pending": 1, "reviewed": 0, "rejected": 0, "resolved": 0}
    assert client.get(f"/reports/post/{post_id}").json()["total"] == 1

    deleted = client.delete(f"/posts/{post_id}")
    assert deleted.status_code == 204, deleted.text

    orphan = client.get(f"/reports/{report_id}").json()
    assert orphan["status"] == "RESOLVED"
    assert orphan["post"] == {
        "id": "00000000-0000-0000-0000-000000000000",
        "content": "Post deleted",
        "author": None,
        "exists": False,
    }

    review = client.post(f"/reports/{report_id}/review", json={"status": "REVIEWED"})
    assert review.status_code == 409

    actions = client.get("/admin/actions", params={"action_type": "DELETE_POST"}).json()
    assert actions["total"] == 1
    entry = actions["items"][0]
    assert entry["affected_username"] == "http-author"
    assert entry["target_table"] == "posts"
    assert entry["target_id"] == post_id


def test_admin_user_management_routes(authed_client, user_factory):
    admin = user_factory("routes-admin", role="admin")
    member = user_factory("routes-member")
    client = authed_client(admin)

    deactivated = client.post(f"/admin/users/{member.id}/deactivate", params={"reason": "spam"})
    assert deactivated.status_code == 200, deactivated.text
    assert deactivated.json()["active"] is False

    assert client.post(f"/admin/users/{member.id}/deactivate").status_code == 409

    promoted = client.patch(f"/admin/users/{member.id}/role", json={"role": "admin"})
    assert promoted.json()["role"] == "admin"

    removed = client.delete(f"/admin/users/{member.id}")
    assert removed.status_code == 204

    actions = client.get("/admin/actions").json()
    kinds = {item["action_type"] for item in actions["items"]}
    assert kinds == {"DEACTIVATE_USER", "CREATE_ADMIN", "DELETE_ADMIN"}

    single = client.get(f"/admin/actions/{actions['items'][0]['id']}")
    assert single.status_code == 200
    assert client.get(f"/admin/actions/{uuid4()}").status_code == 404


def test_bearer_token_identifies_active_users(user_factory):
    active = user_factory("token-active")
    inactive = user_factory("token-inactive", active=False)

    with TestClient(app) as client:
        assert client.post("/posts", json={"content": "anon"}).status_code == 401

        ok = client.post(
            "/posts",
            json={"content": "signed"},
            headers={"Authorization": f"Bearer {create_access_token(active.id)}"},
        )
        assert ok.status_code == 201, ok.text

        blocked = client.post(
            "/posts",
            json={"content": "blocked"},
            headers={"Authorization": f"Bearer {create_access_token(inactive.id)}"},
        )
        assert blocked.status_code == 403

        garbage = client.post("/posts", json={"content": "x"}, headers={"Authorization": "Bearer not-a-jwt"})
        assert garbage.status_code == 401
