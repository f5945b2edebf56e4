"""Administrator endpoints: audit log and account management."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import ActionType, User
from ..schemas import AdminActionListResponse, AdminActionResponse, RoleUpdateRequest, UserSummary
from ..services.admin_action_service import admin_action_to_response, get_admin_action, list_admin_actions
from ..services.auth_service import require_admin
from ..services.user_admin_service import activate_user, deactivate_user, delete_user, update_user_role

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/actions", response_model=AdminActionListResponse)
async def list_actions_endpoint(
    action_type: ActionType | None = Query(None),
    admin_id: UUID | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(25, ge=1, le=100),
    db: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> AdminActionListResponse:
    return list_admin_actions(db, action_type=action_type, admin_id=admin_id, skip=skip, limit=limit)


@router.get("/actions/{action_id}", response_model=AdminActionResponse)
async def get_action_endpoint(
    action_id: UUID,
    db: Session = Depends(get_session),
    _: User = Depends(require_admin),
) -> AdminActionResponse:
    return admin_action_to_response(db, get_admin_action(db, action_id=action_id))


@router.post("/users/{user_id}/activate", response_model=UserSummary)
async def activate_user_endpoint(
    user_id: UUID,
    reason: str | None = Query(None, max_length=1000),
    db: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> UserSummary:
    return UserSummary.model_validate(activate_user(db, actor=admin, user_id=user_id, reason=reason))


@router.post("/users/{user_id}/deactivate", response_model=UserSummary)
async def deactivate_user_endpoint(
    user_id: UUID,
    reason: str | None = Query(None, max_length=1000),
    db: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> UserSummary:
    return UserSummary.model_validate(deactivate_user(db, actor=admin, user_id=user_id, reason=reason))


@router.patch("/users/{user_id}/role", response_model=UserSummary)
async def update_role_endpoint(
    user_id: UUID,
    payload: RoleUpdateRequest,
    db: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> UserSummary:
    return UserSummary.model_validate(update_user_role(db, actor=admin, user_id=user_id, new_role=payload.role))


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_endpoint(
    user_id: UUID,
    reason: str | None = Query(None, max_length=1000),
    db: Session = Depends(get_session),
    admin: User = Depends(require_admin),
) -> Response:
    delete_user(db, actor=admin, user_id=user_id, reason=reason)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
