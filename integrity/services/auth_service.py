"""Bearer-token authentication and role checks for the API layer."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..models import User
from ..security.secrets import JWT_SECRET_ENV, MissingSecretError, require_secret

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def _get_jwt_secret() -> str:
    try:
        return require_secret(JWT_SECRET_ENV)
    except MissingSecretError as exc:
        raise RuntimeError(str(exc)) from exc


def create_access_token(subject: UUID, *, expires_minutes: Optional[int] = None) -> str:
    """Create a signed JWT holding the provided ``subject``."""

    settings = get_settings()
    expire_delta = timedelta(minutes=expires_minutes or settings.jwt_expires_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": str(subject), "exp": now + expire_delta, "iat": now}
    return jwt.encode(payload, _get_jwt_secret(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Decode and validate a JWT, returning the embedded subject UUID."""

    try:
        payload = jwt.decode(token, _get_jwt_secret(), algorithms=[get_settings().jwt_algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    try:
        return UUID(subject)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload") from exc


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_security),
    db: Session = Depends(get_session),
) -> User:
    """Resolve the authenticated, active user from the bearer token."""

    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    user_id = decode_access_token(credentials.credentials)

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if not user.active:
        logger.warning("Inactive user %s rejected", user.id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated")
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    db: Session = Depends(get_session),
) -> User | None:
    """Return the authenticated user when a valid bearer token is provided."""

    if not credentials or credentials.scheme.lower() != "bearer":
        return None

    try:
        user_id = decode_access_token(credentials.credentials)
    except HTTPException:
        return None

    user = db.get(User, user_id)
    if user is None or not user.active:
        return None
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return user


__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "require_admin",
]
