"""Typed failures raised by the moderation services.

Services never raise ``HTTPException`` directly; the API layer maps these
errors to responses through a single exception handler installed in
:mod:`integrity.main`.
"""
from __future__ import annotations

from fastapi import status


class ModerationError(RuntimeError):
    """Base class for every domain failure surfaced to callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ModerationError):
    """A referenced user, post, report, follow edge or reaction does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ModerationError):
    """A uniqueness rule was violated."""

    status_code = status.HTTP_409_CONFLICT


class InvalidArgumentError(ModerationError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidStateError(ModerationError):
    """The target is not in a state that allows the requested transition."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(ModerationError):
    status_code = status.HTTP_403_FORBIDDEN


__all__ = [
    "ModerationError",
    "NotFoundError",
    "ConflictError",
    "InvalidArgumentError",
    "InvalidStateError",
    "ForbiddenError",
]
