"""Lookup of the token signing key from the environment."""
from __future__ import annotations

import os
from typing import Final

__all__ = ["JWT_SECRET_ENV", "MissingSecretError", "require_secret"]

JWT_SECRET_ENV: Final[str] = "JWT_SECRET_KEY"

# values shipped in .env.example and common templates
_TEMPLATE_VALUES: Final[frozenset[str]] = frozenset(
    {"changeme", "change-me", "placeholder", "secret", "your-secret-key"}
)


class MissingSecretError(RuntimeError):
    """Raised when a signing key is unset or still holds a template value."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is not configured; replace the value copied from .env.example")
        self.name = name


def _is_template(value: str) -> bool:
    return value.lower() in _TEMPLATE_VALUES


def require_secret(name: str = JWT_SECRET_ENV) -> str:
    value = (os.getenv(name) or "").strip()
    if not value or _is_template(value):
        raise MissingSecretError(name)
    return value
