"""Security helpers for secret handling."""
from .secrets import JWT_SECRET_ENV, MissingSecretError, require_secret

__all__ = ["JWT_SECRET_ENV", "MissingSecretError", "require_secret"]
