"""Service layer for the moderation backend.

Importing this package registers the report lifecycle hook on the post
deletion chain.
"""
from . import (
    admin_action_service,
    follow_service,
    identity_service,
    post_service,
    reaction_service,
    report_service,
    user_admin_service,
)
from .admin_action_service import AdminActionTarget, record_admin_action
from .identity_service import IdentitySnapshot, capture_identity
from .post_service import post_deletion_hooks

__all__ = [
    "admin_action_service",
    "follow_service",
    "identity_service",
    "post_service",
    "reaction_service",
    "report_service",
    "user_admin_service",
    "AdminActionTarget",
    "IdentitySnapshot",
    "capture_identity",
    "post_deletion_hooks",
    "record_admin_action",
]
