"""Project-wide constant values."""
from __future__ import annotations

from uuid import UUID

# Rendered in place of identity fields that cannot be resolved.
NOT_AVAILABLE = "N/A"

DELETED_POST_CONTENT = "Post deleted"
DELETED_POST_ID = UUID(int=0)

REPORT_REASON_MAX_LENGTH = 500
REPORT_DESCRIPTION_MAX_LENGTH = 1000
POST_CONTENT_MAX_LENGTH = 1000
COMMENT_CONTENT_MAX_LENGTH = 500

MAX_PAGE_LIMIT = 100

__all__ = [
    "NOT_AVAILABLE",
    "DELETED_POST_CONTENT",
    "DELETED_POST_ID",
    "REPORT_REASON_MAX_LENGTH",
    "REPORT_DESCRIPTION_MAX_LENGTH",
    "POST_CONTENT_MAX_LENGTH",
    "COMMENT_CONTENT_MAX_LENGTH",
    "MAX_PAGE_LIMIT",
]
