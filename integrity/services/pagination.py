"""Shared skip/limit clamping for list endpoints."""
from __future__ import annotations

from ..constants import MAX_PAGE_LIMIT


def normalize_pagination(skip: int | None, limit: int | None) -> tuple[int, int]:
    safe_skip = max(0, int(skip or 0))
    safe_limit = max(1, min(int(limit or 25), MAX_PAGE_LIMIT))
    return safe_skip, safe_limit


__all__ = ["normalize_pagination"]
