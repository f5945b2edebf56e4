"""Aggregate router exports."""
from .admin import router as admin_router
from .follows import router as follows_router
from .posts import router as posts_router
from .reactions import router as reactions_router
from .reports import router as reports_router

__all__ = [
    "admin_router",
    "follows_router",
    "posts_router",
    "reactions_router",
    "reports_router",
]
