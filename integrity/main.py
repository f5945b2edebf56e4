"""Application entry point for the FastAPI backend."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .database import init_db
from .errors import ModerationError
from .routers import admin_router, follows_router, posts_router, reactions_router, reports_router
from .services.migrations import run_migrations_if_needed

settings = get_settings()
APP_NAME = settings.app_name
API_VERSION = settings.api_version

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(posts_router)
app.include_router(reactions_router)
app.include_router(follows_router)
app.include_router(reports_router)
app.include_router(admin_router)


@app.exception_handler(ModerationError)
async def _moderation_error_handler(request: Request, exc: ModerationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
async def _startup() -> None:
    """Ensure the database schema is ready before serving."""

    try:
        run_migrations_if_needed(settings)
        init_db()
    except Exception:
        logger.exception("Database initialisation failed")
        raise


@app.get("/api", tags=["system"])
def api_info() -> dict[str, str]:
    return {"service": APP_NAME, "version": API_VERSION}


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
