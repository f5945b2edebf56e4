"""Opt-in Alembic upgrade run from FastAPI startup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..config import Settings

logger = logging.getLogger(__name__)


def _should_run_migrations(settings: Settings) -> bool:
    # Keep tests hermetic.
    if os.getenv("PYTEST_CURRENT_TEST") is not None:
        return False

    if settings.disable_auto_migrations:
        return False

    if settings.auto_migrate:
        return True

    # SQLite databases are created with create_all instead.
    return not settings.database_url.strip().lower().startswith("sqlite")


def run_migrations_if_needed(settings: Settings) -> bool:
    """Run ``alembic upgrade head`` if enabled.

    Returns True if migrations were attempted.
    """

    if not _should_run_migrations(settings):
        logger.info("Auto-migrations disabled")
        return False

    from alembic import command
    from alembic.config import Config

    repo_root = Path(__file__).resolve().parents[2]
    alembic_ini = repo_root / "alembic.ini"

    if not alembic_ini.exists():
        logger.warning("Auto-migrations skipped: missing alembic.ini at %s", alembic_ini)
        return False

    logger.info("Running Alembic migrations (upgrade head)")

    config = Config(str(alembic_ini))
    config.set_main_option("sqlalchemy.url", settings.database_url)
    config.set_main_option("script_location", str(repo_root / "alembic"))

    command.upgrade(config, "head")
    logger.info("Alembic migrations completed")
    return True


__all__ = ["run_migrations_if_needed"]
