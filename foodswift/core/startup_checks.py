from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from foodswift.core.config import DATABASE_URL, IS_PROD

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"


def validate_database_environment() -> None:
    if IS_PROD and DATABASE_URL.startswith("sqlite"):
        logger.critical("%s SQLite is forbidden in production", STARTUP_PREFIX)
        raise RuntimeError("SQLite is forbidden in production environment")


def create_sqlite_schema(*, engine: Engine, metadata) -> bool:
    """Create tables for local SQLite databases. Other backends are provisioned externally."""
    if not DATABASE_URL.startswith("sqlite"):
        logger.info("%s schema creation skipped for non-sqlite database", STARTUP_PREFIX)
        return False
    metadata.create_all(bind=engine)
    logger.info("%s sqlite schema ensured", STARTUP_PREFIX)
    return True
