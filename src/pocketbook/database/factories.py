"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from pocketbook.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "POCKETBOOK_DB_PATH"


def default_database_path() -> Path:
    """~/.pocketbook/pocketbook.db, the store used when nothing else is configured."""
    return Path.home() / ".pocketbook" / "pocketbook.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file: explicit path, then POCKETBOOK_DB_PATH, then the default.

    The parent directory is created if needed.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    path = Path(chosen).expanduser() if chosen else default_database_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed store.

    The schema is created on first use of a new file.
    """
    path = resolve_database_path(database_path)
    logger.debug("Using SQLite database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
