# /random_caller/services/database_service.py

import os
import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

# --- Repository Imports ---
from .database_helpers.storage_repository_sql import StorageRepositorySQL
from .database_helpers.storage_repository_file import StorageRepositoryFile

logger = logging.getLogger(__name__)

DATA_DIR = os.getenv("RANDOM_CALLER_DATA_DIR", "./data")

# Determine which storage backend to use based on an environment variable.
USE_SQL = os.getenv("RANDOM_CALLER_USE_SQL", "false").lower() == "true"


class DatabaseService:
    def __init__(self, db_session: Optional[Session] = None, data_dir: Optional[str] = None):
        """
        Initializes the DatabaseService.

        When a SQLAlchemy session is given, documents are kept in the
        `storage_entries` table. Otherwise it falls back to the JSON-file
        repository rooted at `data_dir` (or DATA_DIR).
        """
        if db_session is not None:
            self.storage_repo = StorageRepositorySQL(db_session)
        else:
            self.storage_repo = StorageRepositoryFile(data_dir or DATA_DIR)

    # --- KEY/VALUE STORAGE METHODS (DELEGATED) ---
    def set_item(self, key: str, value: str) -> None: self.storage_repo.set_item(key, value)
    def close(self) -> None: self.storage_repo.close()

    def get_item(self, key: str) -> Optional[str]:
        """
        Reads a stored document. A backend failure on read is reported as an
        absent key so that loading can fall back to a fresh roster.
        """
        try:
            return self.storage_repo.get_item(key)
        except (OSError, SQLAlchemyError) as e:
            logger.warning("Storage read failed for key %s: %s", key, e)
            return None


def open_db_service() -> DatabaseService:
    """
    Builds the DatabaseService for the running app, deciding between the SQL
    table and the JSON files from configuration.
    """
    if USE_SQL:
        from ..db.database import SessionLocal, init_db
        init_db()
        return DatabaseService(db_session=SessionLocal())
    return DatabaseService(data_dir=DATA_DIR)
