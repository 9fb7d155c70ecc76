# /random_caller/services/database_helpers/storage_repository_sql.py

from typing import Optional
from sqlalchemy.orm import Session

from random_caller.db.models.storage_models import StorageEntry


class StorageRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_item(self, key: str) -> Optional[str]:
        """Returns the stored text for a key, or None if the key was never written."""
        entry = self.db.query(StorageEntry).filter(StorageEntry.key == key).first()
        return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        """Inserts or overwrites the value stored under a key."""
        entry = self.db.query(StorageEntry).filter(StorageEntry.key == key).first()
        if entry:
            entry.value = value
        else:
            self.db.add(StorageEntry(key=key, value=value))
        self.db.commit()

    def close(self) -> None:
        self.db.close()
