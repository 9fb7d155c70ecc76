# /random_caller/db/models/storage_models.py

"""
SQLAlchemy model for the key/value table that backs the roster store.

The roster is persisted as one serialized JSON document per key, so this
table mirrors a browser's local storage: a string key and a text value.
"""

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class StorageEntry(Base):
    __tablename__ = "storage_entries"  # Override automatic pluralization

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
