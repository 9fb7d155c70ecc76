# /random_caller/db/database.py

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# The SQL storage backend is optional; the default is a local SQLite file.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./random_caller.db")

# The 'check_same_thread' argument is only needed for SQLite.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# Each instance of this class will be a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Creates every registered table that does not exist yet."""
    # Importing the registry makes sure all models are attached to Base.metadata.
    from .base import Base
    Base.metadata.create_all(bind=bind or engine)
