# /random_caller/db/base.py

# Central registry for all SQLAlchemy models. Importing them here guarantees
# that Base.metadata knows about every table before create_all() runs.

from .base_class import Base

from .models.storage_models import StorageEntry
