# /random_caller/services/caller_session.py

"""
The explicit session that replaces module-level globals: the in-memory
roster, the active class, the current selection and the storage handle.

Independent sessions share nothing, which is what lets tests (or several
embedded callers) run side by side.
"""

import random
import threading
from typing import Optional

from ..models.roster_model import Class, Roster, Student
from . import state_store
from .database_service import DatabaseService


class CallerSession:
    def __init__(self, db: DatabaseService, roster: Optional[Roster] = None, rng: Optional[random.Random] = None):
        self.db = db
        self.roster = roster if roster is not None else state_store.load(db)
        self.rng = rng or random.Random()
        # Held by the service facade so overlapping requests never interleave.
        self.lock = threading.RLock()
        self.current_class_id: Optional[str] = None
        self.selected_student_id: Optional[str] = None
        self.ensure_current_class()

    def ensure_current_class(self) -> None:
        """Points the session at the first class if the active one is gone."""
        if self.roster.find_class(self.current_class_id) is None:
            self.current_class_id = self.roster.classes[0].id if self.roster.classes else None
            self.selected_student_id = None

    @property
    def current_class(self) -> Optional[Class]:
        return self.roster.find_class(self.current_class_id)

    @property
    def selected_student(self) -> Optional[Student]:
        """The picked student, looked up in the active class; None if it no longer exists."""
        current = self.current_class
        if current is None or not self.selected_student_id:
            return None
        return current.find_student(self.selected_student_id)

    def clear_selection(self) -> None:
        self.selected_student_id = None

    def save(self) -> None:
        state_store.save(self.roster, self.db)
