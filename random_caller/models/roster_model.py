# /random_caller/models/roster_model.py

"""
Pydantic models for the persisted roster document and the signals the core
operations return.

The field names of `Student`, `Class` and `Roster` are exactly the keys of the
stored JSON document (camelCase included), so `model_dump()` produces the
persisted shape byte-for-byte once passed through `json.dumps`.
"""

import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

CURRENT_VERSION = 2
DEFAULT_CLASS_NAMES = ("Class 1", "Class 2", "Class 3")


def new_class_id() -> str:
    return f"cls_{uuid.uuid4().hex[:12]}"


def new_student_id() -> str:
    return f"stu_{uuid.uuid4().hex[:12]}"


# --- Persisted Schema ---

class Student(BaseModel):
    """A single student and their cumulative answer counters."""
    id: str = Field(default_factory=new_student_id)
    name: str = Field(..., min_length=1)
    correct: int = Field(default=0, ge=0)
    incorrect: int = Field(default=0, ge=0)
    calledThisRound: bool = Field(
        default=False,
        description="True once the student has been picked in the class's current round."
    )

    @property
    def total(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> Optional[float]:
        """correct / total, or None when the student has never been marked."""
        if self.total == 0:
            return None
        return self.correct / self.total


class Class(BaseModel):
    """A named group of students with its own independent round state."""
    id: str = Field(default_factory=new_class_id)
    name: str = Field(..., min_length=1)
    students: List[Student] = Field(default_factory=list)

    def find_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    def has_name(self, name: str, exclude_id: Optional[str] = None) -> bool:
        """Case-insensitive name lookup, optionally ignoring one student."""
        wanted = name.lower()
        return any(s.name.lower() == wanted and s.id != exclude_id for s in self.students)


class Roster(BaseModel):
    """The root document: a schema version tag and the ordered classes."""
    version: int = CURRENT_VERSION
    classes: List[Class] = Field(default_factory=list)

    def find_class(self, class_id: Optional[str]) -> Optional[Class]:
        if not class_id:
            return None
        return next((c for c in self.classes if c.id == class_id), None)


def default_roster() -> Roster:
    """A fresh roster with the three empty starter classes."""
    return Roster(classes=[Class(name=name) for name in DEFAULT_CLASS_NAMES])


# --- Operation Signals ---

class Outcome(str, Enum):
    OK = "ok"
    EMPTY_NAME = "empty_name"
    DUPLICATE_NAME = "duplicate_name"
    CLASS_NOT_FOUND = "class_not_found"
    STUDENT_NOT_FOUND = "student_not_found"
    NO_STUDENTS = "no_students"
    ROUND_COMPLETE = "round_complete"
    NO_SELECTION = "no_selection"
    NOTHING_TO_IMPORT = "nothing_to_import"


NOTICES = {
    Outcome.EMPTY_NAME: "Please enter a name",
    Outcome.DUPLICATE_NAME: "Student already exists",
    Outcome.CLASS_NOT_FOUND: "Class not found",
    Outcome.STUDENT_NOT_FOUND: "Student not found",
    Outcome.NO_STUDENTS: "No students in this class",
    Outcome.ROUND_COMPLETE: "Round complete",
    Outcome.NO_SELECTION: "Pick a student first",
    Outcome.NOTHING_TO_IMPORT: "Nothing to import",
}


def notice_for(outcome: Outcome) -> str:
    return NOTICES[outcome]


# --- Round State ---

class RoundState(str, Enum):
    IDLE = "Idle"
    IN_PROGRESS = "InProgress"
    ROUND_COMPLETE = "RoundComplete"


class RoundStatus(BaseModel):
    """Progress of a class through its current round."""
    called: int
    total: int
    remaining: int
    state: RoundState
