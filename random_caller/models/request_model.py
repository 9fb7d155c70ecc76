# /random_caller/models/request_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

from .roster_model import Outcome, RoundStatus, Student


# --- Request Payloads ---

class ClassCreate(BaseModel):
    """Payload for adding a class. The name is normalized by the service."""
    name: str = Field(..., description="Display name of the new class.")


class StudentCreate(BaseModel):
    """Payload for adding a single student to a class."""
    name: str = Field(..., description="The student's display name.")


class StudentRename(BaseModel):
    """Payload for renaming a student in place."""
    name: str = Field(..., description="The new display name.")


class BulkImportRequest(BaseModel):
    """
    Free-form roster text: one name per line, or CSV rows whose first cell is
    the name (an optional header row containing "name" is skipped).
    """
    text: str = Field(..., description="Pasted roster text.", examples=["Name\nAlice,5\nBob,3"])


class MarkRequest(BaseModel):
    """Payload for scoring the currently selected student."""
    isCorrect: bool


# --- Response Contracts ---

class ActionResponse(BaseModel):
    """Generic acknowledgement carrying the outcome and its notice text."""
    outcome: Outcome
    message: str


class StudentView(BaseModel):
    """A student as listed in the class view, with derived totals."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    correct: int
    incorrect: int
    total: int
    accuracy: Optional[float] = Field(default=None, description="correct/total; null when total is 0.")
    calledThisRound: bool

    @classmethod
    def from_student(cls, student: Student) -> "StudentView":
        return cls(
            id=student.id,
            name=student.name,
            correct=student.correct,
            incorrect=student.incorrect,
            total=student.total,
            accuracy=student.accuracy,
            calledThisRound=student.calledThisRound,
        )


class ClassSummary(BaseModel):
    id: str
    name: str
    studentCount: int
    isCurrent: bool


class ClassDetails(BaseModel):
    id: str
    name: str
    students: List[StudentView]
    round: RoundStatus


class ClassCreated(ActionResponse):
    classInfo: Optional[ClassSummary] = None


class StudentResponse(ActionResponse):
    student: Optional[StudentView] = None


class ImportResponse(ActionResponse):
    added: int = 0


class SelectionView(BaseModel):
    """The currently selected student, as shown on the picker card."""
    classId: Optional[str] = None
    student: Optional[StudentView] = None
    accuracyPercent: Optional[int] = Field(default=None, description="Rounded accuracy percentage.")


class PickResponse(ActionResponse):
    picked: Optional[StudentView] = Field(default=None, description="The student just picked, even when the round is now complete.")
    selection: SelectionView
    round: Optional[RoundStatus] = None
