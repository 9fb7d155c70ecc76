# /random_caller/services/class_service.py

"""
This service module is the business logic layer the routers call for every
roster, selection and scoring action.

It serves as a facade over the pure helpers (`crud`, `roster_ingestion`,
`selection_service`, `scoring_service`) and the `CallerSession`. Each
mutating function runs one helper against the session's roster and, when the
helper reports success, saves the whole roster straight away. Non-OK outcomes
leave both memory and storage untouched.

Every facade call runs under the session lock, so requests served from the
threadpool are applied one at a time.
"""

import functools
import logging
from typing import List, Optional, Tuple

from ..models.roster_model import Class, Outcome, RoundState, RoundStatus, Student
from ..models.request_model import ClassDetails, ClassSummary, SelectionView, StudentView
from .caller_session import CallerSession
from . import selection_service, scoring_service

# Import the specialist helper modules this service orchestrates.
from .roster_helpers import crud, roster_ingestion

logger = logging.getLogger(__name__)


def _serialized(func):
    @functools.wraps(func)
    def wrapper(session: CallerSession, *args, **kwargs):
        with session.lock:
            return func(session, *args, **kwargs)
    return wrapper


def _commit(session: CallerSession, outcome: Outcome) -> Outcome:
    if outcome == Outcome.OK:
        session.save()
    else:
        logger.debug("Roster left unchanged: %s", outcome.value)
    return outcome


# --- Class Facade Methods ---

@_serialized
def add_class(session: CallerSession, name: str) -> Tuple[Optional[Class], Outcome]:
    new_class, outcome = crud.add_class(session.roster, name)
    _commit(session, outcome)
    return new_class, outcome


@_serialized
def delete_class(session: CallerSession, class_id: str) -> Outcome:
    """
    Deletes a class and its students. If it was the active class the session
    moves to the first remaining class and drops the selection.
    """
    outcome = crud.delete_class(session.roster, class_id)
    if outcome == Outcome.OK and session.current_class_id == class_id:
        session.clear_selection()
    session.ensure_current_class()
    return _commit(session, outcome)


@_serialized
def select_class(session: CallerSession, class_id: str) -> Outcome:
    """Makes a class active. Round state of every class is left as is."""
    if session.roster.find_class(class_id) is None:
        return Outcome.CLASS_NOT_FOUND
    if session.current_class_id != class_id:
        session.current_class_id = class_id
        session.clear_selection()
    return Outcome.OK


@_serialized
def reset_stats(session: CallerSession, class_id: str) -> Outcome:
    outcome = crud.reset_stats(session.roster, class_id)
    if outcome == Outcome.OK and session.current_class_id == class_id:
        session.clear_selection()
    return _commit(session, outcome)


# --- Student Facade Methods ---

@_serialized
def add_student(session: CallerSession, class_id: str, name: str) -> Tuple[Optional[Student], Outcome]:
    student, outcome = crud.add_student(session.roster, class_id, name)
    _commit(session, outcome)
    return student, outcome


@_serialized
def delete_student(session: CallerSession, class_id: str, student_id: str) -> Outcome:
    outcome = crud.delete_student(session.roster, class_id, student_id)
    if outcome == Outcome.OK and session.selected_student_id == student_id:
        session.clear_selection()
    return _commit(session, outcome)


@_serialized
def rename_student(session: CallerSession, class_id: str, student_id: str, new_name: str) -> Tuple[Optional[Student], Outcome]:
    student, outcome = crud.rename_student(session.roster, class_id, student_id, new_name)
    _commit(session, outcome)
    return student, outcome


@_serialized
def bulk_import(session: CallerSession, class_id: str, text: str) -> Tuple[int, Outcome]:
    added, outcome = roster_ingestion.bulk_import(session.roster, class_id, text)
    _commit(session, outcome)
    return added, outcome


# --- Round-Robin Selection ---

@_serialized
def pick_next(session: CallerSession, class_id: str) -> Tuple[Optional[Student], Outcome]:
    """
    Picks the next student of a class and makes them the current selection.
    The picked class becomes the active class. Once the round is complete,
    by this pick or an earlier one, nobody stays selected.
    """
    target = session.roster.find_class(class_id)
    if target is None:
        return None, Outcome.CLASS_NOT_FOUND

    select_class(session, class_id)
    student, outcome = selection_service.pick_next(target, session.rng)
    if outcome == Outcome.OK and selection_service.round_status(target).state != RoundState.ROUND_COMPLETE:
        session.selected_student_id = student.id
    else:
        session.clear_selection()
    _commit(session, outcome)
    return student, outcome


@_serialized
def start_new_round(session: CallerSession, class_id: str) -> Outcome:
    target = session.roster.find_class(class_id)
    if target is None:
        return Outcome.CLASS_NOT_FOUND

    outcome = selection_service.start_new_round(target)
    if outcome == Outcome.OK and session.current_class_id == class_id:
        session.clear_selection()
    return _commit(session, outcome)


@_serialized
def round_status(session: CallerSession, class_id: str) -> Optional[RoundStatus]:
    target = session.roster.find_class(class_id)
    if target is None:
        return None
    return selection_service.round_status(target)


# --- Scoring ---

@_serialized
def mark_selected(session: CallerSession, is_correct: bool) -> Tuple[Optional[Student], Outcome]:
    student, outcome = scoring_service.mark_selected(session.selected_student, is_correct)
    _commit(session, outcome)
    return student, outcome


# --- Read Models ---

@_serialized
def get_all_classes_with_summary(session: CallerSession) -> List[ClassSummary]:
    return [
        ClassSummary(
            id=cls.id,
            name=cls.name,
            studentCount=len(cls.students),
            isCurrent=cls.id == session.current_class_id,
        )
        for cls in session.roster.classes
    ]


def list_students(target: Class, search: Optional[str] = None) -> List[StudentView]:
    """Students filtered by a case-insensitive substring and sorted by name."""
    query = (search or "").strip().lower()
    matching = [s for s in target.students if not query or query in s.name.lower()]
    matching.sort(key=lambda s: (s.name.casefold(), s.name))
    return [StudentView.from_student(s) for s in matching]


@_serialized
def get_class_details_by_id(session: CallerSession, class_id: str, search: Optional[str] = None) -> Optional[ClassDetails]:
    target = session.roster.find_class(class_id)
    if target is None:
        return None
    return ClassDetails(
        id=target.id,
        name=target.name,
        students=list_students(target, search),
        round=selection_service.round_status(target),
    )


@_serialized
def get_selection(session: CallerSession) -> SelectionView:
    student = session.selected_student
    if student is None:
        return SelectionView(classId=session.current_class_id)

    accuracy = student.accuracy
    return SelectionView(
        classId=session.current_class_id,
        student=StudentView.from_student(student),
        accuracyPercent=None if accuracy is None else int(accuracy * 100 + 0.5),
    )
