# /random_caller/services/roster_helpers/crud.py

"""
Pure roster operations over classes and students.

Every function mutates the given `Roster` in place and reports what happened
through an `Outcome`. None of them raise for bad input: empty names,
duplicate names and unknown ids are answered with a non-OK outcome and leave
the roster untouched.
"""

import re
from typing import Optional, Tuple

from ...models.roster_model import Class, Outcome, Roster, Student, default_roster

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_name(name: Optional[str]) -> str:
    """Collapses internal whitespace runs to one space and trims the ends."""
    return _WHITESPACE_RE.sub(" ", str(name or "")).strip()


# --- CLASS OPERATIONS ---

def add_class(roster: Roster, name: str) -> Tuple[Optional[Class], Outcome]:
    clean = normalize_name(name)
    if not clean:
        return None, Outcome.EMPTY_NAME

    new_class = Class(name=clean)
    roster.classes.append(new_class)
    return new_class, Outcome.OK


def delete_class(roster: Roster, class_id: str) -> Outcome:
    """
    Removes a class together with its students. A roster is never left
    without classes: deleting the last one restores the default classes.
    """
    if roster.find_class(class_id) is None:
        return Outcome.CLASS_NOT_FOUND

    roster.classes = [c for c in roster.classes if c.id != class_id]
    if not roster.classes:
        roster.classes = default_roster().classes
    return Outcome.OK


# --- STUDENT OPERATIONS ---

def add_student(roster: Roster, class_id: str, name: str) -> Tuple[Optional[Student], Outcome]:
    target = roster.find_class(class_id)
    if target is None:
        return None, Outcome.CLASS_NOT_FOUND

    clean = normalize_name(name)
    if not clean:
        return None, Outcome.EMPTY_NAME
    if target.has_name(clean):
        return None, Outcome.DUPLICATE_NAME

    new_student = Student(name=clean)
    target.students.append(new_student)
    return new_student, Outcome.OK


def delete_student(roster: Roster, class_id: str, student_id: str) -> Outcome:
    target = roster.find_class(class_id)
    if target is None:
        return Outcome.CLASS_NOT_FOUND
    if target.find_student(student_id) is None:
        return Outcome.STUDENT_NOT_FOUND

    target.students = [s for s in target.students if s.id != student_id]
    return Outcome.OK


def rename_student(roster: Roster, class_id: str, student_id: str, new_name: str) -> Tuple[Optional[Student], Outcome]:
    target = roster.find_class(class_id)
    if target is None:
        return None, Outcome.CLASS_NOT_FOUND
    student = target.find_student(student_id)
    if student is None:
        return None, Outcome.STUDENT_NOT_FOUND

    clean = normalize_name(new_name)
    if not clean:
        return None, Outcome.EMPTY_NAME
    if target.has_name(clean, exclude_id=student.id):
        return None, Outcome.DUPLICATE_NAME

    student.name = clean
    return student, Outcome.OK


def reset_stats(roster: Roster, class_id: str) -> Outcome:
    """Zeroes the answer counters of every student; round flags are kept."""
    target = roster.find_class(class_id)
    if target is None:
        return Outcome.CLASS_NOT_FOUND

    for student in target.students:
        student.correct = 0
        student.incorrect = 0
    return Outcome.OK
