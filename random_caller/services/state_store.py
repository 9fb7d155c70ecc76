# /random_caller/services/state_store.py

"""
Owns the versioned roster document: loading it from the storage collaborator,
normalizing older or damaged documents to the current schema, and saving it
back after every mutation.

`load` never raises. Anything that cannot be read or understood is replaced
with a fresh default roster, so callers always receive a valid `Roster`.
"""

import json
import logging
import math
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..models.roster_model import (
    CURRENT_VERSION,
    Class,
    Roster,
    Student,
    default_roster,
    new_class_id,
    new_student_id,
)
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

STORAGE_KEY = "random_caller_v2"
LEGACY_STORAGE_KEY = "random_caller_v1"

DEFAULT_CLASS_NAME = "Class"
DEFAULT_STUDENT_NAME = "Student"


# --- Coercion Helpers ---

def _is_version(value: Any, version: int) -> bool:
    # bool is an int subclass; True must not pass as version 1.
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == version


def _coerce_count(value: Any) -> int:
    """
    Turns a stored counter into a non-negative int. Numbers are truncated,
    numeric strings are parsed, and anything else (including booleans and
    NaN) becomes 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return max(0, int(value))
    return 0


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _text_or(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return fallback


def _id_or_new(value: Any, factory: Callable[[], str]) -> str:
    """Keeps a usable stored identifier (numbers are stringified) or mints a new one."""
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
        return str(value)
    return factory()


# --- Schema Migration ---

def _migrate_v1(parsed: Mapping[str, Any]) -> Roster:
    """Maps a version-1 document to version 2. Round state is not carried over."""
    classes: List[Class] = []
    for raw_class in parsed["classes"]:
        if not isinstance(raw_class, Mapping):
            continue
        raw_students = raw_class.get("students")
        students = []
        if isinstance(raw_students, list):
            for raw_student in raw_students:
                if not isinstance(raw_student, Mapping):
                    continue
                students.append(Student(
                    id=_id_or_new(raw_student.get("id"), new_student_id),
                    name=_text_or(raw_student.get("name"), DEFAULT_STUDENT_NAME),
                    correct=_coerce_count(raw_student.get("correct")),
                    incorrect=_coerce_count(raw_student.get("incorrect")),
                    calledThisRound=False,
                ))
        classes.append(Class(
            id=_id_or_new(raw_class.get("id"), new_class_id),
            name=_text_or(raw_class.get("name"), DEFAULT_CLASS_NAME),
            students=students,
        ))
    logger.info("Migrated version-1 roster with %d classes to version %d.", len(classes), CURRENT_VERSION)
    return Roster(version=CURRENT_VERSION, classes=classes)


def _backfill_v2(parsed: Dict[str, Any]) -> Roster:
    """Fills in missing or malformed fields of a version-2 document in place."""
    parsed["classes"] = [c for c in parsed["classes"] if isinstance(c, dict)]
    for raw_class in parsed["classes"]:
        raw_class["id"] = _id_or_new(raw_class.get("id"), new_class_id)
        raw_class["name"] = _text_or(raw_class.get("name"), DEFAULT_CLASS_NAME)
        if not isinstance(raw_class.get("students"), list):
            raw_class["students"] = []
        raw_class["students"] = [s for s in raw_class["students"] if isinstance(s, dict)]

        for raw_student in raw_class["students"]:
            raw_student["id"] = _id_or_new(raw_student.get("id"), new_student_id)
            raw_student["name"] = _text_or(raw_student.get("name"), DEFAULT_STUDENT_NAME)
            for field in ("correct", "incorrect"):
                if not _is_count(raw_student.get(field)):
                    coerced = _coerce_count(raw_student.get(field))
                    if field in raw_student:
                        logger.warning(
                            "Coerced malformed %s counter %r to %d for student %s.",
                            field, raw_student.get(field), coerced, raw_student["id"],
                        )
                    raw_student[field] = coerced
            if not isinstance(raw_student.get("calledThisRound"), bool):
                raw_student["calledThisRound"] = False

    parsed["version"] = CURRENT_VERSION
    return Roster.model_validate(parsed)


def migrate(parsed: Any) -> Roster:
    """
    Normalizes an arbitrary decoded value to the current roster schema.

    - version 1 with a `classes` list: mapped to version 2, round flags reset.
    - version 2 with a `classes` list: missing fields backfilled.
    - anything else: replaced with the default roster.
    """
    if not isinstance(parsed, dict) or not isinstance(parsed.get("classes"), list):
        return default_roster()

    if _is_version(parsed.get("version"), 1):
        return _migrate_v1(parsed)

    if _is_version(parsed.get("version"), CURRENT_VERSION):
        return _backfill_v2(parsed)

    return default_roster()


# --- Load / Save Lifecycle ---

def _parse_document(raw: str, key: str) -> Roster:
    try:
        return migrate(json.loads(raw))
    except (json.JSONDecodeError, TypeError, ValueError, ValidationError, RecursionError) as e:
        logger.warning("Stored roster under %s is unreadable (%s); starting from defaults.", key, e)
        return default_roster()


def load(db: DatabaseService) -> Roster:
    """
    Reads the roster from storage. Falls back to the legacy key when the
    current one is absent, and to a default roster when both are absent or
    unreadable. Never raises.
    """
    raw = db.get_item(STORAGE_KEY)
    if raw:
        roster = _parse_document(raw, STORAGE_KEY)
        logger.info("Loaded roster from %s (%d classes).", STORAGE_KEY, len(roster.classes))
        return roster

    raw_legacy = db.get_item(LEGACY_STORAGE_KEY)
    if raw_legacy:
        roster = _parse_document(raw_legacy, LEGACY_STORAGE_KEY)
        logger.info("Loaded roster from legacy key %s (%d classes).", LEGACY_STORAGE_KEY, len(roster.classes))
        return roster

    logger.info("No stored roster found; created the default roster.")
    return default_roster()


def serialize(roster: Roster, indent: Optional[int] = None) -> str:
    """The full JSON document for a roster, exactly as it is persisted."""
    return json.dumps(roster.model_dump(mode="json"), indent=indent, ensure_ascii=False)


def save(roster: Roster, db: DatabaseService) -> None:
    """Writes the whole roster under the current key. Write failures propagate."""
    document = serialize(roster)
    db.set_item(STORAGE_KEY, document)
    logger.debug("Saved roster under %s (%d bytes).", STORAGE_KEY, len(document))
