# /random_caller/services/roster_helpers/roster_ingestion.py

"""
Bulk roster import from pasted text or an uploaded text/CSV file.

The parser accepts two shapes:
1. One name per line.
2. CSV rows (detected as soon as any line contains a comma), where the first
   cell of each row is the name. A first row whose first cell mentions
   "name" is treated as a header and skipped.

Candidates already present in the class (case-insensitive) are skipped, so
importing the same text twice adds nobody the second time.
"""

import logging
import re
from typing import List, Tuple

from fastapi import UploadFile

from ...models.roster_model import Outcome, Roster, Student
from .crud import normalize_name

logger = logging.getLogger(__name__)


def _clean_cell(cell: str) -> str:
    cell = cell.strip()
    if cell.startswith('"'):
        cell = cell[1:]
    if cell.endswith('"'):
        cell = cell[:-1]
    return cell


def parse_bulk_input(text: str) -> List[str]:
    """Turns free-form roster text into a list of normalized candidate names."""
    lines = [line.strip() for line in re.split(r"\r?\n", str(text or "").strip())]
    lines = [line for line in lines if line]
    if not lines:
        return []

    if any("," in line for line in lines):
        rows = [[_clean_cell(cell) for cell in line.split(",")] for line in lines]
        start = 1 if "name" in rows[0][0].lower() else 0
        candidates = [row[0] for row in rows[start:]]
    else:
        candidates = lines

    names = [normalize_name(c) for c in candidates]
    return [n for n in names if n]


def bulk_import(roster: Roster, class_id: str, text: str) -> Tuple[int, Outcome]:
    """
    Appends every parsed name that is not already in the class.

    Returns:
        A tuple of (number of students actually added, outcome).
    """
    target = roster.find_class(class_id)
    if target is None:
        return 0, Outcome.CLASS_NOT_FOUND

    names = parse_bulk_input(text)
    if not names:
        return 0, Outcome.NOTHING_TO_IMPORT

    added = 0
    for name in names:
        if target.has_name(name):
            continue
        target.students.append(Student(name=name))
        added += 1

    logger.info("Imported %d of %d candidate names into class %s.", added, len(names), class_id)
    return added, Outcome.OK


async def read_upload_text(file: UploadFile) -> str:
    """Reads an uploaded roster file as text, tolerating a UTF-8 byte-order mark."""
    file_bytes = await file.read()
    try:
        return file_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValueError(f"Could not read {file.filename} as UTF-8 text.")
