# /random_caller/services/export_service.py

"""
Read-only export of the roster: a per-student CSV report and a JSON backup.

Neither format is ever read back in by this application.
"""

from datetime import date
from typing import Optional

import pandas as pd

from ..models.roster_model import Roster
from . import state_store

CSV_COLUMNS = ["Class", "Student", "Correct", "Incorrect", "Total", "Accuracy"]


def _format_accuracy(correct: int, total: int) -> str:
    return "" if total == 0 else f"{correct / total:.4f}"


def export_csv(roster: Roster) -> str:
    """
    One row per student across all classes, classes in roster order and
    students sorted by name within each class. Cells holding a comma, quote or
    newline are double-quote escaped. Rows are joined with "\\n" and the text
    has no trailing newline.
    """
    export_data = []
    for cls in roster.classes:
        for s in sorted(cls.students, key=lambda s: (s.name.casefold(), s.name)):
            export_data.append({
                "Class": cls.name,
                "Student": s.name,
                "Correct": s.correct,
                "Incorrect": s.incorrect,
                "Total": s.total,
                "Accuracy": _format_accuracy(s.correct, s.total),
            })

    df = pd.DataFrame(export_data, columns=CSV_COLUMNS)
    csv_text = df.to_csv(index=False, lineterminator="\n")
    return csv_text[:-1] if csv_text.endswith("\n") else csv_text


def export_json(roster: Roster) -> str:
    """Pretty-printed backup, identical in shape to the persisted document."""
    return state_store.serialize(roster, indent=2)


def export_filename(kind: str, today: Optional[date] = None) -> str:
    """Download name, e.g. random-caller-export-2026-10-19.csv or random-caller-backup-2026-10-19.json."""
    stamp = (today or date.today()).isoformat()
    if kind == "csv":
        return f"random-caller-export-{stamp}.csv"
    return f"random-caller-backup-{stamp}.json"
