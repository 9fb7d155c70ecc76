# /random_caller/services/scoring_service.py

from typing import Optional, Tuple

from ..models.roster_model import Outcome, Student


def mark_selected(selected: Optional[Student], is_correct: bool) -> Tuple[Optional[Student], Outcome]:
    """
    Adds one correct or incorrect answer to the selected student.
    Round flags are not touched. Without a selection this is a no-op.
    """
    if selected is None:
        return None, Outcome.NO_SELECTION

    if is_correct:
        selected.correct += 1
    else:
        selected.incorrect += 1
    return selected, Outcome.OK
