# /random_caller/services/selection_service.py

"""
Fair round-robin selection within a class.

A round is one pass through the class in which every student is picked
exactly once, in random order. Each pick chooses uniformly among the
students not yet called this round and flags the chosen one. When nobody is
left the class is `RoundComplete` and stays that way until a new round is
started explicitly.
"""

import logging
import random
from typing import Optional, Tuple

from ..models.roster_model import Class, Outcome, RoundState, RoundStatus, Student

logger = logging.getLogger(__name__)


def round_status(target: Optional[Class]) -> RoundStatus:
    """Called/total/remaining counts and the derived round state of a class."""
    if target is None or not target.students:
        return RoundStatus(called=0, total=0, remaining=0, state=RoundState.IDLE)

    total = len(target.students)
    called = sum(1 for s in target.students if s.calledThisRound)
    remaining = total - called
    state = RoundState.ROUND_COMPLETE if remaining == 0 else RoundState.IN_PROGRESS
    return RoundStatus(called=called, total=total, remaining=remaining, state=state)


def pick_next(target: Class, rng: Optional[random.Random] = None) -> Tuple[Optional[Student], Outcome]:
    """
    Picks one uncalled student uniformly at random and marks them called.

    Rejected with NO_STUDENTS for an empty class and ROUND_COMPLETE when
    everyone has already been called; neither case changes any flag.
    """
    if not target.students:
        return None, Outcome.NO_STUDENTS

    eligible = [s for s in target.students if not s.calledThisRound]
    if not eligible:
        return None, Outcome.ROUND_COMPLETE

    chosen = (rng or random).choice(eligible)
    chosen.calledThisRound = True
    logger.debug("Picked %s in class %s; %d left this round.", chosen.id, target.id, len(eligible) - 1)
    return chosen, Outcome.OK


def start_new_round(target: Class) -> Outcome:
    """Clears every round flag in the class. Never triggered automatically."""
    if not target.students:
        return Outcome.NO_STUDENTS

    for student in target.students:
        student.calledThisRound = False
    return Outcome.OK
