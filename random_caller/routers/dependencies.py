# /random_caller/routers/dependencies.py

from fastapi import HTTPException, Request, status

from ..models.roster_model import Outcome, notice_for
from ..services.caller_session import CallerSession

# Outcomes that are not a success map to the HTTP status the client sees.
_OUTCOME_STATUS = {
    Outcome.EMPTY_NAME: status.HTTP_400_BAD_REQUEST,
    Outcome.CLASS_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.STUDENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.DUPLICATE_NAME: status.HTTP_409_CONFLICT,
    Outcome.NO_STUDENTS: status.HTTP_409_CONFLICT,
    Outcome.ROUND_COMPLETE: status.HTTP_409_CONFLICT,
    Outcome.NO_SELECTION: status.HTTP_409_CONFLICT,
    Outcome.NOTHING_TO_IMPORT: status.HTTP_409_CONFLICT,
}


def get_caller_session(request: Request) -> CallerSession:
    """
    FastAPI dependency that provides the app's single CallerSession, created
    by the lifespan handler in main.py.
    """
    return request.app.state.caller_session


def raise_for_outcome(outcome: Outcome) -> None:
    """Turns a rejected outcome into an HTTPException carrying its notice text."""
    if outcome != Outcome.OK:
        raise HTTPException(status_code=_OUTCOME_STATUS[outcome], detail=notice_for(outcome))
