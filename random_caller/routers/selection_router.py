# /random_caller/routers/selection_router.py

from fastapi import APIRouter, Depends, HTTPException, status

from ..models import request_model
from ..models.roster_model import RoundStatus
from ..services import class_service
from ..services.caller_session import CallerSession
from .dependencies import get_caller_session, raise_for_outcome

router = APIRouter()


@router.get("", response_model=request_model.SelectionView, summary="Get the Currently Selected Student")
def get_selection(session: CallerSession = Depends(get_caller_session)):
    return class_service.get_selection(session=session)

@router.post("/mark", response_model=request_model.PickResponse, summary="Mark the Selected Student Correct or Incorrect")
def mark_selected(payload: request_model.MarkRequest, session: CallerSession = Depends(get_caller_session)):
    _, outcome = class_service.mark_selected(session=session, is_correct=payload.isCorrect)
    raise_for_outcome(outcome)
    return request_model.PickResponse(
        outcome=outcome,
        message="Marked correct" if payload.isCorrect else "Marked incorrect",
        selection=class_service.get_selection(session=session),
    )

# --- PER-CLASS ROUND ENDPOINTS (/api/selection/{class_id}/...) ---

@router.get("/{class_id}/round", response_model=RoundStatus, summary="Get Round Progress for a Class")
def get_round_status(class_id: str, session: CallerSession = Depends(get_caller_session)):
    round_status = class_service.round_status(session=session, class_id=class_id)
    if round_status is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return round_status

@router.post("/{class_id}/pick", response_model=request_model.PickResponse, summary="Pick a Random Student Not Yet Called This Round")
def pick_student(class_id: str, session: CallerSession = Depends(get_caller_session)):
    student, outcome = class_service.pick_next(session=session, class_id=class_id)
    raise_for_outcome(outcome)
    return request_model.PickResponse(
        outcome=outcome,
        message="Student picked",
        picked=request_model.StudentView.from_student(student),
        selection=class_service.get_selection(session=session),
        round=class_service.round_status(session=session, class_id=class_id),
    )

@router.post("/{class_id}/new-round", response_model=request_model.PickResponse, summary="Start a New Round for a Class")
def start_new_round(class_id: str, session: CallerSession = Depends(get_caller_session)):
    outcome = class_service.start_new_round(session=session, class_id=class_id)
    raise_for_outcome(outcome)
    return request_model.PickResponse(
        outcome=outcome,
        message="New round started",
        selection=class_service.get_selection(session=session),
        round=class_service.round_status(session=session, class_id=class_id),
    )
