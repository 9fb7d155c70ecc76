# /random_caller/routers/classes_router.py

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Response
from typing import List, Optional

from ..models import request_model
from ..models.roster_model import Outcome
from ..services import class_service
from ..services.caller_session import CallerSession
from ..services.roster_helpers import roster_ingestion
from .dependencies import get_caller_session, raise_for_outcome

router = APIRouter()


def _import_message(added: int) -> str:
    return f"Imported {added} student{'' if added == 1 else 's'}"


# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[request_model.ClassSummary], summary="Get All Classes with Student Counts")
def get_all_classes(session: CallerSession = Depends(get_caller_session)):
    return class_service.get_all_classes_with_summary(session=session)

@router.post("", response_model=request_model.ClassCreated, status_code=status.HTTP_201_CREATED, summary="Add a Class")
def create_new_class(class_create: request_model.ClassCreate, session: CallerSession = Depends(get_caller_session)):
    new_class, outcome = class_service.add_class(session=session, name=class_create.name)
    raise_for_outcome(outcome)
    summary = request_model.ClassSummary(
        id=new_class.id, name=new_class.name, studentCount=0,
        isCurrent=new_class.id == session.current_class_id,
    )
    return request_model.ClassCreated(outcome=outcome, message="Class added", classInfo=summary)

# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=request_model.ClassDetails, summary="Get a Single Class with Students and Round Progress")
def get_class_by_id(class_id: str, search: Optional[str] = None, session: CallerSession = Depends(get_caller_session)):
    class_details = class_service.get_class_details_by_id(session=session, class_id=class_id, search=search)
    if class_details is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return class_details

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class and Its Students")
def delete_class(class_id: str, session: CallerSession = Depends(get_caller_session)):
    raise_for_outcome(class_service.delete_class(session=session, class_id=class_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{class_id}/select", response_model=request_model.ActionResponse, summary="Make a Class the Active Class")
def select_class(class_id: str, session: CallerSession = Depends(get_caller_session)):
    outcome = class_service.select_class(session=session, class_id=class_id)
    raise_for_outcome(outcome)
    return request_model.ActionResponse(outcome=outcome, message="Class selected")

@router.post("/{class_id}/reset-stats", response_model=request_model.ActionResponse, summary="Zero All Correct/Incorrect Counts in a Class")
def reset_class_stats(class_id: str, session: CallerSession = Depends(get_caller_session)):
    outcome = class_service.reset_stats(session=session, class_id=class_id)
    raise_for_outcome(outcome)
    return request_model.ActionResponse(outcome=outcome, message="Stats reset")

# --- STUDENT SUB-RESOURCE ENDPOINTS ---

@router.post("/{class_id}/students", response_model=request_model.StudentResponse, status_code=status.HTTP_201_CREATED, summary="Add a Student to a Class")
def add_student(class_id: str, student_create: request_model.StudentCreate, session: CallerSession = Depends(get_caller_session)):
    student, outcome = class_service.add_student(session=session, class_id=class_id, name=student_create.name)
    raise_for_outcome(outcome)
    return request_model.StudentResponse(
        outcome=outcome, message="Student added", student=request_model.StudentView.from_student(student)
    )

@router.put("/{class_id}/students/{student_id}", response_model=request_model.StudentResponse, summary="Rename a Student")
def rename_student(class_id: str, student_id: str, student_rename: request_model.StudentRename, session: CallerSession = Depends(get_caller_session)):
    student, outcome = class_service.rename_student(
        session=session, class_id=class_id, student_id=student_id, new_name=student_rename.name
    )
    if outcome == Outcome.DUPLICATE_NAME:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Another student already has that name.")
    raise_for_outcome(outcome)
    return request_model.StudentResponse(
        outcome=outcome, message="Student updated", student=request_model.StudentView.from_student(student)
    )

@router.delete("/{class_id}/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a Student from a Class")
def remove_student_from_class(class_id: str, student_id: str, session: CallerSession = Depends(get_caller_session)):
    raise_for_outcome(class_service.delete_student(session=session, class_id=class_id, student_id=student_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{class_id}/students/import", response_model=request_model.ImportResponse, summary="Bulk Import Students from Pasted Text")
def import_students(class_id: str, payload: request_model.BulkImportRequest, session: CallerSession = Depends(get_caller_session)):
    added, outcome = class_service.bulk_import(session=session, class_id=class_id, text=payload.text)
    raise_for_outcome(outcome)
    return request_model.ImportResponse(outcome=outcome, message=_import_message(added), added=added)

@router.post("/{class_id}/students/upload", response_model=request_model.ImportResponse, summary="Bulk Import Students from a Text/CSV File")
async def upload_students(class_id: str, file: UploadFile = File(...), session: CallerSession = Depends(get_caller_session)):
    try:
        text = await roster_ingestion.read_upload_text(file)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    added, outcome = class_service.bulk_import(session=session, class_id=class_id, text=text)
    raise_for_outcome(outcome)
    return request_model.ImportResponse(outcome=outcome, message=_import_message(added), added=added)
