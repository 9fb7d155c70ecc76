# /random_caller/routers/export_router.py

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..services import export_service
from ..services.caller_session import CallerSession
from .dependencies import get_caller_session

router = APIRouter()


def _download(content: str, file_name: str, media_type: str) -> StreamingResponse:
    return StreamingResponse(
        iter([content]),
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={file_name}"},
    )


@router.get("/csv", summary="Export All Classes as a CSV Report", response_class=StreamingResponse)
def export_roster_csv(session: CallerSession = Depends(get_caller_session)):
    csv_string = export_service.export_csv(session.roster)
    return _download(csv_string, export_service.export_filename("csv"), "text/csv; charset=utf-8")


@router.get("/json", summary="Download a JSON Backup of the Roster", response_class=StreamingResponse)
def export_roster_json(session: CallerSession = Depends(get_caller_session)):
    json_string = export_service.export_json(session.roster)
    return _download(json_string, export_service.export_filename("json"), "application/json; charset=utf-8")
