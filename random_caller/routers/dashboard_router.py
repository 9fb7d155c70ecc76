# /random_caller/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..services import dashboard_service
from ..services.caller_session import CallerSession
from ..models.dashboard_model import DashboardSummary
from .dependencies import get_caller_session

router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Retrieves roster-wide class and student counts plus answer totals."
)
def get_dashboard_summary(session: CallerSession = Depends(get_caller_session)):
    """
    This is the "thin" router layer: it only resolves the session and
    delegates to the service.
    """
    return dashboard_service.get_summary_data(session=session)
