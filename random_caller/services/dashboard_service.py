# /random_caller/services/dashboard_service.py

# --- Imports ---
# The summary is computed from the in-memory roster; nothing is read from storage.
from ..models.dashboard_model import DashboardSummary
from .caller_session import CallerSession

# --- Summary ---

def get_summary_data(session: CallerSession) -> DashboardSummary:
    """
    Calculates the roster-wide summary statistics from the session's
    in-memory roster.

    Args:
        session: The active CallerSession, provided by dependency injection.

    Returns:
        A DashboardSummary Pydantic object containing the calculated counts.
    """
    all_students = [s for cls in session.roster.classes for s in cls.students]

    return DashboardSummary(
        classCount=len(session.roster.classes),
        studentCount=len(all_students),
        totalCorrect=sum(s.correct for s in all_students),
        totalIncorrect=sum(s.incorrect for s in all_students),
    )
