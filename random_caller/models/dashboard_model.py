# /random_caller/models/dashboard_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field

# --- Model Definition ---

class DashboardSummary(BaseModel):
    """
    Defines the data contract for the response of the dashboard summary endpoint.
    These are the roster-wide totals shown above the class picker.
    """

    classCount: int = Field(
        ...,
        description="The number of classes in the roster.",
        examples=[3]
    )

    studentCount: int = Field(
        ...,
        description="The number of students across all classes.",
        examples=[74]
    )

    totalCorrect: int = Field(
        ...,
        description="Sum of every student's correct answers.",
        examples=[120]
    )

    totalIncorrect: int = Field(
        ...,
        description="Sum of every student's incorrect answers.",
        examples=[41]
    )
