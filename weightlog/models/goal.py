"""
Pydantic models for the calorie goal calculator.
"""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ──────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────

class Gender(str, Enum):
    male = "male"
    female = "female"


class ErrorKind(str, Enum):
    invalid_numeric_input = "InvalidNumericInput"
    invalid_goal_direction = "InvalidGoalDirection"
    invalid_timeframe = "InvalidTimeframe"
    invalid_choice = "InvalidChoice"


# ──────────────────────────────────────────────
# Input
# ──────────────────────────────────────────────

class GoalInput(BaseModel):
    """
    Already-parsed calculator input. Values are range-checked by
    compute_goal, not here, so that every violation can be reported.
    """
    current_weight_kg: float
    target_weight_kg: float
    gender: str
    height_cm: float
    age_years: float
    activity_factor: float = 1.0

    # Exactly one of these
    period_months: Optional[float] = None
    target_date: Optional[date] = None


# ──────────────────────────────────────────────
# Output
# ──────────────────────────────────────────────

class GoalResult(BaseModel):
    basal_metabolic_rate: int
    total_energy_expenditure: int
    total_days_elapsing: int
    weight_delta_kg: float = Field(..., description="Rounded to one decimal")
    total_deficit_kcal: float
    daily_deficit_kcal: float
    recommended_daily_intake: int
    exercise_target_kcal: int = Field(..., description="TDEE minus BMR")
    clamped: bool = False
    message: str = ""


class Violation(BaseModel):
    kind: ErrorKind
    field: Optional[str] = None
    message: str

    model_config = {"use_enum_values": True}


class GoalErrorResponse(BaseModel):
    status: str = "error"
    errors: list[Violation]
