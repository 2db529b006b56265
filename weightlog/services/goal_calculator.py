"""
Daily calorie target for a weight-reduction goal.

Pure function – no I/O, fully synchronous. The only side effect is the
optional ``on_success`` callback, which callers use as their persistence
boundary.
"""
from __future__ import annotations

import math
from datetime import date
from typing import Any, Callable, Optional

from weightlog.models.goal import ErrorKind, Gender, GoalInput, GoalResult, Violation
from weightlog.services.dates import local_today
from weightlog.services.formulas import (
    ACTIVITY_MULTIPLIERS,
    DAYS_PER_MONTH,
    KCAL_PER_KG,
    MIN_CALORIES,
    calculate_bmr,
    calculate_tdee,
    months_to_days,
    round_half_up,
)

GOAL_SET_MESSAGE = "Goal calories set. Apply them to your meal log!"


class GoalValidationError(Exception):
    """Raised with every violation found in a goal request."""

    def __init__(self, violations: list[Violation]):
        self.violations = violations
        super().__init__("; ".join(v.message for v in violations))

    @property
    def kinds(self) -> set[str]:
        return {ErrorKind(v.kind).value for v in self.violations}


def _violation(kind: ErrorKind, field: str | None, message: str) -> Violation:
    return Violation(kind=kind, field=field, message=message)


def _direction_violation() -> Violation:
    return _violation(
        ErrorKind.invalid_goal_direction, "target_weight_kg",
        "Target weight must be lower than the current weight.",
    )


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def clamp_message(floor: int) -> str:
    return (
        f"For safety, daily intake was set to the minimum of {floor} kcal. "
        "Consider a longer period for this goal."
    )


# ─────────────────────────────────────────────────────────────────────────────
# Request parsing
# ─────────────────────────────────────────────────────────────────────────────

_NUMERIC_FIELDS = ("current_weight_kg", "target_weight_kg", "height_cm", "age_years")

# camelCase names posted by the browser form
_ALIASES = {
    "currentWeightKg": "current_weight_kg",
    "current_weight":  "current_weight_kg",
    "targetWeightKg":  "target_weight_kg",
    "target_weight":   "target_weight_kg",
    "heightCm":        "height_cm",
    "ageYears":        "age_years",
    "age":             "age_years",
    "activityFactor":  "activity_factor",
    "activityLevel":   "activity_level",
    "periodMonths":    "period_months",
    "targetDate":      "target_date",
}


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_goal_input(raw: dict, *, today: Optional[date] = None) -> GoalInput:
    """
    Build a GoalInput from a loosely typed body (form values arrive as strings).
    Raises GoalValidationError for values that cannot even be parsed, together
    with the direction and timeframe problems visible in the values that did.
    """
    data = {_ALIASES.get(k, k): v for k, v in raw.items()}
    violations: list[Violation] = []
    parsed: dict[str, Any] = {}

    for name in _NUMERIC_FIELDS:
        value = _to_float(data.get(name))
        if value is None:
            violations.append(_violation(
                ErrorKind.invalid_numeric_input, name,
                f"{name} must be a number (got {data.get(name)!r})",
            ))
        else:
            parsed[name] = value

    # activity: explicit factor wins over a named preset
    if not _blank(data.get("activity_factor")):
        factor = _to_float(data["activity_factor"])
        if factor is None:
            violations.append(_violation(
                ErrorKind.invalid_numeric_input, "activity_factor",
                f"activity_factor must be a number (got {data['activity_factor']!r})",
            ))
        else:
            parsed["activity_factor"] = factor
    elif not _blank(data.get("activity_level")):
        level = str(data["activity_level"]).strip().lower()
        if level not in ACTIVITY_MULTIPLIERS:
            violations.append(_violation(
                ErrorKind.invalid_choice, "activity_level",
                "activity_level must be one of: " + ", ".join(ACTIVITY_MULTIPLIERS),
            ))
        else:
            parsed["activity_factor"] = ACTIVITY_MULTIPLIERS[level]

    gender = data.get("gender")
    parsed["gender"] = str(gender).strip().lower() if gender is not None else ""

    if not _blank(data.get("period_months")):
        months = _to_float(data["period_months"])
        if months is None:
            violations.append(_violation(
                ErrorKind.invalid_numeric_input, "period_months",
                f"period_months must be a number (got {data['period_months']!r})",
            ))
        else:
            parsed["period_months"] = months

    if not _blank(data.get("target_date")):
        raw_date = data["target_date"]
        if isinstance(raw_date, date):
            parsed["target_date"] = raw_date
        else:
            try:
                parsed["target_date"] = date.fromisoformat(str(raw_date).strip())
            except ValueError:
                violations.append(_violation(
                    ErrorKind.invalid_timeframe, "target_date",
                    "target_date must be an ISO date (YYYY-MM-DD)",
                ))

    if violations:
        current = parsed.get("current_weight_kg")
        target = parsed.get("target_weight_kg")
        if current is not None and target is not None and target >= current:
            violations.append(_direction_violation())
        if not any(v.field in ("period_months", "target_date") for v in violations):
            violations.extend(_timeframe_violations(
                parsed.get("period_months"), parsed.get("target_date"),
                today or local_today(),
            ))
        raise GoalValidationError(violations)
    return GoalInput(**parsed)


# ─────────────────────────────────────────────────────────────────────────────
# Calculation
# ─────────────────────────────────────────────────────────────────────────────

def _total_days(goal: GoalInput, today: date) -> int | None:
    if goal.period_months is not None:
        return months_to_days(goal.period_months)
    if goal.target_date is not None:
        return (goal.target_date - today).days
    return None


def _timeframe_violations(
    period_months: float | None, target_date: date | None, today: date,
) -> list[Violation]:
    if period_months is not None and target_date is not None:
        return [_violation(
            ErrorKind.invalid_timeframe, None,
            "Give either period_months or target_date, not both.",
        )]
    if period_months is None and target_date is None:
        return [_violation(
            ErrorKind.invalid_timeframe, None,
            "A period_months or target_date is required.",
        )]

    if target_date is not None:
        if (target_date - today).days <= 0:
            return [_violation(
                ErrorKind.invalid_timeframe, "target_date",
                "The target date must be after today.",
            )]
        return []

    if not _is_number(period_months) or not math.isfinite(period_months * DAYS_PER_MONTH):
        return [_violation(
            ErrorKind.invalid_timeframe, "period_months",
            "The goal period is too long to count in days.",
        )]
    if months_to_days(period_months) <= 0:
        return [_violation(
            ErrorKind.invalid_timeframe, "period_months",
            "The goal period must be longer than zero days.",
        )]
    return []


def _energy_violations(goal: GoalInput) -> list[Violation]:
    # Large but finite metrics can still overflow the BMR / deficit products.
    too_large = _violation(
        ErrorKind.invalid_numeric_input, None,
        "Body metrics are too large to estimate energy expenditure.",
    )
    bmr = calculate_bmr(goal.current_weight_kg, goal.height_cm, goal.age_years, goal.gender)
    if not math.isfinite(bmr + 0.5):
        return [too_large]
    if not math.isfinite(calculate_tdee(round_half_up(bmr), goal.activity_factor) + 0.5):
        return [too_large]
    if not math.isfinite((goal.current_weight_kg - goal.target_weight_kg) * KCAL_PER_KG):
        return [too_large]
    return []


def validate_goal(goal: GoalInput, today: date) -> list[Violation]:
    violations: list[Violation] = []

    for name in _NUMERIC_FIELDS + ("activity_factor",):
        value = getattr(goal, name)
        if not _is_number(value) or value <= 0:
            violations.append(_violation(
                ErrorKind.invalid_numeric_input, name, f"{name} must be positive",
            ))
    if _is_number(goal.age_years) and not float(goal.age_years).is_integer():
        violations.append(_violation(
            ErrorKind.invalid_numeric_input, "age_years", "age_years must be a whole number",
        ))

    metrics_ok = not violations

    gender_ok = goal.gender in {g.value for g in Gender}
    if not gender_ok:
        violations.append(_violation(
            ErrorKind.invalid_choice, "gender", "gender must be 'male' or 'female'",
        ))

    if (
        _is_number(goal.current_weight_kg)
        and _is_number(goal.target_weight_kg)
        and goal.target_weight_kg >= goal.current_weight_kg
    ):
        violations.append(_direction_violation())

    if metrics_ok and gender_ok:
        violations.extend(_energy_violations(goal))

    violations.extend(_timeframe_violations(goal.period_months, goal.target_date, today))
    return violations


def compute_goal(
    goal: GoalInput,
    *,
    today: Optional[date] = None,
    on_success: Optional[Callable[[GoalResult], None]] = None,
) -> GoalResult:
    """
    Recommended daily intake for losing ``current - target`` kg in the
    given timeframe. Raises GoalValidationError; nothing is returned or
    persisted on error.
    """
    today = today or local_today()

    violations = validate_goal(goal, today)
    if violations:
        raise GoalValidationError(violations)

    days = _total_days(goal, today)

    # ── BMR / TDEE ────────────────────────────────────────────────────────────
    bmr = round_half_up(calculate_bmr(
        goal.current_weight_kg, goal.height_cm, goal.age_years, goal.gender,
    ))
    tdee = round_half_up(calculate_tdee(bmr, goal.activity_factor))

    # ── Deficit ───────────────────────────────────────────────────────────────
    weight_delta = goal.current_weight_kg - goal.target_weight_kg
    total_deficit = weight_delta * KCAL_PER_KG
    daily_deficit = total_deficit / days

    intake = round_half_up(tdee - daily_deficit)

    # ── Safety floor ──────────────────────────────────────────────────────────
    floor = MIN_CALORIES[goal.gender]
    clamped = intake < floor
    if clamped:
        intake = floor

    result = GoalResult(
        basal_metabolic_rate=bmr,
        total_energy_expenditure=tdee,
        total_days_elapsing=days,
        weight_delta_kg=round(weight_delta, 1),
        total_deficit_kcal=round(total_deficit, 2),
        daily_deficit_kcal=round(daily_deficit, 2),
        recommended_daily_intake=intake,
        exercise_target_kcal=tdee - bmr,
        clamped=clamped,
        message=clamp_message(floor) if clamped else GOAL_SET_MESSAGE,
    )

    if on_success is not None:
        on_success(result)
    return result
