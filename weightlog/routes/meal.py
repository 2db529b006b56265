# Meal log route: forward a meal (name + kcal) to the spreadsheet web app.
import logging
import math

from fastapi import APIRouter, Depends, HTTPException, status

from weightlog.clients.gas import GasClient, GasError, get_gas_client
from weightlog.models.records import MealRecord, MealRecordRequest
from weightlog.services.dates import date_key, local_today

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Meal"])


@router.post("/record", summary="Record a meal")
def record_meal(body: MealRecordRequest, gas: GasClient = Depends(get_gas_client)):
    meal_name = (body.meal_name or "").strip()
    try:
        calorie = float(body.calorie) if body.calorie not in (None, "") else None
    except (TypeError, ValueError):
        calorie = None

    if calorie is None or not math.isfinite(calorie) or not meal_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Calories and meal name were not entered correctly.",
        )

    meal = MealRecord(
        date=body.date or date_key(local_today()),
        calorie=calorie,
        meal_name=meal_name,
    )
    try:
        gas.record_meal(meal)
    except GasError as exc:
        logger.error("Recording meal failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Sending failed: {exc}",
        )

    return {
        "status": "success",
        "meal": meal.model_dump(),
        "message": f"Recorded \"{meal.meal_name}\" ({meal.calorie:g} kcal)!",
    }
