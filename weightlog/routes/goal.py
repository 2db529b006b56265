# Goal routes: compute a daily calorie target and fetch the saved one.
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorCollection

from weightlog.db.mongo import get_goals_collection, load_goal, save_goal
from weightlog.models.goal import GoalErrorResponse, GoalInput, GoalResult
from weightlog.services.dates import local_today
from weightlog.services.goal_calculator import (
    GoalValidationError,
    compute_goal,
    parse_goal_input,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Goal"])


async def _persist_goal(uid: str, goal: GoalInput, result: GoalResult) -> None:
    try:
        collection = await get_goals_collection()
    except Exception as exc:
        logger.error("Goal store unavailable, goal for uid=%s not saved: %s", uid, exc)
        return
    await save_goal(collection, uid, goal, result)


@router.post(
    "/compute",
    response_model=GoalResult,
    responses={422: {"model": GoalErrorResponse}},
    summary="Compute the recommended daily intake for a weight-loss goal",
)
async def compute(
    background_tasks: BackgroundTasks,
    body: dict = Body(...),
    uid: Optional[str] = Query(None, description="Save the goal for this user"),
):
    """
    Body fields (numbers may be sent as strings, as an HTML form does):
    current_weight_kg, target_weight_kg, gender, height_cm, age_years,
    activity_factor or activity_level, and period_months or target_date.
    """
    today = local_today()
    try:
        goal = parse_goal_input(body, today=today)

        def _on_success(result: GoalResult) -> None:
            if uid:
                background_tasks.add_task(_persist_goal, uid, goal, result)

        result = compute_goal(goal, today=today, on_success=_on_success)
    except GoalValidationError as exc:
        logger.info("Rejected goal request: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=GoalErrorResponse(errors=exc.violations).model_dump(),
        )
    return result


@router.get("/{uid}", summary="Get the saved goal for a user")
async def get_goal(
    uid: str,
    goals_col: AsyncIOMotorCollection = Depends(get_goals_collection),
):
    doc = await load_goal(goals_col, uid)
    if not doc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No goal saved yet. Compute one first.",
        )
    return doc
