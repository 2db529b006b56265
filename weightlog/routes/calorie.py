# Calorie search route: AI estimate of calories / PFC for a meal name.
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from weightlog.models.records import CalorieSearchRequest
from weightlog.services.calorie_search import (
    CalorieParseError,
    CalorieSearchError,
    CalorieSearchService,
    get_calorie_search,
)

router = APIRouter(tags=["Calorie Search"])


@router.post("/search-calorie", summary="Estimate calories for a meal name")
def search_calorie(
    body: CalorieSearchRequest,
    service: CalorieSearchService = Depends(get_calorie_search),
):
    food_name = (body.food_name or "").strip()
    if not food_name:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "No meal name was given."},
        )

    try:
        estimate = service.search(food_name)
    except CalorieParseError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "The AI could not work out calorie information."},
        )
    except CalorieSearchError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An error occurred while calling the AI API."},
        )

    return {"status": "success", "data": estimate.model_dump()}
