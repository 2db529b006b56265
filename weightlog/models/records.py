"""
Pydantic models for weight / meal records and the calorie lookup.
"""
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field


# ── Weight ───────────────────────────────────────────────────────────────────

class WeightRecord(BaseModel):
    date: str = Field(..., description="Chart label: day of month, or 'invalid'")
    key: str = Field(..., description="YYYY/M/D")
    weight: Optional[float] = None


class ChartSeries(BaseModel):
    labels: list[str]
    data: list[Optional[float]]


class WeightHistoryResponse(BaseModel):
    status: str = "success"
    records: list[WeightRecord]
    chart: ChartSeries
    latest_weight: Optional[float] = None
    message: str = ""


class WeightRecordRequest(BaseModel):
    # Form values arrive as strings; checked by the route
    weight: Union[float, str, None] = None


class SheetRow(BaseModel):
    date: Optional[str] = None
    weight: Union[float, str, None] = None


# ── Meals ────────────────────────────────────────────────────────────────────

class MealRecordRequest(BaseModel):
    calorie: Union[float, str, None] = None
    meal_name: Optional[str] = Field(None, alias="mealName")
    date: Optional[str] = Field(None, description="YYYY/M/D, defaults to today")

    model_config = {"populate_by_name": True}


class MealRecord(BaseModel):
    date: str
    calorie: float
    meal_name: str

    def to_gas_payload(self) -> dict:
        return {
            "type": "meal",
            "date": self.date,
            "calorie": self.calorie,
            "mealName": self.meal_name,
        }


# ── Calorie lookup ───────────────────────────────────────────────────────────

class CalorieSearchRequest(BaseModel):
    food_name: Optional[str] = Field(None, alias="foodName")

    model_config = {"populate_by_name": True}


class CalorieEstimate(BaseModel):
    calories: Optional[float] = None
    protein: Optional[float] = None
    fat: Optional[float] = None
    carb: Optional[float] = None
