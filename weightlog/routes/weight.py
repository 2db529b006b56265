# Weight dashboard routes: history for the chart and today's weigh-in.
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from weightlog.clients.gas import GasClient, GasError, get_gas_client
from weightlog.core.config import settings
from weightlog.models.records import WeightHistoryResponse, WeightRecordRequest
from weightlog.services.dates import date_key, local_today
from weightlog.services.history import chart_series, latest_weight, normalize_history

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Weight"])


def _parse_weight(value) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return None
    return weight if math.isfinite(weight) and weight > 0 else None


def _history(gas: GasClient, message: str = "") -> WeightHistoryResponse:
    rows = gas.get_history()
    records = normalize_history(rows, settings.APP_TIMEZONE)
    if not records and not message:
        message = "No data yet. Enter your weight."
    return WeightHistoryResponse(
        records=records,
        chart=chart_series(records),
        latest_weight=latest_weight(records),
        message=message,
    )


@router.get("/history", response_model=WeightHistoryResponse, summary="Weight history for the chart")
def get_history(gas: GasClient = Depends(get_gas_client)):
    try:
        return _history(gas)
    except GasError as exc:
        logger.error("Loading weight history failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load weight history: {exc}",
        )


@router.post("/record", response_model=WeightHistoryResponse, summary="Record today's weight")
def record_weight(body: WeightRecordRequest, gas: GasClient = Depends(get_gas_client)):
    weight = _parse_weight(body.weight)
    if weight is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Enter a valid weight.",
        )

    try:
        gas.record_weight(date_key(local_today()), weight)
        return _history(gas, message="Weight recorded! Updating the chart.")
    except GasError as exc:
        logger.error("Recording weight failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Sending failed: {exc}",
        )
