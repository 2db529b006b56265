# Weight sheet routes: read and append (date, weight) rows via the Sheets API.
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from weightlog.clients.sheets import SheetStore, get_sheet_store
from weightlog.models.records import SheetRow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sheet"])


def _server_error(exc: Exception) -> JSONResponse:
    logger.error("Google Sheets API error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "status": "error",
            "message": "A server-side error occurred",
            "error": str(exc),
        },
    )


@router.get("/sheet", summary="List weight rows")
def list_weights(store: SheetStore = Depends(get_sheet_store)):
    try:
        data = store.list_weights()
    except Exception as exc:
        return _server_error(exc)
    return {"status": "success", "data": data}


@router.post("/sheet", summary="Append a weight row")
def append_weight(body: SheetRow, store: SheetStore = Depends(get_sheet_store)):
    if not body.date or not body.weight:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"status": "error", "message": "date or weight is missing"},
        )
    try:
        store.append_weight(body.date, body.weight)
    except Exception as exc:
        return _server_error(exc)
    return {"status": "success", "message": "recorded"}


@router.api_route("/sheet", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
def sheet_method_not_allowed(request: Request):
    return PlainTextResponse(
        f"Method {request.method} Not Allowed",
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={"Allow": "GET, POST"},
    )
