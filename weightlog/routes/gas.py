"""
Spreadsheet web app proxy + URL vendor.
GET/OPTIONS /api/gas     – forward the query string, avoiding browser CORS
GET         /api/secret  – hand the web app URL to the static pages
"""
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from weightlog.clients.gas import GasClient, GasError, get_gas_client
from weightlog.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proxy"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@router.options("/gas", include_in_schema=False)
def gas_preflight():
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)


@router.get("/gas", summary="Forward a GET to the spreadsheet web app")
def gas_proxy(request: Request, gas: GasClient = Depends(get_gas_client)):
    """
    The query is passed through untouched (e.g. ?action=getHistory).
    Upstream status and content type are preserved.
    """
    try:
        upstream = gas.forward(request.url.query)
    except GasError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Proxy fetch failed", "detail": str(exc)},
            headers=CORS_HEADERS,
        )

    headers = dict(CORS_HEADERS)
    if upstream.content_type:
        headers["Content-Type"] = upstream.content_type
    if not upstream.ok:
        logger.warning("GAS upstream answered %d", upstream.status_code)
    return Response(
        content=upstream.body,
        status_code=upstream.status_code if not upstream.ok else status.HTTP_200_OK,
        headers=headers,
    )


@router.get("/secret", summary="Return the spreadsheet web app URL")
def secret():
    if not settings.GAS_URL:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "GAS URL environment variable (MY_SECRET_MESSAGE) not set"},
        )
    return {"message": settings.GAS_URL}
