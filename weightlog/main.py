import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weightlog.clients.gas import GasNotConfigured
from weightlog.core.config import settings
from weightlog.db.mongo import close_client
from weightlog.routes.calorie import router as calorie_router
from weightlog.routes.gas import router as gas_router
from weightlog.routes.goal import router as goal_router
from weightlog.routes.meal import router as meal_router
from weightlog.routes.sheet import router as sheet_router
from weightlog.routes.weight import router as weight_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Application lifespan  (startup / shutdown)
# ─────────────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ──────────────────────────────────────────────────────────────
    if not settings.GAS_URL:
        logger.warning("GAS_URL is not set; proxy, weight and meal endpoints will answer 500.")
    if not settings.GROQ_API_KEY:
        logger.warning("GROQ_API_KEY is not set; calorie search will fail.")
    logger.info("weightlog started (timezone %s).", settings.APP_TIMEZONE)

    yield   # application runs here

    # ── Shutdown ─────────────────────────────────────────────────────────────
    logger.info("Closing MongoDB client…")
    close_client()


app = FastAPI(
    title="Weight Log",
    description="Weight-loss goal calculator and weight / meal log backend",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GasNotConfigured)
async def gas_not_configured_handler(request: Request, exc: GasNotConfigured):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


# Register routers
app.include_router(goal_router, prefix="/goal")
app.include_router(weight_router, prefix="/weight")
app.include_router(meal_router, prefix="/meal")
app.include_router(gas_router, prefix="/api")
app.include_router(sheet_router, prefix="/api")
app.include_router(calorie_router, prefix="/api")


@app.get("/")
def root():
    """API information."""
    return {
        "app": "Weight Log",
        "version": "1.0.0",
        "status": "active",
        "endpoints": {
            "/goal/compute": "POST - Daily calorie target for a weight-loss goal",
            "/weight/history": "GET - Weight history and chart series",
            "/weight/record": "POST - Record today's weight",
            "/meal/record": "POST - Record a meal",
            "/api/search-calorie": "POST - AI calorie estimate for a meal name",
        }
    }


@app.get("/health")
def health_check():
    """Lightweight ping."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("weightlog.main:app", host="0.0.0.0", port=8000)
