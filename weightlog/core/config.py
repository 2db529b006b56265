"""
Centralised application settings loaded from environment variables / .env file.
Upstream integrations are optional; endpoints that need a missing value
answer with a 500 instead of aborting startup.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _optional(*keys: str, default: str = "") -> str:
    """Return the first non-empty env var among ``keys``."""
    for key in keys:
        value = os.getenv(key, "").strip()
        if value:
            return value
    return default


class _Settings:
    # ── Spreadsheet web app (Apps Script) ─────────────────────────────────────
    # MY_SECRET_MESSAGE is the name the deployed front end already uses.
    GAS_URL: str = _optional("GAS_URL", "MY_SECRET_MESSAGE")

    # ── Google Sheets service account ─────────────────────────────────────────
    GOOGLE_SHEET_ID: str     = _optional("GOOGLE_SHEET_ID")
    GOOGLE_CLIENT_EMAIL: str = _optional("GOOGLE_CLIENT_EMAIL")
    # Stored with literal "\n" sequences in most hosting dashboards
    GOOGLE_PRIVATE_KEY: str  = _optional("GOOGLE_PRIVATE_KEY")
    SHEET_NAME: str          = _optional("SHEET_NAME", default="体重記録")

    # ── Calorie search (LLM) ──────────────────────────────────────────────────
    GROQ_API_KEY: str = _optional("GROQ_API_KEY")
    GROQ_MODEL: str   = _optional("GROQ_MODEL", default="llama-3.3-70b-versatile")

    # ── Goal persistence ──────────────────────────────────────────────────────
    MONGO_URI: str     = _optional("MONGO_URI", default="mongodb://localhost:27017")
    MONGO_DB_NAME: str = _optional("MONGO_DB_NAME", default="weightlog")

    # ── Misc ──────────────────────────────────────────────────────────────────
    APP_TIMEZONE: str = _optional("APP_TIMEZONE", default="Asia/Tokyo")
    UPSTREAM_TIMEOUT_SECONDS: float = float(
        _optional("UPSTREAM_TIMEOUT_SECONDS", default="15")
    )
    LOG_LEVEL: str = _optional("LOG_LEVEL", default="INFO").upper()


settings = _Settings()
