# Calendar helpers shared by the goal and weight routes.
from datetime import date, datetime

import pytz

from weightlog.core.config import settings


def local_now() -> datetime:
    return datetime.now(pytz.timezone(settings.APP_TIMEZONE))


def local_today() -> date:
    """Today's date in the configured timezone (not the server's)."""
    return local_now().date()


def date_key(d: date) -> str:
    """Spreadsheet row key, e.g. 2025/10/20 or 2025/1/5 (no zero padding)."""
    return f"{d.year}/{d.month}/{d.day}"
