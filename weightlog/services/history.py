# Weight history normalization for the dashboard chart.
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional

import pytz
from dateutil import parser as date_parser

from weightlog.models.records import ChartSeries, WeightRecord
from weightlog.services.dates import date_key

logger = logging.getLogger(__name__)

INVALID_KEY = "1970/1/1"
INVALID_LABEL = "invalid"
CHART_POINTS = 7


def _parse_date(value, tz) -> Optional[date]:
    """
    Lenient parse of a spreadsheet date cell: '2025/10/20', '2025-10-20',
    or a serialized timestamp such as '2025-10-19T15:00:00.000Z'.
    Aware timestamps are moved into ``tz`` before taking the calendar date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    else:
        try:
            parsed = date_parser.parse(str(value))
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed.date()


def _parse_weight(value) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def normalize_history(rows: Iterable[dict], timezone: str = "Asia/Tokyo") -> list[WeightRecord]:
    """
    Turn raw {date, weight} rows into chart records, sorted by date.
    Rows sharing a day collapse to the last one seen.
    """
    tz = pytz.timezone(timezone)
    parsed: list[tuple[date, WeightRecord]] = []

    for row in rows:
        day = _parse_date(row.get("date"), tz)
        if day is None:
            logger.warning("Unparseable weight row date: %r", row.get("date"))
            day = date(1970, 1, 1)
            record = WeightRecord(date=INVALID_LABEL, key=INVALID_KEY,
                                  weight=_parse_weight(row.get("weight")))
        else:
            record = WeightRecord(date=str(day.day), key=date_key(day),
                                  weight=_parse_weight(row.get("weight")))
        parsed.append((day, record))

    # stable sort keeps sheet order within a day, so the later row wins below
    parsed.sort(key=lambda pair: pair[0])

    unique: dict[str, WeightRecord] = {}
    for _, record in parsed:
        unique.pop(record.key, None)
        unique[record.key] = record
    return list(unique.values())


def chart_series(records: list[WeightRecord], limit: int = CHART_POINTS) -> ChartSeries:
    """Labels / points for the last ``limit`` records."""
    tail = records[-limit:] if limit > 0 else []
    return ChartSeries(
        labels=[r.date for r in tail],
        data=[r.weight for r in tail],
    )


def latest_weight(records: list[WeightRecord]) -> Optional[float]:
    for record in reversed(records):
        if record.weight is not None and record.key != INVALID_KEY:
            return record.weight
    return None
