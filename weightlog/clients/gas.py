# HTTP client for the spreadsheet web app (Google Apps Script deployment).

import json
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import requests

from weightlog.core.config import settings
from weightlog.models.records import MealRecord

logger = logging.getLogger(__name__)


class GasError(Exception):
    """The web app was unreachable or answered with something unusable."""


class GasNotConfigured(GasError):
    pass


@dataclass
class GasResponse:
    status_code: int
    content_type: str
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class GasClient:
    def __init__(self, base_url: str, timeout: float = 15.0, session: Optional[requests.Session] = None):
        if not base_url:
            raise GasNotConfigured("GAS URL environment variable (GAS_URL / MY_SECRET_MESSAGE) not set")
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    # ── Raw proxy ────────────────────────────────────────────────────────────

    def forward(self, query_string: str = "") -> GasResponse:
        """GET ``<base_url>?<query_string>`` and hand back the upstream reply untouched."""
        url = self.base_url
        if query_string:
            url = f"{url}?{query_string.lstrip('?')}"
        try:
            upstream = self.session.get(
                url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("GAS proxy fetch failed: %s", exc)
            raise GasError(str(exc)) from exc
        return GasResponse(
            status_code=upstream.status_code,
            content_type=upstream.headers.get("content-type", ""),
            body=upstream.content,
        )

    # ── Actions ──────────────────────────────────────────────────────────────

    def _get_json(self, params: dict) -> dict:
        resp = self.forward(urlencode(params, safe="/"))
        if not resp.ok:
            raise GasError(f"GAS error: {resp.status_code}")
        if "application/json" not in resp.content_type:
            text = resp.body.decode("utf-8", errors="replace")
            raise GasError(f"Unexpected response (non-JSON): {text[:120]}...")
        try:
            data = json.loads(resp.body)
        except ValueError as exc:
            raise GasError(f"Invalid JSON from GAS: {exc}") from exc
        if not isinstance(data, dict):
            raise GasError("Unexpected JSON shape from GAS")
        return data

    def get_history(self) -> list[dict]:
        """Raw weight rows; empty when the sheet has nothing yet."""
        data = self._get_json({"action": "getHistory"})
        if data.get("status") == "success" and data.get("data"):
            return list(data["data"])
        return []

    def record_weight(self, date_key: str, weight: float) -> dict:
        data = self._get_json({
            "action": "recordWeight",
            "date": date_key,
            "weight": f"{weight:.1f}",
        })
        if data.get("status") != "success":
            raise GasError(data.get("message") or "recording failed")
        logger.info("Weight recorded for %s: %.1f kg", date_key, weight)
        return data

    def record_meal(self, meal: MealRecord) -> None:
        try:
            resp = self.session.post(
                self.base_url,
                json=meal.to_gas_payload(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("GAS meal post failed: %s", exc)
            raise GasError(str(exc)) from exc
        if resp.status_code >= 400:
            raise GasError(f"GAS error: {resp.status_code}")
        logger.info("Meal recorded for %s: %s (%s kcal)", meal.date, meal.meal_name, meal.calorie)


def get_gas_client() -> GasClient:
    """FastAPI dependency. Raises GasNotConfigured when the URL is missing."""
    return GasClient(settings.GAS_URL, timeout=settings.UPSTREAM_TIMEOUT_SECONDS)
