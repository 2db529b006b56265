# Calorie / PFC estimate for a free-text meal name via the Groq chat API.

import json
import logging
from typing import Optional

from groq import Groq

from weightlog.core.config import settings
from weightlog.models.records import CalorieEstimate

logger = logging.getLogger(__name__)


class CalorieSearchError(Exception):
    """The completion call itself failed."""


class CalorieParseError(CalorieSearchError):
    """The model answered, but not with the JSON we asked for."""


def build_prompt(food_name: str) -> str:
    return f"""Meal name entered by the user: {food_name}

Give the typical calories and PFC (protein, fat, carbohydrate) of one
serving of this meal. Respond ONLY with valid JSON in this exact structure,
with no other text:

{{
    "calories": (calories, kcal),
    "protein": (protein, g),
    "fat": (fat, g),
    "carb": (carbohydrate, g)
}}
"""


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    return text.strip()


def parse_estimate(text: str) -> CalorieEstimate:
    try:
        data = json.loads(_strip_fences(text))
    except ValueError as exc:
        logger.error("Model did not return valid JSON: %s", text)
        raise CalorieParseError("Could not read calorie information from the AI answer.") from exc
    if not isinstance(data, dict):
        raise CalorieParseError("Could not read calorie information from the AI answer.")

    values = {}
    for key in ("calories", "protein", "fat", "carb"):
        try:
            values[key] = float(data[key]) if data.get(key) is not None else None
        except (TypeError, ValueError):
            values[key] = None
    return CalorieEstimate(**values)


class CalorieSearchService:
    def __init__(self, client: Optional[Groq] = None, model: Optional[str] = None):
        self.client = client
        self.model = model or settings.GROQ_MODEL

    def _client(self) -> Groq:
        if self.client is None:
            self.client = Groq(api_key=settings.GROQ_API_KEY)
        return self.client

    def search(self, food_name: str) -> CalorieEstimate:
        try:
            chat_completion = self._client().chat.completions.create(
                messages=[
                    {
                        "role": "system",
                        "content": "You are a professional nutritionist AI. Always respond with valid JSON.",
                    },
                    {"role": "user", "content": build_prompt(food_name)},
                ],
                model=self.model,
                temperature=0.2,
                max_tokens=300,
                response_format={"type": "json_object"},
            )
        except Exception as exc:
            logger.error("Groq API call failed: %s", exc)
            raise CalorieSearchError("Error while calling the AI completion API.") from exc

        ai_response = chat_completion.choices[0].message.content or ""
        return parse_estimate(ai_response)


_service: Optional[CalorieSearchService] = None


def get_calorie_search() -> CalorieSearchService:
    """FastAPI dependency – one service (and Groq client) per process."""
    global _service
    if _service is None:
        _service = CalorieSearchService()
    return _service
