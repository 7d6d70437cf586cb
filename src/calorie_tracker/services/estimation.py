"""Calorie estimation service using LLMs."""

import json
import math
import re
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.estimation import CalorieEstimate

SYSTEM_PROMPT = (
    "You are a helpful nutrition expert that provides accurate calorie "
    "estimates. Always respond with valid JSON only."
)

_JSON_BLOCK = re.compile(r"\{.*\}", re.DOTALL)
_FIRST_NUMBER = re.compile(r"\d+")


class EstimationClient(Protocol):
    """Interface for chat completion calls."""

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Return the raw text of the model's reply."""


@dataclass
class EstimationService:
    """Service that prompts the model for calories and parses its reply."""

    client: EstimationClient
    model: str
    temperature: float
    max_tokens: int

    async def estimate(
        self, meal_text: str, meal_type: str | None = None
    ) -> CalorieEstimate:
        """Estimate total calories for a free-text meal description."""
        prompt = build_prompt(meal_text, meal_type or "meal")
        reply = await self.client.complete(
            model=self.model,
            system_prompt=SYSTEM_PROMPT,
            prompt=prompt,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not reply or not reply.strip():
            raise RuntimeError("OpenAI returned an empty response")
        return parse_estimate(reply)


def build_prompt(meal_text: str, meal_type: str) -> str:
    """Build the user prompt for a meal description."""
    return (
        "You are a nutrition expert. Analyze the following meal description "
        "and provide an accurate calorie estimate.\n\n"
        f"Meal Type: {meal_type}\n"
        f'Meal Description: "{meal_text}"\n\n'
        "Please provide:\n"
        "1. Total estimated calories (as a number only)\n"
        "2. A brief breakdown of the main items and their approximate "
        "calorie contributions\n\n"
        "Format your response as JSON with this exact structure:\n"
        "{\n"
        '    "totalCalories": <number>,\n'
        '    "breakdown": ["item 1: X kcal", "item 2: Y kcal", ...]\n'
        "}\n\n"
        "Be accurate and consider typical serving sizes. If quantities are "
        'mentioned (like "2 eggs"), account for that.'
    )


def parse_estimate(reply: str) -> CalorieEstimate:
    """Parse a model reply into a calorie estimate.

    The first ``{...}`` block is decoded as JSON. Replies without one fall
    back to the first integer found in the text.
    """
    text = reply.strip()
    match = _JSON_BLOCK.search(text)
    if match:
        payload = json.loads(match.group(0))
        calories = round(_to_float(payload.get("totalCalories")))
        breakdown = payload.get("breakdown") or []
        return CalorieEstimate(
            calories=max(calories, 0),
            breakdown=[str(item) for item in breakdown],
        )
    number = _FIRST_NUMBER.search(text)
    calories = int(number.group(0)) if number else 0
    return CalorieEstimate(calories=calories, breakdown=[f"Estimated: {calories} kcal"])


def _to_float(value: object) -> float:
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0
