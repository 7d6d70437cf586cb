"""Models for AI calorie estimates."""

from pydantic import BaseModel, Field


class CalorieEstimate(BaseModel):
    """Calorie estimate returned for a meal description."""

    calories: int = Field(ge=0)
    breakdown: list[str] = Field(default_factory=list)
