"""Pydantic models for API request payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class ApiRequest(BaseModel):
    """Base for camelCase JSON request bodies."""

    model_config = ConfigDict(populate_by_name=True)


class UserIdRequest(ApiRequest):
    """Body carrying only a user id (register, login, totals)."""

    user_id: str | None = Field(default=None, alias="userId")


class EstimateRequest(ApiRequest):
    """Meal description to estimate."""

    meal: str | None = None
    meal_type: str | None = Field(default=None, alias="mealType")


class SaveMealRequest(ApiRequest):
    """Meal to persist with its estimated calories."""

    user_id: str | None = Field(default=None, alias="userId")
    meal: str | None = None
    meal_type: str | None = Field(default=None, alias="mealType")
    calories: StrictInt | None = None


class GetMealsRequest(ApiRequest):
    """Meal history query with optional creation-time bounds."""

    user_id: str | None = Field(default=None, alias="userId")
    start_date: datetime | None = Field(default=None, alias="startDate")
    end_date: datetime | None = Field(default=None, alias="endDate")


class LogMealRequest(ApiRequest):
    """Chat message: estimate, save and refresh in one call."""

    user_id: str | None = Field(default=None, alias="userId")
    meal: str | None = None
    meal_type: str | None = Field(default=None, alias="mealType")
