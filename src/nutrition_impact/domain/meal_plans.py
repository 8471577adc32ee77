"""Models for generated meal plans and chat turns."""

from typing import Literal

from pydantic import BaseModel, Field


class PlannedMeal(BaseModel):
    """Single meal suggested by the assistant."""

    meal: str
    name: str
    description: str
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbohydrate: float = Field(ge=0.0)
    fat_total: float = Field(ge=0.0)


class PlannedDay(BaseModel):
    """One day of a meal plan."""

    day: int = Field(ge=1)
    meals: list[PlannedMeal]


class MealPlan(BaseModel):
    """Structured output for meal plan generation."""

    days: list[PlannedDay]
    notes: str | None = None


class ChatMessage(BaseModel):
    """One turn of an assistant conversation."""

    role: Literal["user", "assistant"]
    content: str
