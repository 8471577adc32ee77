"""Request models for the HTTP API."""

from datetime import UTC, date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from nutrition_impact.domain.meal_plans import ChatMessage
from nutrition_impact.domain.resources import ResourceType
from nutrition_impact.domain.users import (
    ActivityLevel,
    Gender,
    PrimaryGoal,
    SecondaryGoal,
)
from nutrition_impact.services.aggregation import LAST_WEEK_START


class HealthProfileBody(BaseModel):
    """Replacement health profile."""

    birth_date: date | None = None
    gender: Gender | None = None
    height_cm: float | None = Field(default=None, gt=0)
    current_weight_kg: float | None = Field(default=None, gt=0)
    activity_level_factor: float | None = Field(default=None, gt=0)
    body_fat_percentage: float | None = Field(default=None, ge=0, le=100)
    steps_daily_average: int | None = Field(default=None, ge=0)
    sleep_hours_average: float | None = Field(default=None, ge=0, le=24)

    @field_validator("birth_date")
    @classmethod
    def _birth_date_not_in_future(cls, value: date | None) -> date | None:
        if value is not None and value > datetime.now(tz=UTC).date():
            raise ValueError("birth_date cannot be in the future")
        return value


class ProfileBody(BaseModel):
    full_name: str = Field(min_length=1)


class GoalCreateBody(BaseModel):
    primary_goals: list[PrimaryGoal] = Field(min_length=1)
    secondary_goals: list[SecondaryGoal] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    activity_level: ActivityLevel
    target_weight_kg: float = Field(gt=0)
    current_weight_kg: float = Field(gt=0)


class GoalUpdateBody(BaseModel):
    primary_goals: list[PrimaryGoal] | None = Field(default=None, min_length=1)
    secondary_goals: list[SecondaryGoal] | None = None
    allergies: list[str] | None = None
    activity_level: ActivityLevel | None = None
    target_weight_kg: float | None = Field(default=None, gt=0)
    current_weight_kg: float | None = Field(default=None, gt=0)


class FoodLogBody(BaseModel):
    date: date | datetime
    time: str
    food_item_id: UUID
    quantity: float = Field(gt=0)


class NutrientsBody(BaseModel):
    """Nutrients per 100 units of the metric serving."""

    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbohydrate: float = Field(default=0.0, ge=0)
    fat_total: float = Field(default=0.0, ge=0)
    fiber: float = Field(default=0.0, ge=0)
    sodium: float = Field(default=0.0, ge=0)
    cholesterol: float = Field(default=0.0, ge=0)
    calcium: float = Field(default=0.0, ge=0)
    potassium: float = Field(default=0.0, ge=0)
    iron: float = Field(default=0.0, ge=0)
    magnesium: float = Field(default=0.0, ge=0)
    vitamin_a: float = Field(default=0.0, ge=0)
    vitamin_c: float = Field(default=0.0, ge=0)
    vitamin_d: float = Field(default=0.0, ge=0)


class FoodItemBody(BaseModel):
    name: str = Field(min_length=1)
    serving_quantity: float = Field(gt=0)
    serving_unit: str
    serving_weight_grams: float = Field(gt=0)
    metric_serving_unit: str = "g"
    nutrients: NutrientsBody = Field(default_factory=NutrientsBody)
    expiration_hours: float = Field(gt=0)
    tags: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    image_url: str | None = None
    inventory_id: UUID | None = None


class NutrientsUpdateBody(BaseModel):
    """Nutrient fields to overwrite; omitted fields keep their stored value."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbohydrate: float | None = Field(default=None, ge=0)
    fat_total: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)
    cholesterol: float | None = Field(default=None, ge=0)
    calcium: float | None = Field(default=None, ge=0)
    potassium: float | None = Field(default=None, ge=0)
    iron: float | None = Field(default=None, ge=0)
    magnesium: float | None = Field(default=None, ge=0)
    vitamin_a: float | None = Field(default=None, ge=0)
    vitamin_c: float | None = Field(default=None, ge=0)
    vitamin_d: float | None = Field(default=None, ge=0)


class FoodItemUpdateBody(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    serving_quantity: float | None = Field(default=None, gt=0)
    serving_unit: str | None = None
    serving_weight_grams: float | None = Field(default=None, gt=0)
    metric_serving_unit: str | None = None
    nutrients: NutrientsUpdateBody | None = None
    expiration_hours: float | None = Field(default=None, gt=0)
    tags: list[str] | None = None
    allergens: list[str] | None = None
    image_url: str | None = None


class InventoryBody(BaseModel):
    name: str = Field(min_length=1)


class InventoryItemBody(BaseModel):
    food_item_id: UUID


class MonthlyBody(BaseModel):
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)


class WeekBody(BaseModel):
    start_date: date

    @field_validator("start_date")
    @classmethod
    def _week_fits_calendar(cls, value: date) -> date:
        if value > LAST_WEEK_START:
            raise ValueError(f"start_date must not be after {LAST_WEEK_START}")
        return value


class WeeklyBody(WeekBody):
    include_suggestions: bool = True


class ImpactBody(WeekBody):
    pass


class MealPlanBody(BaseModel):
    days: int = Field(default=7, ge=1, le=14)


class ChatBody(BaseModel):
    message: str = Field(min_length=1)
    history: list[ChatMessage] = Field(default_factory=list)


class ResourceBody(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    type: ResourceType
    tags: list[str] = Field(default_factory=list)
    video_url: str | None = None


class ResourceUpdateBody(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    type: ResourceType | None = None
    tags: list[str] | None = None
    video_url: str | None = None
