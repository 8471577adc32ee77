"""Food catalog and food log domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from nutrition_impact.domain.nutrients import NutrientVector


@dataclass(frozen=True)
class FoodItem:
    """Catalog entry with nutrients normalized per 100 units of metric serving."""

    id: UUID
    name: str
    serving_quantity: float
    serving_unit: str
    serving_weight_grams: float
    nutrients: NutrientVector
    expiration_hours: float
    tags: frozenset[str] = field(default_factory=frozenset)
    allergens: frozenset[str] = field(default_factory=frozenset)
    metric_serving_unit: str = "g"
    created_by: UUID | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class FoodLogEntry:
    """A single consumption record owned by a user."""

    date: date | datetime
    time: str
    food_item_id: UUID
    quantity: float


@dataclass(frozen=True)
class ResolvedLogEntry:
    """Food log entry paired with its catalog item."""

    entry: FoodLogEntry
    food_item: FoodItem
