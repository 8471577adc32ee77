"""Food catalog service."""

from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import UUID

from nutrition_impact.domain.foods import FoodItem
from nutrition_impact.domain.nutrients import NUTRIENT_FIELDS, NutrientVector
from nutrition_impact.errors import NotFoundError, PreconditionFailedError


@dataclass(frozen=True)
class FoodItemDraft:
    """Fields needed to create a catalog entry."""

    name: str
    serving_quantity: float
    serving_unit: str
    serving_weight_grams: float
    nutrients: NutrientVector
    expiration_hours: float
    tags: frozenset[str] = field(default_factory=frozenset)
    allergens: frozenset[str] = field(default_factory=frozenset)
    metric_serving_unit: str = "g"
    image_url: str | None = None


@dataclass(frozen=True)
class FoodItemChanges:
    """Partial update of a food item; None leaves a field unchanged.

    Nutrients are merged over the stored values, so a change may name only
    the fields it touches.
    """

    name: str | None = None
    serving_quantity: float | None = None
    serving_unit: str | None = None
    serving_weight_grams: float | None = None
    metric_serving_unit: str | None = None
    nutrients: dict[str, float] | None = None
    expiration_hours: float | None = None
    tags: frozenset[str] | None = None
    allergens: frozenset[str] | None = None
    image_url: str | None = None


class FoodCatalogRepository(Protocol):
    """Persistence interface for food items."""

    def create_food_item(self, owner_id: UUID, draft: FoodItemDraft) -> FoodItem:
        """Create a food item and return it."""

    def get_food_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""

    def get_food_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        """Return the food items that exist among the given ids."""

    def list_food_items(self, owner_id: UUID) -> list[FoodItem]:
        """Return food items created by a user."""

    def update_food_item(self, food_item_id: UUID, draft: FoodItemDraft) -> FoodItem:
        """Overwrite a food item's fields and return it."""

    def delete_food_item(self, owner_id: UUID, food_item_id: UUID) -> bool:
        """Delete a user's food item; return False when it was not found."""


@dataclass
class FoodCatalogService:
    """Application service for the shared food catalog."""

    repository: FoodCatalogRepository

    def create(self, owner_id: UUID, draft: FoodItemDraft) -> FoodItem:
        """Validate and create a food item."""
        _validate_draft(draft)
        return self.repository.create_food_item(owner_id, draft)

    def get(self, food_item_id: UUID) -> FoodItem:
        """Return a food item or raise NotFoundError."""
        item = self.repository.get_food_item(food_item_id)
        if item is None:
            raise NotFoundError("Food item", food_item_id)
        return item

    def list_for_owner(self, owner_id: UUID) -> list[FoodItem]:
        """Return the food items a user created."""
        return self.repository.list_food_items(owner_id)

    def update(
        self, owner_id: UUID, food_item_id: UUID, changes: FoodItemChanges
    ) -> FoodItem:
        """Apply changes to a food item the user created."""
        item = self.get(food_item_id)
        if item.created_by != owner_id:
            raise NotFoundError("Food item", food_item_id)
        draft = _apply_changes(item, changes)
        _validate_draft(draft)
        return self.repository.update_food_item(food_item_id, draft)

    def delete(self, owner_id: UUID, food_item_id: UUID) -> None:
        """Delete a food item owned by the user."""
        if not self.repository.delete_food_item(owner_id, food_item_id):
            raise NotFoundError("Food item", food_item_id)

    def resolve(self, food_item_ids: list[UUID]) -> dict[UUID, FoodItem]:
        """Return the existing food items keyed by id."""
        unique_ids = list(dict.fromkeys(food_item_ids))
        if not unique_ids:
            return {}
        return {item.id: item for item in self.repository.get_food_items(unique_ids)}


def _validate_draft(draft: FoodItemDraft) -> None:
    if draft.serving_quantity <= 0 or draft.serving_weight_grams <= 0:
        raise PreconditionFailedError(
            "Serving quantity and serving weight must be positive"
        )
    negative = [
        name for name in NUTRIENT_FIELDS if getattr(draft.nutrients, name) < 0
    ]
    if negative:
        raise PreconditionFailedError(
            f"Nutrient values must not be negative: {', '.join(negative)}"
        )
    if draft.expiration_hours <= 0:
        raise PreconditionFailedError("Expiration hours must be positive")


def _apply_changes(item: FoodItem, changes: FoodItemChanges) -> FoodItemDraft:
    draft = FoodItemDraft(
        name=item.name,
        serving_quantity=item.serving_quantity,
        serving_unit=item.serving_unit,
        serving_weight_grams=item.serving_weight_grams,
        nutrients=item.nutrients,
        expiration_hours=item.expiration_hours,
        tags=item.tags,
        allergens=item.allergens,
        metric_serving_unit=item.metric_serving_unit,
        image_url=item.image_url,
    )
    updates = {
        name: value
        for name, value in vars(changes).items()
        if value is not None and name != "nutrients"
    }
    if changes.nutrients:
        updates["nutrients"] = NutrientVector.from_mapping(
            {**item.nutrients.to_dict(), **changes.nutrients}
        )
    return replace(draft, **updates)
