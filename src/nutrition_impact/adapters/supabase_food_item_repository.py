"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_impact.domain.foods import FoodItem
from nutrition_impact.domain.nutrients import NUTRIENT_FIELDS, NutrientVector
from nutrition_impact.services.catalog import FoodCatalogRepository, FoodItemDraft

_TABLE = "food_items"


@dataclass
class SupabaseFoodItemRepository(FoodCatalogRepository):
    """Supabase-backed repository for food items."""

    client: Client

    def create_food_item(self, owner_id: UUID, draft: FoodItemDraft) -> FoodItem:
        """Create a food item and return it."""
        payload = {**_draft_payload(draft), "created_by": str(owner_id)}
        response = self.client.table(_TABLE).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return _parse_food_item(response.data[0])

    def get_food_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(food_item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food_item(response.data[0])

    def get_food_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        """Return the food items found among the given ids."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .in_("id", [str(item_id) for item_id in food_item_ids])
            .execute()
        )
        return [_parse_food_item(row) for row in response.data or []]

    def list_food_items(self, owner_id: UUID) -> list[FoodItem]:
        """Return food items created by a user, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("created_by", str(owner_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_food_item(row) for row in response.data or []]

    def update_food_item(self, food_item_id: UUID, draft: FoodItemDraft) -> FoodItem:
        """Overwrite a food item's fields and return it."""
        response = (
            self.client.table(_TABLE)
            .update(_draft_payload(draft))
            .eq("id", str(food_item_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food item")
        return _parse_food_item(response.data[0])

    def delete_food_item(self, owner_id: UUID, food_item_id: UUID) -> bool:
        """Delete a food item created by the user."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(food_item_id))
            .eq("created_by", str(owner_id))
            .execute()
        )
        return bool(response.data)


def _draft_payload(draft: FoodItemDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "serving_quantity": draft.serving_quantity,
        "serving_unit": draft.serving_unit,
        "serving_weight_grams": draft.serving_weight_grams,
        "metric_serving_unit": draft.metric_serving_unit,
        "expiration_hours": draft.expiration_hours,
        "tags": sorted(draft.tags),
        "allergens": sorted(draft.allergens),
        "image_url": draft.image_url,
        **draft.nutrients.to_dict(),
    }


def _parse_food_item(row: dict[str, object]) -> FoodItem:
    """Parse a food item row into a domain model."""
    created_by = row.get("created_by")
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        serving_quantity=float(row.get("serving_quantity") or 0),
        serving_unit=str(row.get("serving_unit") or ""),
        serving_weight_grams=float(row.get("serving_weight_grams") or 0),
        metric_serving_unit=str(row.get("metric_serving_unit") or "g"),
        nutrients=NutrientVector.from_mapping(
            {name: row.get(name) for name in NUTRIENT_FIELDS}
        ),
        expiration_hours=float(row.get("expiration_hours") or 0),
        tags=frozenset(row.get("tags") or []),
        allergens=frozenset(row.get("allergens") or []),
        created_by=UUID(str(created_by)) if created_by else None,
        image_url=row.get("image_url"),
    )
