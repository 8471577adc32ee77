"""Supabase implementation for inventories."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_impact.domain.inventory import Inventory
from nutrition_impact.services.inventory import InventoryRepository

_TABLE = "inventories"


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed repository for inventories."""

    client: Client

    def create_inventory(self, user_id: UUID, name: str) -> Inventory:
        """Create an empty inventory and return it."""
        response = (
            self.client.table(_TABLE)
            .insert({"user_id": str(user_id), "name": name, "food_item_ids": []})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create inventory")
        return _parse_inventory(response.data[0])

    def get_inventory(self, inventory_id: UUID) -> Inventory | None:
        """Return an inventory by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(inventory_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_inventory(response.data[0])

    def list_inventories(self, user_id: UUID) -> list[Inventory]:
        """Return the user's inventories, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at")
            .execute()
        )
        return [_parse_inventory(row) for row in response.data or []]

    def rename_inventory(self, inventory_id: UUID, name: str) -> Inventory:
        """Rename an inventory and return it."""
        return self._update(inventory_id, {"name": name})

    def delete_inventory(self, inventory_id: UUID) -> None:
        """Delete an inventory row."""
        self.client.table(_TABLE).delete().eq("id", str(inventory_id)).execute()

    def save_food_item_ids(
        self, inventory_id: UUID, food_item_ids: list[UUID]
    ) -> Inventory:
        """Replace the item references of an inventory."""
        return self._update(
            inventory_id, {"food_item_ids": [str(item) for item in food_item_ids]}
        )

    def _update(self, inventory_id: UUID, payload: dict[str, object]) -> Inventory:
        response = (
            self.client.table(_TABLE)
            .update(payload)
            .eq("id", str(inventory_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update inventory")
        return _parse_inventory(response.data[0])


def _parse_inventory(row: dict[str, object]) -> Inventory:
    """Parse an inventory row into a domain model."""
    return Inventory(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        food_item_ids=tuple(UUID(str(item)) for item in row.get("food_item_ids") or []),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
