"""Inventory management and expiration checks."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrition_impact.domain.inventory import (
    ExpirationReport,
    Inventory,
    InventorySummary,
)
from nutrition_impact.errors import NotFoundError
from nutrition_impact.services.catalog import FoodCatalogService
from nutrition_impact.services.waste import classify_inventory, merge_summaries

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for inventories."""

    def create_inventory(self, user_id: UUID, name: str) -> Inventory:
        """Create an empty inventory and return it."""

    def get_inventory(self, inventory_id: UUID) -> Inventory | None:
        """Return an inventory by id, if present."""

    def list_inventories(self, user_id: UUID) -> list[Inventory]:
        """Return all inventories owned by a user."""

    def rename_inventory(self, inventory_id: UUID, name: str) -> Inventory:
        """Rename an inventory and return it."""

    def delete_inventory(self, inventory_id: UUID) -> None:
        """Delete an inventory."""

    def save_food_item_ids(
        self, inventory_id: UUID, food_item_ids: list[UUID]
    ) -> Inventory:
        """Replace the item references of an inventory and return it."""


@dataclass
class InventoryService:
    """Application service for inventories."""

    repository: InventoryRepository
    catalog: FoodCatalogService

    def create(self, user_id: UUID, name: str) -> Inventory:
        """Create a new inventory for the user."""
        return self.repository.create_inventory(user_id, name)

    def list_for_user(self, user_id: UUID) -> list[Inventory]:
        """Return the user's inventories."""
        return self.repository.list_inventories(user_id)

    def get(self, user_id: UUID, inventory_id: UUID) -> Inventory:
        """Return an inventory owned by the user or raise NotFoundError."""
        inventory = self.repository.get_inventory(inventory_id)
        if inventory is None or inventory.user_id != user_id:
            raise NotFoundError("Inventory", inventory_id)
        return inventory

    def rename(self, user_id: UUID, inventory_id: UUID, name: str) -> Inventory:
        """Rename an inventory."""
        self.get(user_id, inventory_id)
        return self.repository.rename_inventory(inventory_id, name)

    def delete(self, user_id: UUID, inventory_id: UUID) -> Inventory:
        """Delete an inventory and return what was removed."""
        inventory = self.get(user_id, inventory_id)
        self.repository.delete_inventory(inventory_id)
        return inventory

    def add_item(
        self, user_id: UUID, inventory_id: UUID, food_item_id: UUID
    ) -> Inventory:
        """Add a food item reference; adding an existing item is a no-op."""
        inventory = self.get(user_id, inventory_id)
        self.catalog.get(food_item_id)
        if food_item_id in inventory.food_item_ids:
            return inventory
        return self.repository.save_food_item_ids(
            inventory_id, [*inventory.food_item_ids, food_item_id]
        )

    def remove_item(
        self, user_id: UUID, inventory_id: UUID, food_item_id: UUID
    ) -> Inventory:
        """Remove a food item reference from an inventory."""
        inventory = self.get(user_id, inventory_id)
        if food_item_id not in inventory.food_item_ids:
            raise NotFoundError("Food item in inventory", food_item_id)
        remaining = [
            item_id for item_id in inventory.food_item_ids if item_id != food_item_id
        ]
        return self.repository.save_food_item_ids(inventory_id, remaining)

    def check_expiration(
        self, user_id: UUID, inventory_id: UUID, now: datetime | None = None
    ) -> ExpirationReport:
        """Classify the items of one inventory by remaining shelf life."""
        inventory = self.get(user_id, inventory_id)
        return self._classify(inventory, now or datetime.now(tz=UTC))

    def summarize_for_user(
        self, user_id: UUID, now: datetime | None = None
    ) -> InventorySummary:
        """Combine expiration counts over all of a user's inventories."""
        resolved_now = now or datetime.now(tz=UTC)
        return merge_summaries(
            self._classify(inventory, resolved_now).summary
            for inventory in self.repository.list_inventories(user_id)
        )

    def _classify(self, inventory: Inventory, now: datetime) -> ExpirationReport:
        items_by_id = self.catalog.resolve(list(inventory.food_item_ids))
        missing = [
            item_id for item_id in inventory.food_item_ids if item_id not in items_by_id
        ]
        if missing:
            _logger.warning(
                "Inventory references missing food items: inventory_id=%s count=%s",
                inventory.id,
                len(missing),
            )
        food_items = [
            items_by_id[item_id]
            for item_id in inventory.food_item_ids
            if item_id in items_by_id
        ]
        return classify_inventory(inventory, food_items, now)
