"""Food log service."""

import logging
from dataclasses import dataclass
from uuid import UUID

from nutrition_impact.domain.foods import FoodLogEntry, ResolvedLogEntry
from nutrition_impact.domain.users import UserRecord
from nutrition_impact.errors import NotFoundError
from nutrition_impact.services.catalog import FoodCatalogService
from nutrition_impact.services.users import UserRepository

_logger = logging.getLogger(__name__)


@dataclass
class FoodLogService:
    """Service for logging consumption and resolving logs against the catalog."""

    repository: UserRepository
    catalog: FoodCatalogService

    def list_entries(self, user_id: UUID) -> list[FoodLogEntry]:
        """Return the user's food log."""
        return list(self._load(user_id).food_logs)

    def add_entry(self, user_id: UUID, entry: FoodLogEntry) -> list[FoodLogEntry]:
        """Append an entry after checking the food item exists."""
        user = self._load(user_id)
        self.catalog.get(entry.food_item_id)
        food_logs = [*user.food_logs, entry]
        self.repository.save_food_logs(user_id, food_logs)
        return food_logs

    def delete_entry(
        self, user_id: UUID, index: int
    ) -> tuple[FoodLogEntry, list[FoodLogEntry]]:
        """Remove the entry at index and return it with the remaining log."""
        user = self._load(user_id)
        if not 0 <= index < len(user.food_logs):
            raise NotFoundError("Food log", index)
        food_logs = list(user.food_logs)
        removed = food_logs.pop(index)
        self.repository.save_food_logs(user_id, food_logs)
        return removed, food_logs

    def resolve(self, user: UserRecord) -> list[ResolvedLogEntry]:
        """Pair each log entry with its food item, skipping dangling references."""
        items_by_id = self.catalog.resolve(
            [entry.food_item_id for entry in user.food_logs]
        )
        resolved: list[ResolvedLogEntry] = []
        for entry in user.food_logs:
            food_item = items_by_id.get(entry.food_item_id)
            if food_item is None:
                _logger.warning(
                    "Skipping log entry with missing food item: "
                    "user_id=%s food_item_id=%s",
                    user.id,
                    entry.food_item_id,
                )
                continue
            resolved.append(ResolvedLogEntry(entry=entry, food_item=food_item))
        return resolved

    def _load(self, user_id: UUID) -> UserRecord:
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
