"""Inventory and expiration domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ExpirationStatus(StrEnum):
    """Freshness state of an inventory item."""

    HEALTHY = "healthy"
    WARNING = "warning"
    WASTED = "wasted"


@dataclass(frozen=True)
class Inventory:
    """User-owned container of food item references.

    `created_at` is the age-zero point for every item in the inventory.
    """

    id: UUID
    user_id: UUID
    name: str
    food_item_ids: tuple[UUID, ...]
    created_at: datetime


@dataclass(frozen=True)
class ExpirationItem:
    """Classification of a single inventory item."""

    food_item_id: UUID
    name: str
    expiration_hours: float
    hours_elapsed: float
    hours_remaining: float
    percentage_remaining: float
    status: ExpirationStatus
    image_url: str | None = None


@dataclass(frozen=True)
class InventorySummary:
    """Counts of items per expiration status."""

    total_items: int
    healthy_count: int
    warning_count: int
    wasted_count: int


@dataclass(frozen=True)
class ExpirationReport:
    """Detailed expiration view of one inventory."""

    inventory_id: UUID
    inventory_created_at: datetime
    warning: list[ExpirationItem]
    wasted: list[ExpirationItem]
    summary: InventorySummary
