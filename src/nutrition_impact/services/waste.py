"""Inventory expiration classification and waste scoring."""

from collections.abc import Iterable
from datetime import datetime

from nutrition_impact.domain.foods import FoodItem
from nutrition_impact.domain.inventory import (
    ExpirationItem,
    ExpirationReport,
    ExpirationStatus,
    Inventory,
    InventorySummary,
)
from nutrition_impact.services.scoring import clamp01

WARNING_THRESHOLD_PCT = 40.0
WASTE_SCORE_MAX = 30.0
EMPTY_INVENTORY_SCORE = 21.0  # 0.7 of the maximum
WASTED_WEIGHT = 0.7
WARNING_WEIGHT = 0.3
SECONDS_PER_HOUR = 3600


def classify_item(
    food_item: FoodItem, created_at: datetime, now: datetime
) -> ExpirationItem:
    """Classify an item by remaining shelf life since inventory creation."""
    hours_elapsed = (now - created_at).total_seconds() / SECONDS_PER_HOUR
    hours_remaining = food_item.expiration_hours - hours_elapsed
    if food_item.expiration_hours <= 0:
        percentage_remaining = 0.0
    else:
        percentage_remaining = hours_remaining * 100 / food_item.expiration_hours

    if food_item.expiration_hours <= 0 or hours_remaining <= 0:
        status = ExpirationStatus.WASTED
    elif percentage_remaining <= WARNING_THRESHOLD_PCT:
        status = ExpirationStatus.WARNING
    else:
        status = ExpirationStatus.HEALTHY

    return ExpirationItem(
        food_item_id=food_item.id,
        name=food_item.name,
        expiration_hours=food_item.expiration_hours,
        hours_elapsed=round(hours_elapsed, 2),
        hours_remaining=round(hours_remaining, 2),
        percentage_remaining=round(percentage_remaining, 2),
        status=status,
        image_url=food_item.image_url,
    )


def summarize(items: Iterable[ExpirationItem]) -> InventorySummary:
    """Count classified items per status."""
    counts = dict.fromkeys(ExpirationStatus, 0)
    for item in items:
        counts[item.status] += 1
    return InventorySummary(
        total_items=sum(counts.values()),
        healthy_count=counts[ExpirationStatus.HEALTHY],
        warning_count=counts[ExpirationStatus.WARNING],
        wasted_count=counts[ExpirationStatus.WASTED],
    )


def classify_inventory(
    inventory: Inventory, food_items: list[FoodItem], now: datetime
) -> ExpirationReport:
    """Build the expiration view of an inventory, most urgent items first."""
    classified = [
        classify_item(food_item, inventory.created_at, now) for food_item in food_items
    ]
    warning = sorted(
        (item for item in classified if item.status == ExpirationStatus.WARNING),
        key=lambda item: item.hours_remaining,
    )
    wasted = sorted(
        (item for item in classified if item.status == ExpirationStatus.WASTED),
        key=lambda item: item.hours_remaining,
    )
    return ExpirationReport(
        inventory_id=inventory.id,
        inventory_created_at=inventory.created_at,
        warning=warning,
        wasted=wasted,
        summary=summarize(classified),
    )


def merge_summaries(summaries: Iterable[InventorySummary]) -> InventorySummary:
    """Add up summaries from several inventories."""
    total = InventorySummary(0, 0, 0, 0)
    for summary in summaries:
        total = InventorySummary(
            total_items=total.total_items + summary.total_items,
            healthy_count=total.healthy_count + summary.healthy_count,
            warning_count=total.warning_count + summary.warning_count,
            wasted_count=total.wasted_count + summary.wasted_count,
        )
    return total


def waste_score(summary: InventorySummary) -> float:
    """Score food waste on a 0-30 scale; an empty inventory scores 21."""
    if summary.total_items == 0:
        return EMPTY_INVENTORY_SCORE
    waste_ratio = summary.wasted_count / summary.total_items
    warning_ratio = summary.warning_count / summary.total_items
    penalty = WASTED_WEIGHT * waste_ratio + WARNING_WEIGHT * warning_ratio
    return clamp01(1 - penalty) * WASTE_SCORE_MAX
