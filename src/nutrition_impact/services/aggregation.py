"""Nutrient aggregation over food log entries."""

import calendar
from collections.abc import Callable, Iterable
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta

from nutrition_impact.domain.foods import FoodItem, FoodLogEntry, ResolvedLogEntry
from nutrition_impact.domain.nutrients import NutrientVector, sum_vectors
from nutrition_impact.domain.reports import DailyLog
from nutrition_impact.errors import PreconditionFailedError

WEEK_LENGTH = 7
LAST_WEEK_START = date.max - timedelta(days=WEEK_LENGTH - 1)
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def consumed_factor(entry: FoodLogEntry, food_item: FoodItem) -> float:
    """Convert a logged quantity into fractions of the 100-unit nutrient basis."""
    return (entry.quantity * food_item.serving_quantity) / 100


def contribution(resolved: ResolvedLogEntry) -> NutrientVector:
    """Return the nutrients contributed by a single entry."""
    factor = consumed_factor(resolved.entry, resolved.food_item)
    return resolved.food_item.nutrients.scale(factor)


def same_day(left: date | datetime, right: date | datetime) -> bool:
    """Return True when both values fall on the same calendar day."""
    return _as_day(left) == _as_day(right)


def aggregate(
    entries: Iterable[ResolvedLogEntry],
    predicate: Callable[[ResolvedLogEntry], bool],
) -> NutrientVector:
    """Sum the contributions of all entries matching the predicate."""
    return sum_vectors([contribution(item) for item in entries if predicate(item)])


def aggregate_day(entries: Iterable[ResolvedLogEntry], day: date) -> DailyLog:
    """Collect the entries logged on a day and their nutrient totals."""
    matched = [item for item in entries if same_day(item.entry.date, day)]
    return DailyLog(
        day=day,
        entries=[item.entry for item in matched],
        summary=aggregate(matched, lambda _: True),
    )


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month."""
    return calendar.monthrange(year, month)[1]


def month_days(year: int, month: int) -> list[date]:
    """Return every calendar day of a month."""
    if not MINYEAR <= year <= MAXYEAR:
        raise PreconditionFailedError(f"Year must be between {MINYEAR} and {MAXYEAR}")
    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def week_days(start: date) -> list[date]:
    """Return seven consecutive days beginning at start."""
    if start > LAST_WEEK_START:
        raise PreconditionFailedError(
            f"A week starting on {start} runs past the end of the calendar"
        )
    return [start + timedelta(days=offset) for offset in range(WEEK_LENGTH)]


def weekday_name(day: date) -> str:
    """Return the English weekday name of a date."""
    return WEEKDAY_NAMES[day.weekday()]


def _as_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
