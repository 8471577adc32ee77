"""Report models produced by the analytics engine."""

from dataclasses import dataclass
from datetime import date

from nutrition_impact.domain.foods import FoodLogEntry
from nutrition_impact.domain.inventory import InventorySummary
from nutrition_impact.domain.nutrients import NutrientVector


@dataclass(frozen=True)
class SingleDayReport:
    """Percentage-of-goal figures for one day."""

    day: date
    totals: NutrientVector
    percentages: NutrientVector


@dataclass(frozen=True)
class DailyLog:
    """One day of a period report."""

    day: date
    entries: list[FoodLogEntry]
    summary: NutrientVector
    day_of_week: str | None = None
    percentages: NutrientVector | None = None


@dataclass(frozen=True)
class MonthlyReport:
    """Per-day totals for a calendar month."""

    year: int
    month: int
    daily: list[DailyLog]


@dataclass(frozen=True)
class GoalSnapshot:
    """Subset of goal targets echoed in weekly reports."""

    calories: float
    protein: float
    carbohydrate: float
    fat_total: float
    fiber: float
    sodium: float


@dataclass(frozen=True)
class WeeklyReport:
    """Seven consecutive days with totals, averages and percentages."""

    start: date
    end: date
    daily: list[DailyLog]
    totals: NutrientVector
    averages: NutrientVector
    average_percentages: NutrientVector | None
    goal: GoalSnapshot | None
    ai_suggestions: str | None = None


@dataclass(frozen=True)
class ScoreComponents:
    """Breakdown of the impact score."""

    nutrition_score: float
    waste_score: float


@dataclass(frozen=True)
class NutritionSummary:
    """Weekly averages and percentages rounded for display."""

    averages: NutrientVector
    percentages: NutrientVector


@dataclass(frozen=True)
class ImpactReport:
    """Composite SDG impact score with narrative guidance."""

    score: int
    components: ScoreComponents
    start: date
    end: date
    nutrition: NutritionSummary
    inventory: InventorySummary
    strengths: list[str]
    improvements: list[str]
    action_plan: str
