"""SDG impact report composition."""

import math
from dataclasses import dataclass
from datetime import date

from nutrition_impact.domain.inventory import InventorySummary
from nutrition_impact.domain.nutrients import NutrientVector
from nutrition_impact.domain.reports import (
    ImpactReport,
    NutritionSummary,
    ScoreComponents,
)
from nutrition_impact.services.scoring import nutrition_score
from nutrition_impact.services.waste import waste_score

MIN_SCORE = 1
MAX_SCORE = 100
ACTION_PLAN_ITEMS = 3
KEEP_HABITS_MESSAGE = (
    "Keep up your current habits: your nutrition and food waste are on track."
)


@dataclass(frozen=True)
class _Check:
    condition: bool
    message: str


def compose_impact_report(
    *,
    start: date,
    end: date,
    averages: NutrientVector,
    average_percentages: NutrientVector,
    inventory: InventorySummary,
) -> ImpactReport:
    """Combine nutrition adherence and food waste into a 1-100 score."""
    nutrition = nutrition_score(average_percentages)
    waste = waste_score(inventory)
    score = _round_half_up(min(max(nutrition + waste, MIN_SCORE), MAX_SCORE))

    strengths = _strengths(average_percentages, inventory)
    improvements = _improvements(average_percentages, inventory)
    if not improvements:
        improvements = [KEEP_HABITS_MESSAGE]

    return ImpactReport(
        score=score,
        components=ScoreComponents(
            nutrition_score=round(nutrition, 1),
            waste_score=round(waste, 1),
        ),
        start=start,
        end=end,
        nutrition=NutritionSummary(
            averages=averages.rounded(1),
            percentages=average_percentages.rounded(1),
        ),
        inventory=inventory,
        strengths=strengths,
        improvements=improvements,
        action_plan=" ".join(improvements[:ACTION_PLAN_ITEMS]),
    )


def _strengths(pct: NutrientVector, inventory: InventorySummary) -> list[str]:
    checks = [
        _Check(
            90 <= pct.calories <= 110,
            "Your average calorie intake is within 10% of your goal.",
        ),
        _Check(
            pct.protein >= 90,
            "You are consistently meeting your protein target.",
        ),
        _Check(pct.fiber >= 90, "Your fiber intake supports healthy digestion."),
        _Check(
            0 < pct.sodium <= 100,
            "You are keeping sodium within the recommended limit.",
        ),
        _Check(
            inventory.total_items > 0 and inventory.wasted_count == 0,
            "No food in your inventory went to waste.",
        ),
        _Check(
            inventory.total_items > 0 and inventory.warning_count == 0,
            "None of your inventory items are close to expiring.",
        ),
    ]
    return [check.message for check in checks if check.condition]


def _improvements(pct: NutrientVector, inventory: InventorySummary) -> list[str]:
    checks = [
        _Check(
            pct.calories > 110,
            "Reduce portion sizes: your calorie intake is above your goal.",
        ),
        _Check(
            pct.calories < 90,
            "Eat regular balanced meals: your calorie intake is below your goal.",
        ),
        _Check(
            pct.protein < 90,
            "Add lean protein such as eggs, legumes or fish to more meals.",
        ),
        _Check(
            pct.fiber < 90,
            "Include more whole grains, vegetables and fruit to raise fiber.",
        ),
        _Check(
            pct.sodium > 100,
            "Cut back on salty and processed foods to lower sodium.",
        ),
        _Check(
            inventory.wasted_count > 0,
            f"Plan purchases around your meals: {inventory.wasted_count} "
            "inventory item(s) expired unused.",
        ),
        _Check(
            inventory.warning_count > 0,
            f"Use up the {inventory.warning_count} item(s) close to expiring "
            "in your next meals.",
        ),
    ]
    return [check.message for check in checks if check.condition]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
