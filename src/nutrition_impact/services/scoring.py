"""Goal adherence scoring."""

from nutrition_impact.domain.nutrients import NutrientVector

NUTRITION_SCORE_MAX = 70.0
TOLERANCE_PCT = 10.0
DECAY_SPAN_PCT = 50.0
SODIUM_DECAY_SPAN_PCT = 60.0

CALORIES_WEIGHT = 0.4
PROTEIN_WEIGHT = 0.3
FIBER_WEIGHT = 0.2
SODIUM_WEIGHT = 0.1


def percentages(actual: NutrientVector, target: NutrientVector) -> NutrientVector:
    """Express actual intake as a percentage of target, per nutrient.

    A zero target yields zero for that nutrient.
    """
    return actual.combine(
        target, lambda value, goal: (value / goal) * 100 if goal else 0.0
    )


def clamp01(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return max(0.0, min(1.0, value))


def symmetric_score(percentage: float) -> float:
    """Score closeness to 100%, penalizing over and under equally.

    Full marks within 10 points of target, falling linearly to zero at a
    deviation of 60 points.
    """
    deviation = abs(percentage - 100)
    if deviation <= TOLERANCE_PCT:
        return 1.0
    return clamp01(1 - (deviation - TOLERANCE_PCT) / DECAY_SPAN_PCT)


def sodium_score(percentage: float) -> float:
    """Score sodium intake; anything at or under target is free."""
    if percentage <= 100:
        return 1.0
    return clamp01(1 - (percentage - 100) / SODIUM_DECAY_SPAN_PCT)


def nutrition_score(pct: NutrientVector) -> float:
    """Blend calorie, protein, fiber and sodium adherence into 0-70."""
    blended = (
        CALORIES_WEIGHT * symmetric_score(pct.calories)
        + PROTEIN_WEIGHT * symmetric_score(pct.protein)
        + FIBER_WEIGHT * symmetric_score(pct.fiber)
        + SODIUM_WEIGHT * sodium_score(pct.sodium)
    )
    return clamp01(blended) * NUTRITION_SCORE_MAX
