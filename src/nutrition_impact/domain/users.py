"""User, health profile and goal domain models."""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import StrEnum
from uuid import UUID

from nutrition_impact.domain.foods import FoodLogEntry
from nutrition_impact.domain.nutrients import NutrientVector


class PrimaryGoal(StrEnum):
    """Declared primary objective of a goal."""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"
    RECOMPOSITION = "recomposition"
    IMPROVE_ENDURANCE = "improve_endurance"
    IMPROVE_HEALTH = "improve_health"


class SecondaryGoal(StrEnum):
    """Optional secondary objective."""

    BETTER_SLEEP = "better_sleep"
    MORE_ENERGY = "more_energy"
    IMPROVE_MOOD = "improve_mood"
    IMPROVE_MARKERS = "improve_markers"
    BUILD_HABITS = "build_habits"


class ActivityLevel(StrEnum):
    """Self-reported activity level stored with a goal."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"


class Gender(StrEnum):
    """Gender used by the BMR formula and micronutrient tables."""

    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class HealthProfile:
    """Metabolic baseline of a user.

    Fields are optional because a profile may be saved partially; goal
    derivation checks for the ones it needs.
    """

    birth_date: date | None = None
    gender: Gender | None = None
    height_cm: float | None = None
    current_weight_kg: float | None = None
    activity_level_factor: float | None = None
    body_fat_percentage: float | None = None
    steps_daily_average: int | None = None
    sleep_hours_average: float | None = None


@dataclass(frozen=True)
class Goal:
    """A user's objective together with its derived daily targets."""

    primary_goals: tuple[PrimaryGoal, ...]
    activity_level: ActivityLevel
    target_weight_kg: float
    current_weight_kg: float
    targets: NutrientVector
    secondary_goals: tuple[SecondaryGoal, ...] = ()
    allergies: tuple[str, ...] = ()


@dataclass(frozen=True)
class GoalBook:
    """Append-only goal list with a pointer to the current goal."""

    goals: tuple[Goal, ...] = ()
    current_index: int | None = None

    @property
    def current(self) -> Goal | None:
        """Return the current goal, if one is selected."""
        if self.current_index is None:
            return None
        if not 0 <= self.current_index < len(self.goals):
            return None
        return self.goals[self.current_index]

    def append(self, goal: Goal) -> "GoalBook":
        """Append a goal; the first goal becomes current."""
        goals = (*self.goals, goal)
        current_index = 0 if len(goals) == 1 else self.current_index
        return GoalBook(goals=goals, current_index=current_index)

    def remove(self, index: int) -> "GoalBook":
        """Remove a goal and keep the current pointer on the same goal."""
        goals = self.goals[:index] + self.goals[index + 1 :]
        current_index = self.current_index
        if current_index is not None:
            if current_index == index:
                current_index = None
            elif current_index > index:
                current_index -= 1
        return GoalBook(goals=goals, current_index=current_index)

    def replace_at(self, index: int, goal: Goal) -> "GoalBook":
        """Return a copy with the goal at index replaced."""
        goals = self.goals[:index] + (goal,) + self.goals[index + 1 :]
        return replace(self, goals=goals)

    def select(self, index: int) -> "GoalBook":
        """Return a copy with the current pointer moved to index."""
        return replace(self, current_index=index)


@dataclass(frozen=True)
class UserRecord:
    """User document with its owned values."""

    id: UUID
    full_name: str
    health_profile: HealthProfile | None = None
    goal_book: GoalBook = field(default_factory=GoalBook)
    food_logs: tuple[FoodLogEntry, ...] = ()
