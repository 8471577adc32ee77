"""Goal derivation and goal list management."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from uuid import UUID

from nutrition_impact.domain.nutrients import NutrientVector
from nutrition_impact.domain.users import (
    ActivityLevel,
    Gender,
    Goal,
    GoalBook,
    HealthProfile,
    PrimaryGoal,
    SecondaryGoal,
    UserRecord,
)
from nutrition_impact.errors import NotFoundError, PreconditionFailedError
from nutrition_impact.services.users import UserRepository

_logger = logging.getLogger(__name__)

INCOMPLETE_PROFILE_MESSAGE = "Your profile is incomplete to create a goal"
FUTURE_BIRTH_DATE_MESSAGE = "Birth date cannot be in the future"

FAT_CALORIE_SHARE = 0.25
CALORIES_PER_GRAM_FAT = 9
CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_CARBOHYDRATE = 4
FIBER_TARGET_G = 25.0


@dataclass(frozen=True)
class CalorieRule:
    """Calorie offset and protein multiplier applied for a primary goal."""

    goal: PrimaryGoal
    calorie_offset: float
    protein_per_kg: float


# Checked in order; a later matching rule overrides an earlier one.
CALORIE_RULES: tuple[CalorieRule, ...] = (
    CalorieRule(PrimaryGoal.WEIGHT_LOSS, calorie_offset=-250, protein_per_kg=1.0),
    CalorieRule(PrimaryGoal.MAINTENANCE, calorie_offset=0, protein_per_kg=1.2),
    CalorieRule(PrimaryGoal.MUSCLE_GAIN, calorie_offset=300, protein_per_kg=1.8),
)
DEFAULT_PROTEIN_PER_KG = 1.0

_MICRONUTRIENTS: dict[Gender, dict[str, float]] = {
    Gender.MALE: {
        "sodium": 2300,
        "cholesterol": 300,
        "calcium": 1000,
        "potassium": 3400,
        "iron": 8,
        "magnesium": 410,
        "vitamin_a": 900,
        "vitamin_c": 90,
        "vitamin_d": 15,
    },
    Gender.FEMALE: {
        "sodium": 2300,
        "cholesterol": 300,
        "calcium": 1000,
        "potassium": 2600,
        "iron": 18,
        "magnesium": 310,
        "vitamin_a": 700,
        "vitamin_c": 75,
        "vitamin_d": 15,
    },
}


@dataclass(frozen=True)
class GoalTargets:
    """Derived daily targets with the intermediate energy figures."""

    bmr: float
    tdee: float
    targets: NutrientVector


@dataclass(frozen=True)
class GoalRequest:
    """Input for creating a goal."""

    primary_goals: tuple[PrimaryGoal, ...]
    activity_level: ActivityLevel
    target_weight_kg: float
    current_weight_kg: float
    secondary_goals: tuple[SecondaryGoal, ...] = ()
    allergies: tuple[str, ...] = ()


@dataclass(frozen=True)
class GoalUpdate:
    """Partial update of a goal's descriptive fields."""

    primary_goals: tuple[PrimaryGoal, ...] | None = None
    secondary_goals: tuple[SecondaryGoal, ...] | None = None
    allergies: tuple[str, ...] | None = None
    activity_level: ActivityLevel | None = None
    target_weight_kg: float | None = None
    current_weight_kg: float | None = None


def age_on(birth_date: date, today: date) -> int:
    """Return completed years between birth_date and today."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def compute_bmr(profile: HealthProfile | None, today: date) -> float:
    """Compute basal metabolic rate with the Mifflin-St Jeor equation."""
    if (
        profile is None
        or not profile.current_weight_kg
        or not profile.height_cm
        or profile.gender is None
        or profile.birth_date is None
    ):
        raise PreconditionFailedError(INCOMPLETE_PROFILE_MESSAGE)
    if profile.birth_date > today:
        raise PreconditionFailedError(FUTURE_BIRTH_DATE_MESSAGE)
    age = age_on(profile.birth_date, today)
    bmr = 10 * profile.current_weight_kg + 6.25 * profile.height_cm - 5 * age
    if profile.gender == Gender.MALE:
        return bmr + 5
    return bmr - 161


def compute_tdee(bmr: float, activity_level_factor: float) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * activity_level_factor


def derive_targets(
    profile: HealthProfile | None,
    primary_goals: tuple[PrimaryGoal, ...],
    current_weight_kg: float,
    today: date,
) -> GoalTargets:
    """Derive daily nutrient targets from a health profile and objectives."""
    bmr = compute_bmr(profile, today)
    if profile is None or not profile.activity_level_factor:
        raise PreconditionFailedError(INCOMPLETE_PROFILE_MESSAGE)
    tdee = compute_tdee(bmr, profile.activity_level_factor)

    calories = tdee
    protein = DEFAULT_PROTEIN_PER_KG * current_weight_kg
    for rule in CALORIE_RULES:
        if rule.goal in primary_goals:
            calories = tdee + rule.calorie_offset
            protein = rule.protein_per_kg * current_weight_kg

    fat_total = calories * FAT_CALORIE_SHARE / CALORIES_PER_GRAM_FAT
    carbohydrate = (
        calories
        - protein * CALORIES_PER_GRAM_PROTEIN
        - fat_total * CALORIES_PER_GRAM_FAT
    ) / CALORIES_PER_GRAM_CARBOHYDRATE

    targets = NutrientVector(
        calories=calories,
        protein=protein,
        carbohydrate=carbohydrate,
        fat_total=fat_total,
        fiber=FIBER_TARGET_G,
        **_MICRONUTRIENTS[profile.gender],
    )
    return GoalTargets(bmr=bmr, tdee=tdee, targets=targets)


@dataclass
class GoalService:
    """Application service for goal CRUD and target derivation."""

    repository: UserRepository

    def list_goals(self, user_id: UUID) -> GoalBook:
        """Return the user's goals and current goal pointer."""
        return self._load(user_id).goal_book

    def create_goal(
        self, user_id: UUID, request: GoalRequest, today: date | None = None
    ) -> GoalBook:
        """Derive targets for a new goal and append it."""
        user = self._load(user_id)
        derived = derive_targets(
            user.health_profile,
            request.primary_goals,
            request.current_weight_kg,
            today or datetime.now(tz=UTC).date(),
        )
        goal = Goal(
            primary_goals=request.primary_goals,
            secondary_goals=request.secondary_goals,
            allergies=request.allergies,
            activity_level=request.activity_level,
            target_weight_kg=request.target_weight_kg,
            current_weight_kg=request.current_weight_kg,
            targets=derived.targets,
        )
        goal_book = user.goal_book.append(goal)
        self.repository.save_goal_book(user_id, goal_book)
        _logger.info(
            "Goal created: user_id=%s bmr=%.1f tdee=%.1f calories=%.1f",
            user_id,
            derived.bmr,
            derived.tdee,
            derived.targets.calories,
        )
        return goal_book

    def update_goal(self, user_id: UUID, index: int, update: GoalUpdate) -> GoalBook:
        """Update descriptive fields of a goal without re-deriving targets."""
        user = self._load(user_id)
        goal = _goal_at(user.goal_book, index)
        changes = {
            name: value
            for name, value in vars(update).items()
            if value is not None
        }
        goal_book = user.goal_book.replace_at(index, replace(goal, **changes))
        self.repository.save_goal_book(user_id, goal_book)
        return goal_book

    def delete_goal(self, user_id: UUID, index: int) -> GoalBook:
        """Delete a goal, shifting or clearing the current pointer."""
        user = self._load(user_id)
        _goal_at(user.goal_book, index)
        goal_book = user.goal_book.remove(index)
        self.repository.save_goal_book(user_id, goal_book)
        return goal_book

    def set_current_goal(self, user_id: UUID, index: int) -> GoalBook:
        """Mark the goal at index as current."""
        user = self._load(user_id)
        _goal_at(user.goal_book, index)
        goal_book = user.goal_book.select(index)
        self.repository.save_goal_book(user_id, goal_book)
        return goal_book

    def _load(self, user_id: UUID) -> UserRecord:
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user


def _goal_at(goal_book: GoalBook, index: int) -> Goal:
    if not 0 <= index < len(goal_book.goals):
        raise NotFoundError("Goal", index)
    return goal_book.goals[index]
