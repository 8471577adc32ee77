"""Supabase-backed repository for user profiles, goals and food logs."""

from dataclasses import asdict, dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutrition_impact.domain.foods import FoodLogEntry
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
from nutrition_impact.services.users import UserRepository

_TABLE = "profiles"


@dataclass
class SupabaseProfileRepository(UserRepository):
    """Stores each user as a single profile row with JSON columns."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with profile, goals and food logs, if present."""
        response = (
            self.client.table(_TABLE)
            .select(
                "id, full_name, health_profile, goals, current_goal_index, food_logs"
            )
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def save_full_name(self, user_id: UUID, full_name: str) -> None:
        """Replace the full name column."""
        self._update(user_id, {"full_name": full_name})

    def save_health_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        """Replace the health profile column."""
        self._update(user_id, {"health_profile": _dump_profile(profile)})

    def save_goal_book(self, user_id: UUID, goal_book: GoalBook) -> None:
        """Write the goal list and current pointer in one update."""
        self._update(
            user_id,
            {
                "goals": [_dump_goal(goal) for goal in goal_book.goals],
                "current_goal_index": goal_book.current_index,
            },
        )

    def save_food_logs(self, user_id: UUID, food_logs: list[FoodLogEntry]) -> None:
        """Replace the food log column."""
        self._update(
            user_id, {"food_logs": [_dump_food_log(entry) for entry in food_logs]}
        )

    def _update(self, user_id: UUID, payload: dict[str, object]) -> None:
        response = (
            self.client.table(_TABLE).update(payload).eq("id", str(user_id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update profile in Supabase")


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a profile row into a domain model."""
    raw_profile = row.get("health_profile")
    goals = tuple(_parse_goal(item) for item in row.get("goals") or [])
    current_index = row.get("current_goal_index")
    return UserRecord(
        id=UUID(row["id"]),
        full_name=str(row.get("full_name") or ""),
        health_profile=_parse_profile(raw_profile) if raw_profile else None,
        goal_book=GoalBook(
            goals=goals,
            current_index=int(current_index) if current_index is not None else None,
        ),
        food_logs=tuple(_parse_food_log(item) for item in row.get("food_logs") or []),
    )


def _parse_profile(raw: dict[str, object]) -> HealthProfile:
    birth_date = raw.get("birth_date")
    gender = raw.get("gender")
    return HealthProfile(
        birth_date=date.fromisoformat(birth_date[:10]) if birth_date else None,
        gender=Gender(gender) if gender else None,
        height_cm=_optional_float(raw.get("height_cm")),
        current_weight_kg=_optional_float(raw.get("current_weight_kg")),
        activity_level_factor=_optional_float(raw.get("activity_level_factor")),
        body_fat_percentage=_optional_float(raw.get("body_fat_percentage")),
        steps_daily_average=(
            int(raw["steps_daily_average"])
            if raw.get("steps_daily_average") is not None
            else None
        ),
        sleep_hours_average=_optional_float(raw.get("sleep_hours_average")),
    )


def _dump_profile(profile: HealthProfile) -> dict[str, object]:
    payload = asdict(profile)
    if profile.birth_date is not None:
        payload["birth_date"] = profile.birth_date.isoformat()
    if profile.gender is not None:
        payload["gender"] = profile.gender.value
    return payload


def _parse_goal(raw: dict[str, object]) -> Goal:
    return Goal(
        primary_goals=tuple(
            PrimaryGoal(item) for item in raw.get("primary_goals") or []
        ),
        secondary_goals=tuple(
            SecondaryGoal(item) for item in raw.get("secondary_goals") or []
        ),
        allergies=tuple(str(item) for item in raw.get("allergies") or []),
        activity_level=ActivityLevel(raw["activity_level"]),
        target_weight_kg=float(raw["target_weight_kg"]),
        current_weight_kg=float(raw["current_weight_kg"]),
        targets=NutrientVector.from_mapping(raw.get("targets") or {}),
    )


def _dump_goal(goal: Goal) -> dict[str, object]:
    return {
        "primary_goals": [item.value for item in goal.primary_goals],
        "secondary_goals": [item.value for item in goal.secondary_goals],
        "allergies": list(goal.allergies),
        "activity_level": goal.activity_level.value,
        "target_weight_kg": goal.target_weight_kg,
        "current_weight_kg": goal.current_weight_kg,
        "targets": goal.targets.to_dict(),
    }


def _parse_food_log(raw: dict[str, object]) -> FoodLogEntry:
    raw_date = str(raw["date"])
    logged_on: date | datetime = (
        datetime.fromisoformat(raw_date)
        if "T" in raw_date
        else date.fromisoformat(raw_date)
    )
    return FoodLogEntry(
        date=logged_on,
        time=str(raw.get("time") or ""),
        food_item_id=UUID(str(raw["food_item_id"])),
        quantity=float(raw["quantity"]),
    )


def _dump_food_log(entry: FoodLogEntry) -> dict[str, object]:
    return {
        "date": entry.date.isoformat(),
        "time": entry.time,
        "food_item_id": str(entry.food_item_id),
        "quantity": entry.quantity,
    }


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
