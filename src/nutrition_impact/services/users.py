"""User document access and health profile updates."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_impact.domain.foods import FoodLogEntry
from nutrition_impact.domain.users import GoalBook, HealthProfile, UserRecord
from nutrition_impact.errors import NotFoundError


class UserRepository(Protocol):
    """Persistence interface for user documents."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with owned values, if present."""

    def save_full_name(self, user_id: UUID, full_name: str) -> None:
        """Replace the user's display name."""

    def save_health_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        """Replace the user's health profile."""

    def save_goal_book(self, user_id: UUID, goal_book: GoalBook) -> None:
        """Persist the goal list and current goal pointer."""

    def save_food_logs(self, user_id: UUID, food_logs: list[FoodLogEntry]) -> None:
        """Replace the user's food log list."""


@dataclass
class UserService:
    """Application service for user profile actions."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return the user or raise NotFoundError."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def update_full_name(self, user_id: UUID, full_name: str) -> UserRecord:
        """Rename the user and return the updated record."""
        self.get_user(user_id)
        self.repository.save_full_name(user_id, full_name)
        return self.get_user(user_id)

    def update_health_profile(
        self, user_id: UUID, profile: HealthProfile
    ) -> HealthProfile:
        """Replace the user's health profile."""
        self.get_user(user_id)
        self.repository.save_health_profile(user_id, profile)
        return profile
