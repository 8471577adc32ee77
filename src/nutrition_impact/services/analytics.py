"""Report generation over a user's food logs, goals and inventories."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from uuid import UUID

from nutrition_impact.domain.inventory import ExpirationReport
from nutrition_impact.domain.nutrients import sum_vectors
from nutrition_impact.domain.reports import (
    GoalSnapshot,
    ImpactReport,
    MonthlyReport,
    SingleDayReport,
    WeeklyReport,
)
from nutrition_impact.domain.users import Goal, UserRecord
from nutrition_impact.errors import PreconditionFailedError
from nutrition_impact.services.aggregation import (
    WEEK_LENGTH,
    aggregate_day,
    month_days,
    week_days,
    weekday_name,
)
from nutrition_impact.services.assistant import AssistantService
from nutrition_impact.services.food_logs import FoodLogService
from nutrition_impact.services.impact import compose_impact_report
from nutrition_impact.services.inventory import InventoryService
from nutrition_impact.services.scoring import percentages
from nutrition_impact.services.users import UserService

_logger = logging.getLogger(__name__)

NO_GOAL_MESSAGE = "Set a current goal before requesting this report"


@dataclass
class AnalyticsService:
    """Builds daily, monthly, weekly and impact reports."""

    users: UserService
    food_logs: FoodLogService
    inventories: InventoryService
    assistant: AssistantService | None = None

    def single_day(self, user_id: UUID, day: date) -> SingleDayReport:
        """Return one day's totals as percentages of the current goal."""
        user = self.users.get_user(user_id)
        goal = _require_goal(user)
        daily = aggregate_day(self.food_logs.resolve(user), day)
        return SingleDayReport(
            day=day,
            totals=daily.summary,
            percentages=percentages(daily.summary, goal.targets),
        )

    def monthly(self, user_id: UUID, year: int, month: int) -> MonthlyReport:
        """Return entries and totals for every day of a calendar month."""
        user = self.users.get_user(user_id)
        resolved = self.food_logs.resolve(user)
        return MonthlyReport(
            year=year,
            month=month,
            daily=[aggregate_day(resolved, day) for day in month_days(year, month)],
        )

    async def weekly(
        self, user_id: UUID, start: date, *, include_suggestions: bool = True
    ) -> WeeklyReport:
        """Return seven days of totals, averages and goal percentages."""
        report = self._weekly_report(self.users.get_user(user_id), start)
        if not include_suggestions or self.assistant is None:
            return report
        suggestions = await self.assistant.weekly_suggestions(report)
        if not suggestions.available:
            _logger.info("Weekly report sent without suggestions: user_id=%s", user_id)
            return report
        return replace(report, ai_suggestions=suggestions.text)

    def sdg_impact(
        self, user_id: UUID, start: date, now: datetime | None = None
    ) -> ImpactReport:
        """Score the week starting at start against all of the user's inventories."""
        user = self.users.get_user(user_id)
        _require_goal(user)
        weekly = self._weekly_report(user, start)
        inventory = self.inventories.summarize_for_user(
            user_id, now or datetime.now(tz=UTC)
        )
        report = compose_impact_report(
            start=weekly.start,
            end=weekly.end,
            averages=weekly.averages,
            average_percentages=weekly.average_percentages,
            inventory=inventory,
        )
        _logger.info(
            "Impact report built: user_id=%s score=%s nutrition=%.1f waste=%.1f",
            user_id,
            report.score,
            report.components.nutrition_score,
            report.components.waste_score,
        )
        return report

    def check_expiration(
        self, user_id: UUID, inventory_id: UUID, now: datetime | None = None
    ) -> ExpirationReport:
        """Classify the items of one of the user's inventories."""
        return self.inventories.check_expiration(user_id, inventory_id, now)

    def _weekly_report(self, user: UserRecord, start: date) -> WeeklyReport:
        goal = user.goal_book.current
        resolved = self.food_logs.resolve(user)
        days = week_days(start)

        daily = []
        for day in days:
            log = aggregate_day(resolved, day)
            daily.append(
                replace(
                    log,
                    day_of_week=weekday_name(day),
                    percentages=(
                        percentages(log.summary, goal.targets) if goal else None
                    ),
                )
            )

        totals = sum_vectors([log.summary for log in daily])
        averages = totals.map(lambda value: value / WEEK_LENGTH)
        return WeeklyReport(
            start=days[0],
            end=days[-1],
            daily=daily,
            totals=totals,
            averages=averages,
            average_percentages=(
                percentages(averages, goal.targets) if goal else None
            ),
            goal=_snapshot(goal) if goal else None,
        )


def _require_goal(user: UserRecord) -> Goal:
    goal = user.goal_book.current
    if goal is None:
        raise PreconditionFailedError(NO_GOAL_MESSAGE)
    return goal


def _snapshot(goal: Goal) -> GoalSnapshot:
    targets = goal.targets
    return GoalSnapshot(
        calories=targets.calories,
        protein=targets.protein,
        carbohydrate=targets.carbohydrate,
        fat_total=targets.fat_total,
        fiber=targets.fiber,
        sodium=targets.sodium,
    )
