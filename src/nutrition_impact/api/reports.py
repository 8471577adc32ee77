"""Analytics, impact and assistant endpoints."""

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder

from nutrition_impact.api.auth import require_user
from nutrition_impact.api.models import (
    ChatBody,
    ImpactBody,
    MealPlanBody,
    MonthlyBody,
    WeeklyBody,
)
from nutrition_impact.errors import PreconditionFailedError

if TYPE_CHECKING:
    from nutrition_impact.containers import AppContainer

router = APIRouter(tags=["analytics"])


@router.get("/analytics/single-day")
async def single_day(
    day: date, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return one day's intake as percentages of the current goal."""
    container: AppContainer = request.app.state.container
    return jsonable_encoder(container.analytics_service.single_day(user_id, day))


@router.post("/analytics/monthly")
async def monthly(
    body: MonthlyBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    report = container.analytics_service.monthly(user_id, body.year, body.month)
    return jsonable_encoder(report)


@router.post("/analytics/weekly")
async def weekly(
    body: WeeklyBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return a seven-day report with an optional AI narrative."""
    container: AppContainer = request.app.state.container
    report = await container.analytics_service.weekly(
        user_id, body.start_date, include_suggestions=body.include_suggestions
    )
    return jsonable_encoder(report)


@router.post("/analytics/sdg-impact")
async def sdg_impact(
    body: ImpactBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Score nutrition adherence and food waste for the week."""
    container: AppContainer = request.app.state.container
    report = container.analytics_service.sdg_impact(user_id, body.start_date)
    return jsonable_encoder(report)


@router.post("/assistant/meal-plan")
async def meal_plan(
    body: MealPlanBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Generate a meal plan for the current goal."""
    container: AppContainer = request.app.state.container
    user = container.user_service.get_user(user_id)
    goal = user.goal_book.current
    if goal is None:
        raise PreconditionFailedError("Set a current goal before generating a plan")
    plan = await container.assistant_service.generate_meal_plan(user, goal, body.days)
    return {"meal_plan": plan.model_dump()}


@router.post("/assistant/chat")
async def chat(
    body: ChatBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    result = await container.assistant_service.chat(body.history, body.message)
    return {
        "reply": result.reply,
        "history": [message.model_dump() for message in result.history],
    }
