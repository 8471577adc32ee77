"""Endpoints for the caller's health profile, goals and food log."""

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder

from nutrition_impact.api.auth import require_user
from nutrition_impact.api.models import (
    FoodLogBody,
    GoalCreateBody,
    GoalUpdateBody,
    HealthProfileBody,
    ProfileBody,
)
from nutrition_impact.domain.foods import FoodLogEntry
from nutrition_impact.domain.users import GoalBook, HealthProfile
from nutrition_impact.services.goals import GoalRequest, GoalUpdate

if TYPE_CHECKING:
    from nutrition_impact.containers import AppContainer

router = APIRouter(prefix="/users/me", tags=["users"])


@router.get("")
async def get_me(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's profile, goals and food log."""
    container: AppContainer = request.app.state.container
    user = container.user_service.get_user(user_id)
    return {
        "id": str(user.id),
        "full_name": user.full_name,
        "health_profile": jsonable_encoder(user.health_profile),
        **_goal_book_payload(user.goal_book),
        "food_logs": jsonable_encoder(list(user.food_logs)),
    }


@router.patch("")
async def patch_me(
    body: ProfileBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Rename the caller."""
    container: AppContainer = request.app.state.container
    user = container.user_service.update_full_name(user_id, body.full_name)
    return {"id": str(user.id), "full_name": user.full_name}


@router.put("/health-profile")
async def put_health_profile(
    body: HealthProfileBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Replace the caller's health profile."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.update_health_profile(
        user_id, HealthProfile(**body.model_dump())
    )
    return {"health_profile": jsonable_encoder(profile)}


@router.get("/goals")
async def list_goals(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _goal_book_payload(container.goal_service.list_goals(user_id))


@router.post("/goals", status_code=status.HTTP_201_CREATED)
async def create_goal(
    body: GoalCreateBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Derive targets from the health profile and append a goal."""
    container: AppContainer = request.app.state.container
    goal_book = container.goal_service.create_goal(
        user_id,
        GoalRequest(
            primary_goals=tuple(body.primary_goals),
            secondary_goals=tuple(body.secondary_goals),
            allergies=tuple(body.allergies),
            activity_level=body.activity_level,
            target_weight_kg=body.target_weight_kg,
            current_weight_kg=body.current_weight_kg,
        ),
    )
    return _goal_book_payload(goal_book)


@router.patch("/goals/{index}")
async def update_goal(
    index: int,
    body: GoalUpdateBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    changes = {
        name: tuple(value) if isinstance(value, list) else value
        for name, value in body.model_dump(exclude_none=True).items()
    }
    goal_book = container.goal_service.update_goal(
        user_id, index, GoalUpdate(**changes)
    )
    return _goal_book_payload(goal_book)


@router.delete("/goals/{index}")
async def delete_goal(
    index: int, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _goal_book_payload(container.goal_service.delete_goal(user_id, index))


@router.put("/goals/current/{index}")
async def set_current_goal(
    index: int, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return _goal_book_payload(container.goal_service.set_current_goal(user_id, index))


@router.get("/food-logs")
async def list_food_logs(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    entries = container.food_log_service.list_entries(user_id)
    return {"food_logs": jsonable_encoder(entries)}


@router.post("/food-logs", status_code=status.HTTP_201_CREATED)
async def add_food_log(
    body: FoodLogBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Log consumption of a catalog food item."""
    container: AppContainer = request.app.state.container
    entries = container.food_log_service.add_entry(
        user_id,
        FoodLogEntry(
            date=body.date,
            time=body.time,
            food_item_id=body.food_item_id,
            quantity=body.quantity,
        ),
    )
    return {"food_logs": jsonable_encoder(entries)}


@router.delete("/food-logs/{index}")
async def delete_food_log(
    index: int, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    removed, entries = container.food_log_service.delete_entry(user_id, index)
    return {
        "removed": jsonable_encoder(removed),
        "food_logs": jsonable_encoder(entries),
    }


def _goal_book_payload(goal_book: GoalBook) -> dict[str, object]:
    return {
        "goals": jsonable_encoder(list(goal_book.goals)),
        "current_goal_index": goal_book.current_index,
    }
