"""Endpoints for food items and inventories."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.encoders import jsonable_encoder

from nutrition_impact.api.auth import require_user
from nutrition_impact.api.models import (
    FoodItemBody,
    FoodItemUpdateBody,
    InventoryBody,
    InventoryItemBody,
)
from nutrition_impact.domain.nutrients import NutrientVector
from nutrition_impact.services.catalog import FoodItemChanges, FoodItemDraft

if TYPE_CHECKING:
    from nutrition_impact.containers import AppContainer

router = APIRouter(tags=["catalog"])


@router.get("/food-items")
async def list_food_items(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the food items the caller created."""
    container: AppContainer = request.app.state.container
    items = container.catalog_service.list_for_owner(user_id)
    return {"food_items": jsonable_encoder(items)}


@router.get("/food-items/{food_item_id}")
async def get_food_item(
    food_item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    item = container.catalog_service.get(food_item_id)
    return {"food_item": jsonable_encoder(item)}


@router.post("/food-items", status_code=status.HTTP_201_CREATED)
async def create_food_item(
    body: FoodItemBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Create a food item, optionally placing it in one of the caller's inventories."""
    container: AppContainer = request.app.state.container
    if body.inventory_id is not None:
        container.inventory_service.get(user_id, body.inventory_id)
    item = container.catalog_service.create(
        user_id,
        FoodItemDraft(
            name=body.name,
            serving_quantity=body.serving_quantity,
            serving_unit=body.serving_unit,
            serving_weight_grams=body.serving_weight_grams,
            metric_serving_unit=body.metric_serving_unit,
            nutrients=NutrientVector.from_mapping(body.nutrients.model_dump()),
            expiration_hours=body.expiration_hours,
            tags=frozenset(body.tags),
            allergens=frozenset(body.allergens),
            image_url=body.image_url,
        ),
    )
    payload: dict[str, object] = {"food_item": jsonable_encoder(item)}
    if body.inventory_id is not None:
        inventory = container.inventory_service.add_item(
            user_id, body.inventory_id, item.id
        )
        payload["inventory"] = jsonable_encoder(inventory)
    return payload


@router.patch("/food-items/{food_item_id}")
async def update_food_item(
    food_item_id: UUID,
    body: FoodItemUpdateBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Update a food item the caller created."""
    container: AppContainer = request.app.state.container
    item = container.catalog_service.update(
        user_id,
        food_item_id,
        FoodItemChanges(
            name=body.name,
            serving_quantity=body.serving_quantity,
            serving_unit=body.serving_unit,
            serving_weight_grams=body.serving_weight_grams,
            metric_serving_unit=body.metric_serving_unit,
            nutrients=(
                body.nutrients.model_dump(exclude_none=True) if body.nutrients else None
            ),
            expiration_hours=body.expiration_hours,
            tags=frozenset(body.tags) if body.tags is not None else None,
            allergens=frozenset(body.allergens) if body.allergens is not None else None,
            image_url=body.image_url,
        ),
    )
    return {"food_item": jsonable_encoder(item)}


@router.delete("/food-items/{food_item_id}")
async def delete_food_item(
    food_item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.catalog_service.delete(user_id, food_item_id)
    return {"status": "deleted"}


@router.get("/inventories")
async def list_inventories(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    inventories = container.inventory_service.list_for_user(user_id)
    return {"inventories": jsonable_encoder(inventories)}


@router.post("/inventories", status_code=status.HTTP_201_CREATED)
async def create_inventory(
    body: InventoryBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    inventory = container.inventory_service.create(user_id, body.name)
    return {"inventory": jsonable_encoder(inventory)}


@router.get("/inventories/{inventory_id}")
async def get_inventory(
    inventory_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    inventory = container.inventory_service.get(user_id, inventory_id)
    return {"inventory": jsonable_encoder(inventory)}


@router.patch("/inventories/{inventory_id}")
async def rename_inventory(
    inventory_id: UUID,
    body: InventoryBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    inventory = container.inventory_service.rename(user_id, inventory_id, body.name)
    return {"inventory": jsonable_encoder(inventory)}


@router.delete("/inventories/{inventory_id}")
async def delete_inventory(
    inventory_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    inventory = container.inventory_service.delete(user_id, inventory_id)
    return {"inventory": jsonable_encoder(inventory)}


@router.post("/inventories/{inventory_id}/items")
async def add_inventory_item(
    inventory_id: UUID,
    body: InventoryItemBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Add a food item to an inventory; repeated adds are ignored."""
    container: AppContainer = request.app.state.container
    inventory = container.inventory_service.add_item(
        user_id, inventory_id, body.food_item_id
    )
    return {"inventory": jsonable_encoder(inventory)}


@router.delete("/inventories/{inventory_id}/items/{food_item_id}")
async def remove_inventory_item(
    inventory_id: UUID,
    food_item_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    inventory = container.inventory_service.remove_item(
        user_id, inventory_id, food_item_id
    )
    return {"inventory": jsonable_encoder(inventory)}


@router.get("/inventories/{inventory_id}/expiration")
async def check_expiration(
    inventory_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Classify inventory items as healthy, warning or wasted."""
    container: AppContainer = request.app.state.container
    report = container.analytics_service.check_expiration(
        user_id, inventory_id, datetime.now(tz=UTC)
    )
    return jsonable_encoder(report)
