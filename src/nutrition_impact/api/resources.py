"""Endpoints for educational resources."""

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.encoders import jsonable_encoder

from nutrition_impact.api.auth import require_user
from nutrition_impact.api.models import ResourceBody, ResourceUpdateBody
from nutrition_impact.domain.resources import ResourceType
from nutrition_impact.services.resources import (
    ResourceChanges,
    ResourceDraft,
    ResourceQuery,
)

if TYPE_CHECKING:
    from nutrition_impact.containers import AppContainer

router = APIRouter(prefix="/resources", tags=["resources"])


@router.get("/recommendations")
async def recommendations(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return resources matching the caller's recent foods."""
    container: AppContainer = request.app.state.container
    result = container.resource_service.recommend(user_id)
    payload: dict[str, object] = {
        "recommendations": jsonable_encoder(result.recommendations),
        "based_on_tags": result.based_on_tags,
        "count": len(result.recommendations),
    }
    if result.message:
        payload["message"] = result.message
    return payload


@router.get("")
async def list_resources(
    request: Request,
    resource_type: ResourceType | None = Query(default=None, alias="type"),
    tag: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    result = container.resource_service.list_resources(
        ResourceQuery(type=resource_type, tag=tag, page=page, limit=limit)
    )
    return {
        "resources": jsonable_encoder(result.resources),
        "pagination": {
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "total_pages": result.total_pages,
        },
    }


@router.get("/{resource_id}")
async def get_resource(
    resource_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    resource = container.resource_service.get(resource_id)
    return {"resource": jsonable_encoder(resource)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_resource(
    body: ResourceBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Publish an article or video; videos need a URL."""
    container: AppContainer = request.app.state.container
    resource = container.resource_service.create(
        user_id,
        ResourceDraft(
            title=body.title,
            content=body.content,
            type=body.type,
            tags=tuple(body.tags),
            video_url=body.video_url,
        ),
    )
    return {"resource": jsonable_encoder(resource)}


@router.patch("/{resource_id}")
async def update_resource(
    resource_id: UUID,
    body: ResourceUpdateBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    resource = container.resource_service.update(
        user_id,
        resource_id,
        ResourceChanges(
            title=body.title,
            content=body.content,
            type=body.type,
            tags=tuple(body.tags) if body.tags is not None else None,
            video_url=body.video_url,
        ),
    )
    return {"resource": jsonable_encoder(resource)}


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    resource = container.resource_service.delete(user_id, resource_id)
    return {"resource": jsonable_encoder(resource)}
