"""Educational resources and tag-based recommendations."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from nutrition_impact.domain.resources import (
    Resource,
    ResourcePage,
    ResourceRecommendations,
    ResourceType,
)
from nutrition_impact.errors import NotFoundError, PreconditionFailedError
from nutrition_impact.services.catalog import FoodCatalogService
from nutrition_impact.services.inventory import InventoryService
from nutrition_impact.services.users import UserService

_logger = logging.getLogger(__name__)

RECENT_LOG_COUNT = 10
MAX_RECOMMENDATIONS = 20
VIDEO_URL_REQUIRED_MESSAGE = "Video URL is required for video type resources"
NO_TAGS_MESSAGE = (
    "No recommendations available. "
    "Add food items to get personalized recommendations."
)


@dataclass(frozen=True)
class ResourceDraft:
    """Fields needed to publish a resource."""

    title: str
    content: str
    type: ResourceType
    tags: tuple[str, ...] = ()
    video_url: str | None = None


@dataclass(frozen=True)
class ResourceChanges:
    """Partial update of a resource; None leaves a field unchanged."""

    title: str | None = None
    content: str | None = None
    type: ResourceType | None = None
    tags: tuple[str, ...] | None = None
    video_url: str | None = None


@dataclass(frozen=True)
class ResourceQuery:
    """Listing filters and page selection."""

    type: ResourceType | None = None
    tag: str | None = None
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ResourceRepository(Protocol):
    """Persistence interface for resources."""

    def create_resource(self, owner_id: UUID, draft: ResourceDraft) -> Resource:
        """Create a resource and return it."""

    def get_resource(self, resource_id: UUID) -> Resource | None:
        """Return a resource by id, if present."""

    def list_resources(self, query: ResourceQuery) -> tuple[list[Resource], int]:
        """Return one page of matches, newest first, and the total match count."""

    def update_resource(self, resource_id: UUID, draft: ResourceDraft) -> Resource:
        """Overwrite a resource's fields and return it."""

    def delete_resource(self, owner_id: UUID, resource_id: UUID) -> Resource | None:
        """Delete a user's resource and return it, or None when not found."""

    def find_by_tags(self, tags: list[str], limit: int) -> list[Resource]:
        """Return the newest resources sharing at least one tag."""


@dataclass
class ResourceService:
    """Application service for resources and recommendations."""

    repository: ResourceRepository
    users: UserService
    catalog: FoodCatalogService
    inventories: InventoryService

    def list_resources(self, query: ResourceQuery) -> ResourcePage:
        """Return a page of resources filtered by type and tag."""
        resources, total = self.repository.list_resources(query)
        return ResourcePage(
            resources=resources, page=query.page, limit=query.limit, total=total
        )

    def get(self, resource_id: UUID) -> Resource:
        """Return a resource or raise NotFoundError."""
        resource = self.repository.get_resource(resource_id)
        if resource is None:
            raise NotFoundError("Resource", resource_id)
        return resource

    def create(self, owner_id: UUID, draft: ResourceDraft) -> Resource:
        """Publish a resource."""
        _validate_draft(draft)
        return self.repository.create_resource(owner_id, draft)

    def update(
        self, owner_id: UUID, resource_id: UUID, changes: ResourceChanges
    ) -> Resource:
        """Apply changes to a resource the user created."""
        resource = self.get(resource_id)
        if resource.created_by != owner_id:
            raise NotFoundError("Resource", resource_id)
        current = ResourceDraft(
            title=resource.title,
            content=resource.content,
            type=resource.type,
            tags=resource.tags,
            video_url=resource.video_url,
        )
        draft = replace(
            current,
            **{
                name: value
                for name, value in vars(changes).items()
                if value is not None
            },
        )
        _validate_draft(draft)
        return self.repository.update_resource(resource_id, draft)

    def delete(self, owner_id: UUID, resource_id: UUID) -> Resource:
        """Delete a resource the user created."""
        deleted = self.repository.delete_resource(owner_id, resource_id)
        if deleted is None:
            raise NotFoundError("Resource", resource_id)
        return deleted

    def recommend(self, user_id: UUID) -> ResourceRecommendations:
        """Match resources against tags of recently logged and stocked foods."""
        tags = self.collect_tags(user_id)
        if not tags:
            return ResourceRecommendations(message=NO_TAGS_MESSAGE)
        recommendations = self.repository.find_by_tags(tags, MAX_RECOMMENDATIONS)
        _logger.info(
            "Resource recommendations: user_id=%s tags=%s count=%s",
            user_id,
            len(tags),
            len(recommendations),
        )
        return ResourceRecommendations(
            recommendations=recommendations, based_on_tags=tags
        )

    def collect_tags(self, user_id: UUID) -> list[str]:
        """Return tags of the last logged foods and of inventory items, in order."""
        user = self.users.get_user(user_id)
        food_item_ids = [
            entry.food_item_id for entry in user.food_logs[-RECENT_LOG_COUNT:]
        ]
        for inventory in self.inventories.list_for_user(user_id):
            food_item_ids.extend(inventory.food_item_ids)

        items_by_id = self.catalog.resolve(food_item_ids)
        tags: dict[str, None] = {}
        for food_item_id in food_item_ids:
            food_item = items_by_id.get(food_item_id)
            if food_item is not None:
                tags.update(dict.fromkeys(sorted(food_item.tags)))
        return list(tags)


def _validate_draft(draft: ResourceDraft) -> None:
    if draft.type == ResourceType.VIDEO and not draft.video_url:
        raise PreconditionFailedError(VIDEO_URL_REQUIRED_MESSAGE)
