"""Supabase implementation for educational resources."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_impact.domain.resources import Resource, ResourceType
from nutrition_impact.services.resources import (
    ResourceDraft,
    ResourceQuery,
    ResourceRepository,
)

_TABLE = "resources"


@dataclass
class SupabaseResourceRepository(ResourceRepository):
    """Supabase-backed repository for resources."""

    client: Client

    def create_resource(self, owner_id: UUID, draft: ResourceDraft) -> Resource:
        """Create a resource and return it."""
        payload = {**_draft_payload(draft), "created_by": str(owner_id)}
        response = self.client.table(_TABLE).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create resource")
        return _parse_resource(response.data[0])

    def get_resource(self, resource_id: UUID) -> Resource | None:
        """Return a resource by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(resource_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_resource(response.data[0])

    def list_resources(self, query: ResourceQuery) -> tuple[list[Resource], int]:
        """Return one page of matching resources and the total match count."""
        request = self.client.table(_TABLE).select("*", count="exact")
        if query.type is not None:
            request = request.eq("type", query.type.value)
        if query.tag is not None:
            request = request.contains("tags", [query.tag])
        response = (
            request.order("created_at", desc=True)
            .range(query.offset, query.offset + query.limit - 1)
            .execute()
        )
        resources = [_parse_resource(row) for row in response.data or []]
        return resources, response.count or 0

    def update_resource(self, resource_id: UUID, draft: ResourceDraft) -> Resource:
        """Overwrite a resource's fields and return it."""
        response = (
            self.client.table(_TABLE)
            .update(_draft_payload(draft))
            .eq("id", str(resource_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update resource")
        return _parse_resource(response.data[0])

    def delete_resource(self, owner_id: UUID, resource_id: UUID) -> Resource | None:
        """Delete a resource created by the user."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(resource_id))
            .eq("created_by", str(owner_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_resource(response.data[0])

    def find_by_tags(self, tags: list[str], limit: int) -> list[Resource]:
        """Return the newest resources whose tags overlap the given ones."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .overlaps("tags", tags)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_resource(row) for row in response.data or []]


def _draft_payload(draft: ResourceDraft) -> dict[str, object]:
    return {
        "title": draft.title,
        "content": draft.content,
        "type": draft.type.value,
        "tags": list(draft.tags),
        "video_url": draft.video_url,
    }


def _parse_resource(row: dict[str, object]) -> Resource:
    """Parse a resource row into a domain model."""
    return Resource(
        id=UUID(str(row["id"])),
        title=str(row.get("title") or ""),
        content=str(row.get("content") or ""),
        type=ResourceType(str(row["type"])),
        created_by=UUID(str(row["created_by"])),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        tags=tuple(row.get("tags") or []),
        video_url=row.get("video_url"),
    )
