"""Educational resource domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ResourceType(StrEnum):
    ARTICLE = "article"
    VIDEO = "video"


@dataclass(frozen=True)
class Resource:
    """Article or video shared with users, matched to foods by tag."""

    id: UUID
    title: str
    content: str
    type: ResourceType
    created_by: UUID
    created_at: datetime
    tags: tuple[str, ...] = ()
    video_url: str | None = None


@dataclass(frozen=True)
class ResourcePage:
    """One page of a filtered resource listing."""

    resources: list[Resource]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit)


@dataclass(frozen=True)
class ResourceRecommendations:
    """Resources matching the tags of a user's recent foods."""

    recommendations: list[Resource] = field(default_factory=list)
    based_on_tags: list[str] = field(default_factory=list)
    message: str | None = None
