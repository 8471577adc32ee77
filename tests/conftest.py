"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from nutrition_impact.config import Settings, parse_api_tokens
from nutrition_impact.containers import AppContainer
from nutrition_impact.domain.foods import FoodItem, FoodLogEntry
from nutrition_impact.domain.inventory import Inventory
from nutrition_impact.domain.nutrients import NutrientVector
from nutrition_impact.domain.resources import Resource
from nutrition_impact.domain.users import (
    ActivityLevel,
    Gender,
    Goal,
    GoalBook,
    HealthProfile,
    PrimaryGoal,
    UserRecord,
)
from nutrition_impact.services.analytics import AnalyticsService
from nutrition_impact.services.assistant import AssistantService, TextGenerationClient
from nutrition_impact.services.catalog import (
    FoodCatalogRepository,
    FoodCatalogService,
    FoodItemDraft,
)
from nutrition_impact.services.food_logs import FoodLogService
from nutrition_impact.services.goals import GoalService
from nutrition_impact.services.inventory import InventoryRepository, InventoryService
from nutrition_impact.services.resources import (
    ResourceDraft,
    ResourceQuery,
    ResourceRepository,
    ResourceService,
)
from nutrition_impact.services.users import UserRepository, UserService

USER_ID = UUID("11111111-1111-1111-1111-111111111111")
API_TOKEN = "test-token"
AUTH_HEADERS = {"Authorization": f"Bearer {API_TOKEN}"}


def make_food_item(**overrides: object) -> FoodItem:
    """Build a food item with 200 kcal per 100 g unless overridden."""
    values: dict[str, object] = {
        "id": uuid4(),
        "name": "Oatmeal",
        "serving_quantity": 100.0,
        "serving_unit": "g",
        "serving_weight_grams": 100.0,
        "nutrients": NutrientVector(calories=200, protein=10, fiber=5, sodium=100),
        "expiration_hours": 24.0,
    }
    values.update(overrides)
    return FoodItem(**values)


def make_profile(**overrides: object) -> HealthProfile:
    values: dict[str, object] = {
        "birth_date": date(1990, 1, 1),
        "gender": Gender.MALE,
        "height_cm": 180.0,
        "current_weight_kg": 80.0,
        "activity_level_factor": 1.5,
    }
    values.update(overrides)
    return HealthProfile(**values)


def make_goal(targets: NutrientVector | None = None) -> Goal:
    return Goal(
        primary_goals=(PrimaryGoal.MAINTENANCE,),
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        target_weight_kg=80.0,
        current_weight_kg=80.0,
        targets=targets
        or NutrientVector(
            calories=2000, protein=100, fiber=25, sodium=2300, carbohydrate=250
        ),
    )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def add(self, user: UserRecord) -> UserRecord:
        self.users[user.id] = user
        return user

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def save_full_name(self, user_id: UUID, full_name: str) -> None:
        self.users[user_id] = replace(self.users[user_id], full_name=full_name)

    def save_health_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        self.users[user_id] = replace(self.users[user_id], health_profile=profile)

    def save_goal_book(self, user_id: UUID, goal_book: GoalBook) -> None:
        self.users[user_id] = replace(self.users[user_id], goal_book=goal_book)

    def save_food_logs(self, user_id: UUID, food_logs: list[FoodLogEntry]) -> None:
        self.users[user_id] = replace(self.users[user_id], food_logs=tuple(food_logs))


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    """In-memory food catalog for tests."""

    items: dict[UUID, FoodItem] = field(default_factory=dict)

    def add(self, item: FoodItem) -> FoodItem:
        self.items[item.id] = item
        return item

    def create_food_item(self, owner_id: UUID, draft: FoodItemDraft) -> FoodItem:
        return self.add(_item_from_draft(uuid4(), owner_id, draft))

    def update_food_item(self, food_item_id: UUID, draft: FoodItemDraft) -> FoodItem:
        owner_id = self.items[food_item_id].created_by
        return self.add(_item_from_draft(food_item_id, owner_id, draft))

    def get_food_item(self, food_item_id: UUID) -> FoodItem | None:
        return self.items.get(food_item_id)

    def get_food_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        return [
            self.items[item_id] for item_id in food_item_ids if item_id in self.items
        ]

    def list_food_items(self, owner_id: UUID) -> list[FoodItem]:
        return [item for item in self.items.values() if item.created_by == owner_id]

    def delete_food_item(self, owner_id: UUID, food_item_id: UUID) -> bool:
        item = self.items.get(food_item_id)
        if item is None or item.created_by != owner_id:
            return False
        del self.items[food_item_id]
        return True


def _item_from_draft(
    food_item_id: UUID, owner_id: UUID | None, draft: FoodItemDraft
) -> FoodItem:
    return FoodItem(
        id=food_item_id,
        name=draft.name,
        serving_quantity=draft.serving_quantity,
        serving_unit=draft.serving_unit,
        serving_weight_grams=draft.serving_weight_grams,
        nutrients=draft.nutrients,
        expiration_hours=draft.expiration_hours,
        tags=draft.tags,
        allergens=draft.allergens,
        metric_serving_unit=draft.metric_serving_unit,
        created_by=owner_id,
        image_url=draft.image_url,
    )


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory inventory repository for tests."""

    inventories: dict[UUID, Inventory] = field(default_factory=dict)

    def add(self, inventory: Inventory) -> Inventory:
        self.inventories[inventory.id] = inventory
        return inventory

    def create_inventory(self, user_id: UUID, name: str) -> Inventory:
        return self.add(
            Inventory(
                id=uuid4(),
                user_id=user_id,
                name=name,
                food_item_ids=(),
                created_at=datetime.now(tz=UTC),
            )
        )

    def get_inventory(self, inventory_id: UUID) -> Inventory | None:
        return self.inventories.get(inventory_id)

    def list_inventories(self, user_id: UUID) -> list[Inventory]:
        return [inv for inv in self.inventories.values() if inv.user_id == user_id]

    def rename_inventory(self, inventory_id: UUID, name: str) -> Inventory:
        return self.add(replace(self.inventories[inventory_id], name=name))

    def delete_inventory(self, inventory_id: UUID) -> None:
        self.inventories.pop(inventory_id, None)

    def save_food_item_ids(
        self, inventory_id: UUID, food_item_ids: list[UUID]
    ) -> Inventory:
        return self.add(
            replace(self.inventories[inventory_id], food_item_ids=tuple(food_item_ids))
        )


@dataclass
class InMemoryResourceRepository(ResourceRepository):
    """In-memory resource repository for tests."""

    resources: dict[UUID, Resource] = field(default_factory=dict)

    def add(self, resource: Resource) -> Resource:
        self.resources[resource.id] = resource
        return resource

    def create_resource(self, owner_id: UUID, draft: ResourceDraft) -> Resource:
        return self.add(
            Resource(
                id=uuid4(),
                created_by=owner_id,
                created_at=datetime.now(tz=UTC),
                **vars(draft),
            )
        )

    def get_resource(self, resource_id: UUID) -> Resource | None:
        return self.resources.get(resource_id)

    def list_resources(self, query: ResourceQuery) -> tuple[list[Resource], int]:
        matches = [
            resource
            for resource in self._newest_first()
            if (query.type is None or resource.type == query.type)
            and (query.tag is None or query.tag in resource.tags)
        ]
        return matches[query.offset : query.offset + query.limit], len(matches)

    def update_resource(self, resource_id: UUID, draft: ResourceDraft) -> Resource:
        return self.add(replace(self.resources[resource_id], **vars(draft)))

    def delete_resource(self, owner_id: UUID, resource_id: UUID) -> Resource | None:
        resource = self.resources.get(resource_id)
        if resource is None or resource.created_by != owner_id:
            return None
        return self.resources.pop(resource_id)

    def find_by_tags(self, tags: list[str], limit: int) -> list[Resource]:
        wanted = set(tags)
        return [
            resource
            for resource in self._newest_first()
            if wanted.intersection(resource.tags)
        ][:limit]

    def _newest_first(self) -> list[Resource]:
        return sorted(
            self.resources.values(), key=lambda item: item.created_at, reverse=True
        )


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text generation client with canned answers."""

    text: str = "Eat more vegetables."
    payload: dict[str, object] = field(
        default_factory=lambda: {
            "days": [
                {
                    "day": 1,
                    "meals": [
                        {
                            "meal": "breakfast",
                            "name": "Oatmeal with berries",
                            "description": "Rolled oats cooked in milk.",
                            "calories": 420,
                            "protein": 18,
                            "carbohydrate": 65,
                            "fat_total": 9,
                        }
                    ],
                }
            ],
            "notes": None,
        }
    )
    error: Exception | None = None
    delay_seconds: float = 0.0
    prompts: list[str] = field(default_factory=list)

    async def generate_text(self, *, prompt: str, system: str | None) -> str:
        self.prompts.append(prompt)
        await self._wait()
        return self.text

    async def generate_json(
        self,
        *,
        prompt: str,
        system: str | None,
        schema: dict[str, object],
        schema_name: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        await self._wait()
        return self.payload

    async def _wait(self) -> None:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
        api_tokens=f"{API_TOKEN}:{USER_ID}",
        ai_timeout_seconds=1.0,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    repository = InMemoryUserRepository()
    repository.add(UserRecord(id=USER_ID, full_name="Test User"))
    return repository


@pytest.fixture
def catalog_repository() -> InMemoryFoodCatalogRepository:
    return InMemoryFoodCatalogRepository()


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def resource_repository() -> InMemoryResourceRepository:
    return InMemoryResourceRepository()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    catalog_repository: InMemoryFoodCatalogRepository,
    inventory_repository: InMemoryInventoryRepository,
    resource_repository: InMemoryResourceRepository,
    text_client: FakeTextClient,
) -> AppContainer:
    user_service = UserService(user_repository)
    catalog_service = FoodCatalogService(catalog_repository)
    food_log_service = FoodLogService(
        repository=user_repository, catalog=catalog_service
    )
    inventory_service = InventoryService(
        repository=inventory_repository, catalog=catalog_service
    )
    assistant_service = AssistantService(
        client=text_client, timeout_seconds=settings.ai_timeout_seconds
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        api_tokens=parse_api_tokens(settings.api_tokens),
        user_service=user_service,
        goal_service=GoalService(user_repository),
        food_log_service=food_log_service,
        catalog_service=catalog_service,
        inventory_service=inventory_service,
        assistant_service=assistant_service,
        analytics_service=AnalyticsService(
            users=user_service,
            food_logs=food_log_service,
            inventories=inventory_service,
            assistant=assistant_service,
        ),
        resource_service=ResourceService(
            repository=resource_repository,
            users=user_service,
            catalog=catalog_service,
            inventories=inventory_service,
        ),
        close_resources=close_resources,
    )
