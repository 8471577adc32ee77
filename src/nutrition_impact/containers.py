"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

from supabase import create_client

from nutrition_impact.adapters.openai_text_client import OpenAITextClient
from nutrition_impact.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from nutrition_impact.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from nutrition_impact.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_impact.adapters.supabase_resource_repository import (
    SupabaseResourceRepository,
)
from nutrition_impact.config import Settings, parse_api_tokens
from nutrition_impact.services.analytics import AnalyticsService
from nutrition_impact.services.assistant import AssistantService
from nutrition_impact.services.catalog import FoodCatalogService
from nutrition_impact.services.food_logs import FoodLogService
from nutrition_impact.services.goals import GoalService
from nutrition_impact.services.inventory import InventoryService
from nutrition_impact.services.resources import ResourceService
from nutrition_impact.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    api_tokens: dict[str, UUID]
    user_service: UserService
    goal_service: GoalService
    food_log_service: FoodLogService
    catalog_service: FoodCatalogService
    inventory_service: InventoryService
    assistant_service: AssistantService
    analytics_service: AnalyticsService
    resource_service: ResourceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    food_item_repository = SupabaseFoodItemRepository(supabase_client)
    inventory_repository = SupabaseInventoryRepository(supabase_client)
    resource_repository = SupabaseResourceRepository(supabase_client)

    text_client = OpenAITextClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.ai_timeout_seconds,
    )

    user_service = UserService(profile_repository)
    catalog_service = FoodCatalogService(food_item_repository)
    food_log_service = FoodLogService(
        repository=profile_repository, catalog=catalog_service
    )
    inventory_service = InventoryService(
        repository=inventory_repository, catalog=catalog_service
    )
    assistant_service = AssistantService(
        client=text_client, timeout_seconds=resolved_settings.ai_timeout_seconds
    )
    analytics_service = AnalyticsService(
        users=user_service,
        food_logs=food_log_service,
        inventories=inventory_service,
        assistant=assistant_service,
    )

    async def close_resources() -> None:
        await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        api_tokens=parse_api_tokens(resolved_settings.api_tokens),
        user_service=user_service,
        goal_service=GoalService(profile_repository),
        food_log_service=food_log_service,
        catalog_service=catalog_service,
        inventory_service=inventory_service,
        assistant_service=assistant_service,
        analytics_service=analytics_service,
        resource_service=ResourceService(
            repository=resource_repository,
            users=user_service,
            catalog=catalog_service,
            inventories=inventory_service,
        ),
        close_resources=close_resources,
    )
