"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrilog.adapters.off_client import HttpxOpenFoodFactsClient
from nutrilog.adapters.supabase_kv_store import SupabaseKeyValueStore
from nutrilog.config import Settings, build_goals
from nutrilog.services.cache import InMemoryCache
from nutrilog.services.food_lookup import FoodLookupService, SearchCoordinator
from nutrilog.services.session import NutritionSession, SessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: SessionStore
    food_lookup: FoodLookupService
    food_search: SearchCoordinator
    session: NutritionSession
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    store = SupabaseKeyValueStore(
        supabase_client, table=resolved_settings.supabase_kv_table
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        sort_by=resolved_settings.off_sort_by,
        timeout=resolved_settings.off_timeout_seconds,
        user_agent=resolved_settings.off_user_agent,
    )
    food_lookup = FoodLookupService(
        client=off_client,
        cache=InMemoryCache(),
        page_size=resolved_settings.off_page_size,
        search_ttl_seconds=resolved_settings.search_ttl_seconds,
        retry_attempts=resolved_settings.retry_attempts,
        retry_delay_seconds=resolved_settings.retry_delay_seconds,
    )
    session = NutritionSession.load(
        store,
        build_goals(resolved_settings),
        timezone_name=resolved_settings.timezone,
        daily_log_key=resolved_settings.daily_log_key,
        body_log_key=resolved_settings.body_log_key,
    )

    async def close_resources() -> None:
        await off_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        food_lookup=food_lookup,
        food_search=SearchCoordinator(food_lookup),
        session=session,
        close_resources=close_resources,
    )
