"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.openai_generation_client import OpenAIGenerationClient
from meal_planner.adapters.supabase_auth_client import SupabaseAuthClient
from meal_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from meal_planner.adapters.supabase_pantry_repository import SupabasePantryRepository
from meal_planner.adapters.supabase_preferences_repository import (
    SupabasePreferencesRepository,
)
from meal_planner.adapters.supabase_reminder_repository import (
    SupabaseReminderRepository,
)
from meal_planner.config import Settings
from meal_planner.services.auth import AuthService
from meal_planner.services.cache import InMemoryCache, SessionCache
from meal_planner.services.generation import PlanGenerationService
from meal_planner.services.meal_plans import MealPlanService
from meal_planner.services.pantry import PantryService
from meal_planner.services.preferences import PreferencesService
from meal_planner.services.reminders import ReminderService
from meal_planner.services.sessions import SessionService
from meal_planner.services.suggestions import SuggestionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    preferences_service: PreferencesService
    meal_plan_service: MealPlanService
    pantry_service: PantryService
    reminder_service: ReminderService
    generation_service: PlanGenerationService
    suggestion_service: SuggestionService
    session_service: SessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_service = AuthService(SupabaseAuthClient(supabase_client))
    preferences_service = PreferencesService(
        SupabasePreferencesRepository(supabase_client)
    )
    meal_plan_service = MealPlanService(SupabaseMealPlanRepository(supabase_client))
    pantry_service = PantryService(SupabasePantryRepository(supabase_client))
    reminder_service = ReminderService(SupabaseReminderRepository(supabase_client))
    generation_client = OpenAIGenerationClient.create(resolved_settings.openai_api_key)
    generation_service = PlanGenerationService(
        client=generation_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_output_tokens=resolved_settings.plan_max_output_tokens,
    )
    suggestion_service = SuggestionService(
        client=generation_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_output_tokens=resolved_settings.suggestion_max_output_tokens,
    )
    session_service = SessionService(
        preferences_service=preferences_service,
        meal_plan_service=meal_plan_service,
        pantry_service=pantry_service,
        reminder_service=reminder_service,
        session_cache=SessionCache(
            cache=InMemoryCache(),
            ttl_seconds=resolved_settings.session_cache_ttl_seconds,
        ),
    )

    async def close_resources() -> None:
        await generation_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        preferences_service=preferences_service,
        meal_plan_service=meal_plan_service,
        pantry_service=pantry_service,
        reminder_service=reminder_service,
        generation_service=generation_service,
        suggestion_service=suggestion_service,
        session_service=session_service,
        close_resources=close_resources,
    )
