"""Saved meal plans and generation history."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from meal_planner.domain.meal_plans import Day, SavedMealPlan, dump_meal_plan
from meal_planner.domain.preferences import UserPreferences, decode_preferences
from meal_planner.services.persistence import store_errors

logger = logging.getLogger(__name__)


class MealPlanRepository(Protocol):
    """Persistence interface for saved meal plans."""

    def create_plan(
        self,
        user_id: UUID,
        name: str,
        meal_plan: list[dict[str, object]],
        preferences: dict[str, object],
    ) -> UUID:
        """Insert a saved plan and return its id."""

    def get_plan(self, user_id: UUID, plan_id: UUID) -> SavedMealPlan | None:
        """Return a saved plan, if present."""

    def list_plans(self, user_id: UUID) -> list[SavedMealPlan]:
        """Return all saved plans of a user."""

    def delete_plan(self, user_id: UUID, plan_id: UUID) -> None:
        """Delete a saved plan."""

    def create_history_entry(
        self,
        user_id: UUID,
        meal_plan: dict[str, object],
        preferences: dict[str, object],
    ) -> None:
        """Append a generated plan to the user's history."""


@dataclass
class MealPlanService:
    """Service for saving, listing, loading and deleting meal plans."""

    repository: MealPlanRepository

    def save(
        self, user_id: UUID, plan: list[Day], preferences: UserPreferences
    ) -> UUID:
        """Store a new snapshot of the plan and the preferences behind it."""
        with store_errors("Fehler beim Speichern des Essensplans"):
            return self.repository.create_plan(
                user_id,
                name=plan_name(date.today()),
                meal_plan=dump_meal_plan(plan),
                preferences=preferences.to_document(),
            )

    def get(self, user_id: UUID, plan_id: UUID) -> SavedMealPlan | None:
        """Return one saved plan."""
        with store_errors("Fehler beim Laden des Essensplans"):
            return self.repository.get_plan(user_id, plan_id)

    def list_plans(self, user_id: UUID) -> list[SavedMealPlan]:
        """Return saved plans, most recent first."""
        with store_errors("Fehler beim Laden der gespeicherten Pläne"):
            plans = self.repository.list_plans(user_id)
        now = datetime.now(tz=UTC)
        return sorted(plans, key=lambda plan: plan.created_at or now, reverse=True)

    def delete(self, user_id: UUID, plan_id: UUID) -> None:
        """Delete a saved plan; unknown ids are ignored."""
        with store_errors("Fehler beim Löschen des Essensplans"):
            self.repository.delete_plan(user_id, plan_id)

    @staticmethod
    def load(saved: SavedMealPlan) -> tuple[list[Day], UserPreferences]:
        """Return the stored plan and its preferences merged over the defaults."""
        return saved.meal_plan, decode_preferences(saved.preferences)

    def record_history(
        self, user_id: UUID, plan: list[Day], preferences: UserPreferences
    ) -> None:
        """Append a generated plan to the history; failures are only logged."""
        try:
            self.repository.create_history_entry(
                user_id,
                meal_plan={"days": dump_meal_plan(plan)},
                preferences=preferences.to_document(),
            )
        except Exception:
            logger.exception(
                "Failed to record meal plan history", extra={"user_id": str(user_id)}
            )


def plan_name(day: date) -> str:
    """Return the display name for a plan saved on the given day."""
    return f"Essensplan vom {day.day}.{day.month}.{day.year}"
