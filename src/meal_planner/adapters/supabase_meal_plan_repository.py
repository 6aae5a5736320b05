"""Supabase repository for saved meal plans and generation history."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_planner.domain.meal_plans import MEAL_PLAN_ADAPTER, SavedMealPlan
from meal_planner.services.meal_plans import MealPlanRepository

logger = logging.getLogger(__name__)

_PLAN_COLUMNS = "id, name, created_at, meal_plan, preferences"


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for saved meal plans."""

    client: Client

    def create_plan(
        self,
        user_id: UUID,
        name: str,
        meal_plan: list[dict[str, object]],
        preferences: dict[str, object],
    ) -> UUID:
        """Insert a saved plan; created_at is assigned by the database."""
        response = (
            self.client.table("meal_plans")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "meal_plan": meal_plan,
                    "preferences": preferences,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return UUID(response.data[0]["id"])

    def get_plan(self, user_id: UUID, plan_id: UUID) -> SavedMealPlan | None:
        """Return a saved plan by id."""
        response = (
            self.client.table("meal_plans")
            .select(_PLAN_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_plans(self, user_id: UUID) -> list[SavedMealPlan]:
        """Return the user's saved plans, skipping undecodable rows."""
        response = (
            self.client.table("meal_plans")
            .select(_PLAN_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        plans = []
        for row in response.data or []:
            try:
                plans.append(_parse_plan(row))
            except ValueError:
                logger.warning(
                    "Skipping undecodable saved meal plan",
                    extra={"plan_id": row.get("id")},
                )
        return plans

    def delete_plan(self, user_id: UUID, plan_id: UUID) -> None:
        """Delete a saved plan."""
        self.client.table("meal_plans").delete().eq("user_id", str(user_id)).eq(
            "id", str(plan_id)
        ).execute()

    def create_history_entry(
        self,
        user_id: UUID,
        meal_plan: dict[str, object],
        preferences: dict[str, object],
    ) -> None:
        """Append a generated plan to the history table."""
        self.client.table("meal_plan_history").insert(
            {
                "user_id": str(user_id),
                "meal_plan": meal_plan,
                "preferences": preferences,
            }
        ).execute()


def _parse_plan(row: dict[str, object]) -> SavedMealPlan:
    created_at_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_at_raw)
        if isinstance(created_at_raw, str) and created_at_raw
        else None
    )
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    preferences = row.get("preferences")
    return SavedMealPlan(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        created_at=created_at,
        meal_plan=MEAL_PLAN_ADAPTER.validate_python(row.get("meal_plan") or []),
        preferences=preferences if isinstance(preferences, dict) else {},
    )
