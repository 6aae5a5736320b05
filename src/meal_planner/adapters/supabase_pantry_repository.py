"""Supabase repository for the user's pantry."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_planner.services.pantry import PantryRepository


@dataclass
class SupabasePantryRepository(PantryRepository):
    """Stores the single current pantry of each user."""

    client: Client

    def get_items(self, user_id: UUID) -> list[dict[str, object]] | None:
        """Return the stored pantry items, if a pantry exists."""
        response = (
            self.client.table("pantries")
            .select("ingredients")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        ingredients = response.data[0].get("ingredients")
        return ingredients if isinstance(ingredients, list) else []

    def save_items(self, user_id: UUID, items: list[dict[str, object]]) -> None:
        """Create the pantry on first write, update it afterwards."""
        self.client.table("pantries").upsert(
            {
                "user_id": str(user_id),
                "ingredients": items,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
