"""Supabase repository for preference documents."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_planner.services.preferences import PreferencesRepository


@dataclass
class SupabasePreferencesRepository(PreferencesRepository):
    """Stores one JSON preference document per user."""

    client: Client

    def get_document(self, user_id: UUID) -> dict[str, object] | None:
        """Return the stored preference document, if present."""
        response = (
            self.client.table("user_preferences")
            .select("preferences")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        document = response.data[0].get("preferences")
        return document if isinstance(document, dict) else {}

    def create_if_absent(
        self, user_id: UUID, document: dict[str, object]
    ) -> dict[str, object]:
        """Insert the defaults unless a concurrent request already did."""
        self.client.table("user_preferences").upsert(
            {"user_id": str(user_id), "preferences": document},
            on_conflict="user_id",
            ignore_duplicates=True,
        ).execute()
        stored = self.get_document(user_id)
        if stored is None:
            raise RuntimeError("Failed to create preferences in Supabase")
        return stored

    def replace_document(self, user_id: UUID, document: dict[str, object]) -> None:
        """Overwrite the user's preference document."""
        self.client.table("user_preferences").upsert(
            {
                "user_id": str(user_id),
                "preferences": document,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
