"""Supabase repository for meal reminders."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_planner.domain.reminders import MealReminder, NotificationType
from meal_planner.services.reminders import ReminderRepository


@dataclass
class SupabaseReminderRepository(ReminderRepository):
    """Supabase implementation for meal reminders."""

    client: Client

    def list_reminders(self, user_id: UUID) -> list[MealReminder]:
        """Return the user's reminders."""
        response = (
            self.client.table("meal_reminders")
            .select("id, meal_id, reminder_time, notification_type")
            .eq("user_id", str(user_id))
            .order("reminder_time", desc=False)
            .execute()
        )
        return [_parse_reminder(row) for row in response.data or []]

    def create_reminder(
        self,
        user_id: UUID,
        meal_id: str,
        reminder_time: datetime,
        notification_type: NotificationType,
    ) -> MealReminder:
        """Create a reminder row and return it."""
        response = (
            self.client.table("meal_reminders")
            .insert(
                {
                    "user_id": str(user_id),
                    "meal_id": meal_id,
                    "reminder_time": reminder_time.isoformat(),
                    "notification_type": notification_type,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create reminder")
        return _parse_reminder(response.data[0])

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> None:
        """Delete a reminder row."""
        self.client.table("meal_reminders").delete().eq("user_id", str(user_id)).eq(
            "id", str(reminder_id)
        ).execute()


def _parse_reminder(row: dict[str, object]) -> MealReminder:
    reminder_time_raw = row.get("reminder_time")
    reminder_time = (
        datetime.fromisoformat(reminder_time_raw)
        if isinstance(reminder_time_raw, str) and reminder_time_raw
        else datetime.now(tz=UTC)
    )
    if reminder_time.tzinfo is None:
        reminder_time = reminder_time.replace(tzinfo=UTC)
    return MealReminder(
        id=UUID(str(row["id"])),
        meal_id=str(row.get("meal_id") or ""),
        reminder_time=reminder_time,
        notification_type=row.get("notification_type", "prep"),  # type: ignore[arg-type]
    )
