"""Meal reminder storage."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from meal_planner.domain.reminders import MealReminder, NotificationType
from meal_planner.services.persistence import store_errors


class ReminderRepository(Protocol):
    """Persistence interface for meal reminders."""

    def list_reminders(self, user_id: UUID) -> list[MealReminder]:
        """Return the user's reminders."""

    def create_reminder(
        self,
        user_id: UUID,
        meal_id: str,
        reminder_time: datetime,
        notification_type: NotificationType,
    ) -> MealReminder:
        """Create a reminder and return it."""

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> None:
        """Delete a reminder."""


@dataclass
class ReminderService:
    """Service for meal reminders."""

    repository: ReminderRepository

    def list_reminders(self, user_id: UUID) -> list[MealReminder]:
        """Return reminders ordered by time."""
        with store_errors("Fehler beim Laden der Erinnerungen"):
            reminders = self.repository.list_reminders(user_id)
        return sorted(reminders, key=lambda reminder: reminder.reminder_time)

    def create(
        self,
        user_id: UUID,
        meal_id: str,
        reminder_time: datetime,
        notification_type: NotificationType,
    ) -> MealReminder:
        """Schedule a reminder."""
        with store_errors("Fehler beim Speichern der Erinnerung"):
            return self.repository.create_reminder(
                user_id, meal_id, reminder_time, notification_type
            )

    def delete(self, user_id: UUID, reminder_id: UUID) -> None:
        """Remove a reminder."""
        with store_errors("Fehler beim Löschen der Erinnerung"):
            self.repository.delete_reminder(user_id, reminder_id)
