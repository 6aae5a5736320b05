"""Domain models for meal reminders."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

NotificationType = Literal["prep", "cook", "shop"]


@dataclass(frozen=True)
class MealReminder:
    """Scheduled reminder for preparing, cooking or shopping for a meal."""

    id: UUID
    meal_id: str
    reminder_time: datetime
    notification_type: NotificationType
