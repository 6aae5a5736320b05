"""Request bodies accepted by the API."""

from datetime import datetime
from typing import Any, Literal

from meal_planner.domain.base import CamelModel
from meal_planner.domain.reminders import NotificationType


class GenerateRequest(CamelModel):
    """Planning period of a generation request."""

    period: Literal["1-week", "2-weeks"] = "1-week"


class PantryUpdateRequest(CamelModel):
    """Raw pantry entries; invalid ones are dropped by the service."""

    ingredients: list[Any]


class ReminderRequest(CamelModel):
    """New meal reminder."""

    meal_id: str
    reminder_time: datetime
    notification_type: NotificationType
