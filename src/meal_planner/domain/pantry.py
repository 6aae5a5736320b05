"""Domain models for the user's pantry."""

from datetime import date

from meal_planner.domain.base import CamelModel


class PantryItem(CamelModel):
    """Ingredient kept at home."""

    name: str
    amount: float
    unit: str
    expiry_date: date | None = None
