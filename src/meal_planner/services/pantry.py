"""Pantry storage."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import pydantic

from meal_planner.domain.pantry import PantryItem
from meal_planner.services.persistence import store_errors


class PantryRepository(Protocol):
    """Persistence interface for the user's current pantry."""

    def get_items(self, user_id: UUID) -> list[dict[str, object]] | None:
        """Return the stored pantry items, or None when no pantry exists."""

    def save_items(self, user_id: UUID, items: list[dict[str, object]]) -> None:
        """Create or update the user's pantry."""


@dataclass
class PantryService:
    """Service for loading and replacing the pantry."""

    repository: PantryRepository

    def load(self, user_id: UUID) -> list[PantryItem]:
        """Return the pantry, empty when none was stored yet."""
        with store_errors("Fehler beim Laden der Vorratskammer"):
            stored = self.repository.get_items(user_id)
        return clean_pantry_items(stored or [])

    def update(self, user_id: UUID, raw_items: Iterable[object]) -> list[PantryItem]:
        """Replace the pantry with the valid entries of raw_items."""
        items = clean_pantry_items(raw_items)
        with store_errors("Fehler beim Speichern der Vorratskammer"):
            self.repository.save_items(
                user_id,
                [item.model_dump(mode="json", by_alias=True) for item in items],
            )
        return items


def clean_pantry_items(raw_items: Iterable[object]) -> list[PantryItem]:
    """Keep entries with a string name, numeric amount and string unit."""
    items = []
    for entry in raw_items:
        if not isinstance(entry, dict):
            continue
        name, amount, unit = entry.get("name"), entry.get("amount"), entry.get("unit")
        if not isinstance(name, str) or not isinstance(unit, str):
            continue
        if isinstance(amount, bool) or not isinstance(amount, int | float):
            continue
        try:
            item = PantryItem(
                name=name,
                amount=amount,
                unit=unit,
                expiry_date=entry.get("expiryDate") or None,
            )
        except pydantic.ValidationError:
            item = PantryItem(name=name, amount=amount, unit=unit)
        items.append(item)
    return items
