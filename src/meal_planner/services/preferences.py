"""Per-user preference storage."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_planner.domain.preferences import (
    UserPreferences,
    decode_preferences,
    default_preferences,
)
from meal_planner.services.persistence import store_errors

logger = logging.getLogger(__name__)


class PreferencesRepository(Protocol):
    """Persistence interface for preference documents."""

    def get_document(self, user_id: UUID) -> dict[str, object] | None:
        """Return the stored preference document, if present."""

    def create_if_absent(
        self, user_id: UUID, document: dict[str, object]
    ) -> dict[str, object]:
        """Insert the document unless one exists and return the stored one."""

    def replace_document(self, user_id: UUID, document: dict[str, object]) -> None:
        """Overwrite the stored preference document."""


@dataclass
class PreferencesService:
    """Service for loading and updating user preferences."""

    repository: PreferencesRepository

    def load(self, user_id: UUID) -> UserPreferences:
        """Return the user's preferences, creating defaults on first access."""
        with store_errors("Fehler beim Laden der Einstellungen"):
            document = self.repository.get_document(user_id)
            if document is None:
                document = self.repository.create_if_absent(
                    user_id, default_preferences().to_document()
                )
                logger.info(
                    "Created default preferences", extra={"user_id": str(user_id)}
                )
        return decode_preferences(document)

    def update(self, user_id: UUID, preferences: UserPreferences) -> UserPreferences:
        """Overwrite the stored preferences."""
        with store_errors("Deine Einstellungen konnten nicht gespeichert werden"):
            self.repository.replace_document(user_id, preferences.to_document())
        return preferences
