"""User preference documents and their validating decoder."""

from collections.abc import Mapping
from typing import Literal, get_args

from pydantic import Field

from meal_planner.domain.base import CamelModel

Difficulty = Literal["easy", "medium", "hard"]

DEFAULT_PREPARATION_TIME = "30"
DEFAULT_DIFFICULTY: Difficulty = "medium"
DEFAULT_SERVINGS = 4
MIN_SERVINGS = 1
MAX_SERVINGS = 12


class UserPreferences(CamelModel):
    """Preferences used to generate meal plans."""

    dietary_preferences: list[str] = Field(default_factory=list)
    cuisine: list[str] = Field(default_factory=list)
    preparation_time: str = DEFAULT_PREPARATION_TIME
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    is_kid_friendly: bool = False
    servings: int = Field(default=DEFAULT_SERVINGS, ge=MIN_SERVINGS, le=MAX_SERVINGS)
    excluded_ingredients: list[str] = Field(default_factory=list)

    def to_document(self) -> dict[str, object]:
        """Return the camelCase document stored and served for these preferences."""
        return self.model_dump(mode="json", by_alias=True)


def default_preferences() -> UserPreferences:
    """Return a fresh preferences object with documented defaults."""
    return UserPreferences()


def decode_preferences(raw: Mapping[str, object] | None) -> UserPreferences:
    """Decode an untrusted stored document into valid preferences.

    Stored documents are schema-less, so every field is coerced to its type and
    missing or unusable values fall back to the defaults. Every load site goes
    through here.
    """
    data = raw or {}
    difficulty = data.get("difficulty")
    return UserPreferences(
        dietary_preferences=_string_list(data.get("dietaryPreferences")),
        cuisine=_string_list(data.get("cuisine")),
        preparation_time=_preparation_time(data.get("preparationTime")),
        difficulty=(
            difficulty if difficulty in get_args(Difficulty) else DEFAULT_DIFFICULTY
        ),
        is_kid_friendly=bool(data.get("isKidFriendly")),
        servings=_servings(data.get("servings")),
        excluded_ingredients=_string_list(data.get("excludedIngredients")),
    )


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, str)]


def _preparation_time(value: object) -> str:
    if isinstance(value, bool):
        return DEFAULT_PREPARATION_TIME
    if isinstance(value, int | float):
        return f"{value:g}" if value else DEFAULT_PREPARATION_TIME
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_PREPARATION_TIME


def _servings(value: object) -> int:
    try:
        servings = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SERVINGS
    if servings == 0:
        return DEFAULT_SERVINGS
    return min(max(servings, MIN_SERVINGS), MAX_SERVINGS)
