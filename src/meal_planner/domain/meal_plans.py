"""Domain models for generated and saved meal plans."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import TypeAdapter

from meal_planner.domain.base import CamelModel


class Ingredient(CamelModel):
    """Single ingredient line of a meal."""

    name: str
    amount: float
    unit: str = ""


class Meal(CamelModel):
    """A generated recipe."""

    name: str
    description: str = ""
    ingredients: list[Ingredient] = []
    instructions: list[str] = []
    preparation_time: str = ""
    cuisine: str = ""
    dietary_info: list[str] = []
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


class Day(CamelModel):
    """One planned day; only the dinner slot is generated."""

    date: str
    dinner: Meal | None = None


MealPlan = list[Day]

MEAL_PLAN_ADAPTER: TypeAdapter[list[Day]] = TypeAdapter(list[Day])


def dump_meal_plan(plan: list[Day]) -> list[dict[str, object]]:
    """Serialize a meal plan into its camelCase JSON shape."""
    return MEAL_PLAN_ADAPTER.dump_python(
        plan, mode="json", by_alias=True, exclude_none=True
    )


@dataclass(frozen=True)
class ShoppingListCategory:
    """Ingredients of one shopping category."""

    category: str
    items: list[Ingredient]


@dataclass(frozen=True)
class NutritionSummary:
    """Daily average macros of a meal plan."""

    total_calories: int
    total_protein: int
    total_carbs: int
    total_fat: int


@dataclass(frozen=True)
class SavedMealPlan:
    """A stored meal plan snapshot."""

    id: UUID
    name: str
    created_at: datetime | None
    meal_plan: list[Day]
    preferences: dict[str, object]


class RecipeSuggestion(CamelModel):
    """Recipe suggested from pantry contents."""

    name: str
    description: str = ""
    used_ingredients: list[str] = []
    additional_ingredients: list[str] = []
    instructions: list[str] = []

