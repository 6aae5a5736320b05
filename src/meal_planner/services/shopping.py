"""Shopping list derivation from a meal plan."""

import unicodedata

from meal_planner.domain.meal_plans import Day, Ingredient, ShoppingListCategory

DEFAULT_CATEGORY = "Sonstiges"

# First matching category wins, so order matters.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Gemüse", ("karotte", "tomate", "gurke", "salat", "zwiebel")),
    ("Obst", ("apfel", "banane", "orange", "zitrone")),
    ("Proteine", ("fleisch", "fisch", "tofu", "hähnchen", "ei")),
    ("Milchprodukte", ("milch", "käse", "joghurt", "sahne")),
    ("Getreide", ("reis", "nudel", "brot", "mehl")),
    ("Gewürze", ("salz", "pfeffer", "gewürz")),
)


def determine_category(ingredient_name: str) -> str:
    """Return the shopping category for an ingredient name."""
    lower_name = ingredient_name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lower_name for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def build_shopping_list(plan: list[Day]) -> list[ShoppingListCategory]:
    """Merge dinner ingredients across days into a categorized shopping list.

    Ingredients with the same name and unit are summed within their category.
    Categories keep the order in which they were first seen; items are sorted
    by name. The plan itself is never modified.
    """
    by_category: dict[str, list[Ingredient]] = {}
    for day in plan:
        if day.dinner is None:
            continue
        for ingredient in day.dinner.ingredients:
            items = by_category.setdefault(determine_category(ingredient.name), [])
            existing = _find_item(items, ingredient)
            if existing is None:
                items.append(ingredient.model_copy())
            else:
                existing.amount += ingredient.amount
    return [
        ShoppingListCategory(
            category=category,
            items=sorted(items, key=lambda item: _sort_key(item.name)),
        )
        for category, items in by_category.items()
    ]


def _find_item(items: list[Ingredient], ingredient: Ingredient) -> Ingredient | None:
    for item in items:
        if item.name == ingredient.name and item.unit == ingredient.unit:
            return item
    return None


def _sort_key(name: str) -> tuple[str, str]:
    """Collation key ignoring case and accents, with the raw name as tiebreak."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), name
