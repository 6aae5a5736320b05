"""Recipe suggestions from pantry contents."""

import json
from dataclasses import dataclass

import pydantic

from meal_planner.domain.errors import ParseError
from meal_planner.domain.meal_plans import RecipeSuggestion
from meal_planner.domain.pantry import PantryItem
from meal_planner.services.generation import TextGenerationClient

SUGGESTION_SYSTEM_INSTRUCTION = (
    "Du bist ein kreativer Koch, der aus vorhandenen Zutaten leckere Gerichte "
    "zaubert."
)

SUGGESTION_RESPONSE_FORMAT = """{
  "suggestions": [
    {
      "name": "Rezeptname",
      "description": "Kurze Beschreibung",
      "usedIngredients": ["Zutat1", "Zutat2"],
      "additionalIngredients": ["Zutat3", "Zutat4"],
      "instructions": ["Schritt 1", "Schritt 2"]
    }
  ]
}"""

_SUGGESTIONS_ADAPTER = pydantic.TypeAdapter(list[RecipeSuggestion])


def build_suggestion_prompt(pantry: list[PantryItem]) -> str:
    """Render the prompt asking for three recipes from pantry items."""
    ingredients = ", ".join(item.name for item in pantry)
    return (
        f"Erstelle 3 Rezeptvorschläge mit diesen Zutaten: {ingredients}\n"
        "Berücksichtige dabei die Mengen und schlage Rezepte vor, die möglichst "
        "viele der vorhandenen Zutaten verwenden.\n"
        "Formatiere die Antwort als JSON mit diesem Format:\n"
        f"{SUGGESTION_RESPONSE_FORMAT}"
    )


def parse_suggestions(raw: str) -> list[RecipeSuggestion]:
    """Parse generated suggestions or raise ParseError."""
    message = "Fehler beim Erstellen der Rezeptvorschläge"
    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ParseError(message) from exc
    if not isinstance(document, dict) or not isinstance(
        document.get("suggestions"), list
    ):
        raise ParseError(message)
    try:
        return _SUGGESTIONS_ADAPTER.validate_python(document["suggestions"])
    except pydantic.ValidationError as exc:
        raise ParseError(message) from exc


@dataclass
class SuggestionService:
    """Service asking the generator for pantry-based recipes."""

    client: TextGenerationClient
    model: str
    temperature: float = 0.7
    max_output_tokens: int = 1000

    async def suggest(self, pantry: list[PantryItem]) -> list[RecipeSuggestion]:
        """Return recipe suggestions; an empty pantry yields none."""
        if not pantry:
            return []
        raw = await self.client.generate_json(
            model=self.model,
            system_instruction=SUGGESTION_SYSTEM_INSTRUCTION,
            prompt=build_suggestion_prompt(pantry),
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )
        return parse_suggestions(raw)
