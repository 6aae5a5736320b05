"""Meal plan generation through a text generation service."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

import pydantic

from meal_planner.domain.errors import ParseError
from meal_planner.domain.meal_plans import MEAL_PLAN_ADAPTER, Day
from meal_planner.domain.preferences import UserPreferences

logger = logging.getLogger(__name__)

PLANNING_PERIODS: dict[str, int] = {"1-week": 7, "2-weeks": 14}

NO_DIETARY_RESTRICTIONS = "Keine speziellen Ernährungseinschränkungen"
NO_EXCLUDED_INGREDIENTS = "Keine ausgeschlossenen Zutaten"
NO_CUISINE_PREFERENCE = "Keine Präferenz"

RATE_LIMIT_MESSAGE = "Zu viele Anfragen. Bitte versuche es in ein paar Minuten erneut."
GENERATION_FAILED_MESSAGE = (
    "Es gab einen Fehler bei der Anfrage an den Generator. Bitte versuche es erneut."
)
_PARSE_FAILURE = (
    "Fehler beim Parsen der Antwort des Essensplan-Generators. "
    "Bitte versuche es erneut."
)

PLAN_SYSTEM_INSTRUCTION = (
    "Du bist ein erfahrener Chefkoch. Erstelle einen detaillierten Essensplan "
    "mit präzisen Rezepten.\n"
    "Für jedes Rezept:\n"
    "- Gib genaue Mengenangaben\n"
    "- Beschreibe jeden Zubereitungsschritt ausführlich\n"
    "- Füge Kochtipps und wichtige Hinweise hinzu\n"
    "- Erkläre spezielle Techniken\n"
    "- Nenne konkrete Garzeiten und Temperaturen\n"
    "- Beschreibe die gewünschte Konsistenz/das gewünschte Ergebnis\n\n"
    "Strukturiere die Antwort als JSON-Objekt mit dem vorgegebenen Format. "
    "Sei präzise und detailliert in den Anweisungen."
)

PLAN_RESPONSE_FORMAT = """{
  "days": [
    {
      "date": "2024-XX-XX",
      "dinner": {
        "name": "Name des Gerichts",
        "description": "Beschreibung",
        "ingredients": [{"name": "Zutat", "amount": 100, "unit": "g"}],
        "instructions": ["Schritt 1", "Schritt 2"],
        "preparationTime": "30",
        "cuisine": "Küchenstil",
        "dietaryInfo": ["Vegetarisch", "Glutenfrei"]
      }
    }
  ]
}"""


class TextGenerationClient(Protocol):
    """Interface for JSON-mode text generation."""

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Return the raw text of a JSON-mode completion."""


def build_prompt(preferences: UserPreferences, period_days: int) -> str:
    """Render the user prompt asking for a dinner plan."""
    dietary = (
        f"Ernährungsform: {', '.join(preferences.dietary_preferences)}"
        if preferences.dietary_preferences
        else NO_DIETARY_RESTRICTIONS
    )
    excluded = (
        f"Ausgeschlossene Zutaten: {', '.join(preferences.excluded_ingredients)}"
        if preferences.excluded_ingredients
        else NO_EXCLUDED_INGREDIENTS
    )
    cuisine = ", ".join(preferences.cuisine) or NO_CUISINE_PREFERENCE
    kid_friendly = (
        "Kinderfreundlich"
        if preferences.is_kid_friendly
        else "Keine Anforderung an Kinderfreundlichkeit"
    )
    lines = [
        f"Erstelle einen Essensplan für {period_days} Tage "
        "im folgenden JSON-Format:",
        PLAN_RESPONSE_FORMAT,
        "",
        "Berücksichtige dabei folgende Anforderungen:",
        f"- {dietary}",
        f"- Küche: {cuisine}",
        f"- Zubereitungszeit: maximal {preferences.preparation_time} Minuten",
        f"- Schwierigkeitsgrad: {preferences.difficulty}",
        f"- {kid_friendly}",
        f"- Portionen: {preferences.servings}",
        f"- {excluded}",
        "",
        "Erstelle ausschließlich Abendessen-Rezepte.",
    ]
    return "\n".join(lines)


def parse_response(raw: str) -> list[Day]:
    """Parse a generated answer into a meal plan or raise ParseError."""
    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ParseError(_PARSE_FAILURE) from exc
    if not isinstance(document, dict) or not isinstance(document.get("days"), list):
        raise ParseError(_PARSE_FAILURE)
    try:
        return MEAL_PLAN_ADAPTER.validate_python(document["days"])
    except pydantic.ValidationError as exc:
        raise ParseError(_PARSE_FAILURE) from exc


@dataclass
class PlanGenerationService:
    """Service that prompts the generator and validates its meal plans."""

    client: TextGenerationClient
    model: str
    temperature: float = 0.7
    max_output_tokens: int = 4000

    async def generate(
        self, preferences: UserPreferences, period_days: int
    ) -> list[Day]:
        """Generate a dinner plan for the given number of days."""
        raw = await self.client.generate_json(
            model=self.model,
            system_instruction=PLAN_SYSTEM_INSTRUCTION,
            prompt=build_prompt(preferences, period_days),
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )
        plan = parse_response(raw)
        logger.info(
            "Generated meal plan",
            extra={"requested_days": period_days, "received_days": len(plan)},
        )
        return plan
