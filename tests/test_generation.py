"""Tests for meal plan generation."""

import asyncio

import pytest

from meal_planner.domain.errors import GenerationError, ParseError
from meal_planner.domain.preferences import UserPreferences
from meal_planner.services.generation import (
    NO_CUISINE_PREFERENCE,
    NO_DIETARY_RESTRICTIONS,
    NO_EXCLUDED_INGREDIENTS,
    PlanGenerationService,
    build_prompt,
    parse_response,
)
from tests.conftest import FakeGenerationClient, make_day, plan_response


def test_build_prompt_lists_preferences() -> None:
    preferences = UserPreferences(
        dietary_preferences=["Vegetarisch", "Glutenfrei"],
        cuisine=["Italienisch"],
        preparation_time="45",
        difficulty="easy",
        is_kid_friendly=True,
        servings=2,
        excluded_ingredients=["Pilze", "Koriander"],
    )

    prompt = build_prompt(preferences, 14)

    assert "14 Tage" in prompt
    assert "Vegetarisch, Glutenfrei" in prompt
    assert "Küche: Italienisch" in prompt
    assert "maximal 45 Minuten" in prompt
    assert "Schwierigkeitsgrad: easy" in prompt
    assert "- Kinderfreundlich" in prompt
    assert "Portionen: 2" in prompt
    assert "Ausgeschlossene Zutaten: Pilze, Koriander" in prompt
    assert prompt.endswith("Erstelle ausschließlich Abendessen-Rezepte.")


def test_build_prompt_uses_phrases_for_empty_lists() -> None:
    prompt = build_prompt(UserPreferences(), 7)

    assert "7 Tage" in prompt
    assert NO_DIETARY_RESTRICTIONS in prompt
    assert NO_EXCLUDED_INGREDIENTS in prompt
    assert f"Küche: {NO_CUISINE_PREFERENCE}" in prompt
    assert "[]" not in prompt


@pytest.mark.parametrize(
    "raw", ["{}", "not json", "[]", '{"days": "Montag"}', '{"days": [{"x": 1}]}']
)
def test_parse_response_rejects_malformed_answers(raw: str) -> None:
    with pytest.raises(ParseError):
        parse_response(raw)


def test_parse_response_is_a_generation_error() -> None:
    with pytest.raises(GenerationError):
        parse_response("not json")


def test_parse_response_accepts_days_and_ignores_other_slots() -> None:
    raw = (
        '{"days": [{"date": "2024-03-04", '
        '"lunch": {"name": "Suppe"}, '
        '"dinner": {"name": "Risotto", "preparationTime": 40, '
        '"ingredients": [{"name": "Reis", "amount": 200, "unit": "g"}]}}]}'
    )

    plan = parse_response(raw)

    assert len(plan) == 1
    assert plan[0].dinner is not None
    assert plan[0].dinner.name == "Risotto"
    assert plan[0].dinner.preparation_time == "40"
    assert plan[0].dinner.ingredients[0].amount == 200


def test_generate_prompts_client_and_returns_plan() -> None:
    client = FakeGenerationClient(
        responses=[plan_response([make_day("2024-03-04", name="Curry")])]
    )
    service = PlanGenerationService(client=client, model="gpt-4o-mini")

    plan = asyncio.run(service.generate(UserPreferences(), 7))

    assert [day.dinner.name for day in plan if day.dinner] == ["Curry"]
    assert "7 Tage" in client.prompts[0]


def test_generate_propagates_parse_errors() -> None:
    client = FakeGenerationClient(responses=['{"meals": []}'])
    service = PlanGenerationService(client=client, model="gpt-4o-mini")

    with pytest.raises(ParseError):
        asyncio.run(service.generate(UserPreferences(), 7))
