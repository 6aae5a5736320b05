"""Nutrition summary over a meal plan."""

import math

from meal_planner.domain.meal_plans import Day, NutritionSummary

# Assumed macros for a dinner that does not report them.
DEFAULT_CALORIES = 600
DEFAULT_PROTEIN = 20
DEFAULT_CARBS = 60
DEFAULT_FAT = 25


def summarize_nutrition(plan: list[Day]) -> NutritionSummary:
    """Return daily average macros over the days that have a dinner.

    A plan without any dinner yields an all-zero summary.
    """
    calories = protein = carbs = fat = 0.0
    days = 0
    for day in plan:
        dinner = day.dinner
        if dinner is None:
            continue
        calories += _or_default(dinner.calories, DEFAULT_CALORIES)
        protein += _or_default(dinner.protein, DEFAULT_PROTEIN)
        carbs += _or_default(dinner.carbs, DEFAULT_CARBS)
        fat += _or_default(dinner.fat, DEFAULT_FAT)
        days += 1

    if days == 0:
        return NutritionSummary(
            total_calories=0, total_protein=0, total_carbs=0, total_fat=0
        )
    return NutritionSummary(
        total_calories=_round_half_up(calories / days),
        total_protein=_round_half_up(protein / days),
        total_carbs=_round_half_up(carbs / days),
        total_fat=_round_half_up(fat / days),
    )


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
