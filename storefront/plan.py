"""
Personalized weekly meal plan.

The plan does no nutritional planning: the dietary preference picks a catalog
category, the category's recipes are fetched, and recipes are assigned to the
seven days of the week round-robin. Calories and meals per day are validated
but do not influence the selection.
"""

import logging
from typing import List, Sequence

from pydantic import BaseModel, Field

from .errors import StorefrontError
from .models import PlanDay, Recipe, WeeklyPlan
from .recipes import RecipeCatalog

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

DEFAULT_CATEGORY = "Chicken"

NOT_ENOUGH_RECIPES_MESSAGE = "Not enough recipes were found for your preference."
GENERATION_FAILED_MESSAGE = "There was a problem generating the plan."
PLAN_READY_MESSAGE = "Weekly plan generated successfully."


class PlanGenerationError(StorefrontError):
    """The weekly plan could not be built. `str(e)` is user-facing."""


class PlanRequest(BaseModel):
    """Inputs of the personalized plan form."""
    calories_per_day: int = Field(2000, ge=1000)
    meals_per_day: int = Field(3, ge=1, le=10)
    dietary_preferences: str = Field("No restrictions", min_length=1)


def category_for_preference(preference: str) -> str:
    """
    Map free-text dietary preferences to a catalog category.

    "vegan" -> Vegan, "vegetar..." -> Vegetarian, anything else -> Chicken.
    Matching is case-insensitive and by substring, so Spanish "vegano" and
    "vegetariano" map as well.
    """
    text = preference.lower()
    if "vegan" in text:
        return "Vegan"
    if "vegetar" in text:
        return "Vegetarian"
    return DEFAULT_CATEGORY


def assign_week(recipes: Sequence[Recipe]) -> List[PlanDay]:
    """
    Assign recipes to Monday..Sunday round-robin (day i gets recipe i mod n).

    Raises:
        PlanGenerationError: If fewer than seven recipes are given.
    """
    if len(recipes) < len(DAYS_OF_WEEK):
        raise PlanGenerationError(NOT_ENOUGH_RECIPES_MESSAGE)
    return [
        PlanDay(day=day, recipe=recipes[i % len(recipes)])
        for i, day in enumerate(DAYS_OF_WEEK)
    ]


def generate_weekly_plan(catalog: RecipeCatalog, request: PlanRequest) -> WeeklyPlan:
    """
    Build a weekly plan for the given preferences.

    Args:
        catalog: Recipe catalog facade
        request: Validated form inputs

    Returns:
        WeeklyPlan with seven days.

    Raises:
        PlanGenerationError: When the catalog request fails or returns fewer
                             than seven recipes.
    """
    category = category_for_preference(request.dietary_preferences)
    result = catalog.by_category(category)
    if not result.ok:
        logger.warning("Plan generation failed for category %s: %s", category, result.error)
        raise PlanGenerationError(GENERATION_FAILED_MESSAGE) from result.error

    recipes = result.value or []
    days = assign_week(recipes)
    logger.info("Generated weekly plan from %d %s recipes", len(recipes), category)
    return WeeklyPlan(category=category, days=days)
