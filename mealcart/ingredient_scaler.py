"""Serving-size scaling for ingredient lists, recipes and meals."""

import math
from typing import List

from mealcart.ingredient_formatter import format_ingredient
from mealcart.ingredient_parser import parse_ingredient

# Servings assumed for a recipe that does not state its own
DEFAULT_SERVINGS = 4


def serving_ratio(target_servings, current_servings) -> float:
    """Ratio that takes a recipe from current_servings to target_servings.

    Raises:
        ValueError: If either serving count is not a positive number.
    """
    for name, value in (("target", target_servings), ("current", current_servings)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Invalid {name} servings: {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"Servings must be positive, got {name}={value}")
    return target_servings / current_servings


def scale_ingredients(ingredients: List[str], ratio: float) -> List[str]:
    """Multiply every parseable quantity by ratio.

    Lines without a recognizable quantity ("salt to taste") are returned
    unchanged, as are lines whose scaled amount would overflow.

    Raises:
        ValueError: If ratio is not a finite positive number.
    """
    if not math.isfinite(ratio) or ratio <= 0:
        raise ValueError(f"Scaling ratio must be positive, got {ratio}")

    scaled = []
    for line in ingredients:
        parsed = parse_ingredient(line)
        result = parsed.scaled(ratio) if parsed is not None else None
        if result is None or not math.isfinite(result.amount):
            scaled.append(line)
        else:
            scaled.append(format_ingredient(result))
    return scaled


def recipe_servings(recipe: dict) -> float:
    """Current serving count of a recipe dict (DEFAULT_SERVINGS when unset)."""
    servings = recipe.get('current_servings')
    if isinstance(servings, bool) or not isinstance(servings, (int, float)):
        return DEFAULT_SERVINGS
    if not math.isfinite(servings) or servings <= 0:
        return DEFAULT_SERVINGS
    return servings


def scale_recipe(recipe: dict, servings) -> dict:
    """Return a copy of recipe with ingredients scaled to servings.

    The ratio is taken against the recipe's own current servings, and the
    copy records the new count under 'current_servings'.

    Raises:
        ValueError: If servings is not positive or ingredients is not a list.
    """
    ingredients = recipe.get('ingredients') or []
    if not isinstance(ingredients, list):
        raise ValueError(f"Recipe ingredients must be a list: {recipe.get('title', '')!r}")

    ratio = serving_ratio(servings, recipe_servings(recipe))

    scaled = dict(recipe)
    scaled['ingredients'] = scale_ingredients(ingredients, ratio)
    scaled['current_servings'] = servings
    return scaled


def scale_meal(recipes: List[dict], servings) -> List[dict]:
    """Scale every recipe in a meal to the same serving count.

    Each recipe is scaled against its own current servings, not the meal's.
    """
    return [scale_recipe(recipe, servings) for recipe in recipes]
