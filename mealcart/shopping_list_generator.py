"""Shopping list generation from meals.

Glue between recipe dicts, the consolidation engine and saved Markdown
shopping lists. Shared by the CLI (shopping_list.py) and the API server.
"""

import json
import logging
import re
from pathlib import Path

from mealcart.ingredient_aggregator import consolidate_ingredients
from templates.shopping_list_template import generate_filename, generate_shopping_list_markdown

logger = logging.getLogger(__name__)


def recipe_title(recipe: dict) -> str:
    return str(recipe.get('title') or recipe.get('id') or 'Untitled recipe')


def collect_meal_ingredients(recipes: list[dict]) -> tuple[list[str], list[str], list[str]]:
    """Gather the union of ingredient lines across a meal's recipes.

    Returns:
        Tuple of (ingredient lines, titles of recipes that contributed,
        warning messages)
    """
    all_ingredients = []
    loaded_recipes = []
    warnings = []

    for recipe in recipes:
        if not isinstance(recipe, dict):
            warnings.append(f"Skipped malformed recipe entry: {recipe!r}")
            continue

        title = recipe_title(recipe)
        ingredients = recipe.get('ingredients')
        if not isinstance(ingredients, list):
            warnings.append(f"No ingredients list in: {title}")
            continue

        lines = [line for line in ingredients if isinstance(line, str) and line.strip()]
        if not lines:
            warnings.append(f"No ingredients in: {title}")
            continue

        all_ingredients.extend(lines)
        loaded_recipes.append(title)

    for warning in warnings:
        logger.warning(warning)

    return all_ingredients, loaded_recipes, warnings


def generate_shopping_list(recipes: list[dict]) -> dict:
    """Generate a consolidated shopping list from a meal's recipes.

    Args:
        recipes: Recipe dicts, each with an 'ingredients' list of strings

    Returns:
        Dict with keys:
            - success: bool
            - items: sorted list of consolidated ingredient strings
            - recipes: list of recipe titles used
            - warnings: list of warning messages
            - error: error message (if success=False)
    """
    if not recipes:
        return {"success": False, "error": "No recipes in meal"}

    all_ingredients, loaded_recipes, warnings = collect_meal_ingredients(recipes)

    if not all_ingredients:
        return {
            "success": False,
            "error": "No ingredients found in any recipes",
            "warnings": warnings
        }

    items = consolidate_ingredients(all_ingredients)
    logger.info("Consolidated %d lines from %d recipes into %d items",
                len(all_ingredients), len(loaded_recipes), len(items))

    return {
        "success": True,
        "items": items,
        "recipes": loaded_recipes,
        "warnings": warnings
    }


def add_to_shopping_list(existing: list[str], ingredients: list[str]) -> list[str]:
    """Add ingredient lines to a shopping list without near-duplicates.

    The existing entries and the new lines are consolidated together, so
    "2 eggs" added to a list holding "1 egg" becomes "3 eggs".
    """
    return consolidate_ingredients(list(existing) + list(ingredients))


def load_recipes(path: Path) -> list[dict]:
    """Load recipes from a file.

    - .json: a recipe dict, a list of recipe dicts, or {"recipes": [...]}
    - anything else: one ingredient per line, treated as a single recipe
      titled after the file

    Raises:
        ValueError: If the file is missing or holds no usable recipes.
    """
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Recipe file not found: {path}")

    content = path.read_text(encoding='utf-8')

    if path.suffix.lower() != '.json':
        lines = [line.strip() for line in content.splitlines()]
        return [{"title": path.stem, "ingredients": [line for line in lines if line]}]

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path.name}: {e}") from e

    if isinstance(data, dict) and 'recipes' in data:
        data = data['recipes']
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError(f"Expected a recipe or a list of recipes in {path.name}")

    return data


def parse_shopping_list_markdown(content: str) -> dict:
    """Extract checklist entries from shopping list markdown.

    Returns:
        Dict with keys:
            - items: list of unchecked item strings
            - checked: list of checked item strings
            - skipped: count of checked items
    """
    unchecked = []
    checked = []

    for line in content.split('\n'):
        # Match unchecked: - [ ] item
        if re.match(r'^- \[ \] ', line):
            item = line[6:].strip()  # Remove "- [ ] " prefix
            if item:
                unchecked.append(item)
        # Match checked: - [x] item
        elif re.match(r'^- \[x\] ', line, re.IGNORECASE):
            item = line[6:].strip()
            if item:
                checked.append(item)

    return {
        "items": unchecked,
        "checked": checked,
        "skipped": len(checked)
    }


def parse_shopping_list_file(filepath: Path) -> dict:
    """Parse a saved shopping list file.

    Returns:
        Dict with success flag plus the keys of parse_shopping_list_markdown,
        or an error message when the file does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return {"success": False, "error": f"Shopping list not found: {filepath.name}"}

    result = parse_shopping_list_markdown(filepath.read_text(encoding='utf-8'))
    result["success"] = True
    return result


def save_shopping_list(
    directory: Path,
    title: str,
    items: list[str],
    recipes: list[str] = (),
) -> dict:
    """Write a shopping list file, merging into an existing one.

    Unchecked entries already in the file are consolidated with the new
    items; checked entries are kept as they are.

    Returns:
        Dict with the written path and item counts.
    """
    directory = Path(directory)
    filepath = directory / generate_filename(title)

    existing = parse_shopping_list_file(filepath)
    if existing['success']:
        merged = add_to_shopping_list(existing['items'], items)
        checked = existing['checked']
    else:
        merged = consolidate_ingredients(items)
        checked = []

    directory.mkdir(parents=True, exist_ok=True)
    markdown = generate_shopping_list_markdown(title, merged, checked=checked, recipes=list(recipes))
    filepath.write_text(markdown, encoding='utf-8')

    return {
        "success": True,
        "file": str(filepath),
        "item_count": len(merged),
        "checked_count": len(checked),
    }
