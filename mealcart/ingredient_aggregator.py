"""Ingredient aggregation logic for shopping list generation.

Combines like ingredient lines across recipes. Lines are grouped on their
canonical (unit, item) pair and amounts within a group are summed; lines
the parser rejects are kept as opaque text and only merge with exact
(case-insensitive) duplicates.
"""

import math
from typing import Dict, List, Tuple

from mealcart.ingredient_formatter import format_ingredient
from mealcart.ingredient_parser import ParsedIngredient, parse_ingredient


def group_key(parsed: ParsedIngredient) -> str:
    """Consolidation key for a parsed line, e.g. "cups-flour" or "-eggs"."""
    return f"{parsed.unit}-{parsed.item}"


def group_ingredients(ingredients: List[str]) -> Tuple[Dict[str, List[ParsedIngredient]], Dict[str, str]]:
    """Group ingredient lines for consolidation.

    Each key normally holds a single record with the summed amount. A line
    whose addition would overflow the running total starts a new record
    under the same key instead.

    Returns:
        Tuple of (parsed records keyed by group_key, unparsed lines keyed
        by their lowercased text)
    """
    groups: Dict[str, List[ParsedIngredient]] = {}
    unparsed: Dict[str, str] = {}

    for line in ingredients:
        if not line or not line.strip():
            continue

        parsed = parse_ingredient(line)
        if parsed is None:
            text = line.strip().lower()
            unparsed.setdefault(text, text)
            continue

        records = groups.setdefault(group_key(parsed), [])
        if records and math.isfinite(records[-1].amount + parsed.amount):
            last = records[-1]
            records[-1] = ParsedIngredient(
                amount=last.amount + parsed.amount,
                unit=last.unit,
                item=last.item,
            )
        else:
            records.append(parsed)

    return groups, unparsed


def consolidate_ingredients(ingredients: List[str]) -> List[str]:
    """Merge ingredient lines into a sorted, deduplicated list.

    Example:
        ["1 cup flour", "2 cups flour", "1 tsp salt"] -> ["1 tsp salt", "3 cups flour"]
    """
    groups, unparsed = group_ingredients(ingredients)

    results = [format_ingredient(parsed) for records in groups.values() for parsed in records]
    results.extend(unparsed.values())
    return sorted(results)
