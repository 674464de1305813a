"""Ingredient string parser - splits amount, unit, and item"""

import math
import re
from dataclasses import asdict, dataclass, replace
from typing import Optional

from mealcart.ingredient_lexicon import (
    UNIT_WORDS,
    canonical_unit,
    irregular_plural,
    is_count_unit,
    is_known_plural,
    regular_plural,
)

_NUMBER = r'\d*\.?\d+'

MIXED_FRACTION_RE = re.compile(rf'(\d+)\s+({_NUMBER})/({_NUMBER})')
FRACTION_RE = re.compile(rf'({_NUMBER})/({_NUMBER})')

INGREDIENT_RE = re.compile(
    rf'^({_NUMBER})\s*(?:({"|".join(re.escape(u) for u in UNIT_WORDS)})\b)?\s*(.+)$',
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedIngredient:
    """One ingredient line as amount, canonical unit and normalized item."""
    amount: float
    unit: str
    item: str

    def scaled(self, ratio: float) -> "ParsedIngredient":
        return replace(self, amount=self.amount * ratio)

    def to_dict(self) -> dict:
        return asdict(self)


def _decimal_text(value: float) -> str:
    """Plain decimal text for a number (never scientific notation)."""
    return f"{value:.10f}".rstrip('0').rstrip('.')


def replace_fractions(text: str) -> Optional[str]:
    """Replace vulgar fractions in text with decimals.

    - Mixed fractions -> decimals (1 1/2 -> 1.5)
    - Fractions -> decimals (1/2 -> 0.5)

    Returns:
        The rewritten text, or None if any fraction has a zero denominator.
    """
    for match in FRACTION_RE.finditer(text):
        if float(match.group(2)) == 0:
            return None

    text = MIXED_FRACTION_RE.sub(
        lambda m: _decimal_text(float(m.group(1)) + float(m.group(2)) / float(m.group(3))),
        text,
    )
    return FRACTION_RE.sub(
        lambda m: _decimal_text(float(m.group(1)) / float(m.group(2))),
        text,
    )


def normalize_unit(unit: str) -> str:
    """Normalize a unit string to its canonical abbreviation.

    Args:
        unit: A unit string (e.g., "tablespoons", "Cup", "lbs")

    Returns:
        Canonical unit (e.g., "tbsp", "cups", "lb").
        Unknown units pass through lowercased.
        Empty string returns empty string.
    """
    if not unit:
        return ""
    return canonical_unit(unit) or unit.strip().lower()


def _pluralize_phrase(phrase: str) -> str:
    plural = irregular_plural(phrase)
    if plural:
        return plural
    if is_known_plural(phrase):
        return phrase

    prefix, _, last = phrase.rpartition(" ")
    prefix = prefix + " " if prefix else ""

    plural = irregular_plural(last)
    if plural:
        return prefix + plural
    if is_known_plural(last):
        return phrase
    return prefix + regular_plural(last)


def pluralize_item(item: str) -> str:
    """Normalize an item name to lowercase plural form.

    The irregular table is checked for the whole name, then for its last
    word; otherwise suffix rules apply (berry -> berries, peach -> peaches,
    carrot -> carrots). Names already ending in a plural "s" are kept.
    Anything after the first comma ("onion, diced") is left untouched.
    """
    item = item.strip().lower()
    if not item:
        return item

    head, sep, tail = item.partition(",")
    head = head.strip()
    if not head:
        return item
    return _pluralize_phrase(head) + sep + tail


def _clean_item(item: str) -> str:
    """Lowercase, strip whitespace and stray punctuation, drop a leading "of"."""
    item = item.lower().strip().strip(',.;:').strip()
    if item.startswith("of "):
        item = item[3:].strip()
    return item


def parse_ingredient(text: str) -> Optional[ParsedIngredient]:
    """
    Parse an ingredient string into amount, unit, and item.

    Handles "2 cups flour", "1/2 cup sugar", "1 1/2 tbsp olive oil" and
    count-style lines like "2 eggs" (unit is "").

    Returns:
        ParsedIngredient, or None when the line has no leading
        non-negative quantity or no item text.
    """
    if not text or not text.strip():
        return None

    text = replace_fractions(text.strip())
    if text is None:
        return None

    match = INGREDIENT_RE.match(text)
    if not match:
        return None

    amount_str, unit_word, item_text = match.groups()
    amount = float(amount_str)
    if not math.isfinite(amount) or amount < 0:
        return None

    unit = normalize_unit(unit_word) if unit_word else ""
    item = _clean_item(item_text)
    if not item:
        return None

    if is_count_unit(unit):
        item = pluralize_item(item)

    return ParsedIngredient(amount=amount, unit=unit, item=item)
