"""Render parsed ingredients back to display strings."""

from decimal import Context, Decimal, ROUND_HALF_UP

from mealcart.ingredient_lexicon import (
    display_unit,
    irregular_singular,
    is_count_unit,
    regular_singular,
)
from mealcart.ingredient_parser import ParsedIngredient, pluralize_item

_ONE_DECIMAL = Decimal("0.1")

# Enough digits to quantize any finite float
_WIDE_CONTEXT = Context(prec=400)


def round_amount(amount: float) -> Decimal:
    """Round to one decimal place, halves away from zero."""
    return Decimal(str(amount)).quantize(
        _ONE_DECIMAL, rounding=ROUND_HALF_UP, context=_WIDE_CONTEXT
    )


def format_amount(amount: float) -> str:
    """Format an amount for display.

    Whole numbers render without a decimal point ("2"), everything else
    with exactly one decimal digit ("0.5", "1.3").
    """
    rounded = round_amount(amount)
    if rounded == rounded.to_integral_value():
        return str(int(rounded))
    return f"{rounded:.1f}"


def _singularize_phrase(phrase: str) -> str:
    singular = irregular_singular(phrase)
    if singular:
        return singular

    prefix, _, last = phrase.rpartition(" ")
    prefix = prefix + " " if prefix else ""

    singular = irregular_singular(last)
    if singular:
        return prefix + singular
    return prefix + regular_singular(last)


def singularize_item(item: str) -> str:
    """Inverse of pluralize_item: "eggs" -> "egg", "berries" -> "berry".

    A singular that would not pluralize back to the same name is not used;
    the name is returned unchanged so it still parses to the same item.
    """
    head, sep, tail = item.partition(",")
    head = head.strip()
    if not head:
        return item
    singular = _singularize_phrase(head)
    if pluralize_item(singular) != head:
        return item
    return singular + sep + tail


def format_ingredient(parsed: ParsedIngredient) -> str:
    """Format a ParsedIngredient as a display string.

    Examples:
        ParsedIngredient(2, "cups", "flour") -> "2 cups flour"
        ParsedIngredient(1, "", "eggs")      -> "1 egg"
        ParsedIngredient(0.25, "tsp", "salt") -> "0.3 tsp salt"
    """
    rounded = round_amount(parsed.amount)
    item = parsed.item

    if rounded == 1 and is_count_unit(parsed.unit):
        item = singularize_item(item)

    parts = [format_amount(parsed.amount)]
    if parsed.unit:
        parts.append(display_unit(parsed.unit, rounded))
    if item:
        parts.append(item)

    return ' '.join(parts).strip()
