"""Static lookup tables for ingredient units and irregular item plurals."""

from typing import Optional

# Unit synonym -> canonical abbreviation (keys are lowercase)
UNIT_ABBREVIATIONS = {
    "cup": "cups", "cups": "cups",
    "tablespoon": "tbsp", "tablespoons": "tbsp", "tbsp": "tbsp", "tbs": "tbsp",
    "teaspoon": "tsp", "teaspoons": "tsp", "tsp": "tsp",
    "pound": "lb", "pounds": "lb", "lb": "lb", "lbs": "lb",
    "ounce": "oz", "ounces": "oz", "oz": "oz",
    "gram": "g", "grams": "g", "g": "g",
    "kilogram": "kg", "kilograms": "kg", "kg": "kg",
    "milliliter": "ml", "milliliters": "ml", "ml": "ml",
    "liter": "l", "liters": "l", "l": "l",
    "pinch": "pinch", "pinches": "pinch",
    # Descriptive size words count items rather than measure them
    "whole": "whole", "large": "large", "medium": "medium", "small": "small",
}

# Every word the parser accepts in the unit position
UNIT_WORDS = tuple(sorted(UNIT_ABBREVIATIONS, key=len, reverse=True))

CANONICAL_UNITS = frozenset(UNIT_ABBREVIATIONS.values())

# Canonical units whose item is counted, so the item takes singular/plural agreement
COUNT_UNITS = frozenset({"", "whole", "large", "medium", "small"})

# Word endings that take "es" in the plural
SIBILANT_ENDINGS = ("ch", "sh", "s", "x", "z")

# Singular nouns that already end in "s"
SINGULAR_S_ENDINGS = ("ss", "us", "is")

# Unit spelling when exactly one of it is shown
SINGULAR_UNIT_DISPLAY = {
    "cups": "cup",
}

# Singular -> plural for items the suffix rules get wrong or that need a fixed form
IRREGULAR_PLURALS = {
    "egg": "eggs",
    "clove": "cloves",
    "onion": "onions",
    "tomato": "tomatoes",
    "potato": "potatoes",
    "carrot": "carrots",
    "apple": "apples",
    "banana": "bananas",
    "pepper": "peppers",
    "clove of garlic": "cloves of garlic",
    "garlic clove": "garlic cloves",
    "leaf": "leaves",
    "bay leaf": "bay leaves",
    "loaf": "loaves",
    "half": "halves",
    "knife": "knives",
    "mango": "mangoes",
    "avocado": "avocados",
    "radish": "radishes",
    "cherry": "cherries",
    "berry": "berries",
    "anchovy": "anchovies",
    "cookie": "cookies",
    "lime": "limes",
    "olive": "olives",
    "date": "dates",
    "shallot": "shallots",
    "scallion": "scallions",
    "mushroom": "mushrooms",
    "chive": "chives",
    "tortilla": "tortillas",
    "pie": "pies",
    "kiwi": "kiwis",
    "mousse": "mousses",
    "quiche": "quiches",
}

_SINGULARS = {plural: singular for singular, plural in IRREGULAR_PLURALS.items()}


def canonical_unit(word: str) -> Optional[str]:
    """Return the canonical abbreviation for a unit synonym, or None if unknown.

    Lookup is case-insensitive: "Tablespoons" -> "tbsp", "CUP" -> "cups".
    """
    if not word:
        return None
    return UNIT_ABBREVIATIONS.get(word.strip().lower())


def display_unit(unit: str, amount) -> str:
    """Unit spelling for a rendered amount ("1 cup" but "2 cups")."""
    if amount == 1:
        return SINGULAR_UNIT_DISPLAY.get(unit, unit)
    return unit


def is_count_unit(unit: str) -> bool:
    return unit in COUNT_UNITS


def irregular_plural(word: str) -> Optional[str]:
    """Known plural form of an item word, or None when the suffix rules apply."""
    return IRREGULAR_PLURALS.get(word)


def irregular_singular(word: str) -> Optional[str]:
    """Reverse lookup of IRREGULAR_PLURALS (plural -> singular)."""
    return _SINGULARS.get(word)


def is_known_plural(word: str) -> bool:
    return word in _SINGULARS


def _ends_in_plain_s(word: str) -> bool:
    return word.endswith("s") and not word.endswith(SINGULAR_S_ENDINGS)


def regular_plural(word: str) -> str:
    """Suffix-rule plural of a single word.

    Words already ending in a plain "s" are taken as plural. A candidate the
    singular rule cannot map back to the word is rejected and the word is
    kept, so every stored name reads back to itself ("tofu" stays "tofu").
    """
    if _ends_in_plain_s(word):
        return word
    if word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        candidate = word[:-1] + "ies"
    elif word.endswith(SIBILANT_ENDINGS):
        candidate = word + "es"
    else:
        candidate = word + "s"
    return candidate if regular_singular(candidate) == word else word


def regular_singular(word: str) -> str:
    """Suffix-rule singular of a single word, the inverse of regular_plural.

    "es" is only dropped when the plural rule would have added it: after
    ch/sh/x/z or a stem ending in ss/us/is ("glasses", "peaches"). Otherwise
    a plain trailing "s" goes ("cheeses" -> "cheese").
    """
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    stem = word[:-2]
    if word.endswith("es") and stem.endswith(SIBILANT_ENDINGS) and not _ends_in_plain_s(stem):
        return stem
    if _ends_in_plain_s(word):
        return word[:-1]
    return word
