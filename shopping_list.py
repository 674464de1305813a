#!/usr/bin/env python3
"""Generate a consolidated shopping list from recipe files.

Reads ingredient lines from recipe files, optionally scales every recipe
to a serving count, merges like ingredients and prints or saves the list.

Usage:
    python shopping_list.py pasta.json salad.txt              # Print list
    python shopping_list.py meal.json --servings 6            # Scale first
    python shopping_list.py meal.json --output list.txt       # Save plain text
    python shopping_list.py meal.json --save "Sunday Dinner"  # Save markdown checklist
    python shopping_list.py meal.json --report                # Log unparsed lines

Text files hold one ingredient per line; JSON files hold a recipe, a list
of recipes, or {"recipes": [...]}.
"""

import argparse
import logging
import math
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from mealcart.failure_logger import (
    REPORTS_DIR_NAME,
    cleanup_old_reports,
    collect_unparsed,
    log_unparsed,
)
from mealcart.ingredient_scaler import scale_meal
from mealcart.shopping_list_generator import (
    collect_meal_ingredients,
    generate_shopping_list,
    load_recipes,
    save_shopping_list,
)


def positive_number(value: str) -> float:
    """argparse type for serving counts."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value}")
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return int(number) if number == int(number) else number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate shopping list from recipe files")
    parser.add_argument('files', nargs='+', type=Path, help='Recipe files (.json or one ingredient per line)')
    parser.add_argument('--servings', type=positive_number, help='Scale every recipe to this many servings')
    parser.add_argument('--output', type=Path, help='Write the list to a plain text file')
    parser.add_argument('--save', metavar='TITLE', help='Save as a markdown checklist under this title')
    parser.add_argument('--report', action='store_true', help='Write a JSON report of unparsed lines')
    return parser


def main(argv=None):
    load_dotenv()
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'WARNING').upper(),
        format='%(levelname)s %(name)s: %(message)s',
    )

    args = build_parser().parse_args(argv)

    recipes = []
    for path in args.files:
        try:
            recipes.extend(load_recipes(path))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    print(f"Loaded {len(recipes)} recipes")

    if args.servings:
        try:
            recipes = scale_meal(recipes, args.servings)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Scaled to {args.servings} servings")

    result = generate_shopping_list(recipes)
    for warning in result.get('warnings', []):
        print(f"Warning: {warning}", file=sys.stderr)

    if not result['success']:
        print(f"Error: {result['error']}", file=sys.stderr)
        sys.exit(1)

    items = result['items']
    print(f"Aggregated to {len(items)} items")

    if args.report:
        lines, _, _ = collect_meal_ingredients(recipes)
        unparsed = collect_unparsed(lines)
        if unparsed:
            reports_root = Path(os.getenv('MEALCART_REPORTS_PATH', Path(__file__).parent))
            removed = cleanup_old_reports(reports_root / REPORTS_DIR_NAME)
            if removed:
                print(f"Removed {removed} old reports")
            report = log_unparsed(unparsed, len(lines), project_root=reports_root)
            print(f"Logged {len(unparsed)} unparsed lines to {report}")

    if args.save:
        lists_path = Path(os.getenv('MEALCART_SHOPPING_LISTS_PATH', 'Shopping Lists'))
        saved = save_shopping_list(lists_path, args.save, items, recipes=result['recipes'])
        print(f"Saved {saved['item_count']} items to {saved['file']}")
        return

    if args.output:
        args.output.write_text('\n'.join(items) + '\n', encoding='utf-8')
        print(f"Saved to {args.output}")
        return

    print("\nShopping List:")
    for item in items:
        print(f"  - {item}")


if __name__ == "__main__":
    main()
