#!/usr/bin/env python3
"""JSON API for ingredient parsing, scaling and shopping list generation."""

from flask import Flask, request, jsonify
import logging
import math
import os
import threading
import time
from pathlib import Path
from dotenv import load_dotenv

from mealcart.ingredient_aggregator import consolidate_ingredients
from mealcart.ingredient_parser import parse_ingredient
from mealcart.ingredient_scaler import scale_ingredients, scale_meal, scale_recipe, serving_ratio
from mealcart.response_cache import CACHE_DURATION, ResponseCache
from mealcart.shopping_list_generator import (
    add_to_shopping_list,
    generate_shopping_list,
    save_shopping_list,
)

load_dotenv()

SHOPPING_LISTS_PATH = Path(os.getenv('MEALCART_SHOPPING_LISTS_PATH', 'Shopping Lists'))
CACHE_TTL = float(os.getenv('MEALCART_CACHE_TTL', CACHE_DURATION))
CACHE_SWEEP_INTERVAL = 60  # seconds between expired-entry sweeps

logger = logging.getLogger(__name__)

app = Flask(__name__)

_response_cache = ResponseCache(ttl=CACHE_TTL)
_cache_lock = threading.Lock()
_last_sweep = {"timestamp": time.monotonic()}


def _error(message: str, status: int = 400):
    return jsonify({'success': False, 'error': message}), status


def _json_body() -> dict:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _string_list(data: dict, key: str) -> list[str]:
    """Fetch a list of strings from a request body.

    Raises:
        ValueError: If the key is missing or not a list of strings.
    """
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of strings")
    return value


def _number(data: dict, key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number")
    if not math.isfinite(value):
        raise ValueError(f"'{key}' must be finite")
    return value


def _recipe_list(data: dict) -> list[dict]:
    recipes = data.get('recipes')
    if not isinstance(recipes, list) or not all(isinstance(r, dict) for r in recipes):
        raise ValueError("'recipes' must be a list of recipe objects")
    return recipes


@app.before_request
def sweep_response_cache():
    """Drop expired cache entries at most once per CACHE_SWEEP_INTERVAL."""
    now = time.monotonic()
    with _cache_lock:
        if now - _last_sweep["timestamp"] < CACHE_SWEEP_INTERVAL:
            return
        _last_sweep["timestamp"] = now
        removed = _response_cache.sweep()
    if removed:
        logger.debug("Swept %d expired cache entries", removed)


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({'status': 'ok'})


@app.route('/api/ingredients/parse', methods=['POST'])
def parse_endpoint():
    """Parse ingredient lines into amount/unit/item records."""
    data = _json_body()
    try:
        lines = _string_list(data, 'ingredients')
    except ValueError as e:
        return _error(str(e))

    results = []
    for line in lines:
        parsed = parse_ingredient(line)
        results.append({
            'line': line,
            'parsed': parsed.to_dict() if parsed else None,
        })

    return jsonify({'success': True, 'results': results})


@app.route('/api/ingredients/scale', methods=['POST'])
def scale_endpoint():
    """Scale ingredient lines by 'ratio', or from 'current_servings' to 'servings'."""
    data = _json_body()
    try:
        lines = _string_list(data, 'ingredients')
        if 'ratio' in data:
            ratio = _number(data, 'ratio')
        else:
            ratio = serving_ratio(_number(data, 'servings'), _number(data, 'current_servings'))
        scaled = scale_ingredients(lines, ratio)
    except ValueError as e:
        return _error(str(e))

    return jsonify({'success': True, 'ratio': ratio, 'ingredients': scaled})


@app.route('/api/ingredients/consolidate', methods=['POST'])
def consolidate_endpoint():
    """Merge like ingredient lines into a sorted list."""
    data = _json_body()
    try:
        lines = _string_list(data, 'ingredients')
    except ValueError as e:
        return _error(str(e))

    key = ('consolidate', tuple(lines))
    with _cache_lock:
        items = _response_cache.get(key)
    if items is None:
        items = consolidate_ingredients(lines)
        with _cache_lock:
            _response_cache.set(key, items)

    return jsonify({'success': True, 'items': items})


@app.route('/api/recipe/scale', methods=['POST'])
def scale_recipe_endpoint():
    """Scale one recipe to a new serving count."""
    data = _json_body()
    recipe = data.get('recipe')
    if not isinstance(recipe, dict):
        return _error("'recipe' must be a recipe object")

    try:
        scaled = scale_recipe(recipe, _number(data, 'servings'))
    except ValueError as e:
        return _error(str(e))

    return jsonify({'success': True, 'recipe': scaled})


@app.route('/api/meal/scale', methods=['POST'])
def scale_meal_endpoint():
    """Scale every recipe of a meal to the same serving count."""
    data = _json_body()
    try:
        recipes = scale_meal(_recipe_list(data), _number(data, 'servings'))
    except ValueError as e:
        return _error(str(e))

    return jsonify({'success': True, 'servings': data['servings'], 'recipes': recipes})


@app.route('/api/shopping-list', methods=['POST'])
def shopping_list_endpoint():
    """Generate a shopping list from a meal's recipes.

    With a 'title', the list is also saved as a markdown checklist,
    merging into an existing list of the same title.
    """
    data = _json_body()
    try:
        recipes = _recipe_list(data)
    except ValueError as e:
        return _error(str(e))

    result = generate_shopping_list(recipes)
    if not result['success']:
        return jsonify(result), 400

    title = data.get('title')
    if title:
        saved = save_shopping_list(SHOPPING_LISTS_PATH, str(title), result['items'], recipes=result['recipes'])
        result['file'] = saved['file']
        logger.info("Saved shopping list %s (%d items)", saved['file'], saved['item_count'])

    return jsonify(result)


@app.route('/api/shopping-list/add', methods=['POST'])
def add_to_shopping_list_endpoint():
    """Add ingredient lines to an existing list, re-consolidating both."""
    data = _json_body()
    try:
        existing = _string_list(data, 'items')
        new_lines = _string_list(data, 'ingredients')
    except ValueError as e:
        return _error(str(e))

    items = add_to_shopping_list(existing, new_lines)
    return jsonify({
        'success': True,
        'items': items,
        'item_count': len(items),
    })


if __name__ == '__main__':
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
    )
    port = int(os.getenv('PORT', 5000))
    app.run(host=os.getenv('HOST', '0.0.0.0'), port=port, debug=False)
