"""Tests for shopping list generator."""

import json

import pytest

from mealcart.shopping_list_generator import (
    add_to_shopping_list,
    collect_meal_ingredients,
    generate_shopping_list,
    load_recipes,
    parse_shopping_list_file,
    parse_shopping_list_markdown,
    save_shopping_list,
)


PANCAKES = {
    "id": "r1",
    "title": "Pancakes",
    "ingredients": ["1 cup flour", "1 egg", "1 cup milk"],
    "current_servings": 2,
}
CREPES = {
    "id": "r2",
    "title": "Crepes",
    "ingredients": ["2 cups flour", "2 eggs", "a pinch of salt"],
}


class TestGenerateShoppingList:
    """Tests for meal shopping list generation"""

    def test_consolidates_across_recipes(self):
        result = generate_shopping_list([PANCAKES, CREPES])
        assert result["success"] is True
        assert result["items"] == ["1 cup milk", "3 cups flour", "3 eggs", "a pinch of salt"]
        assert result["recipes"] == ["Pancakes", "Crepes"]
        assert result["warnings"] == []

    def test_no_recipes(self):
        result = generate_shopping_list([])
        assert result["success"] is False
        assert "No recipes" in result["error"]

    def test_recipe_without_ingredients_warns(self):
        result = generate_shopping_list([PANCAKES, {"title": "Water", "ingredients": []}])
        assert result["success"] is True
        assert result["recipes"] == ["Pancakes"]
        assert any("Water" in w for w in result["warnings"])

    def test_no_ingredients_anywhere(self):
        result = generate_shopping_list([{"title": "Air"}])
        assert result["success"] is False
        assert result["error"] == "No ingredients found in any recipes"
        assert result["warnings"] == ["No ingredients list in: Air"]

    def test_malformed_entry_skipped(self):
        lines, titles, warnings = collect_meal_ingredients(["not a recipe", CREPES])
        assert lines == CREPES["ingredients"]
        assert titles == ["Crepes"]
        assert len(warnings) == 1


class TestAddToShoppingList:
    """Tests for ad-hoc additions"""

    def test_merges_with_existing(self):
        result = add_to_shopping_list(["1 egg", "2 cups flour"], ["2 eggs", "1 tsp salt"])
        assert result == ["1 tsp salt", "2 cups flour", "3 eggs"]

    def test_unparsable_duplicates(self):
        assert add_to_shopping_list(["a pinch of love"], ["A pinch of love"]) == ["a pinch of love"]

    def test_readding_keeps_one_entry(self):
        """Items from an earlier list merge with new lines for the same item"""
        existing = add_to_shopping_list([], ["1 cheese"])
        assert existing == ["1 cheese"]
        assert add_to_shopping_list(existing, ["2 cheeses"]) == ["3 cheeses"]


class TestLoadRecipes:
    """Tests for reading recipe files"""

    def test_text_file(self, tmp_path):
        path = tmp_path / "pasta.txt"
        path.write_text("200 g spaghetti\n\n2 tbsp olive oil\n")
        assert load_recipes(path) == [
            {"title": "pasta", "ingredients": ["200 g spaghetti", "2 tbsp olive oil"]}
        ]

    def test_json_list(self, tmp_path):
        path = tmp_path / "meal.json"
        path.write_text(json.dumps([PANCAKES, CREPES]))
        assert load_recipes(path) == [PANCAKES, CREPES]

    def test_json_wrapped(self, tmp_path):
        path = tmp_path / "meal.json"
        path.write_text(json.dumps({"recipes": [PANCAKES]}))
        assert load_recipes(path) == [PANCAKES]

    def test_json_single_recipe(self, tmp_path):
        path = tmp_path / "pancakes.json"
        path.write_text(json.dumps(PANCAKES))
        assert load_recipes(path) == [PANCAKES]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_recipes(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "number.json"
        path.write_text("42")
        with pytest.raises(ValueError, match="Expected a recipe"):
            load_recipes(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_recipes(tmp_path / "missing.json")


class TestShoppingListFiles:
    """Tests for markdown shopping list files"""

    def test_parse_markdown(self):
        content = (
            "# Shopping List - Test\n\n"
            "## Items\n\n"
            "- [ ] 2 cups flour\n"
            "- [x] 1 tsp salt\n"
            "- [X] 3 eggs\n"
            "- [ ] \n"
        )
        result = parse_shopping_list_markdown(content)
        assert result["items"] == ["2 cups flour"]
        assert result["checked"] == ["1 tsp salt", "3 eggs"]
        assert result["skipped"] == 2

    def test_parse_missing_file(self, tmp_path):
        result = parse_shopping_list_file(tmp_path / "missing.md")
        assert result["success"] is False
        assert "not found" in result["error"]

    def test_save_new_list(self, tmp_path):
        result = save_shopping_list(tmp_path, "Sunday Dinner", ["2 eggs", "1 egg"], recipes=["Pancakes"])
        filepath = tmp_path / "sunday-dinner.md"
        assert result["file"] == str(filepath)
        assert result["item_count"] == 1
        content = filepath.read_text()
        assert "# Shopping List - Sunday Dinner" in content
        assert "- [ ] 3 eggs" in content

    def test_save_merges_existing(self, tmp_path):
        """Unchecked entries are consolidated; checked ones are kept"""
        filepath = tmp_path / "sunday-dinner.md"
        filepath.write_text("## Items\n\n- [ ] 1 egg\n- [x] 1 tsp salt\n")

        result = save_shopping_list(tmp_path, "Sunday Dinner", ["2 eggs", "1 cup milk"])

        parsed = parse_shopping_list_file(filepath)
        assert parsed["items"] == ["1 cup milk", "3 eggs"]
        assert parsed["checked"] == ["1 tsp salt"]
        assert result["checked_count"] == 1
