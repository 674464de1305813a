"""Tests for ingredient consolidation"""

import pytest
from mealcart.ingredient_aggregator import consolidate_ingredients, group_ingredients, group_key
from mealcart.ingredient_parser import ParsedIngredient


class TestConsolidateIngredients:
    """Tests for merging ingredient lines"""

    def test_sums_same_unit_and_item(self):
        result = consolidate_ingredients(["1 cup flour", "2 cups flour", "1 tsp salt"])
        assert result == ["1 tsp salt", "3 cups flour"]

    def test_singular_and_plural_merge(self):
        assert consolidate_ingredients(["1 egg", "2 eggs"]) == ["3 eggs"]

    def test_unit_synonyms_merge(self):
        assert consolidate_ingredients(["1 tablespoon olive oil", "2 tbsp olive oil"]) == ["3 tbsp olive oil"]

    def test_different_units_stay_apart(self):
        """No conversion between units"""
        assert consolidate_ingredients(["1 cup milk", "100 ml milk"]) == ["1 cup milk", "100 ml milk"]

    def test_fractions_summed(self):
        assert consolidate_ingredients(["1/2 cup sugar", "1/4 cup sugar"]) == ["0.8 cups sugar"]

    def test_unparsable_duplicates_collapse(self):
        assert consolidate_ingredients(["a pinch of love", "a pinch of love"]) == ["a pinch of love"]

    def test_unparsable_case_insensitive(self):
        assert consolidate_ingredients(["Salt to taste", "salt to taste"]) == ["salt to taste"]

    def test_unparsable_wording_differs(self):
        result = consolidate_ingredients(["a pinch of love", "a dash of love"])
        assert result == ["a dash of love", "a pinch of love"]

    def test_unparsable_never_sums_with_parsed(self):
        assert consolidate_ingredients(["salt to taste", "1 tsp salt"]) == ["1 tsp salt", "salt to taste"]

    def test_blank_lines_skipped(self):
        assert consolidate_ingredients(["", "  ", "2 eggs"]) == ["2 eggs"]

    def test_empty(self):
        assert consolidate_ingredients([]) == []

    def test_output_sorted(self):
        result = consolidate_ingredients(["2 eggs", "1 cup rice", "salt to taste", "3 carrots"])
        assert result == sorted(result)

    @pytest.mark.parametrize("lines", [
        ["1 cup flour", "2 cups flour", "1 tsp salt"],
        ["1 1/2 cups flour", "1/3 cup milk", "1/3 cup milk", "1/3 cup milk"],
        ["1 large onion", "2 large onions", "1 egg", "3 lemons"],
        ["salt to taste", "a pinch of love", "A pinch of love", "2 tbsp. olive oil"],
        ["0.25 tsp pepper", "0.3 tsp pepper", "1 clove of garlic", "2 cloves of garlic"],
    ])
    def test_idempotent(self, lines):
        """Consolidating twice changes nothing"""
        once = consolidate_ingredients(lines)
        assert consolidate_ingredients(once) == once


class TestGrouping:
    def test_group_key(self):
        assert group_key(ParsedIngredient(amount=3, unit="cups", item="flour")) == "cups-flour"
        assert group_key(ParsedIngredient(amount=2, unit="", item="eggs")) == "-eggs"

    def test_groups_keep_first_record(self):
        groups, unparsed = group_ingredients(["1 egg", "2 eggs", "salt to taste"])
        assert groups == {"-eggs": [ParsedIngredient(amount=3.0, unit="", item="eggs")]}
        assert unparsed == {"salt to taste": "salt to taste"}

    def test_overflowing_sum_starts_new_record(self):
        huge = "1" + "0" * 308 + " g sugar"
        groups, _ = group_ingredients([huge, huge, "5 g sugar"])
        assert [record.amount for record in groups["g-sugar"]] == [1e308, 1e308]


class TestLargeAmounts:
    """Totals that would overflow a float"""

    HUGE = "1" + "0" * 308 + " g sugar"

    def test_overflow_keeps_lines_apart(self):
        assert consolidate_ingredients([self.HUGE, self.HUGE]) == [self.HUGE, self.HUGE]

    def test_overflow_is_stable(self):
        once = consolidate_ingredients([self.HUGE, self.HUGE, self.HUGE, "2 eggs"])
        assert len(once) == 4
        assert consolidate_ingredients(once) == once


@pytest.mark.parametrize("word", [
    "cheese", "mousse", "horse radish", "glass", "octopus", "iris",
    "berry", "turkey", "key", "peach", "dish", "box", "grape", "lime",
    "kiwi", "tofu", "quiche", "pie", "leaf", "tomato", "series",
])
@pytest.mark.parametrize("template", ["1 {}", "2 {}", "1 whole {}", "3 large {}"])
def test_idempotent_across_word_endings(word, template):
    """Singular and plural spellings consolidate to a stable list"""
    lines = [template.format(word), "2 " + word]
    once = consolidate_ingredients(lines)
    assert consolidate_ingredients(once) == once
    assert consolidate_ingredients(once + lines) == consolidate_ingredients(lines + lines)
