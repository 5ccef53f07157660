"""
Tests for the recipe catalog facade and recipe parsing.

These tests verify that:
- Each lookup hits the right catalog endpoint
- "No results" and "request failed" stay distinguishable
- Ingredients are parsed from the numbered fields
"""

import pytest
import requests

from storefront.errors import ApiError, NetworkError
from storefront.models import MAX_INGREDIENT_FIELDS, Recipe, parse_ingredients
from storefront.recipes import RecipeCatalog


@pytest.fixture
def catalog(catalog_client):
    return RecipeCatalog(catalog_client)


class TestRecipeCatalog:
    """Test RecipeCatalog lookups."""

    def test_search(self, catalog, http, make_response, meal_record):
        http.request.return_value = make_response(200, {"meals": [meal_record]})

        result = catalog.search("chicken")

        assert result.ok
        assert [r.name for r in result.value] == ["Teriyaki Chicken Casserole"]
        args, kwargs = http.request.call_args
        assert args == ("GET", "http://catalog.test/search.php")
        assert kwargs["params"] == {"s": "chicken"}

    def test_by_category(self, catalog, http, make_response):
        http.request.return_value = make_response(200, {"meals": [
            {"idMeal": "1", "strMeal": "Fish pie", "strMealThumb": "https://img.test/1.jpg"},
        ]})

        result = catalog.by_category("Seafood")

        assert result.value[0].id == "1"
        assert http.request.call_args.kwargs["params"] == {"c": "Seafood"}

    def test_by_ingredient(self, catalog, http, make_response):
        http.request.return_value = make_response(200, {"meals": []})

        catalog.by_ingredient("salmon")

        args, kwargs = http.request.call_args
        assert args[1] == "http://catalog.test/filter.php"
        assert kwargs["params"] == {"i": "salmon"}

    def test_null_meals_is_empty_success(self, catalog, http, make_response):
        http.request.return_value = make_response(200, {"meals": None})

        result = catalog.search("zzz")

        assert result.ok
        assert result.value == []

    @pytest.mark.parametrize("meals", ["Arrabiata", {"idMeal": "1", "strMeal": "Soup"}, [1, 2]])
    def test_malformed_meals_is_a_failed_result(self, catalog, http, make_response, meals):
        http.request.return_value = make_response(200, {"meals": meals})

        result = catalog.search("a")

        assert not result.ok
        assert result.value is None
        assert result.unwrap_or([]) == []

    def test_body_without_meals_key_is_empty_success(self, catalog, http, make_response):
        http.request.return_value = make_response(200, ["unexpected"])

        result = catalog.search("a")

        assert result.ok
        assert result.value == []

    def test_network_failure_is_a_failed_result(self, catalog, http):
        http.request.side_effect = requests.exceptions.ConnectionError()

        result = catalog.search("chicken")

        assert not result.ok
        assert isinstance(result.error, NetworkError)
        assert result.unwrap_or([]) == []

    def test_server_error_is_a_failed_result(self, catalog, http, make_response):
        http.request.return_value = make_response(429, {"error": "slow down"})

        result = catalog.by_category("Dessert")

        assert not result.ok
        with pytest.raises(ApiError):
            result.unwrap()

    def test_by_id_found(self, catalog, http, make_response, meal_record):
        http.request.return_value = make_response(200, {"meals": [meal_record]})

        result = catalog.by_id("52772")

        assert result.value.id == "52772"
        assert http.request.call_args.kwargs["params"] == {"i": "52772"}

    def test_by_id_not_found(self, catalog, http, make_response):
        http.request.return_value = make_response(200, {"meals": None})

        result = catalog.by_id("0")

        assert result.ok
        assert result.value is None

    def test_by_id_failure(self, catalog, http):
        http.request.side_effect = requests.exceptions.Timeout()
        assert not catalog.by_id("1").ok


class TestRecipeParsing:
    """Test Recipe model and ingredient extraction."""

    def test_catalog_field_names(self, meal_record):
        recipe = Recipe(**meal_record)
        assert recipe.id == "52772"
        assert recipe.category == "Chicken"
        assert recipe.raw()["strIngredient1"] == "soy sauce"

    def test_numeric_id_is_coerced(self):
        assert Recipe(idMeal=52772, strMeal="Soup").id == "52772"

    def test_ingredients_skip_blank_names(self, meal_record):
        ingredients = Recipe(**meal_record).ingredients()
        assert [i.name for i in ingredients] == ["soy sauce", "water", "brown sugar"]
        assert ingredients[0].measure == "3/4 cup"
        assert str(ingredients[0]) == "soy sauce: 3/4 cup"

    def test_missing_measure(self):
        ingredients = parse_ingredients({"strIngredient1": "salt"})
        assert ingredients[0].measure == ""
        assert str(ingredients[0]) == "salt"

    def test_stops_at_twenty(self):
        record = {f"strIngredient{i}": f"item {i}" for i in range(1, 25)}
        ingredients = parse_ingredients(record)
        assert len(ingredients) == MAX_INGREDIENT_FIELDS
        assert ingredients[-1].name == "item 20"
