"""
Shared fixtures for the storefront tests.

The HTTP layer is faked by handing ApiClient a Mock in place of the
requests.Session; responses are real requests.Response objects so status and
JSON handling go through the same code paths as in production.
"""

import json
from unittest.mock import Mock

import jwt
import pytest
import requests

from storefront.api_client import ApiClient
from storefront.storage import LocalStorage

AUTH_URL = "http://auth.test"
CATALOG_URL = "http://catalog.test"
TEST_SECRET = "test-secret"


def _make_response(status_code=200, body=None, url="http://test.local/"):
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.url = url
    return response


@pytest.fixture
def make_response():
    """Factory for requests.Response objects with a JSON body."""
    return _make_response


@pytest.fixture
def http():
    """Stand-in for requests.Session; set .request.return_value or .side_effect."""
    return Mock()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def auth_client(http):
    return ApiClient(AUTH_URL, session=http)


@pytest.fixture
def catalog_client(http):
    return ApiClient(CATALOG_URL, session=http)


@pytest.fixture
def make_token():
    """Build a signed token carrying the given claims."""
    def _make(**claims):
        return jwt.encode(claims, TEST_SECRET, algorithm="HS256")
    return _make


@pytest.fixture
def meal_record():
    """Full catalog record for one recipe."""
    return {
        "idMeal": "52772",
        "strMeal": "Teriyaki Chicken Casserole",
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strMealThumb": "https://img.test/teriyaki.jpg",
        "strInstructions": "Preheat oven to 350 F.",
        "strIngredient1": "soy sauce",
        "strMeasure1": "3/4 cup",
        "strIngredient2": "water",
        "strMeasure2": "1/2 cup",
        "strIngredient3": "brown sugar",
        "strMeasure3": "1/4 cup",
        "strIngredient4": "",
        "strMeasure4": "",
        "strIngredient5": None,
        "strMeasure5": None,
    }
