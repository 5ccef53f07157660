"""
Recipe lookup facade over the third-party recipe catalog.

The catalog is an unauthenticated JSON API with four query shapes:
- GET /search.php?s=<text>      free-text search
- GET /filter.php?c=<category>  category filter
- GET /filter.php?i=<name>      ingredient filter
- GET /lookup.php?i=<id>        single recipe by id

Every response has the shape {"meals": [...] | null}; null means no match.
Filter endpoints return abbreviated records (id, name, thumbnail only), so a
full record must be fetched with by_id() before its ingredients can be read.

Every call returns a FetchResult so that "no results" and "request failed"
stay distinguishable. Availability and rate limits are outside our control;
nothing is retried.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from .api_client import ApiClient
from .errors import StorefrontError
from .models import Recipe
from .results import FetchResult

logger = logging.getLogger(__name__)

_RECIPE_LIST = TypeAdapter(List[Recipe])


class RecipeCatalog:
    """Facade over the external recipe catalog."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def _fetch_meals(self, path: str, params: Dict[str, Any]) -> FetchResult[List[Recipe]]:
        try:
            data = self.client.get(path, params=params)
            meals = data.get("meals") if isinstance(data, dict) else None
            recipes = _RECIPE_LIST.validate_python(meals if meals is not None else [])
        except (StorefrontError, ValidationError) as e:
            logger.warning("Recipe catalog %s %r failed: %s", path, params, e)
            return FetchResult.failure(e)
        logger.info("Recipe catalog %s %r returned %d meals", path, params, len(recipes))
        return FetchResult.success(recipes)

    def search(self, text: str) -> FetchResult[List[Recipe]]:
        return self._fetch_meals("/search.php", {"s": text})

    def by_category(self, name: str) -> FetchResult[List[Recipe]]:
        return self._fetch_meals("/filter.php", {"c": name})

    def by_ingredient(self, name: str) -> FetchResult[List[Recipe]]:
        return self._fetch_meals("/filter.php", {"i": name})

    def by_id(self, recipe_id: str) -> FetchResult[Optional[Recipe]]:
        """
        Look up one full recipe.

        Returns:
            FetchResult holding the recipe, or None when the catalog has no
            recipe with this id.
        """
        result = self._fetch_meals("/lookup.php", {"i": recipe_id})
        if not result.ok:
            return FetchResult.failure(result.error)
        meals = result.value or []
        return FetchResult.success(meals[0] if meals else None)
