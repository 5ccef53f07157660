"""
Menu aggregation for the menu page.

The menu page shows a fixed list of sections, each backed by one catalog
request (free-text search or category filter). All requests are issued
concurrently and joined; a section whose request fails is rendered empty
(and flagged) instead of dropping the other sections or blocking the page.

Flow: menu page -> load_menu_sections() -> RecipeCatalog.search/by_category -> MenuSection[]
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, model_validator

from .models import Recipe
from .recipes import RecipeCatalog
from .results import FetchResult

logger = logging.getLogger(__name__)


class MenuConfig(BaseModel):
    """
    One menu section definition. Exactly one of query/category is set.

    Attributes:
        title: Section heading
        query: Free-text search term
        category: Catalog category name
    """
    title: str
    query: Optional[str] = None
    category: Optional[str] = None

    @model_validator(mode="after")
    def _one_source(self) -> "MenuConfig":
        if bool(self.query) == bool(self.category):
            raise ValueError("exactly one of query or category must be set")
        return self


class MenuSection(BaseModel):
    """A rendered menu section."""
    title: str
    meals: List[Recipe] = Field(default_factory=list)
    failed: bool = Field(False, description="True when the section's request failed")


DEFAULT_MENUS: List[MenuConfig] = [
    MenuConfig(title="Healthy", query="healthy"),
    MenuConfig(title="Seafood", category="Seafood"),
    MenuConfig(title="Vegetarian", category="Vegetarian"),
    MenuConfig(title="Desserts", category="Dessert"),
]


def _fetch_section(catalog: RecipeCatalog, menu: MenuConfig) -> FetchResult[List[Recipe]]:
    if menu.query:
        return catalog.search(menu.query)
    return catalog.by_category(menu.category)


def load_menu_sections(
    catalog: RecipeCatalog,
    menus: Sequence[MenuConfig] = DEFAULT_MENUS,
    max_workers: Optional[int] = None,
) -> List[MenuSection]:
    """
    Fetch every menu section concurrently and wait for all of them.

    Args:
        catalog: Recipe catalog facade
        menus: Section definitions, in display order
        max_workers: Thread pool size (default: one thread per section)

    Returns:
        One MenuSection per definition, in the same order. Failed requests
        produce an empty section with failed=True.
    """
    if not menus:
        return []

    workers = max_workers or len(menus)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_fetch_section, catalog, menu) for menu in menus]

        sections: List[MenuSection] = []
        for menu, future in zip(menus, futures):
            try:
                result = future.result()
            except Exception as e:
                logger.error("Unexpected error loading menu section %r: %s", menu.title, e, exc_info=True)
                sections.append(MenuSection(title=menu.title, failed=True))
                continue
            if not result.ok:
                sections.append(MenuSection(title=menu.title, failed=True))
                continue
            sections.append(MenuSection(title=menu.title, meals=result.value or []))

    failed = [s.title for s in sections if s.failed]
    if failed:
        logger.warning("Menu loaded with %d failed section(s): %s", len(failed), failed)
    else:
        logger.info("Menu loaded: %d sections", len(sections))
    return sections
