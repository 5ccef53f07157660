"""
Theme preference (light/dark) persisted in local storage under "theme".

Initialized from storage when the application starts; never torn down
(logout keeps the theme).
"""

from .storage import THEME_KEY, LocalStorage

DARK = "dark"
LIGHT = "light"


class ThemePreference:
    """Dark/light toggle backed by local storage."""

    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage
        self.is_dark = storage.get_item(THEME_KEY) == DARK

    @property
    def name(self) -> str:
        return DARK if self.is_dark else LIGHT

    def toggle(self) -> str:
        """Flip the theme, persist it and return the new name."""
        self.is_dark = not self.is_dark
        self.storage.set_item(THEME_KEY, self.name)
        return self.name

    def set(self, name: str) -> None:
        if name not in (DARK, LIGHT):
            raise ValueError(f"Unknown theme: {name!r}")
        self.is_dark = name == DARK
        self.storage.set_item(THEME_KEY, name)
