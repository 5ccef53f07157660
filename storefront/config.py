"""
Configuration management for the Meal Planner Storefront.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early by the Streamlit entry point
(streamlit_app/app.py) so .env is loaded before any other code reads the
environment.

When no .env exists, load_dotenv() is a no-op and process environment
variables are used instead.

Environment Variables:
- STOREFRONT_API_URL: Auth/users backend base URL (default: http://localhost:5000)
- STOREFRONT_SUBSCRIPTION_API_URL: Subscription, profile and settings base URL
  (default: STOREFRONT_API_URL + "/api")
- RECIPE_CATALOG_URL: Third-party recipe catalog base URL
  (default: https://www.themealdb.com/api/json/v1/1)
- STOREFRONT_STORAGE_PATH: JSON file used as local storage
  (default: ~/.storefront/local_storage.json)
- STOREFRONT_HTTP_TIMEOUT: Request timeout in seconds (default: 10)
- LOG_LEVEL: Root logging level (default: INFO)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_RECIPE_CATALOG_URL = "https://www.themealdb.com/api/json/v1/1"
DEFAULT_HTTP_TIMEOUT = 10.0


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    The project root is located by going up from this file
    (storefront/config.py -> storefront/ -> project root).

    Safe to call multiple times. Existing environment variables take precedence.
    """
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


class ApiConfig:
    """Configuration for the storefront's own backends."""

    @staticmethod
    def get_api_url() -> str:
        """
        Get the auth/users backend base URL.

        Returns:
            URL string with trailing slash removed.
        """
        return os.getenv("STOREFRONT_API_URL", DEFAULT_API_URL).rstrip("/")

    @staticmethod
    def get_subscription_api_url() -> str:
        """
        Get the base URL for subscription, profile and settings endpoints.

        Returns:
            URL string with trailing slash removed. Defaults to the auth backend
            URL with "/api" appended.
        """
        url = os.getenv("STOREFRONT_SUBSCRIPTION_API_URL")
        if not url:
            return f"{ApiConfig.get_api_url()}/api"
        return url.rstrip("/")

    @staticmethod
    def get_timeout() -> Optional[float]:
        """
        Get the HTTP timeout in seconds.

        Returns:
            Timeout as float, or None when STOREFRONT_HTTP_TIMEOUT is "none"
            (leave it to the transport defaults).
        """
        raw = os.getenv("STOREFRONT_HTTP_TIMEOUT")
        if raw is None or raw == "":
            return DEFAULT_HTTP_TIMEOUT
        if raw.strip().lower() == "none":
            return None
        try:
            return float(raw)
        except ValueError:
            logging.getLogger(__name__).warning(
                "Invalid STOREFRONT_HTTP_TIMEOUT=%r, using %s", raw, DEFAULT_HTTP_TIMEOUT
            )
            return DEFAULT_HTTP_TIMEOUT


class RecipeCatalogConfig:
    """Configuration for the third-party recipe catalog."""

    @staticmethod
    def get_base_url() -> str:
        return os.getenv("RECIPE_CATALOG_URL", DEFAULT_RECIPE_CATALOG_URL).rstrip("/")


class StorageConfig:
    """Configuration for the local key/value storage file."""

    @staticmethod
    def get_storage_path() -> Path:
        """
        Get the path of the JSON file backing local storage.

        Returns:
            Path (user home expanded).
        """
        raw = os.getenv("STOREFRONT_STORAGE_PATH")
        if raw:
            return Path(raw).expanduser()
        return Path.home() / ".storefront" / "local_storage.json"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the application.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to LOG_LEVEL env var or INFO.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
