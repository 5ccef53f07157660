"""
Application context: one place that wires storage, clients and services.

A Storefront is built once per UI session. It owns the local storage, one
ApiClient per remote service, and every service the pages use.

Lifecycle:
- start(): load the premium flag when a session token already exists
- logout(): forget the token and reset the premium flag and the cart;
  the theme preference is kept
"""

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from .api_client import ApiClient
from .cart import Cart
from .config import ApiConfig, RecipeCatalogConfig, StorageConfig
from .premium import PremiumService
from .profile import ProfileService, SettingsService
from .recipes import RecipeCatalog
from .session import SessionStore
from .storage import LocalStorage
from .theme import ThemePreference
from .users import UserDirectory

logger = logging.getLogger(__name__)


class Storefront:
    """
    All client-side state and services of one user session.

    Args:
        storage_path: JSON file backing local storage (default from config)
        api_url: Auth/users backend (default from config)
        subscription_api_url: Subscription/profile/settings backend (default from config)
        catalog_url: Recipe catalog (default from config)
        timeout: Request timeout in seconds (default from config)
        http: requests.Session shared by the auth and subscription clients,
              which are only used from the script thread (injectable for tests)
        catalog_http: Session for the recipe catalog. The menu page queries
                      the catalog from worker threads, so by default no
                      session is shared and each call uses requests.request.
    """

    def __init__(
        self,
        storage_path: Optional[Union[str, Path]] = None,
        api_url: Optional[str] = None,
        subscription_api_url: Optional[str] = None,
        catalog_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
        catalog_http: Optional[requests.Session] = None,
    ) -> None:
        self.storage = LocalStorage(storage_path or StorageConfig.get_storage_path())
        timeout = timeout if timeout is not None else ApiConfig.get_timeout()
        http = http or requests.Session()

        self.auth_client = ApiClient(api_url or ApiConfig.get_api_url(), timeout, http)
        self.users = UserDirectory(self.auth_client)
        self.session = SessionStore(self.storage, self.auth_client, self.users)

        self.subscription_client = ApiClient(
            subscription_api_url or ApiConfig.get_subscription_api_url(),
            timeout,
            http,
            token_provider=lambda: self.session.token,
        )
        self.premium = PremiumService(self.subscription_client, self.session)
        self.profile = ProfileService(self.subscription_client)
        self.settings = SettingsService(self.subscription_client)

        self.catalog_client = ApiClient(
            catalog_url or RecipeCatalogConfig.get_base_url(), timeout, catalog_http
        )
        self.catalog = RecipeCatalog(self.catalog_client)

        self.cart = Cart()
        self.theme = ThemePreference(self.storage)
        self._started = False

    def start(self) -> None:
        """Load startup state. Only the first call does anything."""
        if self._started:
            return
        self._started = True
        self.premium.load_status()
        logger.info(
            "Storefront started (authenticated=%s, premium=%s, theme=%s)",
            self.session.is_authenticated(),
            self.premium.is_premium,
            self.theme.name,
        )

    def logout(self) -> None:
        self.session.logout()
        self.premium.reset()
        self.cart.clear()
