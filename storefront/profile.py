"""
Profile and settings of the authenticated user.

Both live on the subscription backend ("<api>/api") and require the bearer
token:
- GET/PUT /user/profile
- GET/PUT /user/settings

Errors propagate; the flow layer turns them into banners.
"""

import logging
from typing import Any, Dict

from .api_client import ApiClient
from .models import UserProfile, UserSettings

logger = logging.getLogger(__name__)


class ProfileService:
    """Read and update the user's profile."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def get_profile(self) -> UserProfile:
        data = self.client.get("/user/profile", auth=True)
        return UserProfile.model_validate(data)

    def update_profile(self, changes: Dict[str, Any]) -> UserProfile:
        """
        Update profile fields.

        Args:
            changes: Fields to change; user_id is never sent

        Returns:
            The updated profile as returned by the backend.
        """
        body = {k: v for k, v in changes.items() if k != "user_id"}
        data = self.client.put("/user/profile", json=body, auth=True)
        logger.info("Profile updated (fields: %s)", sorted(body))
        return UserProfile.model_validate(data)


class SettingsService:
    """Read and update the user's settings."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def get_settings(self) -> UserSettings:
        data = self.client.get("/user/settings", auth=True)
        return UserSettings.model_validate(data)

    def update_settings(self, changes: Dict[str, Any]) -> UserSettings:
        """Send a partial settings update and return the stored settings."""
        data = self.client.put("/user/settings", json=changes, auth=True)
        logger.info("Settings updated (fields: %s)", sorted(changes))
        return UserSettings.model_validate(data)
