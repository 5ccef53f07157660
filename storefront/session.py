"""
Session store: bearer token lifecycle.

The session is nothing more than the token saved under "access_token" in local
storage. It is created by a successful login and destroyed only by an explicit
logout; the client never checks the token's expiry, so a token stays "valid"
here until it is cleared, even after the server has stopped accepting it.

Login flow: LoginFlow -> SessionStore.login() -> POST /login -> token -> LocalStorage
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

import jwt
from pydantic import ValidationError

from .api_client import ApiClient
from .errors import ApiError, AuthError, NetworkError, StorefrontError
from .models import Session
from .storage import TOKEN_KEY, LocalStorage

if TYPE_CHECKING:
    from .users import UserDirectory

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_ERROR = "An error occurred"


class SessionStore:
    """
    Holds the bearer token and answers "is the user logged in?".

    Args:
        storage: Local storage holding the token
        client: ApiClient bound to the auth backend
        users: Optional user directory, used by role() when the token
               carries no role claim
    """

    def __init__(
        self,
        storage: LocalStorage,
        client: ApiClient,
        users: Optional["UserDirectory"] = None,
    ) -> None:
        self.storage = storage
        self.client = client
        self.users = users

    @property
    def token(self) -> Optional[str]:
        return self.storage.get_item(TOKEN_KEY)

    def current(self) -> Session:
        return Session(token=self.token)

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def login(self, email: str, password_hash: str) -> Session:
        """
        Log in against the auth backend and persist the returned token.

        Args:
            email: User e-mail (identifier)
            password_hash: Password as expected by the backend

        Returns:
            The new Session.

        Raises:
            AuthError: With the backend's message verbatim when the backend
                       rejects the login, or a generic message when the request
                       failed or no token came back.
        """
        try:
            data = self.client.post(
                "/login",
                json={"email": email, "password_hash": password_hash},
            )
        except ApiError as e:
            logger.info("Login rejected for %s: %s", email, e.message)
            raise AuthError(e.message or DEFAULT_LOGIN_ERROR, e.status_code) from e
        except NetworkError as e:
            logger.warning("Login request failed: %s", e)
            raise AuthError(DEFAULT_LOGIN_ERROR) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            logger.warning("Login response for %s carried no access_token", email)
            raise AuthError(DEFAULT_LOGIN_ERROR)

        self.storage.set_item(TOKEN_KEY, token)
        logger.info("Logged in as %s", email)
        return Session(token=token)

    def logout(self) -> None:
        """Forget the token. Safe to call when already logged out."""
        self.storage.remove_item(TOKEN_KEY)
        logger.info("Logged out")

    def claims(self) -> Optional[Dict[str, Any]]:
        """
        Decode the token's claims without verifying the signature.

        The backend owns the signing key; the client only reads the payload.

        Returns:
            Claims dict, or None if there is no token or it cannot be decoded.
        """
        token = self.token
        if not token:
            return None
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            logger.error("Could not decode access token: %s", e)
            return None

    def email(self) -> Optional[str]:
        claims = self.claims()
        if not claims:
            return None
        return claims.get("email") or None

    def role(self) -> Optional[str]:
        """
        Get the user's role.

        Prefers the token's "rol" claim and falls back to looking the user up
        by e-mail in the user directory.

        Returns:
            Role string, or None if it cannot be determined.
        """
        claims = self.claims()
        if not claims:
            return None
        if claims.get("rol"):
            return claims["rol"]

        email = claims.get("email")
        if not email or self.users is None:
            return None
        try:
            user = self.users.get_user_by_mail(email)
        except (StorefrontError, ValidationError) as e:
            logger.error("Role lookup for %s failed: %s", email, e)
            return None
        return user.roles or None
