"""
User directory on the auth backend.

Wraps registration and the user administration endpoints:
- POST /createUser
- GET /users/email/{email}, GET /users/username/{username}, GET /users/{id}
- GET /usuarios, PATCH /usuarios/{id}, DELETE /usuarios/{id}

Errors propagate as ApiError / NetworkError; the only translated case is a 404
on the username lookup, which means "no such user" and returns None.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from pydantic import TypeAdapter

from .api_client import ApiClient
from .errors import ApiError
from .models import User

logger = logging.getLogger(__name__)

_USER_LIST = TypeAdapter(List[User])


class UserDirectory:
    """User lookups and account management against the auth backend."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def register(self, payload: Dict[str, Any]) -> Optional[str]:
        """
        Create a new account.

        Args:
            payload: Registration fields (username, full_name, email, password, rol)

        Returns:
            The backend's confirmation message, if any.
        """
        data = self.client.post("/createUser", json=payload)
        logger.info("Registered user %s", payload.get("username"))
        if isinstance(data, dict):
            return data.get("message")
        return None

    def get_user_by_mail(self, email: str) -> User:
        data = self.client.get(f"/users/email/{quote(email, safe='@')}")
        return User.model_validate(data)

    def get_user_by_username(self, username: str) -> Optional[User]:
        """
        Look a user up by username.

        Returns:
            The user, or None when the backend answers 404.
        """
        try:
            data = self.client.get(f"/users/username/{quote(username)}")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise
        return User.model_validate(data)

    def get_users(self) -> List[User]:
        data = self.client.get("/usuarios")
        return _USER_LIST.validate_python(data if data is not None else [])

    def get_user(self, user_id: int) -> User:
        data = self.client.get(f"/users/{user_id}")
        return User.model_validate(data)

    def edit_user(
        self,
        user_id: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Change a user's username and/or password.

        Only the fields that are given are sent.

        Returns:
            The backend's response body.
        """
        body: Dict[str, Any] = {}
        if username is not None:
            body["username"] = username
        if password is not None:
            body["password"] = password
        data = self.client.patch(f"/usuarios/{user_id}", json=body)
        logger.info("Edited user %s (fields: %s)", user_id, sorted(body))
        return data or {}

    def delete_user(self, user_id: int) -> None:
        self.client.delete(f"/usuarios/{user_id}")
        logger.info("Deleted user %s", user_id)
