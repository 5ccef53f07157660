"""
Exception types raised by the storefront client.

Read paths (recipe lookups, menu sections) convert these into FetchResult
errors or empty fallbacks. Write paths (login, purchase, profile and settings
saves) let them propagate to the flow layer, which turns them into dialogs
and banners.
"""

from typing import Dict, List, Optional


class StorefrontError(Exception):
    """Base class for all storefront errors."""


class NetworkError(StorefrontError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""


class ApiError(StorefrontError):
    """
    A backend answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the response
        message: Server-provided "message" field, or None when absent
    """

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message or f"HTTP {status_code}")


class AuthError(StorefrontError):
    """Login was rejected. `message` is the backend's message, verbatim."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationFailed(StorefrontError):
    """
    Form-level validation failed before anything was sent to the network.

    Attributes:
        field_errors: Mapping of field name to list of error messages
    """

    def __init__(self, field_errors: Dict[str, List[str]]) -> None:
        self.field_errors = field_errors
        fields = ", ".join(sorted(field_errors))
        super().__init__(f"Invalid fields: {fields}")
