"""
HTTP client shared by every backend wrapper.

This module is the single place where requests are issued. Each remote service
(auth backend, subscription backend, recipe catalog) gets its own ApiClient
bound to a base URL.

Key principles:
- Consistent timeout (from configuration, or transport defaults when None)
- Bearer authentication read from local storage at request time
- Transport failures become NetworkError, non-2xx responses become ApiError
  carrying the server's "message" field verbatim
- No retries: a failed request is reported once and left to the caller
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests

from .errors import ApiError, NetworkError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


def extract_message(response: requests.Response) -> Optional[str]:
    """
    Pull the human-readable error message out of an error response.

    Backends answer errors with {"message": "..."}; some frameworks use
    {"detail": "..."} or {"error": "..."} instead.

    Args:
        response: Non-2xx response

    Returns:
        The message string, or None if the body carries none.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None


class ApiClient:
    """
    Thin wrapper around requests bound to one base URL.

    Attributes:
        base_url: Service base URL without trailing slash
        timeout: Per-request timeout in seconds (None = transport default)
        session: requests.Session to reuse connections with (injectable for
                 tests). Without one every call goes through
                 requests.request, which opens a fresh session per call and
                 is safe to use from worker threads.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        token_provider: Optional[TokenProvider] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session
        self.token_provider = token_provider

    def auth_headers(self) -> Dict[str, str]:
        """
        Build headers for a bearer-authenticated request.

        The token is read at call time; a missing token yields an empty bearer
        value and the backend decides what to do with it.
        """
        token = self.token_provider() if self.token_provider else None
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token or ''}",
        }

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        auth: bool = False,
    ) -> Any:
        """
        Issue a request and return the decoded JSON body.

        Args:
            method: HTTP method ("GET", "POST", ...)
            path: Path relative to base_url, starting with "/"
            params: Optional query parameters
            json: Optional JSON body
            auth: Whether to send the bearer token

        Returns:
            Decoded JSON body, or None for an empty body.

        Raises:
            NetworkError: If no response was received
            ApiError: If the response status is not 2xx or the body is not JSON
        """
        url = f"{self.base_url}{path}"
        headers = self.auth_headers() if auth else {"Content-Type": "application/json"}

        send = self.session.request if self.session is not None else requests.request
        try:
            response = send(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning("%s %s timed out", method, url)
            raise NetworkError(f"Request to {url} timed out") from e
        except requests.exceptions.ConnectionError as e:
            logger.warning("%s %s could not connect: %s", method, url, e)
            raise NetworkError(f"Could not connect to {url}") from e
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e)) from e

        if not response.ok:
            message = extract_message(response)
            logger.info("%s %s -> %d %r", method, url, response.status_code, message)
            raise ApiError(response.status_code, message)

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s returned a non-JSON body", method, url)
            raise ApiError(response.status_code, "Invalid JSON response") from e

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Any:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)
