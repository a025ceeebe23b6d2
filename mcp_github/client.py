# =============================================================================
# GitHub MCP Server - API Client
# =============================================================================
"""
Async HTTP transport for the GitHub REST API.

This module owns the wire: a fixed base URL, the default headers, JSON
parsing, and the mapping of every failure onto a typed exception. It knows
nothing about individual endpoints; :mod:`mcp_github.gateway` builds paths
and bodies on top of it.

There is no retry and no rate-limit backoff here. A rate-limit
response is surfaced as :class:`RateLimitError` with the reset information
attached and the caller decides what to do.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
ACCEPT_HEADER = "application/vnd.github.v3+json"


# =============================================================================
# Custom Exceptions
# =============================================================================


class GitHubApiError(Exception):
    """
    Base exception for GitHub API errors.

    Attributes:
        message: Error description.
        status_code: HTTP status code (0 when no response was received).
        response_data: Raw response data from GitHub.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_data: Optional[dict] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error description.
            status_code: HTTP status code.
            response_data: Raw response data.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}


class AuthRequiredError(GitHubApiError):
    """Raised before any request when a write operation has no token."""

    pass


class RemoteNotFoundError(GitHubApiError):
    """Raised when a resource is not found (404)."""

    pass


class SourceBranchNotFoundError(RemoteNotFoundError):
    """Raised when the branch to create a new branch from does not exist."""

    pass


class RepositoryFileNotFoundError(RemoteNotFoundError):
    """Raised when a file to delete does not exist."""

    pass


class RemoteRejectedError(GitHubApiError):
    """Raised for any non-2xx response other than 404."""

    pass


class RateLimitError(RemoteRejectedError):
    """
    Raised when the rate limit is exhausted.

    Attributes:
        reset_at: Unix timestamp when rate limit resets.
        retry_after: Seconds the API asked us to wait.
    """

    def __init__(
        self,
        message: str,
        reset_at: int = 0,
        retry_after: int = 0,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the rate limit exception.

        Args:
            message: Error description.
            reset_at: Unix timestamp when limit resets.
            retry_after: Seconds to wait.
            **kwargs: Additional arguments for parent.
        """
        super().__init__(message, **kwargs)
        self.reset_at = reset_at
        self.retry_after = retry_after


class TransportError(GitHubApiError):
    """Raised on network-level failures (DNS, timeout, connection reset)."""

    pass


# =============================================================================
# GitHub Client
# =============================================================================


def _header_int(response: httpx.Response, name: str) -> int:
    """
    Read an integer header, or 0 when it is missing or not an integer.

    ``Retry-After`` may also be an HTTP date; that form is reported as 0.
    """
    value = response.headers.get(name, "0")
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring non-integer %s header: %r", name, value)
        return 0


class GitHubClient:
    """
    Async transport for GitHub's REST API.

    When a token is configured it is sent as a bearer credential on every
    request, read and write alike.

    Attributes:
        base_url: GitHub API base URL.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: GitHub personal access token, or None for anonymous access.
            base_url: GitHub API base URL.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        headers = {"Accept": ACCEPT_HEADER}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # HTTP Request Helpers
    # -------------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Any:
        """
        Make an HTTP request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE).
            path: API path (e.g., /repos/owner/repo/issues).
            params: Query parameters.
            json: JSON body. DELETE requests may carry one too.

        Returns:
            Parsed JSON response, or None for empty 2xx responses.

        Raises:
            RemoteNotFoundError: For 404 responses.
            RateLimitError: When the rate limit is exhausted.
            RemoteRejectedError: For every other non-2xx response.
            TransportError: When no response was received.
        """
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(
                method=method,
                url=path,
                params=params,
                json=json,
            )
        except httpx.TimeoutException as e:
            raise TransportError(message=f"Request timed out: {str(e)}")
        except httpx.RequestError as e:
            raise TransportError(message=f"Request failed: {str(e)}")

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                raise RemoteRejectedError(
                    message=f"Invalid JSON in response to {method} {path}",
                    status_code=response.status_code,
                )

        self._raise_for_error(response)

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Translate a non-2xx response into the matching exception."""
        error_data: dict = {}
        try:
            parsed = response.json()
            if isinstance(parsed, dict):
                error_data = parsed
        except ValueError:
            pass

        error_message = error_data.get("message") or response.text
        status = response.status_code

        if status == 404:
            raise RemoteNotFoundError(
                message=f"Resource not found: {error_message}",
                status_code=404,
                response_data=error_data,
            )

        if status in (403, 429):
            remaining = response.headers.get("X-RateLimit-Remaining", "1")
            if remaining == "0" or "rate limit" in error_message.lower():
                raise RateLimitError(
                    message=f"Rate limit exceeded: {error_message}",
                    status_code=status,
                    response_data=error_data,
                    reset_at=_header_int(response, "X-RateLimit-Reset"),
                    retry_after=_header_int(response, "Retry-After"),
                )

        raise RemoteRejectedError(
            message=f"GitHub API error ({status}): {error_message}",
            status_code=status,
            response_data=error_data,
        )

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[dict] = None) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: Optional[dict] = None) -> Any:
        """Make a PATCH request."""
        return await self.request("PATCH", path, json=json)

    async def put(self, path: str, json: Optional[dict] = None) -> Any:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str, json: Optional[dict] = None) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path, json=json)
