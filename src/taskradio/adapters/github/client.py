"""
GitHub API Client - Low-level HTTP client for the GitHub REST API.

This handles the raw HTTP communication with GitHub.
The GhIssuesChannel uses this to implement the TaskChannelPort.

Requests are made exactly once. Failures surface as typed ChannelError
subclasses and are never retried here.

GitHub REST API documentation:
https://docs.github.com/en/rest/issues
"""

import logging
from collections.abc import Iterator
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ChannelError,
    RateLimitError,
    ResourceNotFoundError,
)


class GitHubApiClient:
    """
    Low-level GitHub REST API client.

    Handles authentication, request/response, and error mapping.

    Features:
    - Bearer token authentication
    - Pagination for issue listings
    - Connection pooling for performance
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    API_VERSION = "2022-11-28"
    DEFAULT_PER_PAGE = 100

    # Connection pool settings
    DEFAULT_POOL_CONNECTIONS = 10
    DEFAULT_POOL_MAXSIZE = 10

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token or gh session token
            base_url: API root (override for GitHub Enterprise)
            timeout: Request timeout in seconds (None imposes none)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger("GitHubApiClient")

        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

        self._session = requests.Session()
        self._session.headers.update(self.headers)

        adapter = HTTPAdapter(
            pool_connections=self.DEFAULT_POOL_CONNECTIONS,
            pool_maxsize=self.DEFAULT_POOL_MAXSIZE,
        )
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

        self._current_user: dict[str, Any] | None = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs: Any,
    ) -> dict[str, Any] | list[Any]:
        """
        Make an authenticated request to the GitHub API.

        Args:
            method: HTTP method
            endpoint: API endpoint (e.g., '/repos/o/n/issues')
            **kwargs: Additional arguments for requests

        Returns:
            JSON response (dict or list)

        Raises:
            ChannelError: On transport or API errors
        """
        if endpoint.startswith("http"):
            url = endpoint
        else:
            url = f"{self.base_url}/{endpoint.lstrip('/')}"

        if self.timeout is not None and "timeout" not in kwargs:
            kwargs["timeout"] = self.timeout

        self.logger.debug(f"{method} {endpoint}")

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise ChannelError(f"Connection to GitHub failed: {e}", cause=e) from e
        except requests.exceptions.Timeout as e:
            raise ChannelError(f"GitHub request timed out: {e}", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise ChannelError(f"GitHub request failed: {e}", cause=e) from e

        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, **kwargs: Any) -> dict[str, Any] | list[Any]:
        """Perform a GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(
        self,
        endpoint: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any] | list[Any]:
        """Perform a POST request."""
        return self.request("POST", endpoint, json=json, **kwargs)

    def patch(
        self,
        endpoint: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> dict[str, Any] | list[Any]:
        """Perform a PATCH request."""
        return self.request("PATCH", endpoint, json=json, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self, response: requests.Response, endpoint: str
    ) -> dict[str, Any] | list[Any]:
        """Handle API response and convert errors to typed exceptions."""
        if response.ok:
            if response.text:
                try:
                    json_data = response.json()
                    if isinstance(json_data, (dict, list)):
                        return json_data
                    return {}
                except ValueError:
                    return {}
            return {}

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status == 401:
            raise AuthenticationError(
                "GitHub authentication failed. Check your token.", status_code=status
            )

        if status == 403:
            if response.headers.get("X-RateLimit-Remaining") == "0":
                raise RateLimitError(
                    f"GitHub rate limit exceeded for {endpoint}",
                    retry_after=_parse_retry_after(response),
                    status_code=status,
                )
            raise AccessDeniedError(
                f"Permission denied for {endpoint}. Check token scopes.", status_code=status
            )

        if status == 404:
            raise ResourceNotFoundError(f"Not found: {endpoint}", status_code=status)

        if status == 429:
            raise RateLimitError(
                f"GitHub rate limit exceeded for {endpoint}",
                retry_after=_parse_retry_after(response),
                status_code=status,
            )

        raise ChannelError(f"GitHub API error {status}: {error_body}", status_code=status)

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_current_user(self) -> dict[str, Any]:
        """Get the currently authenticated user."""
        if self._current_user is None:
            result = self.get("/user")
            self._current_user = result if isinstance(result, dict) else {}
        return self._current_user

    # -------------------------------------------------------------------------
    # Issues API
    # -------------------------------------------------------------------------

    def get_issue(self, repo: RepoRef, number: str) -> dict[str, Any]:
        """Get a single issue (or pull request) by number."""
        result = self.get(f"/repos/{repo.slug}/issues/{number}")
        return result if isinstance(result, dict) else {}

    def search_issues(self, query: str, per_page: int = DEFAULT_PER_PAGE) -> list[dict[str, Any]]:
        """
        Search issues with GitHub search syntax.

        Args:
            query: Search query (e.g., '"x" in:title repo:o/n is:issue')
            per_page: Maximum results to return
        """
        result = self.get("/search/issues", params={"q": query, "per_page": per_page})
        if isinstance(result, dict):
            items = result.get("items", [])
            return items if isinstance(items, list) else []
        return []

    def iter_issues(self, repo: RepoRef, state: str = "all") -> Iterator[dict[str, Any]]:
        """
        Iterate over a repository's issues, newest first, one page at a time.

        Pages are only fetched as the caller consumes them, so a caller that
        stops early does not pay for the rest of the listing.

        Args:
            repo: Repository to list
            state: "open", "closed", or "all"
        """
        page = 1
        while True:
            params = {"state": state, "per_page": self.DEFAULT_PER_PAGE, "page": page}
            result = self.get(f"/repos/{repo.slug}/issues", params=params)
            batch = result if isinstance(result, list) else []
            yield from batch

            if len(batch) < self.DEFAULT_PER_PAGE:
                return
            page += 1

    def create_issue(self, repo: RepoRef, title: str, body: str) -> dict[str, Any]:
        """Create a new issue."""
        result = self.post(f"/repos/{repo.slug}/issues", json={"title": title, "body": body})
        return result if isinstance(result, dict) else {}

    def update_issue(
        self,
        repo: RepoRef,
        number: str,
        title: str | None = None,
        body: str | None = None,
    ) -> dict[str, Any]:
        """Update the title and/or body of an issue."""
        data: dict[str, Any] = {}
        if title is not None:
            data["title"] = title
        if body is not None:
            data["body"] = body

        result = self.patch(f"/repos/{repo.slug}/issues/{number}", json=data)
        return result if isinstance(result, dict) else {}

    def add_assignees(self, repo: RepoRef, number: str, assignees: list[str]) -> dict[str, Any]:
        """Add assignees to an issue."""
        result = self.post(
            f"/repos/{repo.slug}/issues/{number}/assignees", json={"assignees": assignees}
        )
        return result if isinstance(result, dict) else {}

    def close_issue(self, repo: RepoRef, number: str, reason: str = "completed") -> dict[str, Any]:
        """
        Close an issue.

        Args:
            repo: Repository of the issue
            number: Issue number
            reason: "completed" or "not_planned"
        """
        result = self.patch(
            f"/repos/{repo.slug}/issues/{number}",
            json={"state": "closed", "state_reason": reason},
        )
        return result if isinstance(result, dict) else {}

    # -------------------------------------------------------------------------
    # Resource Cleanup
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the client and release connection pool resources."""
        self._session.close()
        self.logger.debug("Closed HTTP session")

    def __enter__(self) -> "GitHubApiClient":
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        self.close()


def _parse_retry_after(response: requests.Response) -> int | None:
    value = response.headers.get("Retry-After")
    if value and value.isdigit():
        return int(value)
    return None
