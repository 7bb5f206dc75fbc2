"""
Async GitHub REST API client used by the publish workflow.

Wraps the handful of endpoints the workflow consumes and turns every
non-2xx response into a typed `GitHubClientError`.
"""

import base64
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..schemas import RepositoryMetadata, RepositorySummary

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class GitHubClientError(Exception):
    """Error from GitHub client operations."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubAuthenticationError(GitHubClientError):
    """The token was rejected (HTTP 401)."""


class GitHubNotFoundError(GitHubClientError):
    """The requested resource does not exist (HTTP 404)."""


class GitHubStatusError(GitHubClientError):
    """Any other non-2xx response."""


class GitHubConnectionError(GitHubClientError):
    """Network failure or timeout before a response was received."""


class GitHubResponseError(GitHubClientError):
    """A 2xx response whose body is not the expected JSON payload."""


class GitHubClient:
    """Manages GitHub REST API calls for a single access token."""

    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={
                "Accept": "application/vnd.github.v3+json",
                "Authorization": f"token {token.strip()}",
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise GitHubConnectionError(f"{method} {url} timed out: {e}") from e
        except httpx.RequestError as e:
            raise GitHubConnectionError(f"{method} {url} failed: {e}") from e
        except httpx.InvalidURL as e:
            raise GitHubStatusError(f"{method} {url} is not a valid URL: {e}") from e

        if response.is_success:
            return response

        message = self._error_message(response)
        status = response.status_code
        logger.warning("GitHub API %s %s returned %s: %s", method, url, status, message)
        if status == 401:
            raise GitHubAuthenticationError(message, status_code=status)
        if status == 404:
            raise GitHubNotFoundError(message, status_code=status)
        raise GitHubStatusError(message, status_code=status)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort message from an error body."""
        try:
            data = response.json()
        except ValueError:
            return response.text.strip() or response.reason_phrase
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return response.reason_phrase

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise GitHubResponseError(
                f"Unexpected response body from {response.request.url.path}",
                status_code=response.status_code,
            ) from e

    @classmethod
    def _repository(cls, response: httpx.Response) -> RepositoryMetadata:
        data = cls._json(response)
        try:
            return RepositoryMetadata.from_api(data)
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise GitHubResponseError(
                f"Malformed repository payload: {e}", status_code=response.status_code
            ) from e

    @staticmethod
    def _contents_url(owner: str, name: str, path: str) -> str:
        return f"/repos/{owner}/{name}/contents/{quote(path.lstrip('/'), safe='/')}"

    async def get_repository(self, owner: str, name: str) -> RepositoryMetadata:
        """Fetch repository metadata. Raises GitHubNotFoundError when absent."""
        response = await self._request("GET", f"/repos/{owner}/{name}")
        return self._repository(response)

    async def create_repository(self, name: str, private: bool) -> RepositoryMetadata:
        """Create a repository for the authenticated user."""
        response = await self._request(
            "POST",
            "/user/repos",
            json={"name": name, "private": private, "auto_init": True},
        )
        return self._repository(response)

    async def get_file_sha(
        self, owner: str, name: str, path: str, branch: str
    ) -> Optional[str]:
        """Blob SHA of an existing file, or None if the path is new."""
        try:
            response = await self._request(
                "GET", self._contents_url(owner, name, path), params={"ref": branch}
            )
        except GitHubNotFoundError:
            return None
        data = self._json(response)
        if isinstance(data, dict):
            return data.get("sha")
        # A directory listing at this path; nothing to update in place
        return None

    async def put_file_contents(
        self,
        owner: str,
        name: str,
        path: str,
        content: str,
        branch: str,
        message: str,
        sha: Optional[str] = None,
    ) -> None:
        """Create or update a single file on the given branch."""
        body: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            body["sha"] = sha
        await self._request("PUT", self._contents_url(owner, name, path), json=body)

    async def list_recent_repositories(self, limit: int = 5) -> List[RepositorySummary]:
        """Most recently updated repositories of the authenticated user."""
        response = await self._request(
            "GET", "/user/repos", params={"sort": "updated", "per_page": limit}
        )
        data = self._json(response)
        try:
            return [RepositorySummary.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            raise GitHubResponseError(
                f"Malformed repository list: {e}", status_code=response.status_code
            ) from e
