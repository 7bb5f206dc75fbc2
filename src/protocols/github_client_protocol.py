"""GitHub client protocol interface."""

from typing import List, Optional, Protocol, runtime_checkable

from ..schemas import RepositoryMetadata, RepositorySummary


@runtime_checkable
class GitHubClientProtocol(Protocol):
    """Protocol for the remote repository service."""

    async def get_repository(self, owner: str, name: str) -> RepositoryMetadata:
        """Fetch repository metadata. Raises GitHubNotFoundError when absent."""
        ...

    async def create_repository(self, name: str, private: bool) -> RepositoryMetadata:
        """Create a repository owned by the authenticated user."""
        ...

    async def get_file_sha(
        self, owner: str, name: str, path: str, branch: str
    ) -> Optional[str]:
        """Blob SHA of an existing file, None if the path does not exist."""
        ...

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
        """Create or update a file on a branch."""
        ...

    async def list_recent_repositories(self, limit: int = 5) -> List[RepositorySummary]:
        """Recently updated repositories of the authenticated user."""
        ...

    async def aclose(self) -> None:
        """Release the underlying connection pool."""
        ...
