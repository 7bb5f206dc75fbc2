"""Mock implementation of GitHubClientProtocol for development and testing."""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

sys.path.append(str(Path(__file__).parent.parent.parent))
from src.schemas import RepositoryMetadata, RepositorySummary
from src.services.github_client import GitHubNotFoundError


class MockGitHubClient:
    """Mock GitHub client that keeps repositories and files in memory."""

    def __init__(self, token: str, login: str = "mock-user"):
        self._token = token
        self._login = login
        self.repositories: Dict[str, RepositoryMetadata] = {}
        self.files: Dict[Tuple[str, str], str] = {}

    def _full_name(self, owner: str, name: str) -> str:
        return f"{owner}/{name}"

    async def get_repository(self, owner: str, name: str) -> RepositoryMetadata:
        print(f"Mock: Looking up repository {owner}/{name}")
        metadata = self.repositories.get(self._full_name(owner, name))
        if metadata is None:
            raise GitHubNotFoundError("Not Found", status_code=404)
        return metadata

    async def create_repository(self, name: str, private: bool) -> RepositoryMetadata:
        full_name = self._full_name(self._login, name)
        print(f"Mock: Creating repository {full_name} (private={private})")
        metadata = RepositoryMetadata(
            name=name,
            full_name=full_name,
            html_url=f"https://github.com/{full_name}",
            default_branch="main",
            private=private,
        )
        self.repositories[full_name] = metadata
        return metadata

    async def get_file_sha(
        self, owner: str, name: str, path: str, branch: str
    ) -> Optional[str]:
        key = (self._full_name(owner, name), path)
        if key not in self.files:
            return None
        return f"mock-sha-{abs(hash(self.files[key])):x}"

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
        print(f"Mock: Writing {path} to {owner}/{name}@{branch}")
        self.files[(self._full_name(owner, name), path)] = content

    async def list_recent_repositories(self, limit: int = 5) -> List[RepositorySummary]:
        return [
            RepositorySummary(
                name=metadata.name,
                full_name=metadata.full_name,
                html_url=metadata.html_url,
                default_branch=metadata.default_branch,
                private=metadata.private,
            )
            for metadata in list(self.repositories.values())[:limit]
        ]

    async def aclose(self) -> None:
        pass
