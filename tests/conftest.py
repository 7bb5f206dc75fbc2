from unittest.mock import AsyncMock

import pytest
from pydantic import SecretStr

from src.schemas import Credential, Identity, RepositoryMetadata, WorkspaceEntry
from src.services import GitHubClient, GitHubNotFoundError, InMemoryCredentialStore


@pytest.fixture
def credential() -> Credential:
    return Credential(
        identity=Identity(login="octocat", display_name="The Octocat"),
        token=SecretStr("ghp_testtoken123"),
    )


@pytest.fixture
def credential_store(credential: Credential) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(credential)


@pytest.fixture
def demo_metadata() -> RepositoryMetadata:
    return RepositoryMetadata(
        name="demo",
        full_name="octocat/demo",
        html_url="https://github.com/octocat/demo",
        default_branch="main",
        private=True,
    )


@pytest.fixture
def workspace():
    return {
        "/home/project/src/a.ts": WorkspaceEntry(type="file", is_binary=False, content="x"),
        "/home/project/logo.png": WorkspaceEntry(type="file", is_binary=True, content=""),
    }


@pytest.fixture
def github_client(demo_metadata: RepositoryMetadata) -> AsyncMock:
    """Mock client for a repository that does not exist yet."""
    client = AsyncMock(spec=GitHubClient)
    client.get_repository.side_effect = GitHubNotFoundError("Not Found", status_code=404)
    client.create_repository.return_value = demo_metadata
    client.get_file_sha.return_value = None
    client.put_file_contents.return_value = None
    return client
