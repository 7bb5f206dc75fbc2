"""Services for the application."""

from .content_selector import ContentSelector
from .credential_gate import CredentialGate
from .credential_store import FileCredentialStore, InMemoryCredentialStore
from .github_client import (
    GitHubAuthenticationError,
    GitHubClient,
    GitHubClientError,
    GitHubConnectionError,
    GitHubNotFoundError,
    GitHubResponseError,
    GitHubStatusError,
)
from .github_client_factory import (
    create_client_factory_from_settings,
    create_github_client,
)
from .publish_coordinator import PublishCoordinator, PublishPipeline, PublishStage
from .publish_executor import PartialWriteError, PublishExecutor, classify_error
from .recent_repositories import RecentRepositoriesQuery
from .repository_resolver import RepositoryResolver
from .result_reporter import ResultReporter, format_size

__all__ = [
    "ContentSelector",
    "CredentialGate",
    "FileCredentialStore",
    "GitHubAuthenticationError",
    "GitHubClient",
    "GitHubClientError",
    "GitHubConnectionError",
    "GitHubNotFoundError",
    "GitHubResponseError",
    "GitHubStatusError",
    "InMemoryCredentialStore",
    "PartialWriteError",
    "PublishCoordinator",
    "PublishExecutor",
    "PublishPipeline",
    "PublishStage",
    "RecentRepositoriesQuery",
    "RepositoryResolver",
    "ResultReporter",
    "classify_error",
    "create_client_factory_from_settings",
    "create_github_client",
    "format_size",
]
