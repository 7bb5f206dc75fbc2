"""Factory for creating GitHub clients with DEBUG mode support."""

from typing import Callable

from ..config.settings import Settings
from ..protocols import GitHubClientProtocol
from ..schemas import Credential
from .github_client import GITHUB_API_URL, GitHubClient

ClientFactory = Callable[[Credential], GitHubClientProtocol]


def create_github_client(
    token: str,
    base_url: str = GITHUB_API_URL,
    timeout: float = 10.0,
    debug_mode: bool = False,
) -> GitHubClientProtocol:
    """
    Create a GitHub client based on debug mode.

    Args:
        token: GitHub personal access token
        base_url: REST API base URL
        timeout: Per-request timeout in seconds
        debug_mode: If True, returns MockGitHubClient; if False, returns real GitHubClient

    Returns:
        GitHubClientProtocol implementation
    """
    if debug_mode:
        print("🔧 DEBUG mode: Using MockGitHubClient")
        # Lazy import to avoid import issues when dev path isn't set up yet
        try:
            from mocks.github_client import MockGitHubClient

            return MockGitHubClient(token)
        except ImportError:
            print("⚠️  MockGitHubClient not available, falling back to real GitHubClient")
            return GitHubClient(token, base_url=base_url, timeout=timeout)
    else:
        return GitHubClient(token, base_url=base_url, timeout=timeout)


def create_client_factory_from_settings(settings: Settings) -> ClientFactory:
    """
    Build a per-credential client factory using application settings.

    Args:
        settings: Application settings

    Returns:
        Callable creating one client for the given credential
    """

    def factory(credential: Credential) -> GitHubClientProtocol:
        return create_github_client(
            token=credential.token.get_secret_value(),
            base_url=settings.GITHUB_API_URL,
            timeout=settings.GITHUB_REQUEST_TIMEOUT,
            debug_mode=settings.DEBUG,
        )

    return factory
