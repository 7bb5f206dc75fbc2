"""Protocols for external collaborators."""

from .credential_store_protocol import CredentialStoreProtocol
from .github_client_protocol import GitHubClientProtocol

__all__ = ["CredentialStoreProtocol", "GitHubClientProtocol"]
