"""Schemas for the application."""

from .github import RepositoryMetadata, RepositorySummary
from .publish import (
    Blocked,
    BlockReason,
    Cancelled,
    Credential,
    ErrorCategory,
    ExistsAccessible,
    ExistsInaccessible,
    Failed,
    Identity,
    ManifestEntry,
    ManifestLine,
    NotFound,
    PublishApiRequest,
    PublishApiResponse,
    PublishOutcome,
    PublishRequest,
    PublishSummary,
    RemoteRepositoryState,
    SelectedFile,
    Succeeded,
    Visibility,
    WorkspaceEntry,
    WorkspaceFile,
    WorkspaceSnapshot,
)

__all__ = [
    "Blocked",
    "BlockReason",
    "Cancelled",
    "Credential",
    "ErrorCategory",
    "ExistsAccessible",
    "ExistsInaccessible",
    "Failed",
    "Identity",
    "ManifestEntry",
    "ManifestLine",
    "NotFound",
    "PublishApiRequest",
    "PublishApiResponse",
    "PublishOutcome",
    "PublishRequest",
    "PublishSummary",
    "RemoteRepositoryState",
    "RepositoryMetadata",
    "RepositorySummary",
    "SelectedFile",
    "Succeeded",
    "Visibility",
    "WorkspaceEntry",
    "WorkspaceFile",
    "WorkspaceSnapshot",
]
