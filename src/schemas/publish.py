"""Schemas for the repository publish workflow."""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .github import RepositoryMetadata


class Visibility(str, Enum):
    """Access level applied when the repository is created."""

    PUBLIC = "public"
    PRIVATE = "private"


class ErrorCategory(str, Enum):
    """Failure categories surfaced to the user."""

    NO_CREDENTIAL = "no-credential"
    EMPTY_REPOSITORY_NAME = "empty-repository-name"
    AUTHENTICATION_EXPIRED = "authentication-expired"
    REMOTE_UNAVAILABLE = "remote-unavailable"
    REMOTE_REJECTED = "remote-rejected"
    PARTIAL_WRITE_FAILURE = "partial-write-failure"


class BlockReason(str, Enum):
    """Preconditions that stop a publish before any remote call."""

    NO_CREDENTIAL = "no-credential"
    EMPTY_REPOSITORY_NAME = "empty-repository-name"


class Identity(BaseModel):
    """GitHub account the credential belongs to."""

    model_config = ConfigDict(frozen=True)

    login: str
    display_name: str = ""
    avatar_url: str = ""


class Credential(BaseModel):
    """Identity plus access token, borrowed from the credential store."""

    model_config = ConfigDict(frozen=True)

    identity: Identity
    token: SecretStr


class PublishRequest(BaseModel):
    """A single user-initiated publish attempt."""

    model_config = ConfigDict(frozen=True)

    repository_name: str = Field(..., min_length=1)
    visibility: Visibility = Visibility.PUBLIC
    credential: Credential

    @field_validator("repository_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("repository_name must not be blank")
        return value

    @property
    def owner(self) -> str:
        return self.credential.identity.login

    @property
    def is_private(self) -> bool:
        return self.visibility is Visibility.PRIVATE


class WorkspaceEntry(BaseModel):
    """One entry of the workspace snapshot (path -> entry mapping)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["file", "directory"] = "file"
    is_binary: bool = Field(default=False, alias="isBinary")
    content: Optional[str] = None


WorkspaceSnapshot = Dict[str, WorkspaceEntry]


class WorkspaceFile(BaseModel):
    """A file taken from the workspace snapshot."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str = ""
    is_binary: bool = False


class ManifestEntry(BaseModel):
    """Path and UTF-8 byte size of one published file."""

    model_config = ConfigDict(frozen=True)

    relative_path: str
    size_bytes: int = Field(..., ge=0)


class SelectedFile(BaseModel):
    """A publishable file together with its manifest entry."""

    model_config = ConfigDict(frozen=True)

    file: WorkspaceFile
    entry: ManifestEntry


# --- Outcomes ---


class Blocked(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["blocked"] = "blocked"
    reason: BlockReason


class Cancelled(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["cancelled"] = "cancelled"


class Succeeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["succeeded"] = "succeeded"
    repository_url: str
    manifest: List[ManifestEntry] = Field(default_factory=list)


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    category: ErrorCategory
    detail: str = ""


PublishOutcome = Annotated[
    Union[Blocked, Cancelled, Succeeded, Failed], Field(discriminator="status")
]


# --- Remote repository state ---


class NotFound(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["not_found"] = "not_found"


class ExistsAccessible(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["exists_accessible"] = "exists_accessible"
    metadata: RepositoryMetadata


class ExistsInaccessible(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: Literal["exists_inaccessible"] = "exists_inaccessible"
    metadata: Optional[RepositoryMetadata] = None


RemoteRepositoryState = Union[NotFound, ExistsAccessible, ExistsInaccessible]


# --- Presentation ---


class ManifestLine(BaseModel):
    path: str
    size_bytes: int
    size: str  # Human readable, e.g. "1.5 KB"


class PublishSummary(BaseModel):
    """Presentable view of an outcome."""

    status: Literal["blocked", "cancelled", "succeeded", "failed"]
    severity: Literal["info", "notice", "error"]
    title: str
    message: str
    repository_url: Optional[str] = None
    files: List[ManifestLine] = Field(default_factory=list)


class PublishApiRequest(BaseModel):
    """Body of the publish endpoints."""

    repository_name: str
    visibility: Visibility = Visibility.PUBLIC
    confirm_overwrite: bool = False
    files: Dict[str, WorkspaceEntry] = Field(default_factory=dict)


class PublishApiResponse(BaseModel):
    outcome: PublishOutcome
    summary: PublishSummary
