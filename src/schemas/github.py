"""GitHub REST API payload schemas."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class RepositoryMetadata(BaseModel):
    """Subset of the repository object returned by `GET /repos/{owner}/{repo}`."""

    name: str
    full_name: str
    html_url: str
    default_branch: str = "main"
    private: bool = False
    can_push: bool = True

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RepositoryMetadata":
        permissions = data.get("permissions") or {}
        return cls(
            name=data["name"],
            full_name=data.get("full_name") or data["name"],
            html_url=data["html_url"],
            default_branch=data.get("default_branch") or "main",
            private=bool(data.get("private", False)),
            # Missing permissions block means the token owns the repository
            can_push=bool(permissions.get("push", True)),
        )


class RepositorySummary(BaseModel):
    """Repository listed by the recent repositories query."""

    name: str
    full_name: str
    html_url: str
    description: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    default_branch: str = "main"
    updated_at: Optional[str] = None
    language: Optional[str] = None
    private: bool = False
