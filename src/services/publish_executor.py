"""Writes the selected files into the target repository."""

import logging
from typing import Any, AsyncGenerator, Dict, Sequence

from ..protocols import GitHubClientProtocol
from ..schemas import (
    ErrorCategory,
    ExistsAccessible,
    NotFound,
    PublishRequest,
    RemoteRepositoryState,
    SelectedFile,
)
from .github_client import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubConnectionError,
    GitHubResponseError,
    GitHubStatusError,
)

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_MESSAGE = "Initial commit from workspace"


class PartialWriteError(GitHubClientError):
    """A write failed after some files were already pushed."""

    def __init__(self, written: int, total: int, cause: GitHubClientError):
        super().__init__(
            f"Wrote {written} of {total} files before failing: {cause}",
            status_code=cause.status_code,
        )
        self.written = written
        self.total = total
        self.cause = cause


def classify_error(error: GitHubClientError) -> ErrorCategory:
    """Map a remote error onto the user-facing error category."""
    if isinstance(error, GitHubAuthenticationError):
        return ErrorCategory.AUTHENTICATION_EXPIRED
    if isinstance(error, PartialWriteError):
        if isinstance(error.cause, GitHubAuthenticationError):
            return ErrorCategory.AUTHENTICATION_EXPIRED
        return ErrorCategory.PARTIAL_WRITE_FAILURE
    if isinstance(error, (GitHubConnectionError, GitHubResponseError)):
        return ErrorCategory.REMOTE_UNAVAILABLE
    if isinstance(error, GitHubStatusError) and (error.status_code or 0) >= 500:
        return ErrorCategory.REMOTE_UNAVAILABLE
    return ErrorCategory.REMOTE_REJECTED


class PublishExecutor:
    """Ensures the repository exists and pushes every selected file to it."""

    def __init__(self, commit_message: str = DEFAULT_COMMIT_MESSAGE):
        self.commit_message = commit_message

    async def execute_stream(
        self,
        client: GitHubClientProtocol,
        request: PublishRequest,
        state: RemoteRepositoryState,
        selected: Sequence[SelectedFile],
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """Publish with one progress event per completed remote step."""
        if isinstance(state, NotFound):
            metadata = await client.create_repository(
                request.repository_name, private=request.is_private
            )
            created = True
            logger.info(
                "Created %s repository %s",
                request.visibility.value,
                metadata.full_name,
            )
        elif isinstance(state, ExistsAccessible):
            metadata = state.metadata
            created = False
        else:
            raise ValueError(f"Cannot publish to repository in state {state.state!r}")

        yield {
            "type": "repository_ready",
            "repository_url": metadata.html_url,
            "created": created,
        }

        # Owner and name come from the metadata, which reflects renames and transfers
        owner, _, name = metadata.full_name.partition("/")
        if not name:
            owner, name = request.owner, metadata.name
        branch = metadata.default_branch
        total_files = len(selected)

        for i, item in enumerate(selected):
            path = item.entry.relative_path
            try:
                sha = await client.get_file_sha(owner, name, path, branch)
                await client.put_file_contents(
                    owner,
                    name,
                    path,
                    item.file.content,
                    branch=branch,
                    message=self.commit_message,
                    sha=sha,
                )
            except GitHubClientError as e:
                if i == 0:
                    raise
                raise PartialWriteError(written=i, total=total_files, cause=e) from e

            yield {
                "type": "file_complete",
                "file_path": path,
                "size_bytes": item.entry.size_bytes,
                "current_file": i + 1,
                "total_files": total_files,
            }

        logger.info("Pushed %d files to %s", total_files, metadata.full_name)

    async def execute(
        self,
        client: GitHubClientProtocol,
        request: PublishRequest,
        state: RemoteRepositoryState,
        selected: Sequence[SelectedFile],
    ) -> str:
        """Publish and return the repository's web URL."""
        repository_url = ""
        async for event in self.execute_stream(client, request, state, selected):
            if event["type"] == "repository_ready":
                repository_url = event["repository_url"]
        return repository_url
