"""Determines whether the target repository already exists."""

import logging

from ..protocols import GitHubClientProtocol
from ..schemas import (
    Credential,
    ExistsAccessible,
    ExistsInaccessible,
    NotFound,
    RemoteRepositoryState,
)
from .github_client import GitHubNotFoundError

logger = logging.getLogger(__name__)


class RepositoryResolver:
    """Looks up `owner/name` and reports the remote repository state."""

    async def resolve(
        self,
        client: GitHubClientProtocol,
        credential: Credential,
        repository_name: str,
    ) -> RemoteRepositoryState:
        """
        Resolve the remote state of the target repository.

        Only a 404 is read as "absent". Authentication failures and every
        other remote error propagate to the caller unchanged.
        """
        owner = credential.identity.login
        try:
            metadata = await client.get_repository(owner, repository_name)
        except GitHubNotFoundError:
            logger.info("Repository %s/%s not found; it will be created", owner, repository_name)
            return NotFound()

        if not metadata.can_push:
            logger.info("Repository %s exists but is not writable", metadata.full_name)
            return ExistsInaccessible(metadata=metadata)

        logger.info("Repository %s already exists", metadata.full_name)
        return ExistsAccessible(metadata=metadata)
