"""Read-only query for the user's recently updated repositories."""

import logging
from typing import List, Optional

from ..protocols import CredentialStoreProtocol
from ..schemas import Blocked, RepositorySummary
from .credential_gate import CredentialGate
from .github_client import GitHubAuthenticationError
from .github_client_factory import ClientFactory

logger = logging.getLogger(__name__)


class RecentRepositoriesQuery:
    """Suggests repository names; has no effect on any publish outcome."""

    def __init__(
        self,
        client_factory: ClientFactory,
        gate: Optional[CredentialGate] = None,
        default_limit: int = 5,
    ):
        self.client_factory = client_factory
        self.gate = gate or CredentialGate()
        self.default_limit = default_limit

    async def fetch(
        self, credential_store: CredentialStoreProtocol, limit: Optional[int] = None
    ) -> List[RepositorySummary]:
        checked = self.gate.check(credential_store)
        if isinstance(checked, Blocked):
            return []

        client = self.client_factory(checked)
        try:
            return await client.list_recent_repositories(limit or self.default_limit)
        except GitHubAuthenticationError:
            logger.warning("GitHub token rejected while listing repositories")
            credential_store.clear()
            raise
        finally:
            await client.aclose()
