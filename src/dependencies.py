from fastapi import Depends

from src.config.settings import Settings, get_settings
from src.protocols import CredentialStoreProtocol
from src.services import (
    ContentSelector,
    FileCredentialStore,
    PublishCoordinator,
    PublishExecutor,
    RecentRepositoriesQuery,
    create_client_factory_from_settings,
)


def get_credential_store(
    settings: Settings = Depends(get_settings),
) -> CredentialStoreProtocol:
    return FileCredentialStore(settings.CREDENTIAL_STORE_PATH)


def get_publish_coordinator(
    settings: Settings = Depends(get_settings),
) -> PublishCoordinator:
    return PublishCoordinator(
        client_factory=create_client_factory_from_settings(settings),
        selector=ContentSelector(workspace_root=settings.WORKSPACE_ROOT),
        executor=PublishExecutor(commit_message=settings.COMMIT_MESSAGE),
    )


def get_recent_repositories_query(
    settings: Settings = Depends(get_settings),
) -> RecentRepositoriesQuery:
    return RecentRepositoriesQuery(
        client_factory=create_client_factory_from_settings(settings),
        default_limit=settings.RECENT_REPOS_LIMIT,
    )
