import json
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from src.dependencies import (
    get_credential_store,
    get_publish_coordinator,
    get_recent_repositories_query,
)
from src.protocols import CredentialStoreProtocol
from src.schemas import PublishApiRequest, PublishApiResponse, RepositorySummary
from src.services import (
    GitHubAuthenticationError,
    GitHubClientError,
    PublishCoordinator,
    RecentRepositoriesQuery,
)

router = APIRouter(prefix="/publish", tags=["publish"])


def _serialize_event(event: Dict[str, Any]) -> str:
    payload = {
        key: value.model_dump(mode="json") if isinstance(value, BaseModel) else value
        for key, value in event.items()
    }
    return f"data: {json.dumps(payload)}\n\n"


@router.post("/", response_model=PublishApiResponse)
async def publish_workspace(
    request: PublishApiRequest,
    coordinator: PublishCoordinator = Depends(get_publish_coordinator),
    credential_store: CredentialStoreProtocol = Depends(get_credential_store),
):
    """Publish the submitted workspace files to a GitHub repository."""
    outcome = await coordinator.publish(
        repository_name=request.repository_name,
        visibility=request.visibility,
        workspace=request.files,
        credential_store=credential_store,
        confirm_overwrite=lambda: request.confirm_overwrite,
    )
    return PublishApiResponse(outcome=outcome, summary=coordinator.report(outcome))


@router.post("/stream")
async def publish_workspace_stream(
    request: PublishApiRequest,
    coordinator: PublishCoordinator = Depends(get_publish_coordinator),
    credential_store: CredentialStoreProtocol = Depends(get_credential_store),
):
    """Publish with streaming progress updates (Server-Sent Events)."""

    async def generate_progress():
        async for event in coordinator.publish_stream(
            repository_name=request.repository_name,
            visibility=request.visibility,
            workspace=request.files,
            credential_store=credential_store,
            confirm_overwrite=lambda: request.confirm_overwrite,
        ):
            yield _serialize_event(event)

    return StreamingResponse(generate_progress(), media_type="text/event-stream")


@router.get("/repositories/recent", response_model=List[RepositorySummary])
async def recent_repositories(
    limit: int = Query(default=5, ge=1, le=100),
    query: RecentRepositoriesQuery = Depends(get_recent_repositories_query),
    credential_store: CredentialStoreProtocol = Depends(get_credential_store),
):
    """List the user's most recently updated repositories."""
    try:
        return await query.fetch(credential_store, limit=limit)
    except GitHubAuthenticationError:
        raise HTTPException(
            status_code=401,
            detail="GitHub token expired. Please reconnect your account.",
        )
    except GitHubClientError as e:
        raise HTTPException(
            status_code=502, detail=f"Failed to fetch repositories: {str(e)}"
        )


@router.get("/health")
async def publish_health_check():
    """Simple health check for publish endpoints."""
    return {"status": "publish endpoints available"}
