"""Coordinates publishing a workspace snapshot to a GitHub repository."""

import logging
import re
from enum import Enum
from typing import Any, AsyncGenerator, Callable, Dict, List, Mapping, Optional

from ..protocols import CredentialStoreProtocol
from ..schemas import (
    Blocked,
    BlockReason,
    Cancelled,
    Credential,
    ErrorCategory,
    ExistsAccessible,
    ExistsInaccessible,
    Failed,
    PublishOutcome,
    PublishRequest,
    PublishSummary,
    Succeeded,
    Visibility,
    WorkspaceEntry,
)
from .content_selector import ContentSelector
from .credential_gate import CredentialGate
from .github_client import GitHubClientError
from .github_client_factory import ClientFactory
from .publish_executor import PublishExecutor, classify_error
from .repository_resolver import RepositoryResolver
from .result_reporter import ResultReporter

logger = logging.getLogger(__name__)

ConfirmOverwrite = Callable[[], bool]

# Characters GitHub accepts in a repository name
REPOSITORY_NAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+")


class PublishStage(str, Enum):
    """Stages of a single publish attempt."""

    IDLE = "idle"
    CREDENTIAL_CHECKED = "credential_checked"
    RESOLVED = "resolved"
    CONFIRMATION_PENDING = "confirmation_pending"
    SELECTED = "selected"
    EXECUTED = "executed"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    BLOCKED = "blocked"
    CANCELLED = "cancelled"


TERMINAL_STAGES = frozenset(
    {
        PublishStage.SUCCEEDED,
        PublishStage.FAILED,
        PublishStage.BLOCKED,
        PublishStage.CANCELLED,
    }
)

TRANSITIONS = {
    PublishStage.IDLE: {PublishStage.CREDENTIAL_CHECKED, PublishStage.BLOCKED},
    PublishStage.CREDENTIAL_CHECKED: {
        PublishStage.RESOLVED,
        PublishStage.BLOCKED,
        PublishStage.FAILED,
    },
    PublishStage.RESOLVED: {
        PublishStage.CONFIRMATION_PENDING,
        PublishStage.SELECTED,
        PublishStage.FAILED,
    },
    PublishStage.CONFIRMATION_PENDING: {PublishStage.RESOLVED, PublishStage.CANCELLED},
    PublishStage.SELECTED: {PublishStage.EXECUTED, PublishStage.FAILED},
    PublishStage.EXECUTED: {PublishStage.SUCCEEDED, PublishStage.FAILED},
}

OUTCOME_STAGES = {
    "blocked": PublishStage.BLOCKED,
    "cancelled": PublishStage.CANCELLED,
    "succeeded": PublishStage.SUCCEEDED,
    "failed": PublishStage.FAILED,
}


class PublishPipeline:
    """
    State machine for one publish attempt.

    A pipeline runs exactly once and produces exactly one outcome. Stages
    are never re-entered, except returning to RESOLVED after the overwrite
    confirmation.
    """

    def __init__(
        self,
        client_factory: ClientFactory,
        gate: CredentialGate,
        resolver: RepositoryResolver,
        selector: ContentSelector,
        executor: PublishExecutor,
        reporter: ResultReporter,
    ):
        self.client_factory = client_factory
        self.gate = gate
        self.resolver = resolver
        self.selector = selector
        self.executor = executor
        self.reporter = reporter
        self.stage = PublishStage.IDLE
        self.history: List[PublishStage] = [PublishStage.IDLE]
        self.outcome: Optional[PublishOutcome] = None
        self._started = False

    def _advance(self, stage: PublishStage) -> None:
        allowed = TRANSITIONS.get(self.stage, set())
        reentry = stage in self.history and not (
            stage is PublishStage.RESOLVED
            and self.stage is PublishStage.CONFIRMATION_PENDING
        )
        if stage not in allowed or reentry:
            raise RuntimeError(
                f"Illegal publish transition {self.stage.value} -> {stage.value}"
            )
        self.stage = stage
        self.history.append(stage)

    def _finish(self, outcome: PublishOutcome) -> Dict[str, Any]:
        self._advance(OUTCOME_STAGES[outcome.status])
        self.outcome = outcome
        summary = self.reporter.report(outcome)

        if isinstance(outcome, (Blocked, Cancelled)):
            logger.debug("Publish ended without changes: %s", outcome.model_dump_json())
        elif isinstance(outcome, Failed):
            logger.warning(
                "Publish failed (%s): %s", outcome.category.value, outcome.detail
            )
        else:
            logger.info("Publish succeeded: %s", outcome.repository_url)

        return {
            "type": "complete",
            "status": outcome.status,
            "message": summary.message,
            "progress": 100,
            "outcome": outcome,
            "summary": summary,
        }

    def _fail(
        self, error: GitHubClientError, credential_store: CredentialStoreProtocol
    ) -> Dict[str, Any]:
        category = classify_error(error)
        if category is ErrorCategory.AUTHENTICATION_EXPIRED:
            # Force the user to reconnect instead of retrying a stale token
            credential_store.clear()
        return self._finish(Failed(category=category, detail=str(error)))

    async def run_stream(
        self,
        repository_name: str,
        visibility: Visibility,
        workspace: Mapping[str, WorkspaceEntry],
        credential_store: CredentialStoreProtocol,
        confirm_overwrite: ConfirmOverwrite,
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """Run the attempt, yielding progress events and a final `complete` event."""
        if self._started:
            raise RuntimeError("A publish pipeline can only run once")
        self._started = True

        yield {"type": "status", "message": "Checking GitHub connection...", "progress": 0}
        checked = self.gate.check(credential_store)
        if isinstance(checked, Blocked):
            yield self._finish(checked)
            return
        credential: Credential = checked
        self._advance(PublishStage.CREDENTIAL_CHECKED)

        if not repository_name.strip():
            yield self._finish(Blocked(reason=BlockReason.EMPTY_REPOSITORY_NAME))
            return

        if not REPOSITORY_NAME_PATTERN.fullmatch(repository_name.strip()):
            yield self._finish(
                Failed(
                    category=ErrorCategory.REMOTE_REJECTED,
                    detail=f"Invalid repository name {repository_name.strip()!r}: "
                    "use only letters, digits, '.', '-' and '_'",
                )
            )
            return

        request = PublishRequest(
            repository_name=repository_name,
            visibility=visibility,
            credential=credential,
        )

        client = self.client_factory(credential)
        try:
            yield {
                "type": "status",
                "message": f"Checking repository {request.owner}/{request.repository_name}...",
                "progress": 5,
            }
            try:
                state = await self.resolver.resolve(
                    client, credential, request.repository_name
                )
            except GitHubClientError as e:
                yield self._fail(e, credential_store)
                return
            self._advance(PublishStage.RESOLVED)

            if isinstance(state, ExistsInaccessible):
                yield self._finish(
                    Failed(
                        category=ErrorCategory.REMOTE_REJECTED,
                        detail=f"No push access to {request.owner}/{request.repository_name}",
                    )
                )
                return

            if isinstance(state, ExistsAccessible):
                self._advance(PublishStage.CONFIRMATION_PENDING)
                yield {
                    "type": "status",
                    "message": f'Repository "{request.repository_name}" already exists',
                    "progress": 10,
                }
                if not confirm_overwrite():
                    yield self._finish(Cancelled())
                    return
                self._advance(PublishStage.RESOLVED)

            selected = self.selector.select(workspace)
            self._advance(PublishStage.SELECTED)
            total_files = len(selected)
            yield {
                "type": "status",
                "message": f"Found {total_files} files to push",
                "progress": 15,
                "total_files": total_files,
            }

            repository_url = ""
            try:
                async for event in self.executor.execute_stream(
                    client, request, state, selected
                ):
                    if event["type"] == "repository_ready":
                        repository_url = event["repository_url"]
                        verb = "Created" if event["created"] else "Updating"
                        yield {
                            "type": "status",
                            "message": f"{verb} repository {repository_url}",
                            "progress": 20,
                        }
                    else:
                        done = event["current_file"]
                        yield {
                            "type": "file_complete",
                            "message": f"✅ Pushed: {event['file_path']}",
                            "progress": 20 + (done / max(total_files, 1)) * 75,
                            "file_path": event["file_path"],
                            "size_bytes": event["size_bytes"],
                            "current_file": done,
                            "total_files": total_files,
                        }
            except GitHubClientError as e:
                yield self._fail(e, credential_store)
                return
            self._advance(PublishStage.EXECUTED)

            yield self._finish(
                Succeeded(
                    repository_url=repository_url,
                    manifest=[item.entry for item in selected],
                )
            )
        finally:
            await client.aclose()


class PublishCoordinator:
    """Builds a fresh pipeline for every publish attempt."""

    def __init__(
        self,
        client_factory: ClientFactory,
        gate: Optional[CredentialGate] = None,
        resolver: Optional[RepositoryResolver] = None,
        selector: Optional[ContentSelector] = None,
        executor: Optional[PublishExecutor] = None,
        reporter: Optional[ResultReporter] = None,
    ):
        self.client_factory = client_factory
        self.gate = gate or CredentialGate()
        self.resolver = resolver or RepositoryResolver()
        self.selector = selector or ContentSelector()
        self.executor = executor or PublishExecutor()
        self.reporter = reporter or ResultReporter()

    def new_pipeline(self) -> PublishPipeline:
        return PublishPipeline(
            client_factory=self.client_factory,
            gate=self.gate,
            resolver=self.resolver,
            selector=self.selector,
            executor=self.executor,
            reporter=self.reporter,
        )

    async def publish_stream(
        self,
        repository_name: str,
        visibility: Visibility,
        workspace: Mapping[str, WorkspaceEntry],
        credential_store: CredentialStoreProtocol,
        confirm_overwrite: ConfirmOverwrite,
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """Publish with streaming progress updates."""
        pipeline = self.new_pipeline()
        async for event in pipeline.run_stream(
            repository_name, visibility, workspace, credential_store, confirm_overwrite
        ):
            yield event

    async def publish(
        self,
        repository_name: str,
        visibility: Visibility,
        workspace: Mapping[str, WorkspaceEntry],
        credential_store: CredentialStoreProtocol,
        confirm_overwrite: ConfirmOverwrite,
    ) -> PublishOutcome:
        """Publish and return the single outcome of the attempt."""
        pipeline = self.new_pipeline()
        async for _ in pipeline.run_stream(
            repository_name, visibility, workspace, credential_store, confirm_overwrite
        ):
            pass
        if pipeline.outcome is None:
            raise RuntimeError("Publish pipeline finished without an outcome")
        return pipeline.outcome

    def report(self, outcome: PublishOutcome) -> PublishSummary:
        return self.reporter.report(outcome)
