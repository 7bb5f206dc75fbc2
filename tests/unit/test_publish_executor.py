"""Unit tests for PublishExecutor class."""

import pytest

from src.schemas import (
    ErrorCategory,
    ExistsAccessible,
    ExistsInaccessible,
    NotFound,
    PublishRequest,
    Visibility,
    WorkspaceEntry,
)
from src.services import (
    ContentSelector,
    GitHubAuthenticationError,
    GitHubConnectionError,
    GitHubNotFoundError,
    GitHubResponseError,
    GitHubStatusError,
    PartialWriteError,
    PublishExecutor,
    classify_error,
)


@pytest.fixture
def request_(credential):
    return PublishRequest(
        repository_name="demo", visibility=Visibility.PRIVATE, credential=credential
    )


@pytest.fixture
def selected():
    return ContentSelector().select(
        {
            "/home/project/src/a.ts": WorkspaceEntry(content="x"),
            "/home/project/README.md": WorkspaceEntry(content="# demo"),
            "/home/project/b.ts": WorkspaceEntry(content="héllo"),
        }
    )


class TestPublishExecutor:
    """Test cases for PublishExecutor class."""

    def setup_method(self):
        self.executor = PublishExecutor(commit_message="Publish from tests")

    @pytest.mark.asyncio
    async def test_creates_repository_before_writing(self, github_client, request_, selected):
        url = await self.executor.execute(github_client, request_, NotFound(), selected)

        assert url == "https://github.com/octocat/demo"
        github_client.create_repository.assert_awaited_once_with("demo", private=True)

        call_names = [name for name, _, _ in github_client.mock_calls]
        assert call_names.index("create_repository") < call_names.index("put_file_contents")

    @pytest.mark.asyncio
    async def test_writes_in_selection_order(self, github_client, request_, selected):
        await self.executor.execute(github_client, request_, NotFound(), selected)

        written = [call.args[2] for call in github_client.put_file_contents.await_args_list]
        assert written == ["src/a.ts", "README.md", "b.ts"]

        first = github_client.put_file_contents.await_args_list[0]
        assert first.args[:4] == ("octocat", "demo", "src/a.ts", "x")
        assert first.kwargs == {
            "branch": "main",
            "message": "Publish from tests",
            "sha": None,
        }

    @pytest.mark.asyncio
    async def test_existing_repository_is_updated_in_place(
        self, github_client, request_, selected, demo_metadata
    ):
        github_client.get_file_sha.side_effect = ["sha-a", None, None]

        url = await self.executor.execute(
            github_client, request_, ExistsAccessible(metadata=demo_metadata), selected
        )

        assert url == demo_metadata.html_url
        github_client.create_repository.assert_not_awaited()
        first = github_client.put_file_contents.await_args_list[0]
        assert first.kwargs["sha"] == "sha-a"

    @pytest.mark.asyncio
    async def test_uses_default_branch(self, github_client, request_, selected, demo_metadata):
        metadata = demo_metadata.model_copy(update={"default_branch": "trunk"})

        await self.executor.execute(
            github_client, request_, ExistsAccessible(metadata=metadata), selected
        )

        for call in github_client.put_file_contents.await_args_list:
            assert call.kwargs["branch"] == "trunk"

    @pytest.mark.asyncio
    async def test_rejects_inaccessible_state(self, github_client, request_, selected):
        with pytest.raises(ValueError):
            await self.executor.execute(
                github_client, request_, ExistsInaccessible(), selected
            )
        github_client.put_file_contents.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_first_write_failure_is_not_partial(self, github_client, request_, selected):
        github_client.put_file_contents.side_effect = GitHubStatusError(
            "Unprocessable", status_code=422
        )

        with pytest.raises(GitHubStatusError):
            await self.executor.execute(github_client, request_, NotFound(), selected)

    @pytest.mark.asyncio
    async def test_failure_after_some_writes_aborts(self, github_client, request_, selected):
        github_client.put_file_contents.side_effect = [
            None,
            GitHubStatusError("Server Error", status_code=500),
            None,
        ]

        with pytest.raises(PartialWriteError) as exc_info:
            await self.executor.execute(github_client, request_, NotFound(), selected)

        assert exc_info.value.written == 1
        assert exc_info.value.total == 3
        # The third file is never attempted
        assert github_client.put_file_contents.await_count == 2

    @pytest.mark.asyncio
    async def test_stream_events(self, github_client, request_, selected):
        events = []
        async for event in self.executor.execute_stream(
            github_client, request_, NotFound(), selected
        ):
            events.append(event)

        assert events[0] == {
            "type": "repository_ready",
            "repository_url": "https://github.com/octocat/demo",
            "created": True,
        }
        assert [e["file_path"] for e in events[1:]] == ["src/a.ts", "README.md", "b.ts"]
        assert events[-1]["current_file"] == 3
        assert events[-1]["size_bytes"] == 6

    @pytest.mark.asyncio
    async def test_empty_selection_still_creates_repository(self, github_client, request_):
        url = await self.executor.execute(github_client, request_, NotFound(), [])

        assert url == "https://github.com/octocat/demo"
        github_client.put_file_contents.assert_not_awaited()


class TestClassifyError:
    @pytest.mark.parametrize(
        "error,category",
        [
            (GitHubAuthenticationError("x", 401), ErrorCategory.AUTHENTICATION_EXPIRED),
            (GitHubConnectionError("x"), ErrorCategory.REMOTE_UNAVAILABLE),
            (GitHubResponseError("x", 200), ErrorCategory.REMOTE_UNAVAILABLE),
            (GitHubStatusError("x", 503), ErrorCategory.REMOTE_UNAVAILABLE),
            (GitHubStatusError("x", 403), ErrorCategory.REMOTE_REJECTED),
            (GitHubStatusError("x", 422), ErrorCategory.REMOTE_REJECTED),
            (GitHubNotFoundError("x", 404), ErrorCategory.REMOTE_REJECTED),
            (
                PartialWriteError(2, 5, GitHubStatusError("x", 500)),
                ErrorCategory.PARTIAL_WRITE_FAILURE,
            ),
            (
                PartialWriteError(2, 5, GitHubAuthenticationError("x", 401)),
                ErrorCategory.AUTHENTICATION_EXPIRED,
            ),
        ],
    )
    def test_classify_error(self, error, category):
        assert classify_error(error) == category
