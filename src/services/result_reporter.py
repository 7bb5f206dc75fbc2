"""Turns a publish outcome into a presentable summary."""

from ..schemas import (
    Blocked,
    BlockReason,
    Cancelled,
    ErrorCategory,
    Failed,
    ManifestLine,
    PublishOutcome,
    PublishSummary,
    Succeeded,
)

SIZE_UNITS = ("B", "KB", "MB", "GB")

FAILURE_MESSAGES = {
    ErrorCategory.AUTHENTICATION_EXPIRED: (
        "GitHub token expired. Please reconnect your account."
    ),
    ErrorCategory.REMOTE_REJECTED: (
        "Failed to push to GitHub. Please check your repository name and try again."
    ),
    ErrorCategory.REMOTE_UNAVAILABLE: (
        "Could not reach GitHub. Please check your network connection and try again."
    ),
    ErrorCategory.PARTIAL_WRITE_FAILURE: (
        "The push stopped partway through, so the repository may contain only "
        "some of your files. Please try again."
    ),
    ErrorCategory.NO_CREDENTIAL: (
        "Please connect your GitHub account in Settings > Connections first."
    ),
    ErrorCategory.EMPTY_REPOSITORY_NAME: "Repository name is required.",
}

BLOCKED_MESSAGES = {
    BlockReason.NO_CREDENTIAL: FAILURE_MESSAGES[ErrorCategory.NO_CREDENTIAL],
    BlockReason.EMPTY_REPOSITORY_NAME: FAILURE_MESSAGES[
        ErrorCategory.EMPTY_REPOSITORY_NAME
    ],
}


def format_size(size_bytes: int) -> str:
    """Human readable size, e.g. 1536 -> "1.5 KB"."""
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.1f} {SIZE_UNITS[unit_index]}"


class ResultReporter:
    """Maps each outcome kind onto a summary the presentation layer can render."""

    def report(self, outcome: PublishOutcome) -> PublishSummary:
        if isinstance(outcome, Succeeded):
            return PublishSummary(
                status="succeeded",
                severity="info",
                title="Successfully pushed to GitHub",
                message=f"Pushed {len(outcome.manifest)} files to {outcome.repository_url}",
                repository_url=outcome.repository_url,
                files=[
                    ManifestLine(
                        path=entry.relative_path,
                        size_bytes=entry.size_bytes,
                        size=format_size(entry.size_bytes),
                    )
                    for entry in outcome.manifest
                ],
            )

        if isinstance(outcome, Failed):
            return PublishSummary(
                status="failed",
                severity="error",
                title="Push to GitHub failed",
                message=FAILURE_MESSAGES[outcome.category],
            )

        if isinstance(outcome, Blocked):
            return PublishSummary(
                status="blocked",
                severity="notice",
                title="Nothing was pushed",
                message=BLOCKED_MESSAGES[outcome.reason],
            )

        if isinstance(outcome, Cancelled):
            return PublishSummary(
                status="cancelled",
                severity="notice",
                title="Push cancelled",
                message="The existing repository was left unchanged.",
            )

        raise TypeError(f"Unknown publish outcome: {type(outcome).__name__}")
