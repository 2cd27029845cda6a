"""Protocols defining the contracts between the Migrator and its collaborators.

The migration separates concerns into:

1. IssueSource: Reads open issues and comments (GitHub)
2. StoryTarget: Creates stories and comments (Pivotal Tracker)
3. RecordSink: What happens to each converted record. Chosen once per run:
   a dry-run sink prints it, a live sink writes it to a StoryTarget.
4. Migrator: Orchestrates the flow per repository, issue and comment

This allows testing the Migrator with in-memory fakes and keeps the dry-run
decision out of the per-record loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import (
        CommentRequest,
        SourceComment,
        SourceIssue,
        Story,
        StoryComment,
        StoryRequest,
    )


class IssueSource(Protocol):
    """Protocol for reading issues from the source tracker."""

    def list_open_issues(self, owner: str, repo: str, limit: int) -> list[SourceIssue]:
        """Return at most `limit` open issues, in source order.

        Raises:
            RemoteFetchError: If the repository cannot be read
        """
        ...

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[SourceComment]:
        """Return the comments of one issue, in source order.

        Raises:
            RemoteFetchError: If the comments cannot be read
        """
        ...


class StoryTarget(Protocol):
    """Protocol for creating stories in the destination tracker."""

    def create_story(self, project_id: int, request: StoryRequest) -> Story:
        """Create a story and return it with its assigned id.

        Raises:
            RemoteCreateError: On any transport or validation error
        """
        ...

    def add_comment(self, project_id: int, story_id: int, request: CommentRequest) -> StoryComment:
        """Attach a comment to a story created earlier in this run.

        Raises:
            RemoteCreateError: On any transport or validation error
        """
        ...


class RecordSink(Protocol):
    """Receives every converted record alongside its source record."""

    dry_run: bool

    def handle_issue(self, issue: SourceIssue, request: StoryRequest) -> Story | None:
        """Handle a converted issue.

        Returns:
            The created story, or None when nothing was created (dry-run)
        """
        ...

    def handle_comment(self, story: Story | None, comment: SourceComment, request: CommentRequest) -> None:
        """Handle a converted comment of the issue whose story was returned by handle_issue."""
        ...
