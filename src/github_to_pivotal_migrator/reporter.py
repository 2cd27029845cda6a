"""Human-readable output: dry-run previews, progress lines and the run summary."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from .story_builder import format_labels, format_timestamp, trunc

if TYPE_CHECKING:
    from .models import CommentRequest, SourceComment, SourceIssue, StoryRequest
    from .orchestrator import MigrationStats


class Reporter:
    """Prints audit output to stdout (or the given stream).

    Nothing written here is read back by the migration.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _print(self, text: str = "") -> None:
        print(text, file=self._stream or sys.stdout)

    def analysing_repo(self, owner: str, repo: str) -> None:
        self._print(f"Analysing repo: {owner}/{repo}")

    def found_issues(self, count: int) -> None:
        self._print(f"found {count} issues to migrate")

    def found_comments(self, count: int, issue_number: int) -> None:
        self._print(f"found {count} comments for issue number: {issue_number}")

    def begin_issue(self) -> None:
        self._print("\n===== begin =====\n")

    def end_issue(self) -> None:
        self._print("\n===== end =====\n")

    def finished(self) -> None:
        self._print("Finished.")

    def issue(self, issue: SourceIssue) -> None:
        self._print(
            "\n--- issue ---\n"
            f"Number: {issue.number}\n"
            f"Title: {issue.title}\n"
            f"URL: {issue.html_url}\n"
            f"Created: {format_timestamp(issue.created_at)}\n"
            f"Labels: {format_labels(issue.labels)}\n"
            "--- /issue ---"
        )

    def story(self, request: StoryRequest) -> None:
        self._print(
            "\n--- story ---\n"
            f"Name: {request.name}\n"
            f"Description: {trunc(request.description)}\n"
            f"Type: {request.story_type}\n"
            f"State: {request.current_state}\n"
            f"Labels: {format_labels(request.labels)}\n"
            "--- /story ---"
        )

    def issue_comment(self, comment: SourceComment) -> None:
        self._print(
            "\n--- issue comment ---\n"
            f"Author: {comment.author}\n"
            f"Created: {format_timestamp(comment.created_at)}\n"
            f"Body: {trunc(comment.body)}\n"
            "--- /issue comment ---"
        )

    def story_comment(self, request: CommentRequest) -> None:
        self._print(f"\n--- story comment ---\nText: {trunc(request.text)}\n--- /story comment ---")

    def summary(self, stats: MigrationStats, *, dry_run: bool) -> None:
        mode = "Dry run" if dry_run else "Migration"
        self._print(
            f"{mode} summary: {stats.repositories_processed} repositories, "
            f"{stats.issues_processed} issues, {stats.comments_processed} comments processed; "
            f"{stats.stories_created} stories and {stats.comments_created} comments created"
        )
