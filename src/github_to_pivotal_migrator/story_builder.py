"""Build Pivotal Tracker story and comment requests from GitHub data."""

from __future__ import annotations

import datetime as dt
import json
from typing import TYPE_CHECKING, Final

from .models import MIGRATED_LABEL, REPO_LABEL_PREFIX, CommentRequest, StoryRequest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import SourceComment, SourceIssue

# Display limit for descriptions and comment bodies in dry-run previews
TRUNCATE_LENGTH: Final[int] = 255

_FENCE: Final[str] = "```"


def format_timestamp(timestamp: dt.datetime | None) -> str:
    """Format a datetime to a human-readable form.

    Args:
        timestamp: Timestamp as returned by GitHub (naive values are taken as UTC)

    Returns:
        Formatted timestamp (e.g., "2024-01-15 10:30:45Z").
        Returns an empty string if no timestamp is given.
    """
    if timestamp is None:
        return ""

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=dt.UTC)
    formatted = timestamp.isoformat(sep=" ", timespec="seconds")
    return formatted.replace("+00:00", "Z")


def format_labels(labels: Iterable[str]) -> str:
    """Render label names as a quoted list, e.g. ``["bug", "ui"]``. Quotes and backslashes are escaped."""
    return "[" + ", ".join(json.dumps(label, ensure_ascii=False) for label in labels) + "]"


def trunc(text: str) -> str:
    """Return at most the first TRUNCATE_LENGTH characters of text."""
    if len(text) < TRUNCATE_LENGTH:
        return text
    return text[:TRUNCATE_LENGTH]


def repo_label(repo_name: str) -> str:
    return f"{REPO_LABEL_PREFIX}{repo_name}"


def _provenance_block(html_url: str, *lines: str) -> str:
    block = f"{html_url}\n{_FENCE}\nMigrated from GitHub\n"
    block += "".join(f"{line}\n" for line in lines)
    block += f"{_FENCE}\n\n"
    return block


def build_story_description(issue: SourceIssue) -> str:
    """Build the story description: provenance block followed by the issue body.

    Args:
        issue: GitHub issue

    Returns:
        Complete description for Pivotal Tracker
    """
    description = _provenance_block(
        issue.html_url,
        f"Created: {format_timestamp(issue.created_at)}",
        f"Labels: {format_labels(issue.labels)}",
    )
    return description + issue.body


def build_comment_text(comment: SourceComment) -> str:
    """Build the comment text: provenance block followed by the comment body."""
    text = _provenance_block(
        comment.html_url,
        f"Created: {format_timestamp(comment.created_at)}",
        f"Author: {comment.author}",
    )
    return text + comment.body


def convert_issue(repo_name: str, issue: SourceIssue) -> StoryRequest:
    """Convert a GitHub issue into a Pivotal Tracker story request."""
    return StoryRequest(
        name=issue.title,
        description=build_story_description(issue),
        labels=[MIGRATED_LABEL, repo_label(repo_name)],
    )


def convert_comment(comment: SourceComment) -> CommentRequest:
    """Convert a GitHub issue comment into a Pivotal Tracker comment request."""
    return CommentRequest(text=build_comment_text(comment))
