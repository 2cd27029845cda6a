"""Data models exchanged between the GitHub source, the Pivotal Tracker
target and the Migrator orchestrator.

Source records are read-only snapshots of what GitHub returned. Request
records are built per issue/comment by story_builder and consumed right
away, either by the Pivotal client or by the Reporter in dry-run mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

MIGRATED_LABEL: Final[str] = "github-migrated"
REPO_LABEL_PREFIX: Final[str] = "github-repo/"
STORY_TYPE_FEATURE: Final[str] = "feature"
STORY_STATE_UNSCHEDULED: Final[str] = "unscheduled"


@dataclass(frozen=True)
class SourceIssue:
    """An open issue as read from GitHub."""

    number: int
    title: str
    body: str
    html_url: str
    created_at: datetime | None = None
    labels: tuple[str, ...] = ()
    author: str = ""


@dataclass(frozen=True)
class SourceComment:
    """A comment on a GitHub issue."""

    body: str
    author: str
    html_url: str
    created_at: datetime | None = None


@dataclass
class StoryRequest:
    """Fields sent to Pivotal Tracker to create one story."""

    name: str
    description: str
    labels: list[str] = field(default_factory=list)
    story_type: str = STORY_TYPE_FEATURE
    current_state: str = STORY_STATE_UNSCHEDULED

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "labels": [{"name": label} for label in self.labels],
            "story_type": self.story_type,
            "current_state": self.current_state,
        }


@dataclass(frozen=True)
class Story:
    """A story created in Pivotal Tracker.

    Only exists in live mode; its id is required to attach comments.
    """

    id: int
    project_id: int
    name: str = ""
    url: str = ""


@dataclass
class CommentRequest:
    """Text sent to Pivotal Tracker to attach one comment to a story."""

    text: str

    def to_payload(self) -> dict[str, Any]:
        return {"text": self.text}


@dataclass(frozen=True)
class StoryComment:
    """A comment created in Pivotal Tracker."""

    id: int
    story_id: int
    text: str = ""
