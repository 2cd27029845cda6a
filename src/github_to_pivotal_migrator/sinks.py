"""Record sinks: where converted stories and comments go.

DryRunSink prints each source record next to its conversion and never
touches the destination. PivotalSink writes to Pivotal Tracker.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import MigrationError

if TYPE_CHECKING:
    from .models import CommentRequest, SourceComment, SourceIssue, Story, StoryRequest
    from .protocols import StoryTarget
    from .reporter import Reporter

logger: logging.Logger = logging.getLogger(__name__)


class DryRunSink:
    """Prints what would be created."""

    dry_run: bool = True

    def __init__(self, reporter: Reporter) -> None:
        self._reporter = reporter

    def handle_issue(self, issue: SourceIssue, request: StoryRequest) -> Story | None:
        self._reporter.issue(issue)
        self._reporter.story(request)
        return None

    def handle_comment(self, story: Story | None, comment: SourceComment, request: CommentRequest) -> None:
        self._reporter.issue_comment(comment)
        self._reporter.story_comment(request)


class PivotalSink:
    """Creates stories and comments in one Pivotal Tracker project."""

    dry_run: bool = False

    def __init__(self, target: StoryTarget, project_id: int) -> None:
        self._target = target
        self._project_id = project_id

    def handle_issue(self, issue: SourceIssue, request: StoryRequest) -> Story | None:
        story = self._target.create_story(self._project_id, request)
        logger.info(f"Created story {story.id} from issue #{issue.number}")
        return story

    def handle_comment(self, story: Story | None, comment: SourceComment, request: CommentRequest) -> None:
        if story is None:
            msg = f"Cannot attach comment by {comment.author}: no story was created for its issue"
            raise MigrationError(msg)
        created = self._target.add_comment(self._project_id, story.id, request)
        logger.debug(f"Created comment {created.id} on story {story.id} (by {comment.author})")
