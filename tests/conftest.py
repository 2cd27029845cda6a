"""
Pytest configuration and fixtures.

Provides in-memory stand-ins for GitHub and Pivotal Tracker so the
orchestrator can be exercised without network access:
- FakeIssueSource: serves canned issues/comments and records every call
- RecordingStoryTarget: records every create call and hands out story ids
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

import pytest

from github_to_pivotal_migrator.exceptions import RemoteCreateError, RemoteFetchError
from github_to_pivotal_migrator.models import (
    CommentRequest,
    SourceComment,
    SourceIssue,
    Story,
    StoryComment,
    StoryRequest,
)


@dataclass
class FakeIssueSource:
    """IssueSource serving canned data keyed by repository name."""

    issues: dict[str, list[SourceIssue]] = field(default_factory=dict)
    comments: dict[tuple[str, int], list[SourceComment]] = field(default_factory=dict)
    failing_repos: set[str] = field(default_factory=set)
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def list_open_issues(self, owner: str, repo: str, limit: int) -> list[SourceIssue]:
        self.calls.append(("list_open_issues", owner, repo))
        if repo in self.failing_repos:
            msg = f"Failed to list issues for repo: {owner}/{repo}, error: connection reset"
            raise RemoteFetchError(msg, owner=owner, repo=repo)
        return self.issues.get(repo, [])[:limit]

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[SourceComment]:
        self.calls.append(("list_comments", owner, repo, str(issue_number)))
        return self.comments.get((repo, issue_number), [])


@dataclass
class RecordingStoryTarget:
    """StoryTarget recording calls; story ids start at `next_story_id`."""

    next_story_id: int = 7
    fail_on_story: int | None = None
    stories: list[tuple[int, StoryRequest]] = field(default_factory=list)
    comments: list[tuple[int, int, CommentRequest]] = field(default_factory=list)

    def create_story(self, project_id: int, request: StoryRequest) -> Story:
        if self.fail_on_story is not None and len(self.stories) == self.fail_on_story:
            msg = "Error creating story: Pivotal Tracker returned 400: invalid parameter"
            raise RemoteCreateError(msg, status_code=400)
        self.stories.append((project_id, request))
        story = Story(id=self.next_story_id, project_id=project_id, name=request.name)
        self.next_story_id += 1
        return story

    def add_comment(self, project_id: int, story_id: int, request: CommentRequest) -> StoryComment:
        self.comments.append((project_id, story_id, request))
        return StoryComment(id=100 + len(self.comments), story_id=story_id, text=request.text)


@pytest.fixture
def crash_issue() -> SourceIssue:
    return SourceIssue(
        number=42,
        title="Bug: crash on load",
        body="steps...",
        html_url="https://github.com/acme/widgets/issues/42",
        created_at=dt.datetime(2016, 3, 1, 12, 30, 5, tzinfo=dt.UTC),
        labels=("bug",),
        author="bob",
    )


@pytest.fixture
def confirmed_comment() -> SourceComment:
    return SourceComment(
        body="confirmed",
        author="alice",
        html_url="https://github.com/acme/widgets/issues/42#issuecomment-1",
        created_at=dt.datetime(2016, 3, 2, 8, 0, 0, tzinfo=dt.UTC),
    )


@pytest.fixture
def widgets_source(crash_issue: SourceIssue, confirmed_comment: SourceComment) -> FakeIssueSource:
    return FakeIssueSource(
        issues={"widgets": [crash_issue]},
        comments={("widgets", 42): [confirmed_comment]},
    )


@pytest.fixture
def recording_target() -> RecordingStoryTarget:
    return RecordingStoryTarget()
