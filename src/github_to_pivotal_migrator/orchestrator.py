"""Migration orchestrator that coordinates the GitHub source and a record sink.

Migration Flow
--------------
For each configured repository, in the order given:

    list open issues (at most `limit`)
    For each issue (in source order):
        a. Convert the issue into a story request
        b. Hand it to the sink: print it (dry-run) or create the story (live)
        c. Fetch the issue's comments
        d. For each comment (in source order):
           - Convert it into a comment request
           - Hand it to the sink: print it (dry-run) or attach it to the
             story created in step b (live)

Step b strictly precedes step d: a story must exist before comments can be
attached to it. In dry-run mode no story exists and the sink receives None.

Error Handling
--------------
There is no recoverable tier. The first ConfigError, RemoteFetchError or
RemoteCreateError aborts the whole run. Stories already created stay in
Pivotal Tracker; nothing is rolled back and re-running creates them again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .exceptions import ConfigError, RemoteCreateError
from .story_builder import convert_comment, convert_issue

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import SourceIssue
    from .protocols import IssueSource, RecordSink
    from .reporter import Reporter

logger = logging.getLogger(__name__)

DEFAULT_ISSUE_LIMIT: Final[int] = 1000


@dataclass
class MigrationStats:
    """Statistics collected during migration."""

    repositories_processed: int = 0
    issues_processed: int = 0
    comments_processed: int = 0
    stories_created: int = 0
    comments_created: int = 0


class Migrator:
    """Migrates open GitHub issues of one owner into stories.

    Usage:
        source = GitHubIssueSource(github_client)
        sink = PivotalSink(PivotalClient(token), project_id)  # or DryRunSink(reporter)
        migrator = Migrator(source, sink, reporter, owner="acme")
        stats = migrator.migrate(["widgets", "gadgets"])
    """

    _source: IssueSource
    _sink: RecordSink
    _reporter: Reporter

    def __init__(
        self,
        source: IssueSource,
        sink: RecordSink,
        reporter: Reporter,
        *,
        owner: str,
        limit: int = DEFAULT_ISSUE_LIMIT,
    ) -> None:
        self._source = source
        self._sink = sink
        self._reporter = reporter
        self.owner = owner
        self.limit = limit

    def _validate(self, repos: Sequence[str]) -> None:
        if not repos:
            msg = "no github repos specified"
            raise ConfigError(msg)
        if not self.owner:
            msg = "no github owner specified"
            raise ConfigError(msg)
        if self.limit < 1:
            msg = f"Issue limit must be positive, got {self.limit}"
            raise ConfigError(msg)

    def migrate(self, repos: Sequence[str]) -> MigrationStats:
        """Execute the migration for all repositories.

        Returns:
            MigrationStats for the completed run

        Raises:
            ConfigError: If no repositories are given (before any network call)
            RemoteFetchError: If reading from GitHub fails
            RemoteCreateError: If writing to Pivotal Tracker fails
        """
        self._validate(repos)
        stats = MigrationStats()

        for repo in repos:
            self._migrate_repo(repo, stats)
            stats.repositories_processed += 1

        self._reporter.finished()
        self._reporter.summary(stats, dry_run=self._sink.dry_run)
        logger.info(
            f"Migrated {stats.issues_processed} issues and {stats.comments_processed} comments "
            f"from {stats.repositories_processed} repositories"
        )
        return stats

    def _migrate_repo(self, repo: str, stats: MigrationStats) -> None:
        self._reporter.analysing_repo(self.owner, repo)
        issues = self._source.list_open_issues(self.owner, repo, self.limit)
        self._reporter.found_issues(len(issues))
        logger.info(f"Found {len(issues)} open issues in {self.owner}/{repo}")

        for issue in issues:
            self._migrate_issue(repo, issue, stats)

    def _migrate_issue(self, repo: str, issue: SourceIssue, stats: MigrationStats) -> None:
        """Migrate a single issue with its comments."""
        self._reporter.begin_issue()

        story_request = convert_issue(repo, issue)
        try:
            story = self._sink.handle_issue(issue, story_request)
        except RemoteCreateError:
            logger.error(f"Error creating story for {self.owner}/{repo} issue #{issue.number}")
            raise
        if story is not None:
            stats.stories_created += 1

        comments = self._source.list_comments(self.owner, repo, issue.number)
        self._reporter.found_comments(len(comments), issue.number)

        for comment in comments:
            comment_request = convert_comment(comment)
            try:
                self._sink.handle_comment(story, comment, comment_request)
            except RemoteCreateError:
                logger.error(f"Error creating comment for {self.owner}/{repo} issue #{issue.number}")
                raise
            stats.comments_processed += 1
            if story is not None:
                stats.comments_created += 1

        stats.issues_processed += 1
        self._reporter.end_issue()

