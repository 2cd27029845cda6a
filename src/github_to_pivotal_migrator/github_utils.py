from __future__ import annotations

import logging
import os
from itertools import islice
from typing import TYPE_CHECKING, Final

import requests
from github import Auth, Github, GithubException

from . import utils
from .exceptions import ConfigError, RemoteFetchError
from .models import SourceComment, SourceIssue

if TYPE_CHECKING:
    from github.Issue import Issue as GithubIssue
    from github.IssueComment import IssueComment as GithubIssueComment
    from github.Repository import Repository

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

_TOKEN_ENV_VAR: Final[str] = "GITHUB_TOKEN"  # noqa: S105

# GitHub never returns more than this many items in one page
MAX_PER_PAGE: Final[int] = 100
COMMENT_PAGE_LIMIT: Final[int] = 1000


def get_token(pass_path: str | None = None) -> str | None:
    """Get GitHub token from pass path or env var GITHUB_TOKEN.

    Returns None when neither is set; the client then uses public access.
    """
    if pass_path:
        try:
            return utils.get_pass_value(pass_path)
        except utils.PassError as e:
            msg = f"Could not read GitHub token from pass: {e}"
            raise ConfigError(msg) from e

    token: str | None = os.environ.get(_TOKEN_ENV_VAR)
    if token:
        return token

    logger.warning("No GitHub token specified nor found, using unauthenticated access")
    return None


def get_client(token: str | None = None, *, per_page: int = MAX_PER_PAGE) -> Github:
    """Get a GitHub client using the token. Falls back to anonymous access if no token is provided.

    The page size applies to issue and comment listings alike; the issue
    limit is enforced while iterating, not through the page size.
    """
    per_page = max(1, min(per_page, MAX_PER_PAGE))
    if not token:
        return Github(per_page=per_page)
    return Github(auth=Auth.Token(token), per_page=per_page)


def to_source_issue(gh_issue: GithubIssue) -> SourceIssue:
    return SourceIssue(
        number=gh_issue.number,
        title=gh_issue.title,
        body=gh_issue.body or "",
        html_url=gh_issue.html_url,
        created_at=gh_issue.created_at,
        labels=tuple(label.name for label in gh_issue.labels),
        author=gh_issue.user.login if gh_issue.user else "",
    )


def to_source_comment(gh_comment: GithubIssueComment) -> SourceComment:
    return SourceComment(
        body=gh_comment.body or "",
        author=gh_comment.user.login if gh_comment.user else "",
        html_url=gh_comment.html_url,
        created_at=gh_comment.created_at,
    )


def is_pull_request(gh_issue: GithubIssue) -> bool:
    """Tell pull requests apart from issues using only data from the issue listing."""
    return "/pull/" in gh_issue.html_url


class GitHubIssueSource:
    """Reads open issues and their comments from GitHub repositories.

    Issues returned by the listing are kept so their comments can be read
    without fetching each issue again.
    """

    _client: Github
    _repos: dict[str, Repository]
    _issues: dict[tuple[str, int], GithubIssue]

    def __init__(self, client: Github) -> None:
        self._client = client
        self._repos = {}
        self._issues = {}

    def _get_repo(self, owner: str, repo: str) -> Repository:
        full_name = f"{owner}/{repo}"
        if full_name not in self._repos:
            self._repos[full_name] = self._client.get_repo(full_name)
        return self._repos[full_name]

    def list_open_issues(self, owner: str, repo: str, limit: int) -> list[SourceIssue]:
        """Return at most `limit` open issues in the order GitHub lists them.

        Pull requests share the issues endpoint and are skipped. Skipped pull
        requests still count towards the limit.
        """
        issues: list[SourceIssue] = []
        try:
            for gh_issue in islice(self._get_repo(owner, repo).get_issues(state="open"), limit):
                if is_pull_request(gh_issue):
                    logger.debug(f"Skipping pull request #{gh_issue.number} in {owner}/{repo}")
                    continue
                issues.append(to_source_issue(gh_issue))
                self._issues[(f"{owner}/{repo}", gh_issue.number)] = gh_issue
        except (GithubException, requests.RequestException) as e:
            msg = f"Failed to list issues for repo: {owner}/{repo}, error: {e}"
            raise RemoteFetchError(msg, owner=owner, repo=repo) from e

        logger.debug(f"Fetched {len(issues)} open issues from {owner}/{repo}")
        return issues

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[SourceComment]:
        """Return up to COMMENT_PAGE_LIMIT comments of an issue in source order."""
        try:
            gh_issue = self._issues.get((f"{owner}/{repo}", issue_number))
            if gh_issue is None:
                gh_issue = self._get_repo(owner, repo).get_issue(issue_number)
            comments = [to_source_comment(c) for c in islice(gh_issue.get_comments(), COMMENT_PAGE_LIMIT)]
        except (GithubException, requests.RequestException) as e:
            msg = f"Failed to list comments for repo: {owner}/{repo}, issue {issue_number}: error: {e}"
            raise RemoteFetchError(msg, owner=owner, repo=repo, issue_number=issue_number) from e

        return comments
