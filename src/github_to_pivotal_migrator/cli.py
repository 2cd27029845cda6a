"""
Command-line interface for the GitHub to Pivotal Tracker migration tool.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from . import github_utils as ghu
from . import pivotal_utils as pvu
from .exceptions import ConfigError, MigrationError
from .github_utils import GitHubIssueSource
from .orchestrator import DEFAULT_ISSUE_LIMIT, Migrator
from .pivotal_utils import PivotalClient
from .reporter import Reporter
from .sinks import DryRunSink, PivotalSink
from .utils import setup_logging

if TYPE_CHECKING:
    from .protocols import RecordSink

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Migrate open GitHub issues and their comments to Pivotal Tracker stories"
    )

    _ = parser.add_argument("--owner", required=True, help="Owner of the GitHub repositories to migrate")
    _ = parser.add_argument(
        "--repos",
        action="append",
        default=[],
        help="GitHub repository to migrate (comma-separated list accepted). Can be specified multiple times.",
    )

    _ = parser.add_argument("--gh-token", help="GitHub API access token (default: GITHUB_TOKEN, else public access)")
    _ = parser.add_argument("--github-pass-token", help="Path for GitHub token in pass utility")
    _ = parser.add_argument("--pt-token", help="Pivotal Tracker API access token (default: PIVOTAL_TOKEN)")
    _ = parser.add_argument("--pivotal-pass-token", help="Path for Pivotal Tracker token in pass utility")
    _ = parser.add_argument("--pt-proj-id", type=int, default=0, help="Pivotal Tracker project ID")

    _ = parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_ISSUE_LIMIT,
        help=f"Max number of issues to attempt per repository (default: {DEFAULT_ISSUE_LIMIT})",
    )
    _ = parser.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Print actions that would be taken instead of creating stories (default: on)",
    )

    _ = parser.add_argument(
        "--verbose", "-v", action="count", default=0, help="Increase console logging (-v info, -vv debug)"
    )

    return parser.parse_args(argv)


def split_repos(values: list[str]) -> list[str]:
    """Flatten repeated and comma-separated --repos values, keeping their order."""
    return [name.strip() for value in values for name in value.split(",") if name.strip()]


def build_sink(args: argparse.Namespace, reporter: Reporter) -> RecordSink:
    """Choose the record sink for this run: print in dry-run mode, write to Pivotal otherwise."""
    if args.dry_run:
        return DryRunSink(reporter)

    token = args.pt_token or pvu.get_token(args.pivotal_pass_token)
    if not token:
        msg = "A Pivotal Tracker token is required when --no-dry-run is given"
        raise ConfigError(msg)
    if not args.pt_proj_id:
        msg = "A Pivotal Tracker project ID (--pt-proj-id) is required when --no-dry-run is given"
        raise ConfigError(msg)
    return PivotalSink(PivotalClient(token), args.pt_proj_id)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)

    verbosity: int = getattr(args, "verbose", 0)
    setup_logging(verbosity=verbosity)

    try:
        repos = split_repos(args.repos)
        if not repos:
            msg = "no github repos specified"
            raise ConfigError(msg)

        reporter = Reporter()
        sink = build_sink(args, reporter)

        gh_token = args.gh_token or ghu.get_token(args.github_pass_token)
        source = GitHubIssueSource(ghu.get_client(gh_token))

        migrator = Migrator(source, sink, reporter, owner=args.owner, limit=args.limit)
        _ = migrator.migrate(repos)

    except MigrationError as e:
        logger.error(f"Migration failed: {e}")  # noqa: TRY400
        sys.exit(1)
    except Exception:
        logger.exception("Migration failed")
        sys.exit(1)

    sys.exit(0)
