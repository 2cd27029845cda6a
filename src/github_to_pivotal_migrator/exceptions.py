"""
Custom exception classes for the GitHub to Pivotal Tracker migration tool.
"""

from __future__ import annotations

from typing import Any


class MigrationError(Exception):
    """Base exception for migration errors."""


class ConfigError(MigrationError):
    """Raised when the run is misconfigured, before any network call is made."""


class RemoteFetchError(MigrationError):
    """Raised when reading issues or comments from GitHub fails."""

    def __init__(self, message: str, *, owner: str, repo: str, issue_number: int | None = None) -> None:
        super().__init__(message)
        self.owner = owner
        self.repo = repo
        self.issue_number = issue_number


class RemoteCreateError(MigrationError):
    """Raised when creating a story or comment in Pivotal Tracker fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data
