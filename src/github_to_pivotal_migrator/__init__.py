"""
GitHub to Pivotal Tracker Migration Tool

Migrates open GitHub issues and their comments to Pivotal Tracker stories,
keeping the original URL, creation time, author and labels of each record.
"""

from __future__ import annotations

from .cli import main
from .exceptions import ConfigError, MigrationError, RemoteCreateError, RemoteFetchError
from .orchestrator import MigrationStats, Migrator
from .story_builder import convert_comment, convert_issue, trunc
from .utils import setup_logging

# Package version
__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "MigrationError",
    "MigrationStats",
    "Migrator",
    "RemoteCreateError",
    "RemoteFetchError",
    "convert_comment",
    "convert_issue",
    "main",
    "setup_logging",
    "trunc",
]
