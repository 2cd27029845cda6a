"""Pivotal Tracker REST (v5) access: story and comment creation."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Final

import requests

from . import utils
from .exceptions import ConfigError, RemoteCreateError
from .models import Story, StoryComment

if TYPE_CHECKING:
    from .models import CommentRequest, StoryRequest

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

PIVOTAL_API_URL: Final[str] = "https://www.pivotaltracker.com/services/v5"
_TOKEN_ENV_VAR: Final[str] = "PIVOTAL_TOKEN"  # noqa: S105
_TOKEN_HEADER: Final[str] = "X-TrackerToken"  # noqa: S105


def get_token(pass_path: str | None = None) -> str | None:
    """Get Pivotal Tracker token from pass path or env var PIVOTAL_TOKEN."""
    if pass_path:
        try:
            return utils.get_pass_value(pass_path)
        except utils.PassError as e:
            msg = f"Could not read Pivotal Tracker token from pass: {e}"
            raise ConfigError(msg) from e

    return os.environ.get(_TOKEN_ENV_VAR) or None


def _response_id(data: dict[str, Any], operation: str) -> int:
    try:
        return int(data["id"])
    except (KeyError, TypeError, ValueError) as e:
        msg = f"Error {operation}: response has no usable id"
        raise RemoteCreateError(msg, response_data=data) from e


def _error_detail(response: requests.Response) -> tuple[str, dict[str, Any] | None]:
    try:
        data = response.json()
    except ValueError:
        return response.text[:400], None
    if not isinstance(data, dict):
        return str(data)[:400], None
    detail = data.get("general_problem") or data.get("error") or str(data)[:400]
    return str(detail), data


class PivotalClient:
    """Creates stories and story comments in Pivotal Tracker projects."""

    _session: requests.Session
    _base_url: str

    def __init__(self, token: str, *, base_url: str = PIVOTAL_API_URL) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers.update({_TOKEN_HEADER: token, "Accept": "application/json"})

    def _post(self, path: str, payload: dict[str, Any], operation: str) -> dict[str, Any]:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = self._session.post(url, json=payload)
        except requests.RequestException as e:
            msg = f"Error {operation}: {e}"
            raise RemoteCreateError(msg) from e

        if not response.ok:
            detail, data = _error_detail(response)
            msg = f"Error {operation}: Pivotal Tracker returned {response.status_code}: {detail}"
            raise RemoteCreateError(msg, status_code=response.status_code, response_data=data)

        try:
            return response.json()
        except ValueError as e:
            msg = f"Error {operation}: response is not valid JSON"
            raise RemoteCreateError(msg, status_code=response.status_code) from e

    def create_story(self, project_id: int, request: StoryRequest) -> Story:
        """Create a story in the project.

        Raises:
            RemoteCreateError: On any transport or validation error
        """
        data = self._post(f"/projects/{project_id}/stories", request.to_payload(), "creating story")
        story = Story(
            id=_response_id(data, "creating story"),
            project_id=int(data.get("project_id") or project_id),
            name=data.get("name", request.name),
            url=data.get("url", ""),
        )
        logger.debug(f"Created story {story.id}: {story.name}")
        return story

    def add_comment(self, project_id: int, story_id: int, request: CommentRequest) -> StoryComment:
        """Attach a comment to an existing story.

        Raises:
            RemoteCreateError: On any transport or validation error
        """
        data = self._post(
            f"/projects/{project_id}/stories/{story_id}/comments", request.to_payload(), "creating comment"
        )
        comment = StoryComment(
            id=_response_id(data, "creating comment"),
            story_id=int(data.get("story_id") or story_id),
            text=data.get("text", ""),
        )
        logger.debug(f"Created comment {comment.id} on story {story_id}")
        return comment
