"""Tests for story and comment request building."""

from __future__ import annotations

import dataclasses
import datetime as dt

import pytest

from github_to_pivotal_migrator.models import SourceComment, SourceIssue
from github_to_pivotal_migrator.story_builder import (
    TRUNCATE_LENGTH,
    build_story_description,
    convert_comment,
    convert_issue,
    format_labels,
    format_timestamp,
    trunc,
)


@pytest.mark.unit
class TestFormatTimestamp:
    def test_utc_uses_z_suffix(self) -> None:
        result = format_timestamp(dt.datetime(2024, 1, 15, 10, 30, 45, 123456, tzinfo=dt.UTC))
        assert result == "2024-01-15 10:30:45Z"

    def test_naive_datetime_treated_as_utc(self) -> None:
        result = format_timestamp(dt.datetime(2024, 1, 15, 10, 30, 45))
        assert result == "2024-01-15 10:30:45Z"

    def test_non_utc_offset_kept(self) -> None:
        tz = dt.timezone(dt.timedelta(hours=5, minutes=30))
        result = format_timestamp(dt.datetime(2024, 1, 15, 10, 30, 45, tzinfo=tz))
        assert result == "2024-01-15 10:30:45+05:30"

    def test_none_returns_empty_string(self) -> None:
        assert format_timestamp(None) == ""


@pytest.mark.unit
class TestFormatLabels:
    def test_multiple_labels(self) -> None:
        assert format_labels(["bug", "ui"]) == '["bug", "ui"]'

    def test_no_labels(self) -> None:
        assert format_labels([]) == "[]"

    def test_quotes_and_backslashes_escaped(self) -> None:
        assert format_labels(['say "hi"', "a\\b", "café"]) == '["say \\"hi\\"", "a\\\\b", "café"]'


@pytest.mark.unit
class TestTrunc:
    def test_short_text_unchanged(self) -> None:
        assert trunc("hello") == "hello"

    def test_empty_text(self) -> None:
        assert trunc("") == ""

    def test_just_below_limit_unchanged(self) -> None:
        text = "a" * (TRUNCATE_LENGTH - 1)
        assert trunc(text) == text

    def test_exact_limit(self) -> None:
        text = "b" * TRUNCATE_LENGTH
        assert trunc(text) == text

    def test_long_text_cut_without_ellipsis(self) -> None:
        text = "word " * 100
        result = trunc(text)
        assert len(result) == 255
        assert result == text[:255]
        assert not result.endswith("...")


@pytest.mark.unit
class TestConvertIssue:
    def test_story_fields(self, crash_issue: SourceIssue) -> None:
        request = convert_issue("widgets", crash_issue)

        assert request.name == "Bug: crash on load"
        assert request.story_type == "feature"
        assert request.current_state == "unscheduled"

    def test_description_layout(self, crash_issue: SourceIssue) -> None:
        request = convert_issue("widgets", crash_issue)

        assert request.description == (
            "https://github.com/acme/widgets/issues/42\n"
            "```\n"
            "Migrated from GitHub\n"
            "Created: 2016-03-01 12:30:05Z\n"
            'Labels: ["bug"]\n'
            "```\n"
            "\n"
            "steps..."
        )

    def test_description_ends_with_unmodified_body(self) -> None:
        body = "Line one\n\n```python\nprint('x')\n```\n  trailing spaces  "
        issue = SourceIssue(number=1, title="t", body=body, html_url="https://github.com/o/r/issues/1")

        description = build_story_description(issue)

        assert description.endswith(body)
        assert "https://github.com/o/r/issues/1" in description
        assert "Labels: []" in description

    def test_labels_contain_marker_and_one_repo_label(self, crash_issue: SourceIssue) -> None:
        request = convert_issue("widgets", crash_issue)

        assert "github-migrated" in request.labels
        repo_labels = [label for label in request.labels if label.startswith("github-repo/")]
        assert repo_labels == ["github-repo/widgets"]

    def test_source_labels_not_copied_to_story_labels(self, crash_issue: SourceIssue) -> None:
        request = convert_issue("widgets", crash_issue)
        assert "bug" not in request.labels

    def test_input_issue_unchanged(self, crash_issue: SourceIssue) -> None:
        before = dataclasses.replace(crash_issue)
        convert_issue("widgets", crash_issue)
        assert crash_issue == before

    def test_payload(self, crash_issue: SourceIssue) -> None:
        payload = convert_issue("widgets", crash_issue).to_payload()

        assert payload["name"] == "Bug: crash on load"
        assert payload["labels"] == [{"name": "github-migrated"}, {"name": "github-repo/widgets"}]
        assert payload["story_type"] == "feature"
        assert payload["current_state"] == "unscheduled"


@pytest.mark.unit
class TestConvertComment:
    def test_text_layout(self, confirmed_comment: SourceComment) -> None:
        request = convert_comment(confirmed_comment)

        assert request.text == (
            "https://github.com/acme/widgets/issues/42#issuecomment-1\n"
            "```\n"
            "Migrated from GitHub\n"
            "Created: 2016-03-02 08:00:00Z\n"
            "Author: alice\n"
            "```\n"
            "\n"
            "confirmed"
        )

    def test_empty_body(self) -> None:
        comment = SourceComment(body="", author="carol", html_url="https://github.com/o/r/issues/1#c")
        request = convert_comment(comment)

        assert "Author: carol" in request.text
        assert request.text.endswith("```\n\n")

    def test_payload(self, confirmed_comment: SourceComment) -> None:
        payload = convert_comment(confirmed_comment).to_payload()
        assert list(payload) == ["text"]
        assert payload["text"].endswith("confirmed")
