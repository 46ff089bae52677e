"""Tests for gitlab_issues.logging (threshold, format, urllib3 noise)."""

import logging

import pytest

from gitlab_issues.config import LoggingConfig
from gitlab_issues.logging import DEFAULT_FORMAT, IssueManagerLogging, level_from_name


@pytest.mark.parametrize(
    "name,expected",
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        ("  error ", logging.ERROR),
        ("TRACE", logging.INFO),
        ("", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_level_from_name(name, expected) -> None:
    assert level_from_name(name) == expected


def test_setup_applies_level_and_format() -> None:
    IssueManagerLogging(LoggingConfig(level="WARNING", format="%(levelname)s | %(message)s")).setup()
    assert logging.root.level == logging.WARNING
    formatter = logging.root.handlers[0].formatter
    assert formatter is not None
    assert formatter._fmt == "%(levelname)s | %(message)s"


def test_empty_format_uses_default() -> None:
    IssueManagerLogging(LoggingConfig(level="INFO", format="")).setup()
    formatter = logging.root.handlers[0].formatter
    assert formatter is not None
    assert formatter._fmt == DEFAULT_FORMAT


def test_urllib3_is_quiet_unless_debugging() -> None:
    IssueManagerLogging(LoggingConfig(level="INFO")).setup()
    assert logging.getLogger("urllib3").level == logging.WARNING
    IssueManagerLogging(LoggingConfig(level="DEBUG")).setup()
    assert logging.getLogger("urllib3").level == logging.DEBUG
