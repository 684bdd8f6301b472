"""Shared test fixtures."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from issuesync.models import RemoteIssue, RepoRef
from issuesync.providers.base import IssueTracker
from issuesync.rendering import build_render_context
from issuesync.reporting import OutcomeReporter
from issuesync.sync import SyncTools

# 2024-06-01T12:00:00Z
NOW_MS = 1717243200000


@pytest.fixture
def repo() -> RepoRef:
    return RepoRef(owner="octo", repo="demo")


@pytest.fixture
def render_context(repo: RepoRef) -> dict:
    return build_render_context(repo, environ={"GREETING": "hi"}, now_ms=NOW_MS)


@pytest.fixture
def remote_issue() -> RemoteIssue:
    return RemoteIssue(number=7, title="Welcome demo", html_url="https://github.com/octo/demo/issues/7")


@pytest.fixture
def tracker() -> MagicMock:
    mock = MagicMock(spec=IssueTracker)
    mock.search_open_issues.return_value = []
    return mock


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    return tmp_path / "github_output"


@pytest.fixture
def tools(tracker: MagicMock, repo: RepoRef, render_context: dict, output_file: Path) -> SyncTools:
    return SyncTools(
        tracker=tracker,
        reporter=OutcomeReporter(output_file),
        repo=repo,
        context=render_context,
    )
