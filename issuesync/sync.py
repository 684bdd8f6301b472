"""Render issue files and reconcile them with the tracker.

Per file: read → parse → render → search → update or create → report.
Files are processed one at a time; a failure in one file is reported and
recorded, then the next file starts.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import jinja2

from issuesync.discovery import ISSUE_FILE_SUFFIX, list_matching_files
from issuesync.models import RemoteIssue, RepoRef, SyncOutcome, SyncState
from issuesync.parsing import parse_front_matter, read_issue_file
from issuesync.providers.base import IssueTracker, TrackerError
from issuesync.rendering import make_environment, render_issue
from issuesync.reporting import OutcomeReporter

logger = logging.getLogger("issuesync")


@dataclass(frozen=True)
class SyncTools:
    """Everything a sync needs, passed in explicitly."""

    tracker: IssueTracker
    reporter: OutcomeReporter
    repo: RepoRef
    context: Mapping[str, Any]  # built once per run, shared read-only
    env: jinja2.Environment = field(default_factory=make_environment)
    log: logging.Logger = logger


def find_exact_match(issues: Iterable[RemoteIssue], title: str) -> RemoteIssue | None:
    """Return the first issue whose title equals title; search results only *contain* it."""
    return next((issue for issue in issues if issue.title == title), None)


def _failed(tools: SyncTools, file_path: str, action: str, exc: Exception) -> SyncOutcome:
    tools.reporter.failure(file_path, action, exc)
    return SyncOutcome(file_path=file_path, state=SyncState.FAILED, action=action, error=str(exc))


def sync_issue(tools: SyncTools, file_path: str) -> SyncOutcome:
    """Create or update the issue described by one file.

    OSError from reading the file propagates; every other failure, including
    undecodable file content, is reported and returned as a failed outcome.
    """
    log = tools.log

    log.debug(f"Reading from file {file_path}")
    try:
        text = read_issue_file(file_path)
    except UnicodeDecodeError as exc:
        return _failed(tools, file_path, "reading", exc)

    try:
        front_matter = parse_front_matter(text)
        log.debug(f"Front matter for {file_path} is {front_matter.attributes}")
        rendered = render_issue(tools.env, front_matter, tools.context)
    # FrontMatterError, jinja2.TemplateError, or whatever an expression raises: {{ 1 / 0 }}
    except Exception as exc:
        return _failed(tools, file_path, "rendering", exc)
    log.debug(f"Templates compiled: title={rendered.title!r}")

    log.info(f'Fetching issues with title "{rendered.title}"')
    try:
        candidates = tools.tracker.search_open_issues(tools.repo, rendered.title)
    except TrackerError as exc:
        return _failed(tools, file_path, "searching for", exc)

    existing = find_exact_match(candidates, rendered.title)
    if existing is not None:
        log.info(f"Updating existing issue {existing.title}#{existing.number}: {existing.html_url}")
        try:
            issue = tools.tracker.update_issue(tools.repo, existing.number, rendered.body)
        except TrackerError as exc:
            return _failed(tools, file_path, "updating", exc)
        outcome = SyncOutcome(file_path=file_path, state=SyncState.UPDATED, issue=issue)
        tools.reporter.success(outcome)
        return outcome

    log.info("No existing issue found to update")
    log.info(f"Creating new issue {rendered.title}")
    try:
        issue = tools.tracker.create_issue(tools.repo, rendered)
    except TrackerError as exc:
        return _failed(tools, file_path, "creating", exc)
    outcome = SyncOutcome(file_path=file_path, state=SyncState.CREATED, issue=issue)
    tools.reporter.success(outcome)
    return outcome


def sync_all(tools: SyncTools, root: str = ".", suffix: str = ISSUE_FILE_SUFFIX) -> list[SyncOutcome]:
    """Sync every file under root whose name ends with suffix, sequentially."""
    file_paths = list_matching_files(root, suffix)
    tools.log.info(f"Found {len(file_paths)} issue file(s) under {root}")
    return [sync_issue(tools, file_path) for file_path in file_paths]
