"""issuesync CLI — render *.issue.md templates and sync them to GitHub issues."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from issuesync.models import SyncState
from issuesync.providers.github import GitHubTracker
from issuesync.rendering import build_render_context
from issuesync.reporting import OutcomeReporter
from issuesync.settings import SyncSettings, get_settings
from issuesync.sync import SyncTools, sync_all, sync_issue

app = typer.Typer(help="issuesync: render *.issue.md templates into GitHub issues", no_args_is_help=True)

DEFAULT_ISSUE_FILE = ".github/ISSUE_TEMPLATE.md"


# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------


def _configure_logging(settings: SyncSettings) -> None:
    log = logging.getLogger("issuesync")
    log.setLevel(logging.DEBUG if settings.runner_debug else logging.INFO)
    if not log.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        log.addHandler(handler)


def build_tools(settings: SyncSettings) -> SyncTools:
    repo = settings.repo
    return SyncTools(
        tracker=GitHubTracker(settings),
        reporter=OutcomeReporter(settings.github_output),
        repo=repo,
        context=build_render_context(repo),
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("sync")
def sync_cmd(
    filename: Annotated[
        str,
        typer.Argument(envvar="INPUT_FILENAME", help="Issue template to sync"),
    ] = DEFAULT_ISSUE_FILE,
) -> None:
    """Create or update the issue for a single template file."""
    settings = get_settings()
    _configure_logging(settings)
    tools = build_tools(settings)

    try:
        outcome = sync_issue(tools, filename)
    except OSError as exc:
        tools.log.error(f"Could not read {filename}: {exc}")
        raise typer.Exit(1) from exc

    if outcome.state == SyncState.FAILED:
        raise typer.Exit(1)


@app.command("sync-all")
def sync_all_cmd() -> None:
    """Create or update an issue for every *.issue.md file in the repository."""
    settings = get_settings()
    _configure_logging(settings)
    tools = build_tools(settings)
    root = str(settings.github_workspace) if settings.github_workspace else "."

    try:
        outcomes = sync_all(tools, root, settings.issue_file_suffix)
    except OSError as exc:
        tools.log.error(f"Could not scan {root}: {exc}")
        raise typer.Exit(1) from exc

    if outcomes:
        tools.reporter.summary(outcomes)

    failed = [o for o in outcomes if o.state == SyncState.FAILED]
    if failed:
        tools.log.error(f"{len(failed)} of {len(outcomes)} issue file(s) failed to sync")
        raise typer.Exit(1)
