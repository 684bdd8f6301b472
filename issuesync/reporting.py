"""Map sync outcomes to host signals: log lines, step outputs and error annotations."""

import logging
from pathlib import Path

import typer
from rich import print as rprint
from rich.table import Table

from issuesync.models import SyncOutcome, SyncState

logger = logging.getLogger("issuesync")

_STATE_STYLE = {SyncState.CREATED: "green", SyncState.UPDATED: "cyan", SyncState.FAILED: "red"}


def failure_message(action: str, file_path: str) -> str:
    return f"An error occurred while {action} the issue. Check {file_path}."


def escape_workflow_data(value: str) -> str:
    """Escape a value for a GitHub Actions workflow command (::error::...)."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class OutcomeReporter:
    def __init__(self, output_path: Path | None = None, log: logging.Logger = logger) -> None:
        self._output_path = output_path
        self._log = log

    def set_outputs(self, outputs: dict[str, str]) -> None:
        if self._output_path is None:
            for name, value in outputs.items():
                self._log.debug("output %s=%s", name, value)
            return
        with self._output_path.open("a", encoding="utf-8") as fh:
            for name, value in outputs.items():
                fh.write(f"{name}={value}\n")

    def success(self, outcome: SyncOutcome) -> None:
        issue = outcome.issue
        if issue is None:
            raise ValueError(f"Cannot report success for {outcome.file_path} without an issue")
        self.set_outputs({"issue-number": str(issue.number), "html-url": issue.html_url})
        verb = "Updated" if outcome.state == SyncState.UPDATED else "Created"
        self._log.info(f"{verb} issue {issue.title}#{issue.number}: {issue.html_url}")

    def failure(self, file_path: str, action: str, exc: BaseException) -> None:
        message = failure_message(action, file_path)
        self._log.error(message)
        self._log.error(str(exc))
        errors = getattr(exc, "errors", None)
        if errors:
            self._log.error(errors)
        # Marks the step as failed in the workflow run, whatever the exit code.
        annotation = escape_workflow_data(message + "\n\n" + str(exc))
        typer.echo(f"::error::{annotation}")

    def summary(self, outcomes: list[SyncOutcome]) -> None:
        table = Table(title="Issue Sync")
        table.add_column("File", style="cyan")
        table.add_column("State")
        table.add_column("Issue")
        table.add_column("URL", style="dim")

        for outcome in outcomes:
            style = _STATE_STYLE[outcome.state]
            issue = outcome.issue
            table.add_row(
                outcome.file_path,
                f"[{style}]{outcome.state.value}[/{style}]",
                f"#{issue.number}" if issue else "—",
                issue.html_url if issue else (outcome.error or ""),
            )

        rprint(table)
