"""Settings resolved from the CI host environment (GitHub Actions) and an optional .env."""

import re
import subprocess
from pathlib import Path

import typer
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from issuesync.discovery import ISSUE_FILE_SUFFIX
from issuesync.models import RepoRef


class SyncSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials and scope
    github_token: SecretStr | None = None
    github_repository: str | None = None  # "owner/repo"
    github_api_url: str = "https://api.github.com"

    # Host integration
    github_output: Path | None = None  # file that collects named step outputs
    github_workspace: Path | None = None  # repository checkout, root for sync-all
    runner_debug: bool = False

    issue_file_suffix: str = ISSUE_FILE_SUFFIX

    @property
    def repo(self) -> RepoRef:
        if not self.github_repository:
            raise RuntimeError("No repository configured. Set GITHUB_REPOSITORY=owner/repo.")
        return RepoRef.from_full_name(self.github_repository)


def _repo_from_git_remote() -> str | None:
    """Return "owner/repo" from the origin remote when it points at github.com."""
    result = subprocess.run(["git", "remote", "get-url", "origin"], capture_output=True, text=True)
    if result.returncode != 0:
        return None
    match = re.search(r"github\.com[:/]([^/]+)/([^/]+?)(?:\.git)?$", result.stdout.strip())
    if not match:
        return None
    return f"{match.group(1)}/{match.group(2)}"


def get_settings() -> SyncSettings:
    """Resolve settings and validate what every command needs.

    Repository precedence (highest to lowest):
    1. GITHUB_REPOSITORY env var (or .env)
    2. origin git remote, when hosted on github.com
    """
    settings = SyncSettings()

    if not settings.github_token:
        typer.echo("Missing GitHub credentials. Set GITHUB_TOKEN (in a workflow: ${{ secrets.GITHUB_TOKEN }}).")
        raise typer.Exit(1)

    if not settings.github_repository:
        settings.github_repository = _repo_from_git_remote()
    if not settings.github_repository:
        typer.echo("Cannot determine the repository. Set GITHUB_REPOSITORY=owner/repo.")
        raise typer.Exit(1)

    try:
        RepoRef.from_full_name(settings.github_repository)
    except ValueError as exc:
        typer.echo(f"Invalid GITHUB_REPOSITORY: {exc}")
        raise typer.Exit(1) from exc

    return settings
