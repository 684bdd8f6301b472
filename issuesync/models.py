"""Shared pydantic models — the contract between the parser, renderer, providers and sync."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class RepoRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_full_name(cls, full_name: str) -> "RepoRef":
        owner, _, repo = full_name.strip().partition("/")
        if not owner or not repo or "/" in repo:
            raise ValueError(f"Expected 'owner/repo', got '{full_name}'")
        return cls(owner=owner, repo=repo)


class FrontMatter(BaseModel):
    """Attribute block and remaining body of an issue file."""

    model_config = ConfigDict(frozen=True)

    attributes: dict[str, Any] = {}
    body: str


class RenderedIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    assignees: list[str] = []
    labels: list[str] = []
    milestone: int | None = None


class RemoteIssue(BaseModel):
    """An issue as returned by the tracker — only what sync needs."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    html_url: str


class SyncState(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    FAILED = "failed"


class SyncOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_path: str
    state: SyncState
    issue: RemoteIssue | None = None
    action: str | None = None  # "reading" | "rendering" | "searching for" | "creating" | "updating", set on failure
    error: str | None = None
