"""Abstract base class for issue trackers."""

from abc import ABC, abstractmethod

from issuesync.models import RemoteIssue, RenderedIssue, RepoRef


class TrackerError(RuntimeError):
    """A tracker call was rejected or could not be made."""

    def __init__(self, message: str, status_code: int | None = None, errors: list | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []  # structured validation errors, when the API returns them


class IssueTracker(ABC):
    @abstractmethod
    def search_open_issues(self, repo: RepoRef, title: str) -> list[RemoteIssue]: ...

    @abstractmethod
    def update_issue(self, repo: RepoRef, number: int, body: str) -> RemoteIssue: ...

    @abstractmethod
    def create_issue(self, repo: RepoRef, issue: RenderedIssue) -> RemoteIssue: ...
