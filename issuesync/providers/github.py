"""GitHub REST API v3 tracker."""

import httpx

from issuesync.models import RemoteIssue, RenderedIssue, RepoRef
from issuesync.providers.base import IssueTracker, TrackerError
from issuesync.settings import SyncSettings

BASE_URL = "https://api.github.com"


class GitHubTracker(IssueTracker):
    def __init__(self, settings: SyncSettings) -> None:
        if not settings.github_token:
            raise RuntimeError("No GitHub credentials. Set GITHUB_TOKEN.")
        self._base_url = (settings.github_api_url or BASE_URL).rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {settings.github_token.get_secret_value()}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _request(self, method: str, path: str, params: dict | None = None, body: dict | None = None) -> dict:
        try:
            response = httpx.request(
                method,
                f"{self._base_url}{path}",
                headers=self._headers,
                params=params,
                json=body,
                timeout=30,
            )
        except httpx.HTTPError as exc:
            raise TrackerError(f"GitHub API request failed: {exc}") from exc

        if response.status_code == 401:
            raise TrackerError("GitHub API returned 401. Check that GITHUB_TOKEN is set and valid.", 401)
        if response.is_error:
            try:
                detail = response.json()
            except ValueError:
                detail = {}
            if not isinstance(detail, dict):
                detail = {}
            message = detail.get("message") or response.reason_phrase
            raise TrackerError(
                f"GitHub API returned {response.status_code}: {message}",
                response.status_code,
                detail.get("errors"),
            )
        return response.json()

    @staticmethod
    def _issue_from_node(node: dict) -> RemoteIssue:
        return RemoteIssue(number=node["number"], title=node["title"], html_url=node["html_url"])

    def search_open_issues(self, repo: RepoRef, title: str) -> list[RemoteIssue]:
        # NOTE: fetches page 1 only. Exact-title matching happens in the caller.
        query = f"is:open is:issue repo:{repo.full_name} in:title {title}"
        data = self._request("GET", "/search/issues", params={"q": query, "per_page": "100"})
        return [self._issue_from_node(node) for node in data.get("items", [])]

    def update_issue(self, repo: RepoRef, number: int, body: str) -> RemoteIssue:
        node = self._request("PATCH", f"/repos/{repo.owner}/{repo.repo}/issues/{number}", body={"body": body})
        return self._issue_from_node(node)

    def create_issue(self, repo: RepoRef, issue: RenderedIssue) -> RemoteIssue:
        payload: dict = {"title": issue.title, "body": issue.body}
        if issue.assignees:
            payload["assignees"] = issue.assignees
        if issue.labels:
            payload["labels"] = issue.labels
        if issue.milestone is not None:
            payload["milestone"] = issue.milestone
        node = self._request("POST", f"/repos/{repo.owner}/{repo.repo}/issues", body=payload)
        return self._issue_from_node(node)
