"""GitHub API adapter."""

import re
from typing import Any, Dict, List

import requests

from massmerge.adapters.base import GitPlatformAdapter, GitPlatformError
from massmerge.models import CheckRun, PullRequestRecord, SearchPage

_REPO_URL_RE = re.compile(r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)")


def _repo_from_url(url: str) -> tuple[str, str]:
    """Extract (owner, repo) from an API resource URL."""
    match = _REPO_URL_RE.search(url or "")
    if not match:
        raise GitPlatformError(f"Unexpected resource URL: {url!r}")
    return match.group("owner"), match.group("repo")


def _pr_from_search_item(data: Dict[str, Any]) -> PullRequestRecord:
    user = data.get("user") or {}
    owner, repo = _repo_from_url(data.get("repository_url") or data.get("url", ""))
    return PullRequestRecord(
        id=data["id"],
        number=data["number"],
        owner=owner,
        repo=repo,
        title=data.get("title") or "",
        author=user.get("login", ""),
        html_url=data.get("html_url") or f"https://github.com/{owner}/{repo}/pull/{data['number']}",
    )


def _check_run_from_api(data: Dict[str, Any]) -> CheckRun:
    return CheckRun(
        name=data.get("name") or "",
        status=data.get("status") or "",
        conclusion=data.get("conclusion"),
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com", timeout: int = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "Authorization": f"Bearer {token}",
            }
        )

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def search_pull_requests(
        self,
        query: str,
        page: int = 1,
        per_page: int = 100,
        sort: str = "created",
        order: str = "asc",
    ) -> SearchPage:
        params = {"q": query, "sort": sort, "order": order, "per_page": per_page, "page": page}
        data = self._request("GET", "/search/issues", params=params).json() or {}
        items = [_pr_from_search_item(d) for d in data.get("items") or []]
        return SearchPage(total_count=data.get("total_count", 0), items=items)

    def get_head_sha(self, repo: str, pr_number: int) -> str:
        data = self._request("GET", f"/repos/{repo}/pulls/{pr_number}").json()
        sha = (data.get("head") or {}).get("sha")
        if not sha:
            raise GitPlatformError(f"No head commit for {repo}#{pr_number}")
        return sha

    def list_check_runs(self, repo: str, ref: str) -> List[CheckRun]:
        """List every check run on ref, following pages until total_count is reached."""
        path = f"/repos/{repo}/commits/{ref}/check-runs"
        runs: List[CheckRun] = []
        page = 1
        while True:
            data = self._request("GET", path, params={"per_page": 100, "page": page}).json() or {}
            items = data.get("check_runs") or []
            runs.extend(_check_run_from_api(d) for d in items)
            if not items or len(runs) >= data.get("total_count", 0):
                return runs
            page += 1

    def approve_pr(self, repo: str, pr_number: int) -> None:
        self._request("POST", f"/repos/{repo}/pulls/{pr_number}/reviews", json={"event": "APPROVE"})

    def merge_pr(self, repo: str, pr_number: int, merge_method: str = "squash") -> None:
        self._request("PUT", f"/repos/{repo}/pulls/{pr_number}/merge", json={"merge_method": merge_method})
