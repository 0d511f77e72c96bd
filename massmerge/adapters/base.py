"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from massmerge.models import CheckRun, SearchPage


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Abstract interface for the five operations a mass merge needs."""

    @abstractmethod
    def search_pull_requests(
        self,
        query: str,
        page: int = 1,
        per_page: int = 100,
        sort: str = "created",
        order: str = "asc",
    ) -> SearchPage:
        """Run a full-text issue search and return one page of pull requests.

        Args:
            query: Search filter expression (see massmerge.query)
            page: 1-based page cursor
            per_page: Page size
            sort: Sort field
            order: asc or desc

        Returns:
            SearchPage with the host-reported total and this page's items

        Raises:
            GitPlatformError: If the API call fails
        """
        ...

    @abstractmethod
    def get_head_sha(self, repo: str, pr_number: int) -> str:
        """Return the current head commit SHA of a pull request."""
        ...

    @abstractmethod
    def list_check_runs(self, repo: str, ref: str) -> List[CheckRun]:
        """List check runs reported against a commit."""
        ...

    @abstractmethod
    def approve_pr(self, repo: str, pr_number: int) -> None:
        """Submit an approving review."""
        ...

    @abstractmethod
    def merge_pr(self, repo: str, pr_number: int, merge_method: str = "squash") -> None:
        """Merge a pull request with the given method."""
        ...
