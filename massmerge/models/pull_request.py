"""Pull request search result models."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PullRequestRecord(BaseModel):
    """Open pull request found by the search query."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Stable numeric id, unique within a run")
    number: int
    owner: str = Field(..., description="Owning organization or user")
    repo: str = Field(..., description="Repository name without owner")
    title: str
    author: str = Field(..., description="Author login, e.g. dependabot[bot]")
    html_url: str = ""

    @property
    def full_name(self) -> str:
        """Repository in format owner/repo."""
        return f"{self.owner}/{self.repo}"


class SearchPage(BaseModel):
    """One page of search results plus the total reported by the host."""

    total_count: int = 0
    items: List[PullRequestRecord] = Field(default_factory=list)
