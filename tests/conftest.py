"""Shared fixtures: PR records and a zero-delay settings object."""

import pytest

from massmerge.config import MergeSettings
from massmerge.models import PullRequestRecord, RunConfiguration


def make_pr(
    id: int,
    number: int | None = None,
    repo: str = "api",
    title: str = "Bump lodash from 4.17.20 to 4.17.21",
    author: str = "dependabot[bot]",
) -> PullRequestRecord:
    number = number if number is not None else id
    return PullRequestRecord(
        id=id,
        number=number,
        owner="acme",
        repo=repo,
        title=title,
        author=author,
        html_url=f"https://github.com/acme/{repo}/pull/{number}",
    )


@pytest.fixture
def settings() -> MergeSettings:
    return MergeSettings(
        page_size=2,
        max_pages=5,
        page_delay_seconds=0,
        retry_attempts=3,
        retry_delay_seconds=0,
        action_delay_seconds=0,
    )


@pytest.fixture
def run_config() -> RunConfiguration:
    return RunConfiguration(organizations=("acme",), title="bump lodash", author="dependabot")
