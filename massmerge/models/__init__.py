"""Data models for pull requests, check runs and run results (Pydantic)."""

from massmerge.models.check_run import CheckAggregateStatus, CheckRun
from massmerge.models.outcome import MergeOutcome
from massmerge.models.pull_request import PullRequestRecord, SearchPage
from massmerge.models.run_config import RunConfiguration

__all__ = [
    "CheckAggregateStatus",
    "CheckRun",
    "MergeOutcome",
    "PullRequestRecord",
    "RunConfiguration",
    "SearchPage",
]
