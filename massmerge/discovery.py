"""
Discover candidate pull requests and classify them by their check runs.

Search results are paged in creation order and deduplicated by id, since
pages can shift while new PRs are opened. Each candidate's head commit is
then fetched and its check runs reduced to a single readiness status.
"""

import logging
import time
from typing import Callable, List, Sequence

from massmerge.adapters.base import GitPlatformAdapter
from massmerge.config import MergeSettings
from massmerge.models import CheckAggregateStatus, CheckRun, PullRequestRecord, RunConfiguration
from massmerge.report import status_line, summary_line, title_width
from massmerge.retry import with_retry

PASSING_CONCLUSIONS = frozenset({"success", "neutral", "skipped"})

LOG = logging.getLogger("massmerge.discovery")


def aggregate_check_status(runs: Sequence[CheckRun]) -> CheckAggregateStatus:
    """Reduce check runs to one status; the first matching rule wins."""
    if not runs:
        return CheckAggregateStatus.MISSING
    if all(run.conclusion in PASSING_CONCLUSIONS for run in runs):
        return CheckAggregateStatus.SUCCESS
    if any(run.status == "queued" for run in runs):
        return CheckAggregateStatus.QUEUED
    if any(run.status == "in_progress" for run in runs):
        return CheckAggregateStatus.IN_PROGRESS
    return CheckAggregateStatus.FAILED


def discover_candidates(
    adapter: GitPlatformAdapter,
    query: str,
    settings: MergeSettings | None = None,
) -> List[PullRequestRecord]:
    """Page through search results until the reported total is reached.

    Stops early on an empty page or after settings.max_pages pages.
    """
    settings = settings or MergeSettings()
    seen: dict[int, PullRequestRecord] = {}
    page = 1
    while page <= settings.max_pages:
        if page > 1:
            time.sleep(settings.page_delay_seconds)
        result = with_retry(
            lambda: adapter.search_pull_requests(query, page=page, per_page=settings.page_size),
            attempts=settings.retry_attempts,
            delay=settings.retry_delay_seconds,
            label=f"search page {page}",
        )
        for pr in result.items:
            seen.setdefault(pr.id, pr)
        LOG.debug("Search page %s: %s items, %s/%s unique", page, len(result.items), len(seen), result.total_count)
        if len(seen) >= result.total_count or not result.items:
            break
        page += 1
    else:
        LOG.warning("Stopped after %s search pages with %s PRs collected", settings.max_pages, len(seen))
    return list(seen.values())


def evaluate_status(
    adapter: GitPlatformAdapter,
    pr: PullRequestRecord,
    settings: MergeSettings | None = None,
) -> CheckAggregateStatus:
    """Fetch the PR's head commit and classify its check runs."""
    settings = settings or MergeSettings()
    sha = with_retry(
        lambda: adapter.get_head_sha(pr.full_name, pr.number),
        attempts=settings.retry_attempts,
        delay=settings.retry_delay_seconds,
        label=f"fetch {pr.full_name}#{pr.number}",
    )
    runs = with_retry(
        lambda: adapter.list_check_runs(pr.full_name, sha),
        attempts=settings.retry_attempts,
        delay=settings.retry_delay_seconds,
        label=f"check runs for {pr.full_name}@{sha[:7]}",
    )
    return aggregate_check_status(runs)


def select_ready(
    adapter: GitPlatformAdapter,
    candidates: Sequence[PullRequestRecord],
    run_config: RunConfiguration,
    settings: MergeSettings | None = None,
    echo: Callable[[str], None] = print,
) -> List[PullRequestRecord]:
    """Classify every candidate and return those ready to merge, in order.

    With ignore_checks every candidate is ready and check runs are not fetched.
    """
    settings = settings or MergeSettings()
    width = title_width(candidates)
    ready: List[PullRequestRecord] = []
    for pr in candidates:
        status = None if run_config.ignore_checks else evaluate_status(adapter, pr, settings)
        echo(status_line(pr, status, width))
        if status == CheckAggregateStatus.SUCCESS or run_config.ignore_checks:
            ready.append(pr)
    echo(summary_line(len(candidates), len(ready)))
    return ready
