"""
Confirm, re-validate and merge the ready pull requests one at a time.

Search results and the operator's answer may be stale by the time a PR is
acted on, so author and title are checked again right before approving.
Approve failures abort the run; merge failures are reported and skipped.
"""

import logging
import time
from typing import Callable, Sequence

from massmerge.adapters.base import GitPlatformAdapter
from massmerge.config import MergeSettings
from massmerge.models import MergeOutcome, PullRequestRecord, RunConfiguration
from massmerge.query import expected_login
from massmerge.report import confirm_prompt
from massmerge.retry import TRANSIENT_ERRORS, with_retry

LOG = logging.getLogger("massmerge.merger")


class ConfirmationError(Exception):
    """Raised when the confirmation answer is neither Y nor N."""

    pass


class MergeDeclined(Exception):
    """Raised when the operator answers N."""

    pass


def confirm(count: int, ask: Callable[[str], str] = input) -> None:
    """Block until the operator answers Y (returns) or N (raises MergeDeclined)."""
    try:
        answer = (ask(confirm_prompt(count)) or "").strip().lower()
    except EOFError:
        raise ConfirmationError("Please answer Y or N.") from None
    if answer == "n":
        raise MergeDeclined("Exiting...")
    if answer != "y":
        raise ConfirmationError("Please answer Y or N.")


def check_candidate(pr: PullRequestRecord, run_config: RunConfiguration) -> str | None:
    """Return a skip reason if the PR no longer matches author and title, else None."""
    login = expected_login(run_config.author)
    if pr.author.lower() != login.lower():
        return f'invalid PR author: "{pr.author}" expected: "{login}"'
    if run_config.title.lower() not in pr.title.lower():
        return f'invalid PR title: "{pr.title}" expected: "{run_config.title}"'
    return None


def apply_merges(
    adapter: GitPlatformAdapter,
    ready: Sequence[PullRequestRecord],
    run_config: RunConfiguration,
    total: int,
    settings: MergeSettings | None = None,
    echo: Callable[[str], None] = print,
) -> MergeOutcome:
    """Approve and merge each ready PR in order.

    Args:
        adapter: Platform adapter
        ready: Confirmed PRs in discovery order
        run_config: Filters to re-validate against
        total: Number of PRs discovered, for the outcome
        settings: Pacing, retry and merge method
        echo: Output sink for progress lines

    Returns:
        MergeOutcome with the count of merged PRs

    Raises:
        GitPlatformError: If an approval still fails after retries
    """
    settings = settings or MergeSettings()
    processed = 0
    for pr in ready:
        label = f"{pr.repo}#{pr.number}"
        reason = check_candidate(pr, run_config)
        if reason:
            LOG.info("Skipping %s: %s", pr.html_url, reason)
            echo(f"{label} {reason}")
            continue

        time.sleep(settings.action_delay_seconds)
        with_retry(
            lambda: adapter.approve_pr(pr.full_name, pr.number),
            attempts=settings.retry_attempts,
            delay=settings.retry_delay_seconds,
            label=f"approve {pr.full_name}#{pr.number}",
        )
        try:
            with_retry(
                lambda: adapter.merge_pr(pr.full_name, pr.number, settings.merge_method),
                attempts=settings.retry_attempts,
                delay=settings.retry_delay_seconds,
                label=f"merge {pr.full_name}#{pr.number}",
            )
        except TRANSIENT_ERRORS as e:
            echo(f"{label} approved but NOT MERGED ❗️ ({e})")
            continue
        echo(f"{label} approved and merged")
        processed += 1
    return MergeOutcome(processed=processed, total=total)
