"""Operator-facing output lines."""

from typing import Sequence

from massmerge.models import CheckAggregateStatus, MergeOutcome, PullRequestRecord

MARKERS = {
    CheckAggregateStatus.SUCCESS: "✅",
    CheckAggregateStatus.QUEUED: "❓",
    CheckAggregateStatus.IN_PROGRESS: "❓",
    CheckAggregateStatus.MISSING: "🤔",
    CheckAggregateStatus.FAILED: "❌",
}
UNCHECKED_MARKER = "⏭️"


def title_width(prs: Sequence[PullRequestRecord]) -> int:
    """Length of the longest title, for column alignment."""
    return max((len(pr.title) for pr in prs), default=0)


def status_line(pr: PullRequestRecord, status: CheckAggregateStatus | None, width: int = 0) -> str:
    """One discovery line: marker, padded title, link. status None means checks were ignored."""
    marker = MARKERS[status] if status is not None else UNCHECKED_MARKER
    return f"{marker} {pr.title.ljust(width)} {pr.html_url}"


def summary_line(total: int, ready: int) -> str:
    return f"Checked {total} PRs - {ready} ready to merge"


def confirm_prompt(count: int) -> str:
    return f"Are you sure you want to proceed with the mass merge of {count} PRs? (Y/N) "


def done_line(outcome: MergeOutcome) -> str:
    return f"Done ({outcome.processed}/{outcome.total})"
