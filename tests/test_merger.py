"""Tests for the confirmation gate and the approve/merge phase."""

from unittest.mock import Mock, call, patch

import pytest

from massmerge.adapters.base import GitPlatformError
from massmerge.config import MergeSettings
from massmerge.merger import ConfirmationError, MergeDeclined, apply_merges, check_candidate, confirm
from massmerge.models import RunConfiguration
from tests.conftest import make_pr


class TestConfirm:
    """confirm accepts Y/N case-insensitively and rejects anything else."""

    @pytest.mark.parametrize("answer", ["y", "Y", " y "])
    def test_yes_returns(self, answer: str) -> None:
        ask = Mock(return_value=answer)
        confirm(3, ask)
        assert "3 PRs" in ask.call_args[0][0]

    @pytest.mark.parametrize("answer", ["n", "N"])
    def test_no_declines(self, answer: str) -> None:
        with pytest.raises(MergeDeclined):
            confirm(1, Mock(return_value=answer))

    @pytest.mark.parametrize("answer", ["x", "", "yes"])
    def test_other_input_is_error(self, answer: str) -> None:
        with pytest.raises(ConfirmationError, match="Y or N"):
            confirm(1, Mock(return_value=answer))

    def test_closed_stdin_is_error(self) -> None:
        """EOF on the prompt is treated like an invalid answer."""
        with pytest.raises(ConfirmationError, match="Y or N"):
            confirm(1, Mock(side_effect=EOFError()))


class TestCheckCandidate:
    """check_candidate re-validates author and title."""

    def test_dependabot_match(self, run_config: RunConfiguration) -> None:
        assert check_candidate(make_pr(1), run_config) is None

    def test_author_case_insensitive(self) -> None:
        cfg = RunConfiguration(organizations=("acme",), title="update", author="OctoCat")
        assert check_candidate(make_pr(1, title="Update deps", author="octocat"), cfg) is None

    def test_author_mismatch(self, run_config: RunConfiguration) -> None:
        reason = check_candidate(make_pr(1, author="mallory"), run_config)
        assert reason == 'invalid PR author: "mallory" expected: "dependabot[bot]"'

    def test_title_mismatch(self, run_config: RunConfiguration) -> None:
        reason = check_candidate(make_pr(1, title="Bump react from 17 to 18"), run_config)
        assert reason is not None
        assert reason.startswith("invalid PR title")


class TestApplyMerges:
    """apply_merges approves then merges each valid PR in order."""

    def test_merges_in_order(self, settings: MergeSettings, run_config: RunConfiguration) -> None:
        adapter = Mock()
        prs = [make_pr(1), make_pr(2, repo="web")]
        lines: list[str] = []

        with patch("massmerge.merger.time.sleep") as sleep:
            outcome = apply_merges(adapter, prs, run_config, total=2, settings=settings, echo=lines.append)

        assert outcome.processed == 2
        assert outcome.total == 2
        assert adapter.mock_calls == [
            call.approve_pr("acme/api", 1),
            call.merge_pr("acme/api", 1, "squash"),
            call.approve_pr("acme/web", 2),
            call.merge_pr("acme/web", 2, "squash"),
        ]
        assert sleep.call_count == 2
        assert lines == ["api#1 approved and merged", "web#2 approved and merged"]

    def test_mismatched_candidates_are_never_touched(
        self, settings: MergeSettings, run_config: RunConfiguration
    ) -> None:
        """PRs whose author or title changed after confirmation are skipped."""
        adapter = Mock()
        prs = [
            make_pr(1, author="mallory"),
            make_pr(2, title="Bump react"),
            make_pr(3),
        ]
        lines: list[str] = []

        with patch("massmerge.merger.time.sleep"):
            outcome = apply_merges(adapter, prs, run_config, total=3, settings=settings, echo=lines.append)

        assert outcome.processed == 1
        adapter.approve_pr.assert_called_once_with("acme/api", 3)
        adapter.merge_pr.assert_called_once_with("acme/api", 3, "squash")
        assert lines[0].startswith("api#1 invalid PR author")
        assert lines[1].startswith("api#2 invalid PR title")

    def test_merge_failure_is_isolated(self, settings: MergeSettings, run_config: RunConfiguration) -> None:
        """One merge failing after retries does not stop the other four."""
        adapter = Mock()
        prs = [make_pr(i) for i in range(1, 6)]

        def merge(repo: str, number: int, method: str) -> None:
            if number == 3:
                raise GitPlatformError("405: Pull Request is not mergeable")

        adapter.merge_pr.side_effect = merge
        lines: list[str] = []

        with patch("massmerge.merger.time.sleep"), patch("massmerge.retry.time.sleep"):
            outcome = apply_merges(adapter, prs, run_config, total=5, settings=settings, echo=lines.append)

        assert outcome.processed == 4
        assert outcome.total == 5
        assert adapter.approve_pr.call_count == 5
        assert [c.args[1] for c in adapter.merge_pr.call_args_list] == [1, 2, 3, 3, 3, 4, 5]
        assert "NOT MERGED" in lines[2]
        assert "not mergeable" in lines[2]

    def test_approve_failure_aborts_run(self, settings: MergeSettings, run_config: RunConfiguration) -> None:
        adapter = Mock()
        adapter.approve_pr.side_effect = GitPlatformError("403: Resource not accessible")

        with patch("massmerge.merger.time.sleep"), patch("massmerge.retry.time.sleep"):
            with pytest.raises(GitPlatformError, match="403"):
                apply_merges(adapter, [make_pr(1), make_pr(2)], run_config, total=2, settings=settings)

        assert adapter.approve_pr.call_count == 3
        adapter.merge_pr.assert_not_called()

    def test_empty_ready_set(self, settings: MergeSettings, run_config: RunConfiguration) -> None:
        adapter = Mock()
        outcome = apply_merges(adapter, [], run_config, total=4, settings=settings)
        assert outcome.processed == 0
        assert outcome.total == 4
        adapter.approve_pr.assert_not_called()


def test_capitalized_dependabot_author_is_accepted() -> None:
    """The dependabot alias is matched regardless of case."""
    cfg = RunConfiguration(organizations=("acme",), title="bump lodash", author="Dependabot")
    assert check_candidate(make_pr(1), cfg) is None
