"""mass-merge entry point.

Finds open PRs by one author whose title contains a phrase, shows their
check status, asks for confirmation, then approves and squash-merges them.

Usage: GITHUB_TOKEN=*** mass-merge <orgs> <"title"> <author> [repos] [--ignore-checks]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, NoReturn

import yaml
from pydantic import ValidationError

from massmerge.adapters.base import GitPlatformAdapter
from massmerge.adapters.github import GitHubAdapter
from massmerge.config import TOKEN_HELP, MergeSettings, load_config
from massmerge.discovery import discover_candidates, select_ready
from massmerge.logging import MassMergeLogging
from massmerge.merger import ConfirmationError, MergeDeclined, apply_merges, confirm
from massmerge.models import MergeOutcome, RunConfiguration
from massmerge.query import build_search_query, qualify_repositories
from massmerge.report import done_line

LOG = logging.getLogger("massmerge")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = _ArgumentParser(
        prog="mass-merge",
        description="Approve and squash-merge matching PRs across GitHub organizations",
        epilog='Example: GITHUB_TOKEN=*** mass-merge acme "bump lodash" dependabot',
    )
    parser.add_argument("organizations", help="Organization, or comma-separated organizations")
    parser.add_argument("title", help="Text the PR title must contain")
    parser.add_argument("author", help="PR author login (dependabot for the Dependabot app)")
    parser.add_argument(
        "repositories",
        nargs="?",
        default="",
        help="Optional comma-separated repositories (name or owner/name)",
    )
    parser.add_argument(
        "--ignore-checks",
        "-f",
        action="store_true",
        help="Merge PRs regardless of their check runs",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only list PRs and their status, do not merge",
    )
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Do not ask for confirmation",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Optional YAML config file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def _split(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def build_run_config(args: argparse.Namespace) -> RunConfiguration:
    """Freeze parsed arguments into a RunConfiguration.

    Raises:
        ValidationError: If no organization or an empty title/author was given
    """
    organizations = _split(args.organizations)
    return RunConfiguration(
        organizations=tuple(organizations),
        repositories=tuple(qualify_repositories(organizations, _split(args.repositories))),
        title=args.title.strip(),
        author=args.author.strip(),
        ignore_checks=args.ignore_checks,
    )


def run_mass_merge(
    adapter: GitPlatformAdapter,
    run_config: RunConfiguration,
    settings: MergeSettings | None = None,
    ask: Callable[[str], str] | None = input,
    dry_run: bool = False,
    echo: Callable[[str], None] = print,
) -> MergeOutcome:
    """Search, classify, confirm and merge. ask=None skips the confirmation prompt.

    Raises:
        ConfirmationError: If the confirmation answer is invalid
        MergeDeclined: If the operator declines
    """
    settings = settings or MergeSettings()
    query = build_search_query(
        run_config.organizations,
        run_config.author,
        run_config.title,
        run_config.repositories,
    )
    LOG.info("Search query: %s", query)
    candidates = discover_candidates(adapter, query, settings)
    ready = select_ready(adapter, candidates, run_config, settings, echo=echo)

    if dry_run:
        return MergeOutcome(processed=0, total=len(candidates))
    if ready and ask is not None:
        echo("")
        confirm(len(ready), ask)
    return apply_merges(adapter, ready, run_config, len(candidates), settings, echo=echo)


def main(argv: list[str] | None = None, ask: Callable[[str], str] = input) -> int:
    """Entry point: returns the process exit code."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print(f"Invalid config {args.config}: {e}", file=sys.stderr)
        return 1
    MassMergeLogging(config.logging, verbose=args.verbose).setup()

    try:
        token = config.github_token_resolved
    except OSError as e:
        print(f"Cannot read GITHUB_TOKEN_FILE: {e}", file=sys.stderr)
        print(TOKEN_HELP, file=sys.stderr)
        return 1
    if not token:
        print("GITHUB_TOKEN environment variable required!", file=sys.stderr)
        print(TOKEN_HELP, file=sys.stderr)
        return 1

    try:
        run_config = build_run_config(args)
    except ValidationError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return 1

    adapter = GitHubAdapter(token=token, api_url=config.github.api_url, timeout=config.github.timeout)
    try:
        outcome = run_mass_merge(
            adapter,
            run_config,
            config.merge,
            ask=None if args.yes else ask,
            dry_run=args.dry_run,
        )
    except (ConfirmationError, MergeDeclined) as e:
        print(e)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return 1

    print(f"\n{done_line(outcome)}")
    return 0


def run() -> NoReturn:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
