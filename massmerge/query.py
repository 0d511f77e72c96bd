"""Build the issue search query for candidate pull requests."""

from typing import Iterable, List

DEPENDABOT = "dependabot"

BASE_QUALIFIERS = (
    "is:open",
    "is:pr",
    "archived:false",
    "draft:false",
    "comments:0",
)


def search_author(author: str) -> str:
    """Return the author qualifier value for search (dependabot -> app/dependabot)."""
    if author.lower() == DEPENDABOT:
        return f"app/{DEPENDABOT}"
    return author


def expected_login(author: str) -> str:
    """Return the login a matching PR's author must have.

    GitHub Apps search as ``app/<name>`` but author PRs as ``<name>[bot]``.
    """
    resolved = search_author(author)
    if resolved.startswith("app/"):
        return f"{resolved[len('app/'):]}[bot]"
    return resolved


def qualify_repositories(organizations: Iterable[str], repositories: Iterable[str]) -> List[str]:
    """Turn repo entries into owner/repo, pairing bare names with every organization."""
    result: List[str] = []
    for repo in repositories:
        names = [repo] if "/" in repo else [f"{org}/{repo}" for org in organizations]
        for name in names:
            if name not in result:
                result.append(name)
    return result


def _scope(organizations: List[str], repositories: List[str]) -> str:
    if repositories:
        return " ".join(f"repo:{name}" for name in repositories)
    terms = [f"org:{org}" for org in organizations]
    if len(terms) == 1:
        return terms[0]
    return "(" + " OR ".join(terms) + ")"


def build_search_query(
    organizations: Iterable[str],
    author: str,
    title: str,
    repositories: Iterable[str] | None = None,
) -> str:
    """Build the search filter for open, non-draft, uncommented PRs.

    Explicit repositories take precedence over organization-wide scope.
    The title is quoted so it matches as a phrase.

    Example:
        >>> build_search_query(["acme"], "dependabot", "bump lodash")
        'is:open is:pr archived:false draft:false comments:0 org:acme author:app/dependabot in:title "bump lodash"'
    """
    orgs = [o for o in organizations if o]
    repos = qualify_repositories(orgs, repositories or [])
    phrase = title.replace('"', "")
    parts = [
        *BASE_QUALIFIERS,
        _scope(orgs, repos),
        f"author:{search_author(author)}",
        "in:title",
        f'"{phrase}"',
    ]
    return " ".join(parts)
