"""Git platform adapters (base and implementations)."""

from massmerge.adapters.base import GitPlatformAdapter, GitPlatformError
from massmerge.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
