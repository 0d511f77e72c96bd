"""Configuration loading from YAML and environment.

The GitHub token is taken from the environment or from a file (Docker
secrets). Never put real tokens in config files committed to the repo.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TOKEN_HELP = "Create a personal access token at https://github.com/settings/tokens/new?scopes=repo"


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so token resolution can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT with repo scope; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")


class MergeSettings(BaseSettings):
    """Pacing and retry knobs for discovery and the apply phase."""

    model_config = SettingsConfigDict(env_prefix="MERGE_", extra="ignore")

    page_size: int = Field(default=100, ge=1, le=100, description="Search results per page")
    max_pages: int = Field(default=10, ge=1, description="Upper bound on search pages fetched")
    page_delay_seconds: float = Field(default=1.0, ge=0, description="Delay between search pages")
    retry_attempts: int = Field(default=3, ge=1, description="Attempts per network call")
    retry_delay_seconds: float = Field(default=2.0, ge=0, description="Delay between attempts")
    action_delay_seconds: float = Field(default=2.0, ge=0, description="Delay before approving each PR")
    merge_method: str = Field(default="squash", description="merge, squash or rebase")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    merge: MergeSettings = Field(default_factory=MergeSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from an optional YAML file and environment.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env

    _current_env = dict(os.environ)

    if config_path is None or not config_path.is_file():
        return AppConfig()

    raw = yaml.safe_load(config_path.read_text()) or {}
    raw = _substitute_env(raw)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        merge=MergeSettings(**(raw.get("merge") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
