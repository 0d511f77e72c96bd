"""Check run model and aggregate readiness status."""

from enum import Enum

from pydantic import BaseModel


class CheckAggregateStatus(str, Enum):
    """Readiness of a pull request derived from its check runs."""

    SUCCESS = "success"
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    MISSING = "missing"
    FAILED = "failed"


class CheckRun(BaseModel):
    """Single check run reported against a commit."""

    name: str = ""
    status: str
    conclusion: str | None = None
