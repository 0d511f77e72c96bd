"""Immutable snapshot of what a single run operates on."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class RunConfiguration(BaseModel):
    """Scope and filters of a mass merge run, built once from CLI arguments."""

    model_config = ConfigDict(frozen=True)

    organizations: Tuple[str, ...] = Field(..., min_length=1)
    repositories: Tuple[str, ...] = Field(default_factory=tuple, description="owner/repo entries")
    title: str = Field(..., min_length=1, description="Required title substring")
    author: str = Field(..., min_length=1, description="Author as given on the command line")
    ignore_checks: bool = False
