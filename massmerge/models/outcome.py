"""Result of the apply phase."""

from pydantic import BaseModel


class MergeOutcome(BaseModel):
    """Counts reported in the final summary."""

    processed: int = 0
    total: int = 0
