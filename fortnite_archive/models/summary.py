"""Run outcome data models."""

from dataclasses import dataclass, field
from enum import Enum


class FetchStatus(Enum):
    """Outcome of fetching a single resource."""
    CACHED = "cached"
    SAVED = "saved"
    UNAVAILABLE = "unavailable"

    @property
    def succeeded(self) -> bool:
        return self is not FetchStatus.UNAVAILABLE


@dataclass
class RunSummary:
    """Tally of resource outcomes for one archive run."""
    cached: int = 0
    saved: int = 0
    unavailable: int = 0
    game_versions: list[str] = field(default_factory=list)

    def record(self, status: FetchStatus) -> None:
        if status is FetchStatus.CACHED:
            self.cached += 1
        elif status is FetchStatus.SAVED:
            self.saved += 1
        else:
            self.unavailable += 1

    @property
    def total(self) -> int:
        return self.cached + self.saved + self.unavailable
