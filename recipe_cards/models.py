"""Data models used throughout the scraper run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class TransferStatus(str, Enum):
    """Terminal state of a single candidate link."""

    SKIPPED = "skipped"
    UPLOADED = "uploaded"
    FAILED = "failed"


@dataclass(frozen=True)
class RecipeImage:
    """A candidate link turned into an absolute HTTPS URL and a filename."""

    source_link: str
    url: str
    filename: str


@dataclass
class LinkOutcome:
    """Result of processing one candidate link."""

    link: str
    status: TransferStatus
    filename: Optional[str] = None
    remote_path: Optional[str] = None
    error: Optional[str] = None


@dataclass
class RunResult:
    """Aggregate of every link outcome for one run."""

    outcomes: List[LinkOutcome] = field(default_factory=list)

    def add(self, outcome: LinkOutcome) -> None:
        self.outcomes.append(outcome)

    def _count(self, status: TransferStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def uploaded(self) -> int:
        return self._count(TransferStatus.UPLOADED)

    @property
    def skipped(self) -> int:
        return self._count(TransferStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(TransferStatus.FAILED)

    @property
    def success(self) -> bool:
        """At least one link was processed and none of them failed."""
        return bool(self.outcomes) and self.failed == 0
