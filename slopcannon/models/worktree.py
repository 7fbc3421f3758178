"""Worktree data models."""

from dataclasses import dataclass, field
from typing import List, Optional

from slopcannon.constants import REVIEW_STATE_MERGED


@dataclass(frozen=True)
class WorktreeEntry:
    """A worktree as reported by git worktree list."""

    path: str
    branch: Optional[str]  # None when detached
    is_main: bool  # Is this the main working tree?

    @property
    def is_detached(self) -> bool:
        return self.branch is None

    @property
    def label(self) -> str:
        """Branch name, or the path for detached worktrees."""
        return self.branch if self.branch is not None else self.path

    def __str__(self) -> str:
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch or '(detached)'} @ {self.path}{main_marker}"


@dataclass(frozen=True)
class ReviewRequest:
    """A pull request opened from a worktree's branch."""

    number: int
    title: str
    state: str  # OPEN, CLOSED or MERGED
    url: str

    @property
    def is_merged(self) -> bool:
        return self.state == REVIEW_STATE_MERGED


@dataclass
class CleanupCandidate:
    """A linked worktree with the signals used to decide if it can go."""

    entry: WorktreeEntry
    merged: bool
    deleted_on_remote: bool
    review_request: Optional[ReviewRequest]
    safe_to_clean: bool


@dataclass(frozen=True)
class BatchItemError:
    """A failure for one item of a cleanup batch."""

    label: str
    message: str

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


@dataclass
class ReclaimResult:
    """Outcome of removing a batch of worktrees."""

    removed: int = 0
    errors: List[BatchItemError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
