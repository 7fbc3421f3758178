"""Data models for slopcannon."""

from .repository import BranchEntry, RepositoryInfo
from .worktree import (
    BatchItemError,
    CleanupCandidate,
    ReclaimResult,
    ReviewRequest,
    WorktreeEntry,
)

__all__ = [
    "BranchEntry",
    "RepositoryInfo",
    "WorktreeEntry",
    "ReviewRequest",
    "CleanupCandidate",
    "BatchItemError",
    "ReclaimResult",
]
