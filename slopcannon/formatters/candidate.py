"""Cleanup candidate formatting."""

from typing import List

from slopcannon.constants import SYMBOL_DETACHED
from slopcannon.models.worktree import CleanupCandidate, ReviewRequest


def format_review_request(pr: ReviewRequest) -> str:
    """``PR #12 merged: Add login``."""
    return f"PR #{pr.number} {pr.state.lower()}: {pr.title}"


def format_candidate_tags(candidate: CleanupCandidate) -> List[str]:
    """Short reasons shown next to a worktree."""
    tags = []
    if candidate.merged:
        tags.append("merged")
    if candidate.deleted_on_remote:
        tags.append("gone from remote")
    if candidate.review_request:
        tags.append(format_review_request(candidate.review_request))
    return tags


def format_candidate(candidate: CleanupCandidate) -> str:
    """
    Format a cleanup candidate for the selection list.

    Args:
        candidate: Candidate to describe

    Returns:
        Branch name (or "(detached)") followed by its tags in parentheses
    """
    name = candidate.entry.branch or SYMBOL_DETACHED
    tags = format_candidate_tags(candidate)
    if not tags:
        return name
    return f"{name} ({', '.join(tags)})"
