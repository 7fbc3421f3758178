"""Service for deciding which worktrees can be reclaimed and removing them"""

from typing import Iterable, List, Optional, Set

from slopcannon.constants import DEFAULT_REMOTE
from slopcannon.exceptions import ExternalCommandError
from slopcannon.logging_config import get_logger
from slopcannon.models.repository import RepositoryInfo
from slopcannon.models.worktree import (
    BatchItemError,
    CleanupCandidate,
    ReclaimResult,
    ReviewRequest,
    WorktreeEntry,
)
from slopcannon.services.git.github import GitHubService
from slopcannon.services.git.repository import RepositoryInspector
from slopcannon.services.git.runner import CommandRunner
from slopcannon.services.git.worktrees import WorktreeService

logger = get_logger(__name__)


def is_safe_to_clean(
    entry: WorktreeEntry,
    merged: bool,
    deleted_on_remote: bool,
    review_request: Optional[ReviewRequest],
) -> bool:
    """Combine the cleanup signals into one verdict.

    A merged pull request counts even when the local merge check disagrees,
    since squash and rebase merges leave the branch unmerged locally.
    """
    if merged:
        return True
    if deleted_on_remote and entry.is_detached:
        return True
    return review_request is not None and review_request.is_merged


class CleanupService:
    """Classifies linked worktrees and reclaims the selected ones."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        worktree_service: Optional[WorktreeService] = None,
        github_service: Optional[GitHubService] = None,
        remote: str = DEFAULT_REMOTE,
    ):
        """Initialize the service.

        Args:
            runner: Git command runner
            worktree_service: Worktree operations
            github_service: Pull request lookup; None disables it
            remote: Remote checked for deleted branches
        """
        self.runner = runner or CommandRunner()
        self.worktree_service = worktree_service or WorktreeService(self.runner)
        self.inspector = RepositoryInspector(self.runner, remote=remote)
        self.github_service = github_service
        self.remote = remote

    def get_merged_branches(self, root: str, target_ref: str) -> Set[str]:
        """Local branches already merged into target_ref."""
        output = self.runner.run_optional(
            ["branch", "--merged", target_ref, "--format=%(refname:short)"], root
        )
        if output is None:
            logger.warning(f"Could not list branches merged into {target_ref}")
            return set()
        return {line.strip() for line in output.splitlines() if line.strip()}

    def is_deleted_on_remote(self, root: str, branch: str) -> bool:
        """True when no remote-tracking ref exists for branch."""
        return not self.inspector.has_remote_branch(root, branch)

    def find_review_request(self, root: str, branch: str) -> Optional[ReviewRequest]:
        if self.github_service is None:
            return None
        return self.github_service.find_review_request(branch, root)

    def classify(
        self,
        root: str,
        entries: Iterable[WorktreeEntry],
        target_ref: str,
    ) -> List[CleanupCandidate]:
        """Build a candidate for every linked worktree.

        Read-only: nothing in the repository changes.
        """
        linked = [entry for entry in entries if not entry.is_main]
        if not linked:
            return []

        merged_branches = self.get_merged_branches(root, target_ref)
        candidates = []
        for entry in linked:
            if entry.branch is None:
                merged = False
                deleted_on_remote = False
                review_request = None
            else:
                merged = entry.branch in merged_branches
                deleted_on_remote = self.is_deleted_on_remote(root, entry.branch)
                review_request = self.find_review_request(root, entry.branch)

            safe = is_safe_to_clean(entry, merged, deleted_on_remote, review_request)
            logger.debug(
                f"{entry}: merged={merged} gone={deleted_on_remote} "
                f"pr={review_request.state if review_request else None} safe={safe}"
            )
            candidates.append(
                CleanupCandidate(
                    entry=entry,
                    merged=merged,
                    deleted_on_remote=deleted_on_remote,
                    review_request=review_request,
                    safe_to_clean=safe,
                )
            )
        return candidates

    def scan(self, info: RepositoryInfo) -> List[CleanupCandidate]:
        """Prune, list and classify the worktrees of a repository.

        Raises:
            ExternalCommandError: if the worktree listing fails
        """
        entries = self.worktree_service.list_worktrees(info.root)
        return self.classify(info.root, entries, info.default_ref)

    def reclaim(self, root: str, candidates: Iterable[CleanupCandidate]) -> ReclaimResult:
        """Remove each worktree and delete its branch.

        Every item is attempted; failures are collected, not raised.
        """
        result = ReclaimResult()
        for candidate in candidates:
            entry = candidate.entry
            try:
                self.worktree_service.remove_worktree(root, entry.path, force=True)
            except ExternalCommandError as e:
                logger.error(f"Failed to remove worktree at {entry.path}: {e}")
                result.errors.append(BatchItemError(label=entry.label, message=str(e)))
                continue

            if entry.branch is not None:
                try:
                    self.worktree_service.delete_branch(root, entry.branch, force=True)
                except ExternalCommandError as e:
                    # The worktree is gone; a missing branch is fine
                    logger.debug(f"Could not delete branch {entry.branch}: {e}")

            result.removed += 1

        return result
