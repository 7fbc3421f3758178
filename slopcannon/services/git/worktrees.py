"""Worktree operations service for slopcannon."""

from typing import Dict, List, Optional

from slopcannon.constants import HEADS_PREFIX
from slopcannon.logging_config import get_logger
from slopcannon.models.worktree import WorktreeEntry
from slopcannon.services.git.runner import CommandRunner

logger = get_logger(__name__)


def parse_worktree_porcelain(output: str) -> List[WorktreeEntry]:
    """Parse ``git worktree list --porcelain`` output.

    Format::

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    git always lists the main worktree first, so the first record is the
    primary one.
    """
    entries: List[WorktreeEntry] = []
    current: Dict[str, Optional[str]] = {}

    def flush():
        path = current.get("path")
        if path:
            entries.append(
                WorktreeEntry(path=path, branch=current.get("branch"), is_main=not entries)
            )
        current.clear()

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            # Empty line marks end of worktree entry
            flush()
            continue

        if line.startswith("worktree "):
            if current:
                flush()
            current["path"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith(HEADS_PREFIX):
                current["branch"] = branch_ref[len(HEADS_PREFIX):]
            else:
                current["branch"] = None
        elif line == "detached":
            current["branch"] = None

    # Handle last entry if no trailing blank line
    flush()
    return entries


class WorktreeService:
    """Creates, lists and removes git worktrees."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        """Initialize the worktree service.

        Args:
            runner: Git command runner
        """
        self.runner = runner or CommandRunner()

    def create_worktree(self, root: str, worktree_path: str, base_ref: str, new_branch: str) -> None:
        """Create a worktree at worktree_path on a new branch cut from base_ref.

        A single ``git worktree add -b`` call. Nothing is prepared beforehand
        and nothing is rolled back; git's own error propagates as-is.

        Raises:
            ExternalCommandError: if git refuses
        """
        self.runner.run(["worktree", "add", "-b", new_branch, worktree_path, base_ref], root)
        logger.info(f"Created worktree {worktree_path} on {new_branch} from {base_ref}")

    def prune_worktrees(self, root: str) -> bool:
        """Drop metadata of worktrees whose directory is gone."""
        pruned = self.runner.probe(["worktree", "prune"], root)
        if not pruned:
            logger.warning("git worktree prune failed; stale worktrees may be listed")
        return pruned

    def list_worktrees(self, root: str) -> List[WorktreeEntry]:
        """Prune, then list every worktree of the repository.

        Raises:
            ExternalCommandError: if the listing itself fails
        """
        self.prune_worktrees(root)
        output = self.runner.run(["worktree", "list", "--porcelain"], root)
        entries = parse_worktree_porcelain(output)

        logger.debug(f"Found {len(entries)} worktrees")
        for entry in entries:
            logger.debug(f"  {entry}")
        return entries

    def remove_worktree(self, root: str, path: str, force: bool = False) -> None:
        """Remove a worktree; force also removes dirty or locked ones.

        Raises:
            ExternalCommandError: if git refuses
        """
        args = ["worktree", "remove", path]
        if force:
            args.append("--force")
        self.runner.run(args, root)
        logger.info(f"Removed worktree at {path}")

    def delete_branch(self, root: str, branch: str, force: bool = False) -> None:
        """Delete a local branch.

        Raises:
            ExternalCommandError: if git refuses
        """
        self.runner.run(["branch", "-D" if force else "-d", branch], root)
        logger.info(f"Deleted branch {branch}")
