"""Worktree path and branch name rules."""

import os
from typing import Optional

from slopcannon.constants import HEADS_PREFIX
from slopcannon.services.git.runner import CommandRunner


def compute_worktree_path(parent_dir: str, repo_name: str, branch: str) -> str:
    """Sibling directory for a new worktree, e.g. ``../app-feat-login``."""
    safe_branch = branch.replace("/", "-")
    return os.path.join(parent_dir, f"{repo_name}-{safe_branch}")


def validate_branch_name(name: str, root: str, runner: Optional[CommandRunner] = None) -> Optional[str]:
    """
    Check a proposed branch name.

    Args:
        name: Proposed branch name
        root: Repository root
        runner: Git command runner

    Returns:
        A reason the name is rejected, or None if it can be used
    """
    if not name or not name.strip():
        return "Branch name required"

    runner = runner or CommandRunner()
    # --branch expands @{-N}, so the full ref is checked as well
    if not runner.probe(["check-ref-format", "--branch", name], root) or not runner.probe(
        ["check-ref-format", f"{HEADS_PREFIX}{name}"], root
    ):
        return "Invalid branch name"

    if runner.probe(["rev-parse", "--verify", "--quiet", f"{HEADS_PREFIX}{name}"], root):
        return f"Branch '{name}' already exists"

    return None
