"""Git-related services for slopcannon."""

from .runner import CommandRunner
from .repository import RepositoryInspector
from .naming import compute_worktree_path, validate_branch_name
from .worktrees import WorktreeService, parse_worktree_porcelain
from .github import GitHubService, parse_github_repo

__all__ = [
    "CommandRunner",
    "RepositoryInspector",
    "compute_worktree_path",
    "validate_branch_name",
    "WorktreeService",
    "parse_worktree_porcelain",
    "GitHubService",
    "parse_github_repo",
]
