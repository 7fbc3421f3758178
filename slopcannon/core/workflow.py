"""Worktree creation and cleanup workflow for slopcannon"""

import os
from typing import List, Optional, Union

from slopcannon.config import Config
from slopcannon.logging_config import get_logger
from slopcannon.models.repository import RepositoryInfo
from slopcannon.models.worktree import CleanupCandidate, ReclaimResult
from slopcannon.services.cleanup_service import CleanupService
from slopcannon.services.git import (
    CommandRunner,
    GitHubService,
    RepositoryInspector,
    WorktreeService,
    compute_worktree_path,
    validate_branch_name,
)

logger = get_logger(__name__)


class WorktreeWorkflow:
    """Ties the git services together for one invocation.

    Nothing is cached between calls: every inspection and scan reads the
    repository again.
    """

    def __init__(
        self,
        config: Union[Config, dict, None] = None,
        cwd: Optional[str] = None,
        runner: Optional[CommandRunner] = None,
        github_service: Optional[GitHubService] = None,
    ):
        """Initialize the workflow.

        Args:
            config: Configuration dict or Config object
            cwd: Directory to look for the repository in
            runner: Git command runner
            github_service: Pull request lookup (built from config when omitted)
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.cwd = cwd or os.getcwd()
        self.runner = runner or CommandRunner(cwd=self.cwd)
        self.inspector = RepositoryInspector(self.runner, remote=config.remote)
        self.worktree_service = WorktreeService(self.runner)
        self._github_service = github_service

    def inspect(self) -> RepositoryInfo:
        """Read the repository containing cwd.

        Raises:
            NotARepositoryError: if cwd is outside any repository
        """
        return self.inspector.inspect(self.cwd)

    def validate_branch_name(self, info: RepositoryInfo, name: str) -> Optional[str]:
        """Reason the new branch name is rejected, or None."""
        return validate_branch_name(name, info.root, self.runner)

    def worktree_path_for(self, info: RepositoryInfo, branch: str) -> str:
        return compute_worktree_path(info.parent_dir, info.repo_name, branch)

    def create_command(self, info: RepositoryInfo, base_ref: str, branch: str) -> str:
        """The git command create_worktree will run, for display."""
        return f"git worktree add -b {branch} {self.worktree_path_for(info, branch)} {base_ref}"

    def create_worktree(self, info: RepositoryInfo, base_ref: str, branch: str) -> str:
        """Create the worktree for branch and return its path.

        Raises:
            ExternalCommandError: if git refuses
        """
        path = self.worktree_path_for(info, branch)
        self.worktree_service.create_worktree(info.root, path, base_ref, branch)
        return path

    def github_service(self, info: RepositoryInfo) -> GitHubService:
        if self._github_service is None:
            self._github_service = GitHubService(info.remote_url, token=self.config.token)
        return self._github_service

    def cleanup_service(self, info: RepositoryInfo) -> CleanupService:
        return CleanupService(
            runner=self.runner,
            worktree_service=self.worktree_service,
            github_service=self.github_service(info),
            remote=self.config.remote,
        )

    def scan_worktrees(self, info: RepositoryInfo) -> List[CleanupCandidate]:
        """Classify every linked worktree of the repository.

        Raises:
            ExternalCommandError: if the worktrees cannot be listed
        """
        return self.cleanup_service(info).scan(info)

    def reclaim(self, info: RepositoryInfo, candidates: List[CleanupCandidate]) -> ReclaimResult:
        """Remove the selected worktrees and their branches."""
        return self.cleanup_service(info).reclaim(info.root, candidates)
