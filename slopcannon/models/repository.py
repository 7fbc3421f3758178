"""Repository data models."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class BranchEntry:
    """A branch offered as a base for a new worktree."""

    name: str  # Short display name, remote prefix stripped
    ref: str  # Local name when a local branch exists, else e.g. "origin/foo"

    @property
    def is_remote(self) -> bool:
        return self.ref != self.name


@dataclass
class RepositoryInfo:
    """Snapshot of the repository the command was started in."""

    root: str
    repo_name: str
    parent_dir: str
    remote_url: Optional[str]
    default_branch: str
    branches: List[BranchEntry] = field(default_factory=list)

    def find_branch(self, name: str) -> Optional[BranchEntry]:
        """Look up a branch by display name."""
        for entry in self.branches:
            if entry.name == name:
                return entry
        return None

    @property
    def default_ref(self) -> str:
        """Resolvable ref for the default branch."""
        entry = self.find_branch(self.default_branch)
        return entry.ref if entry else self.default_branch
