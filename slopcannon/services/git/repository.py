"""Repository inspection for slopcannon."""

import os
from typing import Dict, List, Optional, Tuple

from slopcannon.constants import (
    DEFAULT_BRANCH_CANDIDATES,
    DEFAULT_REMOTE,
    FALLBACK_DEFAULT_BRANCH,
    HEADS_PREFIX,
    REMOTES_PREFIX,
    SYMBOLIC_HEAD,
)
from slopcannon.exceptions import ExternalCommandError, NotARepositoryError
from slopcannon.logging_config import get_logger
from slopcannon.models.repository import BranchEntry, RepositoryInfo
from slopcannon.services.git.runner import CommandRunner

logger = get_logger(__name__)

# Dedup priority when several refs share a display name (lower wins)
_PRIORITY_LOCAL = 0
_PRIORITY_CANONICAL_REMOTE = 1
_PRIORITY_OTHER_REMOTE = 2


class RepositoryInspector:
    """Reads the current state of a repository."""

    def __init__(self, runner: Optional[CommandRunner] = None, remote: str = DEFAULT_REMOTE):
        """Initialize the inspector.

        Args:
            runner: Git command runner
            remote: Canonical remote name
        """
        self.runner = runner or CommandRunner()
        self.remote = remote

    def get_root(self, cwd: Optional[str] = None) -> str:
        """Top-level directory of the repository containing cwd."""
        cwd = cwd or os.getcwd()
        try:
            return self.runner.run(["rev-parse", "--show-toplevel"], cwd)
        except ExternalCommandError as e:
            raise NotARepositoryError(cwd, e.stderr or None) from e

    def get_remote_url(self, root: str) -> Optional[str]:
        """URL of the canonical remote, or None if there is none."""
        return self.runner.run_optional(["remote", "get-url", self.remote], root)

    def has_local_branch(self, root: str, name: str) -> bool:
        return self.runner.probe(["rev-parse", "--verify", "--quiet", f"{HEADS_PREFIX}{name}"], root)

    def has_remote_branch(self, root: str, name: str) -> bool:
        return self.runner.probe(
            ["rev-parse", "--verify", "--quiet", f"{REMOTES_PREFIX}{self.remote}/{name}"], root
        )

    def detect_default_branch(self, root: str) -> str:
        """Find the default branch; the first probe that answers wins."""
        remote_head_prefix = f"{REMOTES_PREFIX}{self.remote}/"
        ref = self.runner.run_optional(
            ["symbolic-ref", f"{remote_head_prefix}{SYMBOLIC_HEAD}"], root
        )
        if ref and ref.startswith(remote_head_prefix):
            logger.debug(f"Default branch from {self.remote}/HEAD: {ref}")
            return ref[len(remote_head_prefix):]

        for candidate in DEFAULT_BRANCH_CANDIDATES:
            if self.has_local_branch(root, candidate):
                logger.debug(f"Default branch from local branch: {candidate}")
                return candidate

        current = self.runner.run_optional(["branch", "--show-current"], root)
        if current:
            logger.debug(f"Default branch from current branch: {current}")
            return current

        return FALLBACK_DEFAULT_BRANCH

    def _classify_ref(self, refname: str) -> Optional[Tuple[str, str, int]]:
        """Map a full refname to (display name, resolvable ref, priority)."""
        if refname.startswith(HEADS_PREFIX):
            name = refname[len(HEADS_PREFIX):]
            return name, name, _PRIORITY_LOCAL

        if refname.startswith(REMOTES_PREFIX):
            qualified = refname[len(REMOTES_PREFIX):]
            remote, sep, name = qualified.partition("/")
            if not sep or not name or name == SYMBOLIC_HEAD:
                return None
            priority = _PRIORITY_CANONICAL_REMOTE if remote == self.remote else _PRIORITY_OTHER_REMOTE
            return name, qualified, priority

        return None

    def normalize_branches(self, refnames: List[str], default_branch: str) -> List[BranchEntry]:
        """Deduplicate full refnames into display entries.

        Local branches beat remote-tracking ones with the same short name.
        The default branch sorts first, the rest by ordinal comparison.
        """
        best: Dict[str, Tuple[int, int, str]] = {}
        for position, refname in enumerate(refnames):
            classified = self._classify_ref(refname.strip())
            if classified is None:
                continue
            name, ref, priority = classified
            current = best.get(name)
            if current is None or (priority, position) < current[:2]:
                best[name] = (priority, position, ref)

        entries = [BranchEntry(name=name, ref=ref) for name, (_, _, ref) in best.items()]
        entries.sort(key=lambda e: (e.name != default_branch, e.name))
        return entries

    def list_branches(self, root: str, default_branch: str) -> List[BranchEntry]:
        """All local and remote branches, normalized and sorted."""
        raw = self.runner.run(
            ["for-each-ref", "--format=%(refname)", HEADS_PREFIX.rstrip("/"), REMOTES_PREFIX.rstrip("/")],
            root,
        )
        return self.normalize_branches(raw.splitlines(), default_branch)

    def inspect(self, cwd: Optional[str] = None) -> RepositoryInfo:
        """Build a fresh RepositoryInfo for the repository containing cwd.

        Raises:
            NotARepositoryError: if cwd is not inside a git repository
        """
        root = self.get_root(cwd)
        default_branch = self.detect_default_branch(root)
        info = RepositoryInfo(
            root=root,
            repo_name=os.path.basename(root),
            parent_dir=os.path.dirname(root),
            remote_url=self.get_remote_url(root),
            default_branch=default_branch,
            branches=self.list_branches(root, default_branch),
        )
        logger.debug(
            f"Repository {info.repo_name} at {root}: default={default_branch}, "
            f"{len(info.branches)} branches"
        )
        return info
