"""Pytest fixtures for slopcannon tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from slopcannon.config import Config
from slopcannon.core.workflow import WorktreeWorkflow
from slopcannon.models.worktree import CleanupCandidate, ReviewRequest, WorktreeEntry
from slopcannon.services.git import CommandRunner, GitHubService


def commit_file(repo, name, content, message):
    """Write a file in the repo and commit it."""
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # git reports resolved paths (e.g. /private/var on macOS)
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")
    repo.git.branch("-M", "main")

    repo.create_remote("origin", "git@github.com:test/test-repo.git")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with local branches and fake remote-tracking refs.

    - feature/active: unmerged, pushed (origin/feature/active exists)
    - feature/merged: merged into main with a merge commit, not on origin
    - origin/remote-only: exists only on the remote
    - origin/HEAD -> origin/main
    """
    repo = git_repo

    repo.git.checkout("-b", "feature/active")
    commit_file(repo, "active.txt", "Active content\n", "Add active feature")

    repo.git.checkout("main")
    repo.git.checkout("-b", "feature/merged")
    commit_file(repo, "merged.txt", "Merged content\n", "Add merged feature")

    repo.git.checkout("main")
    repo.git.merge("feature/merged", "--no-ff", "-m", "Merge feature/merged")

    main_sha = repo.commit("main").hexsha
    repo.git.update_ref("refs/remotes/origin/main", main_sha)
    repo.git.update_ref("refs/remotes/origin/feature/active", repo.commit("feature/active").hexsha)
    repo.git.update_ref("refs/remotes/origin/remote-only", main_sha)
    repo.git.symbolic_ref("refs/remotes/origin/HEAD", "refs/remotes/origin/main")

    yield repo


@pytest.fixture
def disabled_github():
    """PR lookup with no backend."""
    return GitHubService(None, token=None, gh_available=False)


@pytest.fixture
def workflow(git_repo_with_branches, config, disabled_github):
    """Workflow bound to the test repository."""
    return WorktreeWorkflow(
        config, cwd=git_repo_with_branches.working_dir, github_service=disabled_github
    )


@pytest.fixture
def mock_runner():
    """Runner whose calls are all mocked."""
    runner = Mock(spec=CommandRunner)
    runner.run.return_value = ""
    runner.probe.return_value = False
    runner.run_optional.return_value = None
    return runner


@pytest.fixture
def make_candidate():
    """Factory for cleanup candidates."""

    def _make(path, branch="feature/x", merged=False, deleted_on_remote=False,
              review_request=None, safe_to_clean=False):
        return CleanupCandidate(
            entry=WorktreeEntry(path=path, branch=branch, is_main=False),
            merged=merged,
            deleted_on_remote=deleted_on_remote,
            review_request=review_request,
            safe_to_clean=safe_to_clean,
        )

    return _make


@pytest.fixture
def merged_pr():
    return ReviewRequest(number=42, title="Add login", state="MERGED",
                         url="https://github.com/test/test-repo/pull/42")
