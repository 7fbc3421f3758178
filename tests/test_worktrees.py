"""Tests for WorktreeService"""
import os

import pytest

from slopcannon.exceptions import ExternalCommandError
from slopcannon.services.git import WorktreeService, parse_worktree_porcelain

PORCELAIN = """\
worktree /work/app
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /work/app-feat-login
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feat/login

worktree /work/app-detached
HEAD 3333333333333333333333333333333333333333
detached

"""


class TestParsePorcelain:
    """Test parsing recorded porcelain output."""

    def test_parses_all_records(self):
        entries = parse_worktree_porcelain(PORCELAIN)
        assert [(e.path, e.branch, e.is_main) for e in entries] == [
            ("/work/app", "main", True),
            ("/work/app-feat-login", "feat/login", False),
            ("/work/app-detached", None, False),
        ]

    def test_exactly_one_primary_and_it_is_first(self):
        entries = parse_worktree_porcelain(PORCELAIN)
        primaries = [e for e in entries if e.is_main]
        assert primaries == [entries[0]]

    def test_primary_can_be_detached(self):
        output = "worktree /work/app\nHEAD abc\ndetached\n\nworktree /work/app-x\nHEAD def\nbranch refs/heads/x\n"
        entries = parse_worktree_porcelain(output)
        assert entries[0].is_main is True
        assert entries[0].branch is None
        assert entries[1].is_main is False

    def test_last_record_without_blank_line(self):
        entries = parse_worktree_porcelain(PORCELAIN.rstrip("\n"))
        assert len(entries) == 3
        assert entries[-1].path == "/work/app-detached"

    def test_extra_attributes_ignored(self):
        output = (
            "worktree /work/app\nHEAD abc\nbranch refs/heads/main\n\n"
            "worktree /work/app-x\nHEAD def\nbranch refs/heads/x\nlocked reason\nprunable gitdir file points to non-existent location\n"
        )
        entries = parse_worktree_porcelain(output)
        assert [e.branch for e in entries] == ["main", "x"]

    def test_empty_output(self):
        assert parse_worktree_porcelain("") == []


class TestWorktreeLifecycle:
    """Test create, list and remove against a real repository."""

    def test_create_and_list(self, git_repo_with_branches, temp_dir):
        root = git_repo_with_branches.working_dir
        service = WorktreeService()
        path = str(temp_dir / "test_repo-feat-new")

        service.create_worktree(root, path, "main", "feat/new")

        assert os.path.isdir(path)
        entries = service.list_worktrees(root)
        assert entries[0].path == root
        assert entries[0].is_main is True
        assert (path, "feat/new", False) in [(e.path, e.branch, e.is_main) for e in entries]

    def test_create_from_remote_ref(self, git_repo_with_branches, temp_dir):
        root = git_repo_with_branches.working_dir
        path = str(temp_dir / "test_repo-from-remote")

        WorktreeService().create_worktree(root, path, "origin/remote-only", "from-remote")

        assert git_repo_with_branches.commit("from-remote").hexsha == \
            git_repo_with_branches.commit("origin/remote-only").hexsha

    def test_create_existing_branch_fails_verbatim(self, git_repo_with_branches, temp_dir):
        root = git_repo_with_branches.working_dir
        path = str(temp_dir / "test_repo-dup")

        with pytest.raises(ExternalCommandError) as exc_info:
            WorktreeService().create_worktree(root, path, "main", "feature/active")

        assert exc_info.value.verb == "git worktree"
        assert "feature/active" in exc_info.value.stderr

    def test_stale_worktree_is_pruned(self, git_repo_with_branches, temp_dir):
        root = git_repo_with_branches.working_dir
        service = WorktreeService()
        path = temp_dir / "test_repo-stale"
        service.create_worktree(root, str(path), "main", "stale")

        # Simulate the directory being deleted by hand
        import shutil
        shutil.rmtree(path)

        entries = service.list_worktrees(root)
        assert str(path) not in [e.path for e in entries]

    def test_remove_dirty_worktree_with_force(self, git_repo_with_branches, temp_dir):
        root = git_repo_with_branches.working_dir
        service = WorktreeService()
        path = temp_dir / "test_repo-dirty"
        service.create_worktree(root, str(path), "main", "dirty")
        (path / "scratch.txt").write_text("uncommitted\n")

        with pytest.raises(ExternalCommandError):
            service.remove_worktree(root, str(path))

        service.remove_worktree(root, str(path), force=True)
        assert not path.exists()

    def test_delete_branch(self, git_repo_with_branches):
        root = git_repo_with_branches.working_dir
        service = WorktreeService()

        service.delete_branch(root, "feature/active", force=True)

        assert "feature/active" not in [h.name for h in git_repo_with_branches.heads]

    def test_delete_missing_branch_raises(self, git_repo):
        with pytest.raises(ExternalCommandError):
            WorktreeService().delete_branch(git_repo.working_dir, "nope", force=True)

    def test_list_prunes_first(self, mock_runner):
        mock_runner.probe.return_value = True
        mock_runner.run.return_value = PORCELAIN

        entries = WorktreeService(mock_runner).list_worktrees("/work/app")

        mock_runner.probe.assert_called_once_with(["worktree", "prune"], "/work/app")
        mock_runner.run.assert_called_once_with(["worktree", "list", "--porcelain"], "/work/app")
        assert len(entries) == 3
