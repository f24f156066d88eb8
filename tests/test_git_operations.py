"""Tests for GitOperations and worktree listing"""
import os
import pytest

from gtr.exceptions import GitOperationError, NotARepositoryError
from gtr.services.git import GitOperations, parse_porcelain


PORCELAIN = """worktree /repo
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /wt/feature
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feat/feature

worktree /wt/detached
HEAD 3333333333333333333333333333333333333333
detached
"""


class TestParsePorcelain:
    """Test parsing of `git worktree list --porcelain`."""

    def test_parses_entries_in_order(self):
        worktrees = parse_porcelain(PORCELAIN)

        assert [wt.path for wt in worktrees] == ["/repo", "/wt/feature", "/wt/detached"]
        assert [wt.branch_name for wt in worktrees] == ["main", "feat/feature", ""]
        assert worktrees[1].commit_sha.startswith("2222")
        assert worktrees[1].short_sha == "2222222"

    def test_first_entry_is_main(self):
        worktrees = parse_porcelain(PORCELAIN)
        assert [wt.is_main for wt in worktrees] == [True, False, False]

    def test_missing_directories_are_orphaned(self):
        worktrees = parse_porcelain(PORCELAIN)
        assert all(wt.is_orphaned for wt in worktrees)

    def test_last_entry_without_trailing_blank_line(self):
        worktrees = parse_porcelain("worktree /repo\nHEAD abc\nbranch refs/heads/main")
        assert len(worktrees) == 1
        assert worktrees[0].branch_name == "main"

    def test_empty_output(self):
        assert parse_porcelain("") == []

    def test_str_marks_detached_and_main(self):
        worktrees = parse_porcelain(PORCELAIN)
        assert "(main)" in str(worktrees[0])
        assert "(detached)" in str(worktrees[2])


class TestDiscover:
    """Test repository discovery."""

    def test_discover_from_subdirectory(self, git_repo):
        sub = os.path.join(git_repo.working_dir, "sub")
        os.makedirs(sub)

        git_ops = GitOperations.discover(sub)

        assert os.path.realpath(git_ops.root) == os.path.realpath(git_repo.working_dir)

    def test_discover_outside_repository(self, temp_dir):
        outside = temp_dir / "plain"
        outside.mkdir()
        with pytest.raises(NotARepositoryError):
            GitOperations.discover(str(outside))

    def test_discover_missing_path(self, temp_dir):
        with pytest.raises(NotARepositoryError):
            GitOperations.discover(str(temp_dir / "nope"))


class TestGitOperations:
    """Test the git commands used by the lifecycle manager."""

    def test_ref_exists(self, git_repo, git_ops):
        assert git_ops.ref_exists("refs/heads/main") is True
        assert git_ops.ref_exists("refs/heads/missing") is False

    def test_branch_exists_requires_exact_name(self, git_repo, git_ops):
        git_repo.create_head("feat/x")
        assert git_ops.branch_exists("feat/x") is True
        assert git_ops.branch_exists("x") is False

    def test_add_worktree_with_new_branch(self, git_repo, git_ops, worktree_base):
        path = str(worktree_base / "x")

        git_ops.add_worktree(path, "feat/x", create_branch=True)

        assert os.path.isdir(path)
        assert "feat/x" in [b.name for b in git_repo.branches]

    def test_add_worktree_returns_git_report(self, git_repo, git_ops, worktree_base):
        git_repo.create_head("feat/x")

        output = git_ops.add_worktree(str(worktree_base / "x"), "feat/x")

        # git reports on stderr; it must not be lost
        assert "HEAD is now at" in output
        assert not output.endswith("\n")

    def test_add_worktree_for_missing_branch_fails(self, git_ops, worktree_base):
        with pytest.raises(GitOperationError, match="worktree add"):
            git_ops.add_worktree(str(worktree_base / "x"), "no-such-branch")

    def test_remove_missing_worktree_returns_error(self, git_ops, worktree_base):
        removed, error = git_ops.remove_worktree(str(worktree_base / "missing"))
        assert removed is False
        assert "git worktree remove failed" in error

    def test_delete_missing_branch_returns_error(self, git_ops):
        deleted, error = git_ops.delete_branch("missing")
        assert deleted is False
        assert error

    def test_list_worktrees_after_add(self, git_ops, worktree_base):
        path = str(worktree_base / "x")
        git_ops.add_worktree(path, "feat/x", create_branch=True)

        worktrees = git_ops.list_worktrees()

        assert len(worktrees) == 2
        assert worktrees[0].is_main
        assert os.path.realpath(worktrees[1].path) == os.path.realpath(path)
        assert worktrees[1].branch_name == "feat/x"

    def test_main_worktree(self, git_repo, git_ops):
        main = git_ops.main_worktree()
        assert os.path.realpath(main.path) == os.path.realpath(git_repo.working_dir)

    def test_status_short_lists_changes(self, git_repo, git_ops):
        with open(os.path.join(git_repo.working_dir, "new.txt"), "w") as f:
            f.write("x")

        assert git_ops.status_short(git_repo.working_dir) == ["?? new.txt"]

    def test_status_short_missing_path(self, git_ops, temp_dir):
        assert git_ops.status_short(str(temp_dir / "missing")) == []

    def test_is_ignored(self, git_repo, git_ops):
        root = git_repo.working_dir
        with open(os.path.join(root, ".gitignore"), "w") as f:
            f.write(".claude\n")
        os.makedirs(os.path.join(root, ".claude"))
        os.makedirs(os.path.join(root, ".prompts"))

        assert git_ops.is_ignored(".claude") is True
        assert git_ops.is_ignored(".prompts") is False
