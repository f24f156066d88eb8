"""Pytest fixtures for gtr tests"""
import logging
import tempfile
from pathlib import Path
import pytest
import git

from gtr.config import BasePathSource, Config
from gtr.core import WorktreeManager
from gtr.services.git import GitOperations


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_home(temp_dir, monkeypatch):
    """Keep the user's real config file and env overrides out of every test."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    monkeypatch.delenv("GTR_WORKTREE_DIR", raising=False)
    monkeypatch.delenv("GTR_BRANCH_PREFIX", raising=False)
    return home


@pytest.fixture(autouse=True)
def restore_loggers():
    """setup_logging() reconfigures the gtr and git loggers; put them back after each test."""
    saved = [(logger, logger.handlers[:], logger.level)
             for logger in (logging.getLogger("gtr"), logging.getLogger("git"))]
    yield
    for logger, handlers, level in saved:
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def worktree_base(temp_dir):
    """Base directory for worktrees created during a test."""
    return temp_dir / "wt"


@pytest.fixture
def config(worktree_base):
    """Configuration pointing at the test worktree base."""
    return Config(base_path=str(worktree_base), base_path_source=BasePathSource.ENV)


@pytest.fixture
def git_ops(git_repo):
    """GitOperations bound to the test repository."""
    return GitOperations(git_repo.working_dir)


@pytest.fixture
def manager(git_ops, config):
    """WorktreeManager over the test repository."""
    return WorktreeManager(git_ops, config)
