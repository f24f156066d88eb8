"""Git operations service"""

import os
from typing import List, Optional, Tuple

import git

from gtr.exceptions import GitOperationError, NotARepositoryError
from gtr.models.worktree import WorktreeInfo
from gtr.services.git.worktrees import WorktreeService
from gtr.logging_config import get_logger

logger = get_logger(__name__)


def _describe_error(e: git.exc.GitCommandError) -> str:
    """Flatten a GitCommandError into a one-line message."""
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else str(e)).strip()
    # GitPython wraps stderr as "\n  stderr: '...'"
    if stderr.startswith("stderr: "):
        stderr = stderr[len("stderr: "):].strip("'")
    status = e.status if hasattr(e, "status") else "unknown"
    if stderr:
        return f"(exit {status}) {stderr}"
    return f"exit code {status}"


class GitOperations:
    """Thin adapter over the git commands gtr needs."""

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Root of the working tree (not a repo object)
        """
        self.repo_path = repo_path
        self.worktree_service = WorktreeService(repo_path)

    @classmethod
    def discover(cls, path: Optional[str] = None) -> "GitOperations":
        """Open the repository containing ``path`` (default: cwd).

        Raises:
            NotARepositoryError: If ``path`` is not inside a git working tree
        """
        path = path or os.getcwd()
        try:
            repo = git.Repo(path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            logger.debug(f"No repository at {path}: {e}")
            raise NotARepositoryError(path) from e

        try:
            root = repo.working_tree_dir
            if root is None:
                # Bare repository, or cwd is inside .git
                raise NotARepositoryError(path)
        finally:
            repo.close()

        logger.debug(f"Repository root: {root}")
        return cls(str(root))

    def _get_repo(self):
        """Get a fresh git.Repo instance.

        GitPython repos are lightweight - they don't clone, just open the existing repo.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    @property
    def root(self) -> str:
        """Top level of the current working tree."""
        return self.repo_path

    def ref_exists(self, ref: str) -> bool:
        """Check whether an exact ref (e.g. refs/heads/feat/x) exists."""
        repo = self._get_repo()
        try:
            repo.git.show_ref("--verify", "--quiet", ref)
            logger.debug(f"Ref {ref} exists")
            return True
        except git.exc.GitCommandError:
            logger.debug(f"Ref {ref} does not exist")
            return False

    def branch_exists(self, branch_name: str) -> bool:
        """Check whether a local branch exists."""
        return self.ref_exists(f"refs/heads/{branch_name}")

    def add_worktree(self, path: str, branch_name: str, create_branch: bool = False) -> str:
        """Materialize a worktree at ``path`` bound to ``branch_name``.

        Args:
            path: Target directory (created by git, parents included)
            branch_name: Branch to check out
            create_branch: Create the branch from HEAD instead of checking out an existing one

        Returns:
            What git printed (it reports progress on stderr), stdout first

        Raises:
            GitOperationError: If git refuses (existing path, branch in use, ...)
        """
        repo = self._get_repo()
        if create_branch:
            args = ["add", "-b", branch_name, path]
        else:
            args = ["add", path, branch_name]

        logger.debug(f"git worktree {' '.join(args)}")
        try:
            _, stdout, stderr = repo.git.worktree(*args, with_extended_output=True)
        except git.exc.GitCommandError as e:
            error_msg = _describe_error(e)
            logger.debug(f"Failed to add worktree at {path}: {error_msg}")
            raise GitOperationError("worktree add", path, error_msg) from e

        self.worktree_service.clear_cache()
        logger.info(f"Added worktree at {path} on {branch_name}")
        return "\n".join(part.strip() for part in (stdout, stderr) if part and part.strip())

    def remove_worktree(self, path: str, force: bool = False) -> Tuple[bool, Optional[str]]:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        repo = self._get_repo()
        args = ["remove", path]
        if force:
            args.append("--force")

        logger.debug(f"git worktree {' '.join(args)}")
        try:
            repo.git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = f"git worktree remove failed {_describe_error(e)}"
            logger.debug(f"Failed to remove worktree at {path}: {error_msg}")
            return False, error_msg

        self.worktree_service.clear_cache()
        logger.info(f"Removed worktree at {path}")
        return True, None

    def delete_branch(self, branch_name: str, force: bool = False) -> Tuple[bool, Optional[str]]:
        """Delete a local branch with ``-d`` (or ``-D`` when forced).

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        repo = self._get_repo()
        flag = "-D" if force else "-d"

        logger.debug(f"git branch {flag} {branch_name}")
        try:
            repo.git.branch(flag, branch_name)
        except git.exc.GitCommandError as e:
            error_msg = f"git branch {flag} failed {_describe_error(e)}"
            logger.debug(f"Could not delete branch {branch_name}: {error_msg}")
            return False, error_msg

        logger.info(f"Deleted branch {branch_name}")
        return True, None

    def status_short(self, worktree_path: str) -> List[str]:
        """Short-format status lines for a worktree, or [] if unavailable."""
        if not os.path.isdir(worktree_path):
            logger.debug(f"Worktree path {worktree_path} doesn't exist")
            return []

        repo = self._get_repo()
        try:
            # Use git -C <path> to run command in that directory
            output = repo.git.execute(["git", "-C", worktree_path, "status", "--short"])
        except git.exc.GitCommandError as e:
            logger.debug(f"Could not check status for {worktree_path}: {_describe_error(e)}")
            return []

        return [line for line in output.split("\n") if line.strip()]

    def is_ignored(self, path: str) -> bool:
        """Check whether ``path`` is excluded from version control."""
        repo = self._get_repo()
        try:
            repo.git.check_ignore("-q", path)
            return True
        except git.exc.GitCommandError:
            # Exit 1 means "not ignored"
            return False

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Worktrees as reported by git, main worktree first."""
        return self.worktree_service.get_worktree_info()

    def main_worktree(self) -> Optional[WorktreeInfo]:
        """The primary checkout, i.e. the first entry git reports."""
        worktrees = self.list_worktrees()
        return worktrees[0] if worktrees else None
