"""Worktree listing for gtr."""

import os
from typing import Any, Dict, List, Optional

import git

from gtr.models.worktree import WorktreeInfo
from gtr.logging_config import get_logger

logger = get_logger(__name__)


def parse_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)
    """
    worktree_list: List[WorktreeInfo] = []
    current: Dict[str, Any] = {}

    def flush():
        path = current.get("path", "")
        if not path:
            return
        worktree_list.append(
            WorktreeInfo(
                path=path,
                branch_name=current.get("branch", ""),
                commit_sha=current.get("HEAD", ""),
                # First worktree in list is always the main one
                is_main=not worktree_list,
                is_orphaned=not os.path.exists(path),
            )
        )

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            flush()
            current = {}
            continue

        if line.startswith("worktree "):
            current["path"] = line.split(" ", 1)[1]
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current["branch"] = branch_ref
        elif line == "detached":
            current["branch"] = ""

    # Handle last entry if no trailing blank line
    flush()
    return worktree_list


class WorktreeService:
    """Service for reading the git worktree registry."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository
        """
        self.repo_path = repo_path
        self._worktree_info: Optional[List[WorktreeInfo]] = None

    def clear_cache(self):
        """Clear the worktree information cache."""
        self._worktree_info = None

    def get_worktree_info(self) -> List[WorktreeInfo]:
        """Get detailed information about all worktrees.

        Returns:
            List of WorktreeInfo objects, empty if git cannot list them
        """
        if self._worktree_info is not None:
            return self._worktree_info

        worktree_list: List[WorktreeInfo] = []
        try:
            repo = git.Repo(self.repo_path)
            output = repo.git.worktree("list", "--porcelain")
            worktree_list = parse_porcelain(output)

            logger.debug(f"Found {len(worktree_list)} worktrees")
            for wt in worktree_list:
                logger.debug(f"  {wt}")
        except (git.exc.GitCommandError, git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            logger.debug(f"Could not list worktrees: {e}")

        self._worktree_info = worktree_list
        return worktree_list
