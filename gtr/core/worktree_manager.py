"""Worktree lifecycle management"""

import os
import shutil
import subprocess
from typing import Callable, List, Optional, Tuple

from rich.console import Console

from gtr.config import Config
from gtr.constants import AFFIRMATIVE_REPLIES, AUX_DIRS, INTERACTIVE_TOOL
from gtr.exceptions import DirtyWorktreeError, GitOperationError, GtrError, PathNotFoundError
from gtr.models.branch import BranchResolution, CheckoutMode
from gtr.models.worktree import WorktreeInfo
from gtr.services.branch_resolver import BranchResolver
from gtr.services.display_service import DisplayService
from gtr.services.git.operations import GitOperations
from gtr.services.name_validation_service import NameValidationService
from gtr.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


def confirm_on_console(prompt: str) -> bool:
    """Ask a [y/N] question; anything but y/yes is a no."""
    try:
        response = console.input(prompt, markup=False)
    except EOFError:
        return False
    return response.strip().lower() in AFFIRMATIVE_REPLIES


class WorktreeManager:
    """Create, remove, switch between and list worktrees under the base path."""

    def __init__(self, git_ops: GitOperations, config: Config,
                 display_service: Optional[DisplayService] = None):
        """
        Args:
            git_ops: Adapter for the repository the command runs in
            config: Configuration resolved once for this invocation
            display_service: Output renderer (a default one is created if None)
        """
        self.git_ops = git_ops
        self.config = config
        self.branch_resolver = BranchResolver(git_ops, config)
        self.display_service = display_service or DisplayService(config.verbose, config.debug)

    def create(self, name: str, prefix: Optional[str] = None) -> BranchResolution:
        """
        Create a worktree at ``<base>/<name>``.

        git's own report is echoed; nothing else is printed on success.

        Args:
            name: Worktree name
            prefix: One-off branch prefix; the configured default when None

        Returns:
            The branch resolution the worktree was created with

        Raises:
            InvalidNameError: If the name is rejected
            GitOperationError: If git refuses to add the worktree
        """
        NameValidationService.validate(name)
        resolution = self.branch_resolver.resolve(name, prefix)

        output = self.git_ops.add_worktree(
            resolution.path,
            resolution.branch,
            create_branch=resolution.mode is CheckoutMode.CREATE_NEW,
        )
        self.display_service.display_git_output(output)
        self.copy_aux_dirs(resolution.path)
        return resolution

    def copy_aux_dirs(self, dest: str) -> List[str]:
        """Copy git-ignored helper directories from the source checkout into ``dest``.

        Best effort: failures are logged and never raised.

        Returns:
            Names of the directories that were copied
        """
        copied = []
        for dir_name in AUX_DIRS:
            src = os.path.join(self.git_ops.root, dir_name)
            if not os.path.isdir(src) or not self.git_ops.is_ignored(dir_name):
                continue
            try:
                shutil.copytree(src, os.path.join(dest, dir_name), symlinks=True, dirs_exist_ok=True)
            except (OSError, shutil.Error) as e:
                logger.warning(f"Could not copy {dir_name} into {dest}: {e}")
                continue
            logger.debug(f"Copied {dir_name} into {dest}")
            copied.append(dir_name)
        return copied

    def _branch_candidates(self, name: str) -> List[str]:
        prefixed = f"{self.config.branch_prefix}{name}"
        return [prefixed] if prefixed == name else [prefixed, name]

    def _cleanup_branches(self, name: str, force: bool) -> None:
        """Delete the prefixed and bare branches for ``name``.

        Delete failures are discarded here: the branch may already be gone, or
        (without force) still hold unmerged commits.
        """
        for branch in self._branch_candidates(name):
            if not self.git_ops.branch_exists(branch):
                continue
            deleted, error = self.git_ops.delete_branch(branch, force=force)
            if deleted:
                continue
            if force:
                logger.debug(f"Branch '{branch}' was not deleted: {error}")
            else:
                logger.warning(f"Kept branch '{branch}' (not fully merged?): {error}")

    def remove(self, name: str, force: bool = False) -> None:
        """
        Remove the named worktree and clean up its branches.

        Args:
            name: Worktree name
            force: Remove even with uncommitted changes and force-delete branches

        Raises:
            InvalidNameError: If the name is rejected
            DirtyWorktreeError: If a non-forced removal hit uncommitted changes
            GitOperationError: If a non-forced removal failed for another reason
        """
        NameValidationService.validate(name)
        path = self.config.worktree_path(name)

        if force:
            removed, error = self.git_ops.remove_worktree(path, force=True)
            if not removed:
                # Branch cleanup still runs; the worktree may already be gone
                logger.debug(f"Forced removal of {path} reported: {error}")
            self._cleanup_branches(name, force=True)
            return

        removed, error = self.git_ops.remove_worktree(path)
        if not removed:
            status_lines = self.git_ops.status_short(path)
            if status_lines:
                raise DirtyWorktreeError(name, status_lines)
            raise GitOperationError("worktree remove", name, error)

        self._cleanup_branches(name, force=False)

    def remove_many(self, names: List[str], force: bool = False) -> List[str]:
        """Remove several worktrees in order, stopping at the first failure.

        Returns:
            Names removed before returning or raising
        """
        removed = []
        for name in names:
            self.remove(name, force=force)
            self.display_service.display_removed(name, force)
            removed.append(name)
        return removed

    def switch_to(self, name: Optional[str] = None) -> str:
        """
        Change the working directory to a worktree, or to the main worktree when no name is given.

        Returns:
            The directory switched to

        Raises:
            PathNotFoundError: If the target directory does not exist
        """
        if name is None:
            main = self.git_ops.main_worktree()
            if main is None or not os.path.isdir(main.path):
                raise PathNotFoundError(main.path if main else "", "could not find the main worktree")
            path = main.path
        else:
            NameValidationService.validate(name)
            path = self.config.worktree_path(name)
            if not os.path.isdir(path):
                raise PathNotFoundError(path)

        os.chdir(path)
        logger.debug(f"Changed directory to {path}")
        return path

    def list_worktrees(self) -> Tuple[List[WorktreeInfo], str]:
        """Git's worktree listing, unfiltered, together with the base path."""
        return self.git_ops.list_worktrees(), self.config.base_path

    def launch_interactive(self, name: str,
                           confirm: Callable[[str], bool] = confirm_on_console,
                           tool: str = INTERACTIVE_TOOL) -> int:
        """
        Run the interactive session tool inside a worktree, creating it on request.

        Args:
            name: Worktree name
            confirm: Asks whether a missing worktree should be created
            tool: Command started in the worktree

        Returns:
            The tool's exit status, or 0 when the user declined creation
        """
        NameValidationService.validate(name)
        path = self.config.worktree_path(name)

        if not os.path.isdir(path):
            if not confirm(f"Worktree '{name}' doesn't exist. Create it now? [y/N] "):
                console.print("Aborted.")
                return 0
            console.print(f"Creating worktree '{name}'…")
            self.create(name)

        logger.info(f"Starting {tool} in {path}")
        try:
            result = subprocess.run([tool], cwd=path)
        except FileNotFoundError as e:
            raise GtrError(f"'{tool}' not found on PATH") from e
        return result.returncode
