"""Branch resolution for new worktrees."""

from typing import Optional

from gtr.config import Config
from gtr.models.branch import BranchResolution, CheckoutMode
from gtr.services.git.operations import GitOperations
from gtr.logging_config import get_logger

logger = get_logger(__name__)


class BranchResolver:
    """Decide which branch a new worktree should be bound to."""

    def __init__(self, git_ops: GitOperations, config: Config):
        self.git_ops = git_ops
        self.config = config

    def resolve(self, name: str, prefix: Optional[str] = None) -> BranchResolution:
        """
        Resolve a worktree name to a branch.

        Lookup order: ``<prefix><name>``, then the bare ``<name>``, and only
        when neither exists a new ``<prefix><name>``. Existing branches are
        never renamed or overwritten. Each call re-queries git.

        Args:
            name: Validated worktree name
            prefix: Per-call prefix; the configured default when None

        Returns:
            BranchResolution with the worktree path, branch and mode
        """
        prefix = self.config.branch_prefix if prefix is None else prefix
        path = self.config.worktree_path(name)
        prefixed = f"{prefix}{name}"

        if self.git_ops.branch_exists(prefixed):
            resolution = BranchResolution(path, prefixed, CheckoutMode.CHECKOUT)
        elif self.git_ops.branch_exists(name):
            resolution = BranchResolution(path, name, CheckoutMode.CHECKOUT_BARE)
        else:
            resolution = BranchResolution(path, prefixed, CheckoutMode.CREATE_NEW)

        logger.debug(f"Resolved '{name}' to {resolution.branch} ({resolution.mode.value})")
        return resolution
