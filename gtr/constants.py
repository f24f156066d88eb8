"""Shared constants for gtr."""

from typing import Tuple

# Environment overrides, read once per invocation
ENV_WORKTREE_DIR = "GTR_WORKTREE_DIR"
ENV_BRANCH_PREFIX = "GTR_BRANCH_PREFIX"

DEFAULT_BRANCH_PREFIX = "feat/"
DEFAULT_WORKTREE_DIR = "~/code/worktrees"

# Sibling directory probed next to the repository root
AUTO_DETECT_DIR_NAME = "worktrees"

# Persisted base path lives at <config home>/gtr/config
CONFIG_DIR_NAME = "gtr"
CONFIG_FILE_NAME = "config"

# Git-ignored directories copied from the source checkout into new worktrees
AUX_DIRS: Tuple[str, ...] = (".claude", ".prompts")

# External interactive session tool started by `gtr claude`
INTERACTIVE_TOOL = "claude"

AFFIRMATIVE_REPLIES = ("y", "yes")
