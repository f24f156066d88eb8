"""Git-related services for gtr."""

from .operations import GitOperations
from .worktrees import WorktreeService, parse_porcelain

__all__ = [
    "GitOperations",
    "WorktreeService",
    "parse_porcelain",
]
