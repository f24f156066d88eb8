"""Data models for gtr."""

from .branch import BranchResolution, CheckoutMode
from .worktree import WorktreeInfo

__all__ = ["BranchResolution", "CheckoutMode", "WorktreeInfo"]
