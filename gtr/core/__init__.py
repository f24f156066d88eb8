"""Core worktree lifecycle for gtr."""

from .worktree_manager import WorktreeManager

__all__ = ["WorktreeManager"]
