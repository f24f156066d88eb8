"""Custom exceptions for gtr"""

from enum import Enum
from typing import List, Optional


class GtrError(Exception):
    """Base exception for all gtr errors."""
    pass


class UsageError(GtrError):
    """Exception raised for missing or malformed command-line arguments."""

    def __init__(self, message: str, usage: Optional[str] = None):
        self.usage = usage
        super().__init__(message)


class InvalidNameReason(Enum):
    """Why a worktree name was rejected."""

    EMPTY_NAME = "name cannot be empty"
    LEADING_DASH = "name cannot start with '-'"
    UNSAFE_SEQUENCE = "name cannot contain '..', '/' or '\\'"


class InvalidNameError(GtrError):
    """Exception raised when a worktree name fails validation."""

    def __init__(self, name: str, reason: InvalidNameReason):
        self.name = name
        self.reason = reason
        super().__init__(f"invalid worktree name '{name}': {reason.value}")


class NotARepositoryError(GtrError):
    """Exception raised when a repo-scoped command runs outside a git repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("not inside a git repository")


class GitOperationError(GtrError):
    """Exception raised when a git command exits non-zero."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"git {operation} failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class DirtyWorktreeError(GitOperationError):
    """Exception raised when a non-forced removal hits uncommitted changes."""

    def __init__(self, name: str, status_lines: List[str]):
        self.name = name
        self.status_lines = status_lines
        super().__init__("worktree remove", name, "worktree has uncommitted changes")
        self.hint = f"Use 'gtr rm -f {name}' to force-remove."

    def __str__(self) -> str:
        return f"worktree '{self.name}' has uncommitted changes"


class PathNotFoundError(GtrError):
    """Exception raised when a worktree directory cannot be found."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"No such worktree: {path}")
