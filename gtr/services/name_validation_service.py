"""Worktree name validation for gtr."""

from gtr.exceptions import InvalidNameError, InvalidNameReason

UNSAFE_SEQUENCES = ("..", "/", "\\")


class NameValidationService:
    """Service for validating worktree names."""

    @staticmethod
    def validate(name: str) -> None:
        """
        Reject names that are unsafe to use as a path component or git argument.

        Args:
            name: Requested worktree name

        Raises:
            InvalidNameError: If the name is empty, starts with '-', or contains
                '..', '/' or '\\'
        """
        if not name:
            raise InvalidNameError(name, InvalidNameReason.EMPTY_NAME)
        # A leading dash would be parsed as an option by git
        if name.startswith("-"):
            raise InvalidNameError(name, InvalidNameReason.LEADING_DASH)
        if any(seq in name for seq in UNSAFE_SEQUENCES):
            raise InvalidNameError(name, InvalidNameReason.UNSAFE_SEQUENCE)
