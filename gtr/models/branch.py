"""Branch resolution models."""

from dataclasses import dataclass
from enum import Enum


class CheckoutMode(Enum):
    """How a worktree gets bound to its branch."""

    CHECKOUT = "checkout"  # <prefix><name> already exists
    CHECKOUT_BARE = "checkout_bare"  # unprefixed <name> already exists
    CREATE_NEW = "create_new"  # neither exists, create <prefix><name>


@dataclass
class BranchResolution:
    """Result of resolving a worktree name to a branch."""

    path: str
    branch: str
    mode: CheckoutMode

    @property
    def creates_branch(self) -> bool:
        return self.mode is CheckoutMode.CREATE_NEW
