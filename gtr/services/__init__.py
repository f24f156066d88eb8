"""Services for gtr."""

from .name_validation_service import NameValidationService
from .branch_resolver import BranchResolver
from .display_service import DisplayService

__all__ = ["NameValidationService", "BranchResolver", "DisplayService"]
