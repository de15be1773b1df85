"""
Exception Types

Errors raised while resolving repositories and running status checks.
"""

from pathlib import Path
from typing import Optional


class VCGuardError(Exception):
    """Base class for vcguard errors."""
    pass


class PredicateNotFoundError(VCGuardError):
    """No predicate is registered for a backend/check pair."""

    def __init__(self, backend: str, check: str):
        self.backend = backend
        self.check = check
        super().__init__(f"No '{check}' check is defined for the {backend} backend")


class CommandPredicateError(VCGuardError):
    """A configured status command could not be run."""
    pass


class CheckInvocationError(VCGuardError):
    """
    A status check failed while inspecting a repository.

    Wraps the original exception together with the repository root and
    the name of the check that raised it.
    """

    def __init__(self, root: Path, check: Optional[str], cause: BaseException):
        self.root = root
        self.check = check
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)

    @property
    def description(self) -> str:
        """Short description used in confirmation prompts."""
        if self.check:
            return f"{self.check}: {self}"
        return str(self)
