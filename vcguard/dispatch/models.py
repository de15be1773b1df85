"""
Dispatch Models

Per-repository outcome of running status checks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..errors import CheckInvocationError
from ..resolver import RepositoryDescriptor


class RepositoryStatus(str, Enum):
    """Overall state of a repository after its checks ran."""
    CLEAN = "clean"
    AUTO_COMMITTED = "auto_committed"
    UNCLEAN = "unclean"
    ERROR = "error"


@dataclass
class RepositoryReport:
    """Result of evaluating the checks of one repository."""
    descriptor: RepositoryDescriptor
    failed_checks: List[str] = field(default_factory=list)
    error: Optional[CheckInvocationError] = None
    auto_committed: bool = False

    @property
    def status(self) -> RepositoryStatus:
        if self.error is not None:
            return RepositoryStatus.ERROR
        if not self.failed_checks:
            return RepositoryStatus.CLEAN
        if self.auto_committed:
            return RepositoryStatus.AUTO_COMMITTED
        return RepositoryStatus.UNCLEAN

    @property
    def needs_confirmation(self) -> bool:
        """Whether the user has to confirm before exiting."""
        return self.status in (RepositoryStatus.ERROR, RepositoryStatus.UNCLEAN)

    def __str__(self) -> str:
        status = self.status.value.upper()
        detail = ""
        if self.error is not None:
            detail = f": {self.error.description}"
        elif self.failed_checks:
            detail = f": {', '.join(self.failed_checks)}"
        return f"[{status}] {self.descriptor.root}{detail}"
