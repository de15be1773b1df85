"""
Check Dispatcher

Runs the status checks of each resolved repository and asks the user
to confirm exiting when a repository is not clean.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from rich.markup import escape
from rich.prompt import Confirm

from .messages import error_message, failure_message
from .models import RepositoryReport, RepositoryStatus
from ..backends import PredicateRegistry
from ..config.models import BUILTIN_CHECKS, GuardConfig
from ..errors import CheckInvocationError
from ..resolver import RepositoryDescriptor

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]

AUTO_COMMIT_CHECK = "auto-commit"


def confirm_exit(message: str) -> bool:
    """Ask the user a yes/no question on the terminal."""
    return Confirm.ask(f"[yellow]{escape(message)}[/yellow]", default=False)


@contextmanager
def working_directory(path: Union[str, Path]) -> Iterator[None]:
    """Temporarily change the process working directory."""
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield
    finally:
        os.chdir(previous)


class CheckDispatcher:
    """
    Evaluates repositories and gates the exit on the user's answers.

    Each repository is checked inside its root directory. Checks run in
    order; the first exception stops the remaining checks of that
    repository and is reported to the user instead of being raised.
    """

    def __init__(
        self,
        predicates: PredicateRegistry,
        confirm: Optional[ConfirmCallback] = None,
        human_names: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            predicates: Status predicates keyed by backend and check
            confirm: Yes/no prompt (terminal prompt by default)
            human_names: Wording of each check in prompts
        """
        self.predicates = predicates
        self.confirm = confirm or confirm_exit
        self.human_names = dict(human_names) if human_names is not None else dict(BUILTIN_CHECKS)

    @classmethod
    def from_config(
        cls,
        config: GuardConfig,
        confirm: Optional[ConfirmCallback] = None,
    ) -> "CheckDispatcher":
        """Create a dispatcher from a configuration."""
        return cls(
            predicates=config.predicate_registry(),
            confirm=confirm,
            human_names=config.check_definitions(),
        )

    def evaluate(self, descriptor: RepositoryDescriptor) -> RepositoryReport:
        """
        Run the checks of one repository without prompting.

        Args:
            descriptor: Repository to check

        Returns:
            RepositoryReport with failed checks or the captured error
        """
        report = RepositoryReport(descriptor=descriptor)
        if not descriptor.checks:
            return report

        current: Optional[str] = None
        try:
            with working_directory(descriptor.root):
                for check in descriptor.checks:
                    current = check
                    predicate = self.predicates.lookup(descriptor.backend, check)
                    if predicate(descriptor.root):
                        report.failed_checks.append(check)

                if report.failed_checks:
                    current = AUTO_COMMIT_CHECK
                    auto_commit = self.predicates.auto_commit(descriptor.backend)
                    if auto_commit is not None:
                        report.auto_committed = bool(auto_commit(descriptor.root))
        except Exception as e:
            logger.debug("Check %s failed on %s: %s", current, descriptor.root, e)
            report.error = CheckInvocationError(descriptor.root, current, e)
            report.failed_checks = []
            report.auto_committed = False

        logger.debug("%s", report)
        return report

    def inspect(self, descriptors: Iterable[RepositoryDescriptor]) -> List[RepositoryReport]:
        """Evaluate every repository without prompting."""
        return [self.evaluate(descriptor) for descriptor in descriptors]

    def confirm_report(self, report: RepositoryReport) -> bool:
        """
        Decide whether a repository lets the session exit.

        Returns:
            True if the repository passes or the user confirmed
        """
        status = report.status
        if status == RepositoryStatus.ERROR:
            return bool(self.confirm(error_message(report)))
        if status == RepositoryStatus.UNCLEAN:
            return bool(self.confirm(failure_message(report, self.human_names)))
        return True

    def should_exit(self, descriptors: Iterable[RepositoryDescriptor]) -> bool:
        """
        Check repositories in order until one is declined.

        Args:
            descriptors: Resolved repositories

        Returns:
            True if exiting is allowed
        """
        for descriptor in descriptors:
            report = self.evaluate(descriptor)
            if not self.confirm_report(report):
                logger.debug("Exit declined for %s", descriptor.root)
                return False
        return True
