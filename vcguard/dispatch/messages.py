"""Confirmation prompt wording."""

from typing import Dict, Optional, Sequence

from .models import RepositoryReport


def human_join(items: Sequence[str]) -> str:
    """
    Join items as an English enumeration.

    >>> human_join(["a", "b", "c"])
    'a, b and c'
    """
    items = list(items)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} and {items[-1]}"


def failure_message(report: RepositoryReport, human_names: Optional[Dict[str, str]] = None) -> str:
    """Build the prompt for a repository with failed checks."""
    human_names = human_names or {}
    names = [human_names.get(check, check) for check in report.failed_checks]
    return f"Repository {report.descriptor.root} has {human_join(names)}. Exit anyway?"


def error_message(report: RepositoryReport) -> str:
    """Build the prompt for a repository whose checks raised an error."""
    if report.error is None:
        raise ValueError(f"Repository {report.descriptor.root} has no error to report")
    return (
        f"An error occurred on repository {report.descriptor.root}: "
        f"{report.error.description}. Exit anyway?"
    )
