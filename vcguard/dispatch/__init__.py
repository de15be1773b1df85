"""
Check Dispatch Module

Evaluates resolved repositories and gates the exit on the user's answers.
"""

from .checker import CheckDispatcher, confirm_exit, working_directory
from .messages import error_message, failure_message, human_join
from .models import RepositoryReport, RepositoryStatus

__all__ = [
    "CheckDispatcher",
    "RepositoryReport",
    "RepositoryStatus",
    "confirm_exit",
    "working_directory",
    "human_join",
    "failure_message",
    "error_message",
]
