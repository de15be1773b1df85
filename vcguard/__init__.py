"""
vcguard

Warns before leaving an editing session while open repositories still
have uncommitted changes, untracked files or unpushed commits.
"""

__version__ = "1.0.0"

from .guard import ExitGuard, find_guard, is_active, toggle
from .session import EditorSession, OpenFile

__all__ = [
    "ExitGuard",
    "EditorSession",
    "OpenFile",
    "find_guard",
    "is_active",
    "toggle",
]
