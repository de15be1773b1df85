"""
Editing Session

Host-side view of an editing session: the open file contexts that are
scanned at exit time and the exit gates consulted before leaving.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

ExitGate = Callable[[], bool]


@dataclass
class OpenFile:
    """
    A single open file context.

    Attributes:
        path: Absolute path of the backing file, or None for contexts
            that are not visiting a file (scratch buffers, shells, ...)
        local_checks: Optional file-local list of check names that
            replaces the rule-based checks for this file's repository
        name: Display name of the context
    """
    path: Optional[Path] = None
    local_checks: Optional[List[str]] = None
    name: str = ""

    def __post_init__(self):
        if self.path is not None:
            self.path = Path(self.path).expanduser().absolute()
        if not self.name:
            self.name = self.path.name if self.path is not None else "*scratch*"


@dataclass
class EditorSession:
    """
    A running editing session.

    Keeps the ordered list of open file contexts and the exit gates.
    Gates are run in registration order when the user asks to exit;
    the first gate returning False vetoes the exit.
    """
    open_files: List[OpenFile] = field(default_factory=list)
    exit_gates: List[ExitGate] = field(default_factory=list)

    def open(
        self,
        path: Optional[Union[str, Path]] = None,
        local_checks: Optional[Sequence[str]] = None,
        name: str = "",
    ) -> OpenFile:
        """Open a new file context and return it."""
        context = OpenFile(
            path=Path(path) if path is not None else None,
            local_checks=list(local_checks) if local_checks is not None else None,
            name=name,
        )
        self.open_files.append(context)
        return context

    def close(self, context: OpenFile) -> None:
        """Close a file context."""
        self.open_files.remove(context)

    def request_exit(self) -> bool:
        """
        Ask every exit gate whether the session may end.

        Returns:
            True if all gates agreed
        """
        for gate in list(self.exit_gates):
            if not gate():
                return False
        return True
