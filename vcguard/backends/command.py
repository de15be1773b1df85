"""
Command Predicates

Status predicates declared in configuration as shell commands. The
command runs inside the repository root; its outcome is interpreted
either from its output or from its exit status.
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Sequence, Union

from ..errors import CommandPredicateError

logger = logging.getLogger(__name__)

OUTPUT_MODE = "output"
STATUS_MODE = "status"
SUCCESS_MODE = "success"
MODES = (OUTPUT_MODE, STATUS_MODE, SUCCESS_MODE)


class CommandPredicate:
    """
    Predicate that runs an external command.

    In ``output`` mode the predicate is true when the command prints
    anything on stdout, and an exit status outside ``ok_status`` is an
    error. In ``status`` mode it is true when the command exits with a
    non-zero status, in ``success`` mode when it exits with status zero.
    """

    def __init__(
        self,
        command: Union[str, List[str]],
        mode: str = OUTPUT_MODE,
        timeout: float = 10.0,
        ok_status: Sequence[int] = (0,),
    ):
        if isinstance(command, str):
            command = shlex.split(command)
        if not command:
            raise ValueError("Empty command")
        if mode not in MODES:
            raise ValueError(f"Unknown command mode: {mode}")
        self.command = list(command)
        self.mode = mode
        self.timeout = timeout
        self.ok_status = tuple(ok_status)

    def __call__(self, root: Path) -> bool:
        try:
            result = subprocess.run(
                self.command,
                cwd=str(root),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise CommandPredicateError(f"Command not found: {self.command[0]}")
        except subprocess.TimeoutExpired:
            raise CommandPredicateError(
                f"Command timed out after {self.timeout:g}s: {self.display}"
            )

        if self.mode == STATUS_MODE:
            outcome = result.returncode != 0
        elif self.mode == SUCCESS_MODE:
            outcome = result.returncode == 0
        else:
            if result.returncode not in self.ok_status:
                message = result.stderr.strip() or f"exit status {result.returncode}"
                raise CommandPredicateError(f"{self.display} failed: {message}")
            outcome = result.stdout.strip() != ""

        logger.debug("%s in %s -> %s", self.display, root, outcome)
        return outcome

    @property
    def display(self) -> str:
        """Command line as a single string."""
        return " ".join(shlex.quote(part) for part in self.command)

    def __repr__(self) -> str:
        return f"CommandPredicate({self.display!r}, mode={self.mode!r})"
