"""
Exit Guard

Registers vcguard as an exit gate of an editing session.
"""

import logging
from typing import Optional

from .config.models import GuardConfig
from .dispatch import CheckDispatcher
from .dispatch.checker import ConfirmCallback
from .resolver import RepositoryResolver
from .session import EditorSession

logger = logging.getLogger(__name__)


class ExitGuard:
    """
    Exit gate checking the repositories of a session.

    Every call resolves the session's open files again and runs a fresh
    dispatch pass.
    """

    def __init__(
        self,
        session: EditorSession,
        config: GuardConfig,
        confirm: Optional[ConfirmCallback] = None,
    ):
        self.session = session
        self.config = config
        self.resolver = RepositoryResolver.from_config(config)
        self.dispatcher = CheckDispatcher.from_config(config, confirm=confirm)

    def __call__(self) -> bool:
        descriptors = self.resolver.resolve(self.session.open_files)
        logger.debug("Checking %d repositories before exit", len(descriptors))
        return self.dispatcher.should_exit(descriptors)


def find_guard(session: EditorSession) -> Optional[ExitGuard]:
    """Get the vcguard gate registered on a session, if any."""
    for gate in session.exit_gates:
        if isinstance(gate, ExitGuard):
            return gate
    return None


def is_active(session: EditorSession) -> bool:
    """Check whether vcguard gates the exit of a session."""
    return find_guard(session) is not None


def toggle(
    session: EditorSession,
    config: GuardConfig,
    arg: Optional[int] = None,
    confirm: Optional[ConfirmCallback] = None,
) -> bool:
    """
    Register or unregister the vcguard exit gate.

    Args:
        session: Session whose exit is gated
        config: Configuration used by the gate
        arg: Negative to unregister; None, zero or positive to register
        confirm: Yes/no prompt used by the gate

    Returns:
        True if the gate is registered afterwards
    """
    existing = find_guard(session)

    if arg is not None and arg < 0:
        if existing is not None:
            session.exit_gates.remove(existing)
        return False

    if existing is None:
        session.exit_gates.append(ExitGuard(session, config, confirm=confirm))
    return True
