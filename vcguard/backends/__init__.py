"""Version-control backends and status predicate registries.

Known backends:
- git: repositories with a .git entry
- hg: Mercurial repositories (.hg)
- svn: Subversion working copies (.svn)
- bzr: Bazaar branches (.bzr)
"""

from .base import VCBackend
from .command import CommandPredicate
from .registry import BackendRegistry, Predicate, PredicateRegistry

MARKERS = {
    "git": ".git",
    "hg": ".hg",
    "svn": ".svn",
    "bzr": ".bzr",
}


def list_known_backends() -> list:
    """List the backends with a known marker."""
    return sorted(MARKERS.keys())


__all__ = [
    "VCBackend",
    "CommandPredicate",
    "BackendRegistry",
    "PredicateRegistry",
    "Predicate",
    "MARKERS",
    "list_known_backends",
]
