"""
Backend and Predicate Registries

The backend registry answers "which backend owns this file?" in a fixed
priority order. The predicate registry maps a (backend, check) pair to
the callable that evaluates that check on a repository.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .base import VCBackend
from ..errors import PredicateNotFoundError

logger = logging.getLogger(__name__)

Predicate = Callable[[Path], bool]


class BackendRegistry:
    """Ordered collection of backends; the first claiming backend wins."""

    def __init__(self, backends: Optional[Iterable[VCBackend]] = None):
        self._backends: List[VCBackend] = []
        for backend in backends or []:
            self.add(backend)

    def add(self, backend: VCBackend) -> None:
        """Append a backend at the lowest priority."""
        if self.get(backend.name) is not None:
            raise ValueError(f"Backend already registered: {backend.name}")
        self._backends.append(backend)

    def get(self, name: str) -> Optional[VCBackend]:
        """Get a backend by name."""
        for backend in self._backends:
            if backend.name == name:
                return backend
        return None

    def responsible(self, path: Path) -> Optional[Tuple[VCBackend, Path]]:
        """
        Find the backend responsible for a path.

        Backends are asked in priority order and the first one returning
        a root wins, even if a later backend would find a closer root.

        Args:
            path: Absolute path of an open file

        Returns:
            (backend, repository root), or None if no backend claims it
        """
        for backend in self._backends:
            try:
                root = backend.responsible(path)
            except OSError as e:
                logger.warning("Backend %s failed on %s: %s", backend.name, path, e)
                continue
            if root:
                return backend, Path(root)
        return None


class PredicateRegistry:
    """
    Status predicates keyed by backend and check name.

    Also holds the optional auto-commit predicate of each backend.
    """

    def __init__(self):
        self._predicates: Dict[Tuple[str, str], Predicate] = {}
        self._auto_commit: Dict[str, Predicate] = {}

    def register(self, backend: str, check: str, predicate: Predicate) -> None:
        """Register the predicate for a backend/check pair."""
        self._predicates[(backend, check)] = predicate

    def register_auto_commit(self, backend: str, predicate: Predicate) -> None:
        """Register the auto-commit predicate of a backend."""
        self._auto_commit[backend] = predicate

    def lookup(self, backend: str, check: str) -> Predicate:
        """
        Get the predicate for a backend/check pair.

        Raises:
            PredicateNotFoundError: If nothing is registered for the pair
        """
        try:
            return self._predicates[(backend, check)]
        except KeyError:
            raise PredicateNotFoundError(backend, check) from None

    def auto_commit(self, backend: str) -> Optional[Predicate]:
        """Get the auto-commit predicate of a backend, if any."""
        return self._auto_commit.get(backend)

